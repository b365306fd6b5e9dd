# --------------------------------------------------------------
# File: test_identity.py
# Description: Pruebas de la abstracción de identidad y su normalización.
# --------------------------------------------------------------

from dataclasses import dataclass

import pytest

from logincore.identity import Identity, LoginKey, as_identity


@dataclass(frozen=True)
class User:
    user_id: str

    @property
    def login_key(self) -> str:
        return self.user_id


def test_login_key_is_its_own_identity():
    key = LoginKey("u123")
    assert key.login_key == "u123"
    assert isinstance(key, Identity)
    assert key == "u123"


def test_as_identity_wraps_plain_strings():
    identity = as_identity("u123")
    assert isinstance(identity, LoginKey)
    assert identity.login_key == "u123"


def test_as_identity_passes_custom_objects_through():
    user = User("u9")
    assert as_identity(user) is user


@pytest.mark.parametrize("value", [None, 123, b"u123"])
def test_as_identity_rejects_other_values(value):
    with pytest.raises(TypeError):
        as_identity(value)


def test_as_identity_rejects_non_string_login_key():
    class NumericUser:
        login_key = 5

    with pytest.raises(TypeError):
        as_identity(NumericUser())
