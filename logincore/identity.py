# --------------------------------------------------------------
# File: identity.py
# Description: Abstracción de identidad asociada a un login correcto.
# --------------------------------------------------------------
"""Identidad opaca expuesta como un identificador estable."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

__all__ = ["Identity", "LoginKey", "as_identity"]


@runtime_checkable
class Identity(Protocol):
    """Capacidad mínima de una identidad: su clave única de login."""

    @property
    def login_key(self) -> str:
        ...


class LoginKey(str):
    """Identidad respaldada directamente por una cadena."""

    @property
    def login_key(self) -> str:
        return str(self)


def as_identity(value: object) -> Identity:
    """Normaliza el resultado de un Checker a una ``Identity``.

    Args:
        value (object): Cadena o instancia que ya cumple ``Identity``.

    Returns:
        Identity: La propia identidad o un ``LoginKey`` para cadenas.

    """

    if isinstance(value, str) and not isinstance(value, LoginKey):
        return LoginKey(value)
    if isinstance(value, Identity):
        if not isinstance(value.login_key, str):
            raise TypeError(
                f"login_key debe ser str, no {type(value.login_key).__name__}"
            )
        return value
    raise TypeError(f"no es una identidad válida: {type(value).__name__}")
