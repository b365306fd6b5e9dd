# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas para aislar el entorno y preparar claves y apps.
# --------------------------------------------------------------

import importlib
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from logincore.crypto_sym import generate_key

_ENV_VARS = (
    "LOGIN_COOKIE_KEY",
    "LOGIN_COOKIE_NAME",
    "LOGIN_COOKIE_MAX_AGE",
    "LOGIN_COOKIE_SECURE",
    "LOGIN_COOKIE_SAMESITE",
    "LOGIN_COOKIE_PATH",
    "LOGIN_COOKIE_DOMAIN",
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch) -> Iterator[None]:
    """Limpia las variables LOGIN_* para que cada prueba parta de cero.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture para ajustar variables de entorno.

    Returns:
        Iterator[None]: Control del fixture autouse durante la ejecución de cada test.
    """
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture()
def key() -> bytes:
    """Clave aleatoria de 128 bits para cada prueba."""
    return generate_key()


@pytest.fixture()
def reload_config():
    """Devuelve una función que recarga logincore.config tras ajustar el entorno."""

    def _reload():
        import logincore.config as config_module

        return importlib.reload(config_module)

    return _reload


@pytest.fixture()
def demo_client(key) -> Iterator[TestClient]:
    """Cliente HTTP sobre la app de demostración con una clave fija."""
    from loginapi.demo import create_app

    with TestClient(create_app(key)) as client:
        yield client
