# --------------------------------------------------------------
# File: collaborators.py
# Description: Contratos Checker/Reader/Writer y adaptadores sobre cookie segura.
# --------------------------------------------------------------
"""Colaboradores enchufables del manejador de login.

Cada rol es una única capacidad; cualquier función (síncrona o ``async``)
con la firma adecuada lo cumple, sin jerarquía de clases.
"""

from __future__ import annotations

from typing import Any, Awaitable, Optional, Protocol, Union

from starlette.requests import Request
from starlette.responses import Response

from logincore.errors import CookieNotFoundError, LoginError, StorageError
from logincore.identity import Identity, LoginKey
from logincore.models import CookieSettings
from logincore.secure_cookie import (
    clear_secure_json_cookie,
    decode_secure_json_cookie,
    encode_secure_json_cookie,
)

__all__ = [
    "Checker",
    "Reader",
    "Writer",
    "secure_cookie_reader",
    "secure_cookie_writer",
]


class Checker(Protocol):
    """Valida credenciales; lanza ``LoginFailed`` si no son correctas."""

    def __call__(self, username: str, password: str) -> Union[Identity, Awaitable[Identity]]:
        ...


class Writer(Protocol):
    """Adjunta la identidad a la respuesta; ``None`` significa cerrar sesión."""

    def __call__(
        self, request: Request, response: Response, identity: Optional[Identity]
    ) -> Union[None, Awaitable[None]]:
        ...


class Reader(Protocol):
    """Recupera la identidad actual; ``None`` si nadie ha iniciado sesión."""

    def __call__(
        self, request: Request, response: Optional[Response] = None
    ) -> Union[Optional[Identity], Awaitable[Optional[Identity]]]:
        ...


def secure_cookie_writer(key: bytes, cookie: Optional[CookieSettings] = None) -> Writer:
    """Crea un Writer que guarda ``identity.login_key`` en una cookie cifrada.

    Args:
        key (bytes): Clave simétrica de 128 bits.
        cookie (Optional[CookieSettings]): Atributos de la cookie.

    Returns:
        Writer: Función lista para ``LoginHandler``.

    """

    def write(request: Request, response: Response, identity: Optional[Identity]) -> None:
        try:
            if identity is None:
                clear_secure_json_cookie(response, cookie)
            else:
                encode_secure_json_cookie(response, key, identity.login_key, cookie)
        except LoginError as exc:
            raise StorageError(f"no se ha podido escribir la cookie: {exc}") from exc

    return write


def secure_cookie_reader(key: bytes, cookie_name: str = "") -> Reader:
    """Crea un Reader que descifra la cookie de login en un ``LoginKey``.

    Una cookie ausente devuelve ``None``; una cookie inválida propaga
    ``DecodeError`` para que el llamante decida cómo tratarla.

    Args:
        key (bytes): Clave simétrica de 128 bits.
        cookie_name (str): Nombre de la cookie; vacío equivale a ``"login"``.

    Returns:
        Reader: Función de lectura de identidad.

    """

    def read(request: Request, response: Any = None) -> Optional[Identity]:
        try:
            value = decode_secure_json_cookie(request, key, str, cookie_name)
        except CookieNotFoundError:
            return None
        return LoginKey(value)

    return read
