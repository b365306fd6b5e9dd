# --------------------------------------------------------------
# File: secure_cookie.py
# Description: Codificación de identidades en cookies JSON cifradas y autenticadas.
# --------------------------------------------------------------
"""Protocolo de cookie segura: JSON, AES-GCM y Base64 URL-safe sin relleno.

Formato del valor de la cookie::

    base64url_sin_relleno(nonce[12] || AES-GCM(json(identidad)))

La caducidad la gestiona la capa de transporte mediante ``max_age``; el
códec no rechaza tokens antiguos que sigan siendo íntegros.
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json

from logincore.crypto_sym import aes_gcm_decrypt, aes_gcm_encrypt
from logincore.errors import (
    CookieNotFoundError,
    DecodeError,
    DeserializationError,
    SerializationError,
)
from logincore.models import DEFAULT_COOKIE_NAME, CookieSettings

__all__ = [
    "clear_secure_json_cookie",
    "decode_secure_json_cookie",
    "encode_secure_json_cookie",
    "open_value",
    "seal_value",
]

_B64U_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


def _b64u(data: bytes) -> str:
    """Codifica datos binarios en Base64 URL-safe sin relleno."""

    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _unb64u(value: str) -> bytes:
    """Decodifica Base64 URL-safe sin relleno rechazando cualquier otro carácter."""

    if not isinstance(value, str) or not _B64U_ALPHABET.fullmatch(value):
        raise DecodeError("el valor de la cookie no es Base64 URL-safe")
    pad = "=" * (-len(value) % 4)
    try:
        return base64.urlsafe_b64decode(value + pad)
    except (binascii.Error, ValueError):
        raise DecodeError("el valor de la cookie no es Base64 URL-safe") from None


def seal_value(key: bytes, obj: Any) -> str:
    """Serializa ``obj`` a JSON, lo cifra y lo devuelve listo para una cookie.

    Args:
        key (bytes): Clave simétrica de 128 bits.
        obj (Any): Objeto representable en JSON (cadenas, modelos, dicts...).

    Returns:
        str: Valor Base64 URL-safe sin relleno.

    Raises:
        SerializationError: Si ``obj`` no tiene representación JSON.

    """

    try:
        payload = to_json(obj)
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise SerializationError(f"no se puede serializar el objeto: {exc}") from exc
    return _b64u(aes_gcm_encrypt(key, payload))


def open_value(key: bytes, value: str, shape: Any = str) -> Any:
    """Revierte ``seal_value`` validando el resultado contra ``shape``.

    Args:
        key (bytes): Clave simétrica de 128 bits.
        value (str): Valor de la cookie.
        shape (Any): Tipo destino (``str``, un modelo Pydantic, ``dict``...).

    Returns:
        Any: Objeto reconstruido con el tipo pedido.

    Raises:
        DecodeError: Si el valor no es Base64 URL-safe válido.
        AuthenticationError: Si el token está manipulado o no se autentica.
        DeserializationError: Si el JSON no encaja con ``shape``.

    """

    blob = _unb64u(value)
    plaintext = aes_gcm_decrypt(key, blob)
    try:
        return TypeAdapter(shape).validate_json(plaintext)
    except ValidationError as exc:
        raise DeserializationError(
            f"el contenido no encaja con {getattr(shape, '__name__', shape)!s}"
        ) from exc


def encode_secure_json_cookie(
    response: Any,
    key: bytes,
    obj: Any,
    cookie: Optional[CookieSettings] = None,
) -> str:
    """Cifra ``obj`` y lo fija como cookie en la respuesta.

    Sin ``cookie`` se usan los valores por defecto: nombre ``"login"``,
    8 horas de vida y ``HttpOnly``.

    Args:
        response (Any): Respuesta con ``set_cookie`` (Starlette/FastAPI).
        key (bytes): Clave simétrica de 128 bits.
        obj (Any): Objeto de identidad a transportar.
        cookie (Optional[CookieSettings]): Atributos de la cookie.

    Returns:
        str: Valor codificado que se ha escrito en la cookie.

    """

    cookie = cookie or CookieSettings()
    value = seal_value(key, obj)
    response.set_cookie(
        key=cookie.name,
        value=value,
        max_age=cookie.max_age,
        path=cookie.path,
        domain=cookie.domain,
        secure=cookie.secure,
        httponly=cookie.http_only,
        samesite=cookie.same_site,
    )
    return value


def decode_secure_json_cookie(
    request: Any,
    key: bytes,
    shape: Any = str,
    cookie_name: str = "",
) -> Any:
    """Lee la cookie segura de la petición y reconstruye el objeto original.

    Args:
        request (Any): Petición con un mapeo ``cookies``.
        key (bytes): Clave simétrica de 128 bits.
        shape (Any): Tipo destino de la deserialización.
        cookie_name (str): Nombre de la cookie; vacío equivale a ``"login"``.

    Returns:
        Any: Objeto reconstruido.

    Raises:
        CookieNotFoundError: Si la petición no trae la cookie.
        DecodeError: Si la cookie existe pero no es un token válido.

    """

    name = cookie_name or DEFAULT_COOKIE_NAME
    value = request.cookies.get(name)
    if value is None:
        raise CookieNotFoundError(f"no hay cookie {name!r}")
    return open_value(key, value, shape)


def clear_secure_json_cookie(response: Any, cookie: Optional[CookieSettings] = None) -> None:
    """Borra la cookie en el cliente con los mismos atributos con que se fijó."""

    cookie = cookie or CookieSettings()
    response.delete_cookie(
        key=cookie.name,
        path=cookie.path,
        domain=cookie.domain,
        secure=cookie.secure,
        httponly=cookie.http_only,
        samesite=cookie.same_site,
    )
