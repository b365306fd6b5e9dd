# --------------------------------------------------------------
# File: config.py
# Description: Parámetros de arranque leídos del entorno (.env incluido).
# --------------------------------------------------------------
"""Configuración de la clave de cifrado y de los atributos de la cookie."""

import base64
import binascii
import os
import re
from typing import Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from logincore.crypto_sym import KEY_SIZE
from logincore.errors import ConfigurationError
from logincore.models import DEFAULT_COOKIE_NAME, DEFAULT_MAX_AGE_SECONDS, CookieSettings

load_dotenv()

COOKIE_KEY = os.getenv("LOGIN_COOKIE_KEY", "")
COOKIE_NAME = os.getenv("LOGIN_COOKIE_NAME", DEFAULT_COOKIE_NAME)
# Se valida en cookie_settings(); un valor no numérico es ConfigurationError.
COOKIE_MAX_AGE = os.getenv("LOGIN_COOKIE_MAX_AGE", str(DEFAULT_MAX_AGE_SECONDS))
COOKIE_SECURE = os.getenv("LOGIN_COOKIE_SECURE", "false").lower() in {"1", "true", "yes", "y"}
COOKIE_SAMESITE = os.getenv("LOGIN_COOKIE_SAMESITE") or None
COOKIE_PATH = os.getenv("LOGIN_COOKIE_PATH", "/")
COOKIE_DOMAIN = os.getenv("LOGIN_COOKIE_DOMAIN") or None

_B64U_KEY = re.compile(r"[A-Za-z0-9_-]+={0,2}")


def load_cookie_key(value: Optional[str] = None) -> bytes:
    """Decodifica la clave de la cookie desde Base64 URL-safe.

    Args:
        value (Optional[str]): Clave codificada; por defecto ``LOGIN_COOKIE_KEY``.

    Returns:
        bytes: Clave de exactamente 128 bits.

    Raises:
        ConfigurationError: Si falta, no es Base64 o no mide 16 bytes.

    """

    raw = (COOKIE_KEY if value is None else value).strip()
    if not raw:
        raise ConfigurationError("falta LOGIN_COOKIE_KEY en el entorno")
    if not _B64U_KEY.fullmatch(raw):
        raise ConfigurationError("LOGIN_COOKIE_KEY no es Base64 URL-safe")
    data = raw.rstrip("=")
    try:
        key = base64.urlsafe_b64decode(data + "=" * (-len(data) % 4))
    except (binascii.Error, ValueError) as exc:
        raise ConfigurationError("LOGIN_COOKIE_KEY no es Base64 URL-safe") from exc
    if len(key) != KEY_SIZE:
        raise ConfigurationError(
            f"LOGIN_COOKIE_KEY debe decodificar a {KEY_SIZE} bytes (obtenidos {len(key)})"
        )
    return key


def cookie_settings() -> CookieSettings:
    """Construye los atributos de cookie a partir de las variables de entorno."""

    try:
        return CookieSettings(
            name=COOKIE_NAME,
            max_age=COOKIE_MAX_AGE,
            secure=COOKIE_SECURE,
            same_site=COOKIE_SAMESITE,
            path=COOKIE_PATH,
            domain=COOKIE_DOMAIN,
        )
    except ValidationError as exc:
        raise ConfigurationError(f"atributos de cookie inválidos: {exc}") from exc
