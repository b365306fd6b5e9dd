# --------------------------------------------------------------
# File: models.py
# Description: Modelos de datos comunes para cookies y credenciales de login.
# --------------------------------------------------------------
"""Modelos Pydantic que encapsulan atributos de cookie y credenciales."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_COOKIE_NAME = "login"
DEFAULT_MAX_AGE_SECONDS = 8 * 60 * 60  # 8 horas


class CookieSettings(BaseModel):
    """Atributos de transporte de la cookie que transporta el token.

    Gobiernan la vida de la cookie en el cliente, no la validez criptográfica
    del token: un token caducado pero íntegro sigue descifrándose.

    Attributes:
        name (str): Nombre de la cookie; vacío equivale a ``"login"``.
        max_age (int): Segundos de vida; ``0`` equivale a 8 horas.
        http_only (bool): Oculta la cookie a JavaScript.
        secure (bool): Solo se envía sobre HTTPS.
        same_site (Optional[str]): Política SameSite; ``None`` no la emite.
        path (str): Ruta a la que se asocia la cookie.
        domain (Optional[str]): Dominio de la cookie, si se fija.

    """

    model_config = ConfigDict(frozen=True)

    name: str = DEFAULT_COOKIE_NAME
    max_age: int = DEFAULT_MAX_AGE_SECONDS
    http_only: bool = True
    secure: bool = False
    same_site: Optional[Literal["lax", "strict", "none"]] = None
    path: str = "/"
    domain: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _default_name(cls, value):
        return value or DEFAULT_COOKIE_NAME

    @field_validator("max_age")
    @classmethod
    def _default_max_age(cls, value):
        return value or DEFAULT_MAX_AGE_SECONDS

    @field_validator("same_site", mode="before")
    @classmethod
    def _lower_same_site(cls, value):
        if isinstance(value, str):
            return value.strip().lower() or None
        return value


class Credentials(BaseModel):
    """Par usuario/contraseña transitorio recibido en el login.

    Nunca se persiste; solo vive durante la llamada al Checker.

    """

    model_config = ConfigDict(extra="ignore")

    username: str = ""
    password: str = ""
