# --------------------------------------------------------------
# File: demo.py
# Description: Aplicación FastAPI de ejemplo que cablea login, lectura y logout.
# --------------------------------------------------------------
"""Ejemplo de integración: endpoint de login y un endpoint que usa la sesión."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response

from logincore import config
from logincore.crypto_sym import generate_key
from logincore.errors import DecodeError, LoginFailed
from logincore.identity import Identity, LoginKey
from logincore.models import CookieSettings
from loginapi.collaborators import secure_cookie_reader, secure_cookie_writer
from loginapi.handler import LoginHandler

logger = logging.getLogger(__name__)

DEMO_USERNAME = "you@example.com"
DEMO_PASSWORD = "testtest"
DEMO_LOGIN_KEY = "u123"


def demo_checker(username: str, password: str) -> Identity:
    """Acepta únicamente la cuenta de demostración."""

    if username == DEMO_USERNAME and password == DEMO_PASSWORD:
        return LoginKey(DEMO_LOGIN_KEY)
    raise LoginFailed("login incorrecto")


def create_app(key: Optional[bytes] = None, cookie: Optional[CookieSettings] = None) -> FastAPI:
    """Construye la app de demostración.

    Args:
        key (Optional[bytes]): Clave de 128 bits; si falta se genera una
            aleatoria (las sesiones no sobreviven a un reinicio).
        cookie (Optional[CookieSettings]): Atributos de la cookie de login.

    Returns:
        FastAPI: Aplicación con ``/api/login`` y ``/api/demo``.

    """

    if key is None:
        logger.warning("sin clave configurada: se usa una clave aleatoria")
        key = generate_key()

    reader = secure_cookie_reader(key, cookie.name if cookie else "")
    writer = secure_cookie_writer(key, cookie)

    app = FastAPI()
    LoginHandler(demo_checker, writer).mount(app, "/api/login")

    @app.get("/api/demo")
    def demo(request: Request) -> Response:
        try:
            identity = reader(request)
        except DecodeError:
            identity = None
        if identity is None:
            return Response(status_code=403)
        return PlainTextResponse(identity.login_key)

    return app


def create_app_from_env() -> FastAPI:
    """Factoría para uvicorn: clave y atributos de cookie salen de ``logincore.config``."""

    key = config.load_cookie_key() if config.COOKIE_KEY else None
    return create_app(key, config.cookie_settings())
