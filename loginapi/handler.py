# --------------------------------------------------------------
# File: handler.py
# Description: Manejador HTTP de login/logout con colaboradores enchufables.
# --------------------------------------------------------------
"""Despacho de las llamadas de la API de login.

El manejador no guarda estado entre peticiones: el estado de sesión viaja
por completo en el token que presenta el cliente. La lectura de la
identidad actual no forma parte de este manejador; los endpoints que la
necesitan usan directamente un ``Reader``.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Optional

from fastapi import FastAPI
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route
from starlette.types import Receive, Scope, Send

from logincore.errors import LoginFailed
from logincore.identity import as_identity
from logincore.models import Credentials
from loginapi.collaborators import Checker, Writer

__all__ = ["ErrorReporter", "LoginHandler", "log_error"]

logger = logging.getLogger(__name__)

ErrorReporter = Callable[[Request, BaseException], None]

ALLOWED_METHODS = ("POST", "DELETE")


class _BadInput(Exception):
    """Cuerpo de la petición imposible de interpretar."""


def log_error(request: Request, exc: BaseException) -> None:
    """Canal por defecto para fallos operativos: el log de la aplicación."""

    logger.error(
        "login %s %s falló: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=(type(exc), exc, exc.__traceback__),
    )


async def _call(fn: Callable[..., Any], *args: Any) -> Any:
    """Invoca un colaborador sin bloquear el bucle de eventos."""

    if inspect.iscoroutinefunction(fn) or inspect.iscoroutinefunction(
        getattr(fn, "__call__", None)
    ):
        return await fn(*args)
    result = await run_in_threadpool(fn, *args)
    if inspect.isawaitable(result):
        result = await result
    return result


def _is_json(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def _error(status_code: int, detail: str, **kwargs: Any) -> JSONResponse:
    return JSONResponse({"detail": detail}, status_code=status_code, **kwargs)


class LoginHandler:
    """Implementa las llamadas de la API de login.

    Args:
        checker (Checker): Valida credenciales y devuelve la identidad.
        writer (Writer): Adjunta o borra la identidad en la respuesta.
        on_error (Optional[ErrorReporter]): Canal de fallos operativos;
            por defecto se registran en el log.
        method_param (str): Parámetro de query que sobrescribe el método HTTP.

    """

    def __init__(
        self,
        checker: Checker,
        writer: Writer,
        *,
        on_error: Optional[ErrorReporter] = None,
        method_param: str = "_method",
    ) -> None:
        self.checker = checker
        self.writer = writer
        self.on_error = on_error or log_error
        self.method_param = method_param

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        response = await self.handle(Request(scope, receive))
        await response(scope, receive, send)

    def effective_method(self, request: Request) -> str:
        override = request.query_params.get(self.method_param, "") if self.method_param else ""
        return (override.strip() or request.method).upper()

    async def handle(self, request: Request) -> Response:
        method = self.effective_method(request)
        if method == "POST":
            return await self.login(request)
        if method == "DELETE":
            return await self.logout(request)
        return _error(405, "Method Not Allowed", headers={"Allow": ", ".join(ALLOWED_METHODS)})

    async def login(self, request: Request) -> Response:
        try:
            credentials = await self._read_credentials(request)
        except _BadInput:
            return _error(400, "Bad Request")

        try:
            identity = as_identity(
                await _call(self.checker, credentials.username, credentials.password)
            )
        except LoginFailed:
            logger.debug("credenciales rechazadas")
            return _error(403, "Forbidden")
        except Exception as exc:
            self.on_error(request, exc)
            return _error(500, "Internal Server Error")

        response = JSONResponse({"login_key": identity.login_key})
        try:
            await _call(self.writer, request, response, identity)
        except Exception as exc:
            self.on_error(request, exc)
            return _error(500, "Internal Server Error")
        return response

    async def logout(self, request: Request) -> Response:
        response = Response(status_code=204)
        try:
            await _call(self.writer, request, response, None)
        except Exception as exc:
            self.on_error(request, exc)
            return _error(500, "Internal Server Error")
        return response

    async def _read_credentials(self, request: Request) -> Credentials:
        if _is_json(request.headers.get("content-type", "")):
            body = await request.body()
            try:
                return Credentials.model_validate_json(body)
            except ValidationError as exc:
                raise _BadInput() from exc

        try:
            form = await request.form()
        except (HTTPException, MultiPartException) as exc:
            raise _BadInput() from exc
        fields = {}
        for name in ("username", "password"):
            value = form.get(name)
            # Los ficheros subidos no cuentan como credenciales.
            if isinstance(value, str):
                fields[name] = value
        return Credentials(**fields)

    def mount(self, app: FastAPI, path: str = "/api/login") -> None:
        """Registra el manejador como app ASGI sin filtro de métodos; él decide el 405."""

        app.router.routes.append(Route(path, endpoint=self, include_in_schema=False))
