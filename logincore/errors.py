# --------------------------------------------------------------
# File: errors.py
# Description: Jerarquía de excepciones del subsistema de login y cookies seguras.
# --------------------------------------------------------------
"""Tipos de error que distinguen fallos de configuración, entrada y negocio."""

__all__ = [
    "LoginError",
    "ConfigurationError",
    "InputError",
    "DecodeError",
    "AuthenticationError",
    "DeserializationError",
    "SerializationError",
    "CookieNotFoundError",
    "StorageError",
    "LoginFailed",
]


class LoginError(Exception):
    """Raíz común de todos los errores propios del paquete."""


class ConfigurationError(LoginError):
    """Clave con longitud incorrecta o parámetros de arranque inválidos.

    Es un fallo fatal de configuración: no se recupera petición a petición.
    """


class InputError(LoginError):
    """Entrada malformada recibida del cliente (cuerpo, cookie o token)."""


class DecodeError(InputError):
    """El valor de la cookie existe pero no es un token válido."""


class AuthenticationError(DecodeError):
    """El blob no supera la verificación AEAD.

    Se usa el mismo mensaje para manipulación, clave errónea, truncado o
    datos aleatorios; no se revela qué parte ha fallado.
    """


class DeserializationError(DecodeError):
    """El contenido descifrado no encaja con la forma esperada."""


class SerializationError(LoginError):
    """El objeto de identidad no admite representación JSON."""


class CookieNotFoundError(LoginError):
    """La petición no trae la cookie pedida: nadie ha iniciado sesión."""


class StorageError(LoginError):
    """No se ha podido adjuntar o borrar el token en la respuesta."""


class LoginFailed(LoginError):
    """Credenciales rechazadas por el Checker.

    Es un resultado de negocio esperado (403), no un error operativo.
    """
