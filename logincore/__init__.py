# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública del códec AEAD y de la cookie segura.
# --------------------------------------------------------------
"""Inicializa el paquete `logincore` y documenta sus módulos principales."""

__all__ = [
    "config",
    "crypto_sym",
    "errors",
    "identity",
    "models",
    "secure_cookie",
]
