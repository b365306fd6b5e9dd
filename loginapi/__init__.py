# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública del manejador de login y sus colaboradores.
# --------------------------------------------------------------
"""Inicializa el paquete `loginapi` y documenta sus módulos principales."""

__all__ = [
    "collaborators",
    "demo",
    "handler",
    "logging_config",
]
