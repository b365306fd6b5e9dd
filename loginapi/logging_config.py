# --------------------------------------------------------------
# File: logging_config.py
# Description: Configuración de logging para el servidor de demostración.
# --------------------------------------------------------------
"""Diccionario de ``logging.config`` compartido por la app y uvicorn."""

from typing import Any, Dict


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Devuelve la configuración de logging con el nivel indicado.

    Args:
        level (str): Nivel para los loggers ``loginapi``, ``logincore`` y uvicorn.

    Returns:
        Dict[str, Any]: Estructura apta para ``logging.config.dictConfig``.

    """

    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
            "access": {"format": "%(message)s"},
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "uvicorn": {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn.error": {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn.access": {"handlers": ["access"], "level": level, "propagate": False},
            "loginapi": {"handlers": ["default"], "level": level, "propagate": False},
            "logincore": {"handlers": ["default"], "level": level, "propagate": False},
        },
        "root": {"level": level, "handlers": ["default"]},
    }
