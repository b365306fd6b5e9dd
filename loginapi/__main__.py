"""Servidor de demostración del login.

Run with:
  python -m loginapi
"""

import os

import uvicorn

from loginapi.logging_config import get_logging_config


def main() -> None:
    host = os.getenv("LOGIN_HOST", "127.0.0.1")
    port = int(os.getenv("LOGIN_PORT", "8000"))
    reload = os.getenv("LOGIN_RELOAD", "false").lower() in {"1", "true", "yes", "y"}
    log_level = os.getenv("LOGIN_LOG_LEVEL", "INFO")
    uvicorn.run(
        "loginapi.demo:create_app_from_env",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_config=get_logging_config(log_level),
    )


if __name__ == "__main__":
    main()
