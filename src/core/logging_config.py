"""Configuración de logging.

Un único handler a stderr: stdout queda libre para la salida de la operación
(texto o bytes), que puede encadenarse con otras herramientas.
"""

from __future__ import annotations

import logging
import logging.config
from typing import Any

from core.config import AppSettings


def get_logging_config(level: str = "WARNING") -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            },
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            # httpx loguea cada request a INFO; con DEBUG nuestro ya basta.
            "httpx": {"level": "WARNING"},
            "httpcore": {"level": "WARNING"},
        },
        "root": {
            "handlers": ["default"],
            "level": level,
        },
    }


def setup_logging(settings: AppSettings | None = None, *, level: str | None = None) -> None:
    """Aplica la configuración; `level` (p.ej. desde `--verbose`) tiene prioridad."""

    settings = settings or AppSettings()
    logging.config.dictConfig(get_logging_config(level or settings.log_level))
