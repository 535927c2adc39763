# backend/ticket_logger/core/logging_config.py
"""
Configuración del logging de la aplicación.

Se instala una sola vez al arrancar (ver main.py) a partir de LOG_LEVEL,
LOG_FORMAT y LOG_FILE_PATH. Los módulos sólo hacen logging.getLogger(__name__).
"""

import logging
import logging.config
from pathlib import Path

from ticket_logger.core.config import Settings

# Librerías que no necesitamos ver en INFO
NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncio", "multipart")


def setup_logging(settings: Settings) -> None:
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
        }
    }

    if settings.LOG_FILE_PATH:
        log_path = Path(settings.LOG_FILE_PATH)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "default",
            "filename": str(log_path),
            "maxBytes": 10_000_000,
            "backupCount": 5,
            "encoding": "utf-8",
        }

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": settings.LOG_FORMAT}},
        "handlers": handlers,
        "root": {"level": settings.LOG_LEVEL.upper(), "handlers": list(handlers)},
    })

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
