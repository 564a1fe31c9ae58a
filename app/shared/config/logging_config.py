# -*- coding: utf-8 -*-
"""
backend/app/shared/config/logging_config.py

Logging de RadioHub vía dictConfig.

- plain/pretty: una línea legible por evento (desarrollo, tests)
- json: python-json-logger, un objeto por línea (producción); `levelname`
  y `name` salen como `level` y `logger`

Los loggers ya creados siguen activos (disable_existing_loggers=False):
los módulos obtienen su logger al importarse, antes de esta llamada.

Autor: RadioHub
Fecha: 02/09/2026
"""

import logging.config
from typing import Any, Dict, Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["plain", "pretty", "json"]

# Librerías que a DEBUG inundan la salida; DB_ECHO_SQL agrega su propio handler
NOISY_LOGGERS = ("sqlalchemy.engine", "apscheduler", "aiosqlite", "asyncio")

_FORMATTERS: Dict[str, Dict[str, Any]] = {
    "plain": {
        "format": "%(asctime)s - %(levelname)s [%(name)s]: %(message)s",
        "datefmt": "%Y-%m-%d %H:%M:%S",
    },
    "json": {
        "()": "pythonjsonlogger.json.JsonFormatter",
        "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
        "rename_fields": {"levelname": "level", "name": "logger"},
    },
}


def setup_logging(level: LogLevel = "INFO", fmt: LogFormat = "plain") -> None:
    """
    Instala un único handler de consola (stdout) en el root logger.

    Ejemplo:
        >>> setup_logging("WARNING", "json")
    """
    formatter = "json" if fmt == "json" else "plain"
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": _FORMATTERS,
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": formatter,
                    "stream": "ext://sys.stdout",
                }
            },
            "loggers": {name: {"level": "WARNING"} for name in NOISY_LOGGERS},
            "root": {"handlers": ["console"], "level": level.upper()},
        }
    )


__all__ = ["LogFormat", "LogLevel", "NOISY_LOGGERS", "setup_logging"]
# Fin del archivo backend/app/shared/config/logging_config.py
