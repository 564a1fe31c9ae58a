# -*- coding: utf-8 -*-
"""
backend/app/core/logging.py

Logging a partir de los settings activos (LOG_LEVEL / LOG_FORMAT).

Autor: RadioHub
Fecha: 2026-09-03
"""

import logging

from app.shared.config.logging_config import setup_logging
from app.shared.config.settings_base import BaseAppSettings


def setup_logging_from_settings(settings: BaseAppSettings) -> None:
    setup_logging(level=settings.log_level, fmt=settings.log_format)
    logging.getLogger(__name__).debug(
        "[logging] level=%s format=%s env=%s",
        settings.log_level,
        settings.log_format,
        settings.python_env,
    )


__all__ = ["setup_logging", "setup_logging_from_settings"]
# Fin del archivo backend/app/core/logging.py
