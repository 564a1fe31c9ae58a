# -*- coding: utf-8 -*-
"""
backend/app/shared/config/config_loader.py

Elige la clase de settings por PYTHON_ENV y la instancia una sola vez
por proceso. Los tests que cambian el entorno llaman
``get_settings.cache_clear()``.

Autor: RadioHub
Actualizado: 02/09/2026
"""

from functools import lru_cache
import logging
import os
from typing import Dict, Type

from .settings_base import BaseAppSettings
from .settings_dev import DevSettings
from .settings_prod import ProdSettings
from .settings_testing import EnvTestingSettings

logger = logging.getLogger(__name__)

SETTINGS_BY_ENV: Dict[str, Type[BaseAppSettings]] = {
    "production": ProdSettings,
    "test": EnvTestingSettings,
    "development": DevSettings,
}


@lru_cache(maxsize=1)
def get_settings() -> BaseAppSettings:
    """Settings del entorno activo; valores desconocidos caen en desarrollo."""
    env = os.getenv("PYTHON_ENV", "development").strip().lower()
    settings = SETTINGS_BY_ENV.get(env, DevSettings)()

    # Sin base de datos la API arranca igual y los reportes salen en ceros
    if not settings.database_configured:
        logger.warning("[config] DATABASE_URL ausente (env=%s): analítica en modo degradado", env)
    return settings


__all__ = ["SETTINGS_BY_ENV", "get_settings"]
# Fin del archivo backend/app/shared/config/config_loader.py
