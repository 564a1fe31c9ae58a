# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_dev.py

Entorno local de RadioHub: logs DEBUG legibles y caché de analítica
corto para que el dashboard refleje descargas nuevas en un minuto.
Lee `.env` del directorio de trabajo.

Autor: RadioHub
Fecha: 02/09/2026
"""

from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class DevSettings(BaseAppSettings):
    python_env: str = "development"
    log_level: str = "DEBUG"
    log_format: str = "plain"
    analytics_cache_ttl_seconds: int = 60

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


__all__ = ["DevSettings"]
# Fin del archivo backend/app/shared/config/settings_dev.py
