# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_testing.py

PYTHON_ENV=test. Sin scheduler (la suite barre el caché a mano) y sin
DATABASE_URL por defecto: cada test arma su StoreClient en SQLite.

Autor: RadioHub
Fecha: 02/09/2026
"""

from typing import Optional

from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class EnvTestingSettings(BaseAppSettings):
    python_env: str = "test"
    log_level: str = "WARNING"
    log_format: str = "pretty"
    database_url: Optional[str] = None
    scheduler_enabled: bool = False

    model_config = SettingsConfigDict(env_file=".env.test", env_file_encoding="utf-8", extra="ignore")


__all__ = ["EnvTestingSettings"]
# Fin del archivo backend/app/shared/config/settings_testing.py
