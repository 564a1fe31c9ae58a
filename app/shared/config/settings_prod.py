# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_prod.py

Producción: solo variables de entorno (sin `.env`), logs INFO en JSON
para el agregador. DATABASE_URL y CORS_ORIGINS llegan del orquestador.

Autor: RadioHub
Fecha: 02/09/2026
"""

from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings, EnvName


class ProdSettings(BaseAppSettings):
    python_env: EnvName = "production"
    log_level: str = "INFO"
    log_format: str = "json"

    model_config = SettingsConfigDict(env_file=None, extra="ignore")


__all__ = ["ProdSettings"]
# Fin del archivo backend/app/shared/config/settings_prod.py
