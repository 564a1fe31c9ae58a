# -*- coding: utf-8 -*-
"""
backend/app/core/settings.py

Acceso a settings para main.py y scripts: la instancia del entorno
activo (PYTHON_ENV), cacheada por `app.shared.config.config_loader`.

Autor: RadioHub
Fecha: 2026-09-03
"""

from app.shared.config.config_loader import get_settings
from app.shared.config.settings_base import BaseAppSettings

__all__ = ["BaseAppSettings", "get_settings"]
# Fin del archivo backend/app/core/settings.py
