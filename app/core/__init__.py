# -*- coding: utf-8 -*-
"""
backend/app/core/__init__.py

Arranque de RadioHub: settings, logging, almacén y dependencias FastAPI.
Las piezas viven en `app.shared.*`; este paquete solo decide qué usa la
capa de aplicación.

Autor: RadioHub
Fecha: 2026-09-03
"""

from .db import (
    StoreClient,
    StoreUnavailableError,
    check_database_health,
    create_store_client,
    create_store_client_from_settings,
)
from .logging import setup_logging, setup_logging_from_settings
from .settings import get_settings

__all__ = [
    "StoreClient",
    "StoreUnavailableError",
    "check_database_health",
    "create_store_client",
    "create_store_client_from_settings",
    "get_settings",
    "setup_logging",
    "setup_logging_from_settings",
]
# Fin del archivo backend/app/core/__init__.py
