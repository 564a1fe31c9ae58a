# -*- coding: utf-8 -*-
"""
backend/app/shared/database/__init__.py

Re-exporta utilidades comunes de base de datos.

Autor: RadioHub
Fecha: 2026-09-02
"""

from __future__ import annotations

from .base import Base, radiohub_metadata
from .store_client import StoreClient, StoreUnavailableError
from .database import (
    create_store_client,
    create_store_client_from_settings,
    check_database_health,
)

__all__ = [
    "Base",
    "radiohub_metadata",
    "StoreClient",
    "StoreUnavailableError",
    "create_store_client",
    "create_store_client_from_settings",
    "check_database_health",
]

# Fin del archivo backend/app/shared/database/__init__.py
