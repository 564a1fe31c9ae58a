# -*- coding: utf-8 -*-
"""
backend/app/core/db.py

Lo que main.py y las rutas de health necesitan del almacén: construir el
StoreClient desde settings y sondearlo. Los modelos importan `Base`
directamente de `app.shared.database`.

Autor: RadioHub
Fecha: 2026-09-03
"""

from app.shared.database.database import (
    check_database_health,
    create_store_client,
    create_store_client_from_settings,
)
from app.shared.database.store_client import StoreClient, StoreUnavailableError

__all__ = [
    "StoreClient",
    "StoreUnavailableError",
    "check_database_health",
    "create_store_client",
    "create_store_client_from_settings",
]
# Fin del archivo backend/app/core/db.py
