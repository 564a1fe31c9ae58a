# -*- coding: utf-8 -*-
"""
backend/app/routes/health_routes.py

Endpoint básico de health check del backend RadioHub.

`status` es "ok" si el almacén está configurado y responde; "degraded" en
otro caso (los reportes siguen respondiendo en cero).

Autor: RadioHub
Fecha: 2026-09-13
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.core.db import check_database_health
from app.core.dependencies import get_app_settings, get_store
from app.shared.config.settings_base import BaseAppSettings
from app.shared.database import StoreClient

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    summary="Health check del backend",
    description=(
        "Devuelve el estado básico del backend, incluyendo si hay almacén "
        "configurado y si responde dentro del timeout."
    ),
)
async def health_check(
    store: StoreClient = Depends(get_store),
    settings: BaseAppSettings = Depends(get_app_settings),
) -> dict:
    database = await check_database_health(store, timeout_s=settings.db_connect_timeout_s)

    return {
        "status": "ok" if database["reachable"] else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.python_env,
        "database": database,
        "service": {
            "name": settings.app_name,
            "version": settings.app_version,
        },
    }

# Fin del archivo backend/app/routes/health_routes.py
