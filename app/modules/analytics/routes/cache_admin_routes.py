# -*- coding: utf-8 -*-
"""
backend/app/modules/analytics/routes/cache_admin_routes.py

Administración del caché de respuestas de analítica.

- GET  /api/analytics/cache/stats  -> contadores del caché
- POST /api/analytics/cache/clear  -> vacía el caché

Autor: RadioHub
Fecha: 2026-09-11
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from app.core.dependencies import get_response_cache
from app.shared.cache import ResponseCache
from app.modules.analytics.schemas.analytics_schemas import CacheClearOut, CacheStatsOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analytics/cache", tags=["Analytics: cache"])


@router.get("/stats", response_model=CacheStatsOut, summary="Estadísticas del caché de reportes")
async def cache_stats(cache: ResponseCache = Depends(get_response_cache)):
    return cache.get_stats()


@router.post("/clear", response_model=CacheClearOut, summary="Vaciar el caché de reportes")
async def cache_clear(cache: ResponseCache = Depends(get_response_cache)):
    cleared = cache.clear()
    logger.info("[analytics] cache %s cleared: %d entries", cache.name, cleared)
    return {"success": True, "cleared": cleared}


__all__ = ["router"]

# Fin del archivo backend/app/modules/analytics/routes/cache_admin_routes.py
