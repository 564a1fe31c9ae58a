# -*- coding: utf-8 -*-
"""
backend/app/modules/analytics/routes/__init__.py

Ensamblador de routers del módulo Analytics.

Autor: RadioHub
Fecha: 2026-09-11
"""

from fastapi import APIRouter

from .analytics_routes import router as reports_router
from .cache_admin_routes import router as cache_admin_router


def get_analytics_routers() -> list[APIRouter]:
    # cache_admin va primero: /api/analytics/cache/* no debe caer en otra ruta
    return [cache_admin_router, reports_router]


__all__ = ["get_analytics_routers", "reports_router", "cache_admin_router"]

# Fin del archivo backend/app/modules/analytics/routes/__init__.py
