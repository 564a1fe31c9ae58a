# -*- coding: utf-8 -*-
"""
backend/app/routes/__init__.py

Ensamblador principal de ruteadores de la API de RadioHub.

Responsabilidades:
- Incluir el router de health (/health).
- Montar los routers de cada módulo (analytics, files).

Autor: RadioHub
Fecha: 2026-09-13
"""

from fastapi import APIRouter

from app.modules.analytics.routes import get_analytics_routers
from app.modules.files.routes import get_files_routers

from .health_routes import router as health_router

router = APIRouter()

# Health check sin prefijo adicional
router.include_router(health_router)

for module_router in (*get_analytics_routers(), *get_files_routers()):
    router.include_router(module_router)

__all__ = ["router"]

# Fin del archivo backend/app/routes/__init__.py
