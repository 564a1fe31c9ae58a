# -*- coding: utf-8 -*-
"""
backend/app/core/dependencies.py

Dependencias FastAPI compartidas.

Los servicios de larga vida (StoreClient, ResponseCache, reloj del motor)
viven en `app.state`, los crea `create_app()`. Las dependencias sólo los
leen del request, así los tests pueden armar una app con su propio almacén
y caché sin tocar estado global.

Autor: RadioHub
Fecha: 2026-09-11
"""

from __future__ import annotations

from fastapi import Depends, Request

from app.shared.cache import ResponseCache
from app.shared.config.settings_base import BaseAppSettings
from app.shared.database import StoreClient
from app.modules.analytics.services import AggregationEngine


def get_app_settings(request: Request) -> BaseAppSettings:
    return request.app.state.settings


def get_store(request: Request) -> StoreClient:
    return request.app.state.store


def get_response_cache(request: Request) -> ResponseCache:
    return request.app.state.response_cache


def get_aggregation_engine(
    request: Request,
    store: StoreClient = Depends(get_store),
) -> AggregationEngine:
    return AggregationEngine(store, clock=getattr(request.app.state, "clock", None))


__all__ = [
    "get_app_settings",
    "get_store",
    "get_response_cache",
    "get_aggregation_engine",
]

# Fin del archivo backend/app/core/dependencies.py
