# -*- coding: utf-8 -*-
"""
backend/app/modules/analytics/services/__init__.py

Servicios del módulo Analytics: motor de agregación, ventanas de tiempo,
normalización de entradas/salidas y formas en cero.

Autor: RadioHub
Fecha: 2026-09-10
"""

from .aggregation_engine import AggregationEngine, utc_now
from .degraded import AnalyticsNotFoundError, degrades_to
from .normalization import PageRequest, page_request, pagination
from .timeframe import TimeWindow, resolve_timeframe, resolve_window, window_start

__all__ = [
    "AggregationEngine",
    "utc_now",
    "AnalyticsNotFoundError",
    "degrades_to",
    "PageRequest",
    "page_request",
    "pagination",
    "TimeWindow",
    "resolve_timeframe",
    "resolve_window",
    "window_start",
]

# Fin del archivo backend/app/modules/analytics/services/__init__.py
