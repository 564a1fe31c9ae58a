# -*- coding: utf-8 -*-
"""
backend/app/modules/analytics/services/timeframe.py

Resolución de la ventana de tiempo de un reporte.

- Token conocido (24h/7d/30d/90d) -> start = now - N días.
- Token ausente o desconocido -> default del endpoint (nunca error).
- El filtro es `downloaded_at >= start`; no hay cota superior.

Autor: RadioHub
Fecha: 2026-09-08
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from app.modules.analytics.enums import Timeframe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimeWindow:
    timeframe: Timeframe
    start: datetime


def resolve_timeframe(token: Optional[str], default: Timeframe) -> Timeframe:
    if token is None or not str(token).strip():
        return default
    timeframe = Timeframe.parse_or(token)
    if timeframe is None:
        logger.debug("[analytics] unknown timeframe=%r, using default=%s", token, default.value)
        return default
    return timeframe


def window_start(timeframe: Timeframe, now: datetime) -> datetime:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now - timedelta(days=timeframe.days)


def resolve_window(token: Optional[str], default: Timeframe, now: datetime) -> TimeWindow:
    timeframe = resolve_timeframe(token, default)
    return TimeWindow(timeframe=timeframe, start=window_start(timeframe, now))


__all__ = ["TimeWindow", "resolve_timeframe", "window_start", "resolve_window"]

# Fin del archivo backend/app/modules/analytics/services/timeframe.py
