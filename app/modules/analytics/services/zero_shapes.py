# -*- coding: utf-8 -*-
"""
backend/app/modules/analytics/services/zero_shapes.py

Formas "en cero" de cada reporte.

Se devuelven cuando el almacén no está disponible o la consulta falla, y
tienen exactamente las mismas llaves que la respuesta real: números en 0,
listas vacías y la serie horaria siempre con 24 entradas.

Autor: RadioHub
Fecha: 2026-09-08
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from app.modules.analytics.enums import Timeframe
from app.modules.analytics.services.normalization import PageRequest, pagination

HOURS_PER_DAY = 24


def zero_hour_series() -> List[Dict[str, int]]:
    return [{"hour": hour, "count": 0} for hour in range(HOURS_PER_DAY)]


def zero_overview(*, timeframe: Timeframe, **_: Any) -> Dict[str, Any]:
    return {
        "timeframe": timeframe.value,
        "totalDownloads": 0,
        "uniqueDownloaders": 0,
        "totalDataDownloaded": 0,
        "popularFiles": [],
        "downloadsByDay": [],
        "downloadsByType": [],
        "downloadsByHour": zero_hour_series(),
    }


def zero_list(**_: Any) -> List[Any]:
    return []


def zero_logs(*, page: PageRequest, **_: Any) -> Dict[str, Any]:
    return {"logs": [], "pagination": pagination(page, total=0, returned=0)}


def zero_file_stats(*, page: PageRequest, **_: Any) -> Dict[str, Any]:
    return {"files": [], "pagination": pagination(page, total=0, returned=0)}


def _zero_owner_detail(owner_key: str, timeframe: Timeframe) -> Dict[str, Any]:
    return {
        owner_key: None,
        "timeframe": timeframe.value,
        "fileDownloads": [],
        "downloadsByDay": [],
        "topUsers": [],
    }


def zero_project_detail(*, timeframe: Timeframe, **_: Any) -> Dict[str, Any]:
    return _zero_owner_detail("project", timeframe)


def zero_episode_detail(*, timeframe: Timeframe, **_: Any) -> Dict[str, Any]:
    return _zero_owner_detail("episode", timeframe)


def zero_script_detail(*, timeframe: Timeframe, **_: Any) -> Dict[str, Any]:
    return _zero_owner_detail("script", timeframe)


def zero_file_detail(*, timeframe: Optional[Timeframe] = None, **_: Any) -> Dict[str, Any]:
    return {
        "file": None,
        "timeframe": (timeframe or Timeframe.last_30d).value,
        "recentDownloads": [],
        "topDownloaders": [],
    }


__all__ = [
    "HOURS_PER_DAY",
    "zero_hour_series",
    "zero_overview",
    "zero_list",
    "zero_logs",
    "zero_file_stats",
    "zero_project_detail",
    "zero_episode_detail",
    "zero_script_detail",
    "zero_file_detail",
]

# Fin del archivo backend/app/modules/analytics/services/zero_shapes.py
