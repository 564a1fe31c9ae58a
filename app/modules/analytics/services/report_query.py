# -*- coding: utf-8 -*-
"""
backend/app/modules/analytics/services/report_query.py

Parseo tolerante de los query params de los reportes.

Los endpoints reciben todo como texto opcional; aquí se convierten a los
tipos del motor sin rechazar nunca la petición:
- timeframe desconocido -> default del descriptor del reporte
- page/limit inválidos -> 1 / default (limit recortado a [1, max])
- ids mal formados -> sin filtro
- entityType/status "all", vacíos o desconocidos -> sin filtro

Autor: RadioHub
Fecha: 2026-09-11
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional
from uuid import UUID

from app.modules.analytics.enums import Timeframe
from app.modules.analytics.services.normalization import (
    PageRequest,
    page_request,
    parse_filter_token,
    parse_uuid,
)
from app.modules.analytics.services.timeframe import resolve_timeframe
from app.modules.files.enums import DownloadStatus, EntityType

LOGS_PAGE_SIZE = 50


@dataclass(frozen=True)
class RawReportQuery:
    """Query params tal como llegan (todo texto opcional)."""

    timeframe: Optional[str] = None
    page: Optional[str] = None
    limit: Optional[str] = None
    search: Optional[str] = None
    file_id: Optional[str] = None
    user_id: Optional[str] = None
    project_id: Optional[str] = None
    entity_type: Optional[str] = None
    status: Optional[str] = None


def timeframe_of(raw: RawReportQuery, default: Any) -> Timeframe:
    """
    `default` es un Timeframe o un descriptor de reporte; de un descriptor se
    toma su `default_timeframe`.
    """
    return resolve_timeframe(raw.timeframe, getattr(default, "default_timeframe", default))


def page_of(raw: RawReportQuery, default_limit: int, max_limit: int = 100) -> PageRequest:
    return page_request(raw.page, raw.limit, default_limit, max_limit)


def entity_type_of(raw: RawReportQuery) -> Optional[EntityType]:
    token = parse_filter_token(raw.entity_type)
    return EntityType.parse_or(token) if token else None


def status_of(raw: RawReportQuery) -> Optional[DownloadStatus]:
    token = parse_filter_token(raw.status)
    return DownloadStatus.parse_or(token) if token else None


def uuid_of(value: Optional[str]) -> Optional[UUID]:
    return parse_uuid(parse_filter_token(value))


def search_of(raw: RawReportQuery) -> Optional[str]:
    if raw.search is None:
        return None
    term = raw.search.strip()
    return term or None


def user_id_of(raw: RawReportQuery) -> Optional[str]:
    return parse_filter_token(raw.user_id)


__all__ = [
    "RawReportQuery",
    "LOGS_PAGE_SIZE",
    "timeframe_of",
    "page_of",
    "entity_type_of",
    "status_of",
    "uuid_of",
    "search_of",
    "user_id_of",
]

# Fin del archivo backend/app/modules/analytics/services/report_query.py
