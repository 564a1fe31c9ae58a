# -*- coding: utf-8 -*-
"""
backend/app/modules/analytics/services/normalization.py

Helpers comunes para los reportes:
- normalización de page/limit (entrada tolerante, nunca rechaza)
- parseo de filtros opcionales (ids, tokens "all")
- conversión de valores de BD a tipos JSON (Decimal -> int, fechas -> ISO)
- bloque de paginación {page, limit, total, hasMore}

Autor: RadioHub
Fecha: 2026-09-08
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional
from uuid import UUID

ALL_TOKEN = "all"


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _lenient_int(raw: Any) -> Optional[int]:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


def _bounds(page: Any, limit: Any, default_limit: int, max_limit: int = 100) -> PageRequest:
    """
    page < 1 o inválido -> 1; limit inválido -> default; limit fuera de
    [1, max_limit] -> recortado al borde más cercano.
    """
    pg = _lenient_int(page)
    lim = _lenient_int(limit)
    pg = 1 if pg is None or pg < 1 else pg
    lim = default_limit if lim is None else max(1, min(lim, max_limit))
    return PageRequest(page=pg, limit=lim)


def page_request(page: Any, limit: Any, default_limit: int, max_limit: int = 100) -> PageRequest:
    return _bounds(page, limit, default_limit, max_limit)


def parse_uuid(raw: Any) -> Optional[UUID]:
    if raw is None or isinstance(raw, UUID):
        return raw
    try:
        return UUID(str(raw).strip())
    except ValueError:
        return None


def parse_filter_token(raw: Optional[str]) -> Optional[str]:
    """None, cadena vacía y "all" significan "sin filtro"."""
    if raw is None:
        return None
    token = str(raw).strip()
    if not token or token.casefold() == ALL_TOKEN:
        return None
    return token


def to_int(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, (Decimal, float)):
        return int(value)
    return _lenient_int(value) or 0


def to_str_id(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def to_iso_datetime(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            # Los timestamps se guardan en UTC
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    return str(value)


def to_iso_date(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    # SQLite devuelve DATE(...) como texto "YYYY-MM-DD"
    return str(value)[:10]


def pagination(page: PageRequest, total: int, returned: int) -> Dict[str, Any]:
    return {
        "page": page.page,
        "limit": page.limit,
        "total": total,
        "hasMore": page.offset + returned < total,
    }


__all__ = [
    "ALL_TOKEN",
    "PageRequest",
    "page_request",
    "parse_uuid",
    "parse_filter_token",
    "to_int",
    "to_str_id",
    "to_iso_datetime",
    "to_iso_date",
    "pagination",
]

# Fin del archivo backend/app/modules/analytics/services/normalization.py
