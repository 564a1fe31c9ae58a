# -*- coding: utf-8 -*-
"""
backend/app/modules/analytics/enums/timeframe_enum.py

Ventanas de tiempo aceptadas por los reportes: 24h, 7d, 30d, 90d.

Autor: RadioHub
Fecha: 2026-09-08
"""

from __future__ import annotations

from app.modules.files.enums.compat_base import TokenEnum


class Timeframe(TokenEnum):
    """
    Token de ventana. `days` es el tamaño de la ventana hacia atrás desde
    "ahora"; no hay límite superior.
    """
    last_24h = "24h"
    last_7d = "7d"
    last_30d = "30d"
    last_90d = "90d"

    @property
    def days(self) -> int:
        return _DAYS[self.value]


_DAYS = {
    "24h": 1,
    "7d": 7,
    "30d": 30,
    "90d": 90,
}


__all__ = ["Timeframe"]
