# -*- coding: utf-8 -*-
"""
backend/app/modules/files/services/__init__.py

Servicios de dominio del módulo Files.

Autor: RadioHub
Fecha: 2026-09-12
"""

from __future__ import annotations

from .download_tracking_service import (
    DIRECT_REFERER,
    MANUAL_REFERER,
    DownloadTrackingService,
    RequestContext,
    ServedFile,
    normalize_client_ip,
)

__all__ = [
    "DIRECT_REFERER",
    "MANUAL_REFERER",
    "DownloadTrackingService",
    "RequestContext",
    "ServedFile",
    "normalize_client_ip",
]

# Fin del archivo backend/app/modules/files/services/__init__.py
