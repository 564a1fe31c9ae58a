# -*- coding: utf-8 -*-
"""
backend/app/modules/files/schemas/tracking_schemas.py

Schemas del registro manual de descargas (POST /api/analytics/track-download).

`status` se acepta como texto libre: valores desconocidos se registran como
"completed" en lugar de rechazar el evento.

Autor: RadioHub
Fecha: 2026-09-12
"""

from __future__ import annotations

from typing import Optional

from app.shared.utils.base_models import CamelModel, Field


class TrackDownloadIn(CamelModel):
    file_id: str = Field(..., description="Id del archivo descargado")
    download_size: Optional[int] = Field(
        default=None, ge=0, description="Bytes transferidos; por defecto el tamaño del archivo"
    )
    download_duration: Optional[int] = Field(default=None, ge=0, description="Duración en ms")
    status: Optional[str] = Field(default=None, description="completed | failed | partial")


class TrackDownloadOut(CamelModel):
    success: bool = True
    download_id: str


__all__ = ["TrackDownloadIn", "TrackDownloadOut"]

# Fin del archivo backend/app/modules/files/schemas/tracking_schemas.py
