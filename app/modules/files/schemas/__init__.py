# -*- coding: utf-8 -*-
"""
backend/app/modules/files/schemas/__init__.py

Schemas Pydantic del módulo Files.

Autor: RadioHub
Fecha: 2026-09-12
"""

from __future__ import annotations

from .tracking_schemas import TrackDownloadIn, TrackDownloadOut

__all__ = ["TrackDownloadIn", "TrackDownloadOut"]

# Fin del archivo backend/app/modules/files/schemas/__init__.py
