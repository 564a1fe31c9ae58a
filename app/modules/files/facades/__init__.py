# -*- coding: utf-8 -*-
"""
backend/app/modules/files/facades/__init__.py

Punto de agregación de fachadas del módulo Files.

Autor: RadioHub
Fecha: 2026-09-12
"""

from __future__ import annotations

from .errors import FilesError, FileNotFound, FilePayloadError, TrackingUnavailable

__all__ = ["FilesError", "FileNotFound", "FilePayloadError", "TrackingUnavailable"]

# Fin del archivo backend/app/modules/files/facades/__init__.py
