# -*- coding: utf-8 -*-
"""
backend/app/modules/files/enums/download_status_enum.py

Estado final de una descarga registrada en download_logs.

Autor: RadioHub
Fecha: 2026-09-05
"""

from __future__ import annotations

from .compat_base import TokenEnum


class DownloadStatus(TokenEnum):
    completed = "completed"
    failed = "failed"
    partial = "partial"


__all__ = ["DownloadStatus"]
