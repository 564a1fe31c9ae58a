# -*- coding: utf-8 -*-
"""
backend/app/modules/files/enums/__init__.py

Barrel para enums del módulo Files.

Autor: RadioHub
Fecha: 2026-09-05
"""

from __future__ import annotations

from .entity_type_enum import EntityType
from .download_status_enum import DownloadStatus

__all__ = ["EntityType", "DownloadStatus"]
