# -*- coding: utf-8 -*-
"""
backend/app/modules/files/models/__init__.py

Barrel de modelos del módulo Files.

Modelos:
- File        : Catálogo de archivos (dueño: proyecto, episodio o guion).
- DownloadLog : Bitácora append-only de descargas.

Autor: RadioHub
Fecha: 2026-09-05
"""

from .file_models import File
from .download_log_models import DownloadLog

__all__ = ["File", "DownloadLog"]
