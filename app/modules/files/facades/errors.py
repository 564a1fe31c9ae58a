# -*- coding: utf-8 -*-
"""
backend/app/modules/files/facades/errors.py

Errores de dominio del módulo Files.

Los servicios los lanzan sin acoplarse a FastAPI; las rutas los traducen:
- FileNotFound        -> 404
- TrackingUnavailable -> 503
- FilePayloadError    -> 500 (contenido almacenado ilegible)

Autor: RadioHub
Fecha: 2026-09-12
"""

from __future__ import annotations

from typing import Any


class FilesError(Exception):
    """
    Error base para el módulo Files.
    """

    pass


class FileNotFound(FilesError):
    """
    El archivo no existe, está inactivo o el id no es válido.
    """

    def __init__(self, file_id: Any = None, message: str = "File not found") -> None:
        self.file_id = file_id
        super().__init__(message)


class TrackingUnavailable(FilesError):
    """
    No hay almacén configurado: no se pueden registrar descargas.
    """

    def __init__(self, message: str = "Download tracking unavailable") -> None:
        super().__init__(message)


class FilePayloadError(FilesError):
    def __init__(self, file_id: Any, message: str = "Stored file content could not be decoded") -> None:
        self.file_id = file_id
        super().__init__(message)


__all__ = [
    "FilesError",
    "FileNotFound",
    "TrackingUnavailable",
    "FilePayloadError",
]

# Fin del archivo backend/app/modules/files/facades/errors.py
