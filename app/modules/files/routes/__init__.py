# -*- coding: utf-8 -*-
"""
backend/app/modules/files/routes/__init__.py

Ensamblador de routers del módulo Files.

Autor: RadioHub
Fecha: 2026-09-12
"""

from fastapi import APIRouter

from .download_routes import router as download_router


def get_files_routers() -> list[APIRouter]:
    """
    Devuelve todos los routers del módulo Files listos para montar.
    """
    return [download_router]


__all__ = ["get_files_routers", "download_router"]

# Fin del archivo backend/app/modules/files/routes/__init__.py
