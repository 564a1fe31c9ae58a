# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/__init__.py

Utilidades comunes: modelos base Pydantic y respuestas JSON UTF-8.

Autor: RadioHub
Fecha: 2026-09-11
"""

from .base_models import CamelModel, UTF8SafeModel, Field
from .json_response import UTF8JSONResponse, json_response_utf8

__all__ = [
    "CamelModel",
    "UTF8SafeModel",
    "Field",
    "UTF8JSONResponse",
    "json_response_utf8",
]
