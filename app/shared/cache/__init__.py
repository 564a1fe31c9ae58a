# -*- coding: utf-8 -*-
"""
backend/app/shared/cache/__init__.py

Módulo compartido de caché con interfaces y utilidades reutilizables.
"""

from .cache_backend import CacheBackend
from .response_cache import ResponseCache

__all__ = ["CacheBackend", "ResponseCache"]
