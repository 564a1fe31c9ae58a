# -*- coding: utf-8 -*-
"""
backend/app/shared/cache/cache_backend.py

Contrato de un caché de respuestas con TTL. Lo consumen las rutas de
analítica (lectura/escritura), las rutas de descarga (invalidación por
prefijo), la administración del caché y el job de barrido.

`get_stats()` devuelve al menos: name, size, max_size, default_ttl,
hits, misses, evictions, invalidations, expired_removals, total_requests
y hit_rate_percent.

Autor: RadioHub
Fecha: 2026-09-04
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional


class CacheBackend(ABC):
    @property
    @abstractmethod
    def max_size(self) -> Optional[int]:
        """None = sin límite de entradas."""

    @property
    @abstractmethod
    def default_ttl(self) -> float: ...

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """None si la clave falta o ya venció; una entrada vencida se descarta al leerla."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None: ...

    @abstractmethod
    def invalidate(self, key: str) -> bool: ...

    @abstractmethod
    def invalidate_prefix(self, prefix: str) -> int: ...

    @abstractmethod
    def sweep(self) -> int:
        """Descarta todo lo vencido; devuelve cuántas entradas salieron."""

    @abstractmethod
    def clear(self) -> int: ...

    @abstractmethod
    def get_stats(self) -> dict: ...


__all__ = ["CacheBackend"]
# Fin del archivo backend/app/shared/cache/cache_backend.py
