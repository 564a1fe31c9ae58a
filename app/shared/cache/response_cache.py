# -*- coding: utf-8 -*-
"""
backend/app/shared/cache/response_cache.py

Caché en memoria para respuestas de reportes, con TTL y LRU eviction.

Cada entrada guarda (valor, insertado_en). Una lectura es hit si y sólo si
`ahora - insertado_en < ttl`; si no, la entrada se descarta en ese momento.
El reloj es inyectable (por defecto time.monotonic) para poder probar los
bordes del TTL sin dormir.

Alcance: un proceso. Dos misses simultáneos sobre la misma clave calculan
ambos y gana la última escritura.

Autor: RadioHub
Fecha: 2026-09-04
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Optional

from app.shared.cache.cache_backend import CacheBackend

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class ResponseCache(CacheBackend):
    """
    Caché thread-safe con TTL fijo y LRU eviction.

    Política:
    - set() sobre una clave existente reemplaza valor y marca de tiempo.
    - Al alcanzar max_size se expulsa la entrada menos usada recientemente.
    - sweep() elimina todo lo expirado (lo invoca el scheduler cada 60 s).
    """

    def __init__(
        self,
        ttl_seconds: float = 300,
        max_size: Optional[int] = 100,
        clock: Optional[Clock] = None,
        name: str = "analytics_responses",
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds debe ser positivo")
        self._ttl = float(ttl_seconds)
        self._max_size = max_size
        self._clock: Clock = clock or time.monotonic
        self.name = name

        self._entries: OrderedDict[str, tuple[Any, float]] = OrderedDict()
        self._lock = threading.RLock()

        # Estadísticas
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._invalidations = 0
        self._expired_removals = 0

    @property
    def max_size(self) -> Optional[int]:
        return self._max_size

    @property
    def default_ttl(self) -> float:
        return self._ttl

    def _is_fresh(self, inserted_at: float, now: float) -> bool:
        return now - inserted_at < self._ttl

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            value, inserted_at = entry
            if not self._is_fresh(inserted_at, self._clock()):
                del self._entries[key]
                self._misses += 1
                self._expired_removals += 1
                return None

            self._entries.move_to_end(key)
            self._hits += 1
            return value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            now = self._clock()
            if key in self._entries:
                self._entries[key] = (value, now)
                self._entries.move_to_end(key)
                return

            if self._max_size is not None and len(self._entries) >= self._max_size:
                evicted_key, _ = self._entries.popitem(last=False)
                self._evictions += 1
                logger.debug("[%s] LRU eviction key=%s", self.name, evicted_key)

            self._entries[key] = (value, now)

    def invalidate(self, key: str) -> bool:
        with self._lock:
            if key in self._entries:
                del self._entries[key]
                self._invalidations += 1
                return True
            return False

    def invalidate_prefix(self, prefix: str) -> int:
        with self._lock:
            doomed = [k for k in self._entries if k.startswith(prefix)]
            for key in doomed:
                del self._entries[key]
            self._invalidations += len(doomed)
            return len(doomed)

    def sweep(self) -> int:
        with self._lock:
            now = self._clock()
            expired = [
                key for key, (_, inserted_at) in self._entries.items()
                if not self._is_fresh(inserted_at, now)
            ]
            for key in expired:
                del self._entries[key]
            self._expired_removals += len(expired)
            return len(expired)

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        # No cuenta como lectura ni aplica TTL; útil para diagnósticos
        with self._lock:
            return key in self._entries

    def get_stats(self) -> dict:
        with self._lock:
            total_requests = self._hits + self._misses
            hit_rate = (self._hits / total_requests * 100) if total_requests > 0 else 0.0
            return {
                "name": self.name,
                "size": len(self._entries),
                "max_size": self._max_size,
                "default_ttl": self._ttl,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
                "invalidations": self._invalidations,
                "expired_removals": self._expired_removals,
                "hit_rate_percent": round(hit_rate, 2),
                "total_requests": total_requests,
            }

    def reset_stats(self) -> None:
        with self._lock:
            self._hits = 0
            self._misses = 0
            self._evictions = 0
            self._invalidations = 0
            self._expired_removals = 0


__all__ = ["ResponseCache", "Clock"]

# Fin del archivo backend/app/shared/cache/response_cache.py
