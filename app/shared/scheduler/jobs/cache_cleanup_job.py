# -*- coding: utf-8 -*-
"""
backend/app/shared/scheduler/jobs/cache_cleanup_job.py

Barrido periódico del caché de reportes de analítica.

`get()` ya descarta entradas vencidas al leerlas; el barrido libera las que
nadie vuelve a pedir (combinaciones de filtros de una sola vez). Cada tick
deja una línea de log con tamaño antes/después y tasa de aciertos.

Autor: RadioHub
Fecha: 2026-09-04
"""

import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict

from app.shared.cache import CacheBackend

logger = logging.getLogger(__name__)

CACHE_SWEEP_JOB_ID = "analytics_cache_sweep"

# Por encima de esta ocupación el LRU empieza a expulsar reportes vigentes
CAPACITY_WARNING_RATIO = 0.9


async def cleanup_cache(cache: CacheBackend, cache_name: str) -> Dict[str, Any]:
    """
    Un tick del barrido. Nunca lanza: un error queda en el log y en la llave
    `error` del resultado, y el siguiente tick reintenta.
    """
    timestamp = datetime.now(timezone.utc).isoformat()
    started = time.perf_counter()
    try:
        before = cache.get_stats().get("size", 0)
        removed = cache.sweep()
        stats = cache.get_stats()
    except Exception as e:
        logger.error("[cache_sweep] cache=%s error: %s", cache_name, e, exc_info=True)
        return {"cache_name": cache_name, "timestamp": timestamp, "error": str(e), "removed_expired": 0}

    after = stats.get("size", 0)
    result = {
        "cache_name": cache_name,
        "timestamp": timestamp,
        "entries_before": before,
        "entries_after": after,
        "removed_expired": removed,
        "duration_ms": round((time.perf_counter() - started) * 1000, 2),
        "hit_rate_percent": stats.get("hit_rate_percent", 0.0),
    }
    logger.info(
        "[cache_sweep] cache=%s before=%d after=%d removed=%d hit_rate=%.1f%%",
        cache_name,
        before,
        after,
        removed,
        result["hit_rate_percent"],
    )

    capacity = cache.max_size
    if capacity and after > capacity * CAPACITY_WARNING_RATIO:
        logger.warning(
            "[cache_sweep] cache=%s at %.0f%% capacity (%d/%d)",
            cache_name,
            after / capacity * 100,
            after,
            capacity,
        )
    return result


def register_cache_sweep_job(
    scheduler,
    cache: CacheBackend,
    seconds: int = 60,
    cache_name: str = "analytics_responses",
) -> str:
    """Programa `cleanup_cache` en un SchedulerService; devuelve el id del job."""
    return scheduler.add_interval_job(
        cleanup_cache,
        CACHE_SWEEP_JOB_ID,
        seconds=seconds,
        cache=cache,
        cache_name=cache_name,
    )


# Fin del archivo backend/app/shared/scheduler/jobs/cache_cleanup_job.py
