# -*- coding: utf-8 -*-
"""
backend/app/modules/analytics/services/degraded.py

Modo degradado de los reportes.

`degrades_to(zero_factory, report=...)` envuelve un método async del motor
de agregación:

1. Si el almacén no está configurado (`store.connected` es False) devuelve
   la forma en cero sin tocar la BD.
2. Si la consulta falla, registra el error con el nombre del reporte y la
   ventana, y devuelve la forma en cero.
3. Los "no encontrado" (AnalyticsNotFoundError) se propagan: la ruta los
   traduce a 404.

En los casos 1 y 2 el motor queda marcado con `degraded = True`; la ruta
usa esa marca para no guardar la respuesta en caché.

El `zero_factory` recibe los mismos kwargs que el método, así la forma en
cero refleja la ventana y la página pedidas.

Autor: RadioHub
Fecha: 2026-09-09
"""

from __future__ import annotations

import functools
import logging
import time
from typing import Any, Awaitable, Callable, TypeVar

from app.modules.analytics.metrics.analytics_collectors import (
    analytics_report_latency_seconds,
    analytics_reports_degraded_total,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")


class AnalyticsNotFoundError(LookupError):
    """La entidad pedida (proyecto, archivo) no existe."""

    def __init__(self, entity: str, entity_id: Any) -> None:
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


def _timeframe_label(kwargs: dict) -> str:
    timeframe = kwargs.get("timeframe")
    return getattr(timeframe, "value", str(timeframe)) if timeframe is not None else "-"


def degrades_to(
    zero_factory: Callable[..., R],
    *,
    report: str,
) -> Callable[[Callable[..., Awaitable[R]]], Callable[..., Awaitable[R]]]:
    def decorator(func: Callable[..., Awaitable[R]]) -> Callable[..., Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(self, **kwargs: Any) -> R:
            if not self.store.connected:
                analytics_reports_degraded_total.labels(report, "store_unavailable").inc()
                self.degraded = True
                logger.warning(
                    "[analytics] report=%s timeframe=%s degraded: store unavailable",
                    report,
                    _timeframe_label(kwargs),
                )
                return zero_factory(**kwargs)

            started = time.perf_counter()
            try:
                return await func(self, **kwargs)
            except AnalyticsNotFoundError:
                raise
            except Exception:
                analytics_reports_degraded_total.labels(report, "query_failed").inc()
                self.degraded = True
                logger.exception(
                    "[analytics] report=%s timeframe=%s failed; returning zero shape",
                    report,
                    _timeframe_label(kwargs),
                )
                return zero_factory(**kwargs)
            finally:
                analytics_report_latency_seconds.labels(report).observe(time.perf_counter() - started)

        return wrapper

    return decorator


__all__ = ["AnalyticsNotFoundError", "degrades_to"]

# Fin del archivo backend/app/modules/analytics/services/degraded.py
