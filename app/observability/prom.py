# -*- coding: utf-8 -*-
"""
backend/app/observability/prom.py

Métricas HTTP de RadioHub y endpoint /metrics (modelo pull).

`path` es la plantilla de la ruta resuelta (`/api/analytics/files/{file_id}`),
nunca el path concreto: un label por UUID dispararía la cardinalidad.
Peticiones que no resuelven ruta se agrupan en `<unmatched>`.

Con PROMETHEUS_MULTIPROC_DIR (gunicorn con varios workers) el endpoint
agrega los archivos de todos los procesos.

Autor: RadioHub
Fecha: 2026-09-13
"""
from __future__ import annotations

import os
from time import perf_counter

from fastapi import FastAPI
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    multiprocess,
)
from prometheus_client.registry import REGISTRY
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

METRICS_PATH = "/metrics"
UNMATCHED_PATH = "<unmatched>"

HTTP_LABELS = ("method", "path", "status")

REQUEST_COUNT = Counter("radiohub_http_requests_total", "Peticiones HTTP atendidas", HTTP_LABELS)
REQUEST_LATENCY = Histogram(
    "radiohub_http_request_latency_seconds",
    "Latencia de peticiones HTTP (s)",
    HTTP_LABELS,
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)


class PrometheusMiddleware:
    """Middleware ASGI; el scrape de /metrics no se cuenta a sí mismo."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope.get("path") == METRICS_PATH:
            await self.app(scope, receive, send)
            return

        status = "500"
        started = perf_counter()

        async def send_with_status(message: Message) -> None:
            nonlocal status
            if message["type"] == "http.response.start":
                status = str(message["status"])
            await send(message)

        try:
            await self.app(scope, receive, send_with_status)
        finally:
            # El router deja la ruta resuelta en el mismo scope
            route = getattr(scope.get("route"), "path", None) or UNMATCHED_PATH
            labels = (scope["method"], route, status)
            REQUEST_LATENCY.labels(*labels).observe(perf_counter() - started)
            REQUEST_COUNT.labels(*labels).inc()


def _registry() -> CollectorRegistry:
    if not os.environ.get("PROMETHEUS_MULTIPROC_DIR"):
        return REGISTRY
    registry = CollectorRegistry()
    multiprocess.MultiProcessCollector(registry)
    return registry


def setup_observability(app: FastAPI, *, http_metrics: bool = True) -> None:
    """Instala el middleware (si `http_metrics`) y expone /metrics."""
    if http_metrics:
        app.add_middleware(PrometheusMiddleware)
    registry = _registry()

    @app.get(METRICS_PATH, include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(registry), media_type=CONTENT_TYPE_LATEST)


__all__ = ["PrometheusMiddleware", "setup_observability"]
# Fin del archivo backend/app/observability/prom.py
