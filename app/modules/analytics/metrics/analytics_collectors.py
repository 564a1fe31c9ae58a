# -*- coding: utf-8 -*-
"""
backend/app/modules/analytics/metrics/analytics_collectors.py

Coleccionistas Prometheus para el módulo Analytics de RadioHub.

Define contadores e histogramas para registrar:
- Lecturas del caché de respuestas (hit/miss)
- Reportes servidos en modo degradado (almacén caído o consulta fallida)
- Sub-métricas que fallaron de forma aislada dentro de un reporte
- Latencia de cómputo por reporte (sólo misses de caché)
- Eventos de descarga registrados

Autor: RadioHub
Fecha: 2026-09-09
"""
from prometheus_client import Counter, Histogram

NAMESPACE = "radiohub"
SUBSYSTEM = "analytics"

analytics_cache_lookups_total = Counter(
    f"{NAMESPACE}_{SUBSYSTEM}_cache_lookups_total",
    "Lecturas del caché de respuestas de analítica",
    labelnames=("result",),  # hit|miss
)

analytics_reports_degraded_total = Counter(
    f"{NAMESPACE}_{SUBSYSTEM}_reports_degraded_total",
    "Reportes devueltos en su forma en cero",
    labelnames=("report", "reason"),  # reason: store_unavailable|query_failed
)

analytics_submetric_failures_total = Counter(
    f"{NAMESPACE}_{SUBSYSTEM}_submetric_failures_total",
    "Sub-métricas sustituidas por su valor en cero",
    labelnames=("report", "metric"),
)

analytics_report_latency_seconds = Histogram(
    f"{NAMESPACE}_{SUBSYSTEM}_report_latency_seconds",
    "Latencia de cómputo de reportes (s)",
    labelnames=("report",),
)

download_events_recorded_total = Counter(
    f"{NAMESPACE}_{SUBSYSTEM}_download_events_recorded_total",
    "Eventos de descarga insertados en download_logs",
    labelnames=("source", "status"),  # source: served|manual
)

__all__ = [
    "analytics_cache_lookups_total",
    "analytics_reports_degraded_total",
    "analytics_submetric_failures_total",
    "analytics_report_latency_seconds",
    "download_events_recorded_total",
]
