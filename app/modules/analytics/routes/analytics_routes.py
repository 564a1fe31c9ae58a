# -*- coding: utf-8 -*-
"""
backend/app/modules/analytics/routes/analytics_routes.py

Rutas de reportes de descargas (`/api/analytics/...`).

Contrato:
- Todos los query params son texto opcional y se normalizan sin rechazar
  la petición (ver services/report_query.py).
- Las respuestas GET pasan por el caché de respuestas; la llave es la ruta
  más los query params ordenados. No se guarda un reporte degradado (almacén
  caído o consulta fallida), así una respuesta en cero no tapa datos reales.
- La ventana por defecto de cada endpoint es la de su descriptor.
- Almacén caído: HTTP 200 con la forma en cero del reporte.
- Proyecto, episodio, guion o archivo inexistente en los detalles: 404.

Autor: RadioHub
Fecha: 2026-09-11
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, List, Optional
from urllib.parse import urlencode
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from app.core.dependencies import (
    get_aggregation_engine,
    get_app_settings,
    get_response_cache,
)
from app.shared.cache import ResponseCache
from app.shared.config.settings_base import BaseAppSettings
from app.modules.analytics import ANALYTICS_CACHE_PREFIX
from app.modules.analytics.metrics.analytics_collectors import analytics_cache_lookups_total
from app.modules.analytics.schemas.analytics_schemas import (
    DownloadLogPageOut,
    EpisodeDetailOut,
    EpisodeRollupOut,
    FileDetailOut,
    FileStatPageOut,
    OverviewOut,
    ProjectDetailOut,
    ProjectRollupOut,
    ScriptDetailOut,
    ScriptRollupOut,
    UserActivityOut,
)
from app.modules.analytics.services import AggregationEngine, AnalyticsNotFoundError
from app.modules.analytics.services import report_descriptors as rd
from app.modules.analytics.services.report_query import (
    LOGS_PAGE_SIZE,
    RawReportQuery,
    entity_type_of,
    page_of,
    search_of,
    status_of,
    timeframe_of,
    user_id_of,
    uuid_of,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def report_query(
    timeframe: Optional[str] = Query(None, description="24h | 7d | 30d | 90d"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    # Nombres con sufijo: no chocan con los path params {file_id}/{project_id}
    file_id_q: Optional[str] = Query(None, alias="fileId"),
    user_id: Optional[str] = Query(None, alias="userId"),
    project_id_q: Optional[str] = Query(None, alias="projectId"),
    entity_type: Optional[str] = Query(None, alias="entityType"),
    status_: Optional[str] = Query(None, alias="status"),
) -> RawReportQuery:
    return RawReportQuery(
        timeframe=timeframe,
        page=page,
        limit=limit,
        search=search,
        file_id=file_id_q,
        user_id=user_id,
        project_id=project_id_q,
        entity_type=entity_type,
        status=status_,
    )


def cache_key(request: Request) -> str:
    query = urlencode(sorted(request.query_params.multi_items()))
    return f"{ANALYTICS_CACHE_PREFIX}{request.url.path}?{query}"


async def cached_report(
    request: Request,
    cache: ResponseCache,
    engine: AggregationEngine,
    compute: Callable[[], Awaitable[Any]],
) -> Any:
    key = cache_key(request)
    hit = cache.get(key)
    if hit is not None:
        analytics_cache_lookups_total.labels("hit").inc()
        return hit

    analytics_cache_lookups_total.labels("miss").inc()
    value = await compute()
    if engine.degraded:
        logger.info("[analytics] degraded report not cached key=%s", key)
    else:
        cache.set(key, value)
    return value


def _path_uuid(raw: str, entity: str) -> UUID:
    parsed = uuid_of(raw)
    if parsed is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{entity} not found")
    return parsed


# ---------------------------------------------------------------------------
# Descargas
# ---------------------------------------------------------------------------

@router.get(
    "/downloads/overview",
    response_model=OverviewOut,
    summary="Resumen de descargas",
    description="Totales, archivos populares y series por día, tipo y hora (24 cubetas).",
)
async def downloads_overview(
    request: Request,
    raw: RawReportQuery = Depends(report_query),
    engine: AggregationEngine = Depends(get_aggregation_engine),
    cache: ResponseCache = Depends(get_response_cache),
):
    timeframe = timeframe_of(raw, rd.TOTAL_DOWNLOADS)
    return await cached_report(request, cache, engine, lambda: engine.overview(timeframe=timeframe))


@router.get(
    "/downloads/users",
    response_model=List[UserActivityOut],
    summary="Descargas por usuario",
)
async def downloads_by_user(
    request: Request,
    raw: RawReportQuery = Depends(report_query),
    engine: AggregationEngine = Depends(get_aggregation_engine),
    cache: ResponseCache = Depends(get_response_cache),
    settings: BaseAppSettings = Depends(get_app_settings),
):
    timeframe = timeframe_of(raw, rd.USER_DOWNLOADS)
    page = page_of(raw, settings.default_page_size, settings.max_page_size)
    search = search_of(raw)
    return await cached_report(
        request,
        cache,
        engine,
        lambda: engine.user_downloads(timeframe=timeframe, page=page, search=search),
    )


@router.get(
    "/downloads/logs",
    response_model=DownloadLogPageOut,
    summary="Bitácora de descargas",
    description="Eventos individuales, más recientes primero, con paginación.",
)
async def download_logs(
    request: Request,
    raw: RawReportQuery = Depends(report_query),
    engine: AggregationEngine = Depends(get_aggregation_engine),
    cache: ResponseCache = Depends(get_response_cache),
    settings: BaseAppSettings = Depends(get_app_settings),
):
    timeframe = timeframe_of(raw, rd.DOWNLOAD_LOG_ROWS)
    page = page_of(raw, LOGS_PAGE_SIZE, settings.max_page_size)
    filters = dict(
        file_id=uuid_of(raw.file_id),
        user_id=user_id_of(raw),
        entity_type=entity_type_of(raw),
        status=status_of(raw),
    )
    return await cached_report(
        request,
        cache,
        engine,
        lambda: engine.download_logs(timeframe=timeframe, page=page, **filters),
    )


@router.get(
    "/downloads/files",
    response_model=FileStatPageOut,
    summary="Descargas por archivo",
)
async def downloads_by_file(
    request: Request,
    raw: RawReportQuery = Depends(report_query),
    engine: AggregationEngine = Depends(get_aggregation_engine),
    cache: ResponseCache = Depends(get_response_cache),
    settings: BaseAppSettings = Depends(get_app_settings),
):
    timeframe = timeframe_of(raw, rd.FILE_STATS)
    page = page_of(raw, settings.default_page_size, settings.max_page_size)
    entity_type = entity_type_of(raw)
    return await cached_report(
        request,
        cache,
        engine,
        lambda: engine.file_stats(timeframe=timeframe, page=page, entity_type=entity_type),
    )


# ---------------------------------------------------------------------------
# Rollups por catálogo
# ---------------------------------------------------------------------------

@router.get(
    "/projects",
    response_model=List[ProjectRollupOut],
    summary="Descargas por proyecto",
    description="Incluye archivos del proyecto y de sus episodios y guiones.",
)
async def project_rollup(
    request: Request,
    raw: RawReportQuery = Depends(report_query),
    engine: AggregationEngine = Depends(get_aggregation_engine),
    cache: ResponseCache = Depends(get_response_cache),
):
    timeframe = timeframe_of(raw, rd.PROJECT_ROLLUP)
    project_id = uuid_of(raw.project_id)
    return await cached_report(
        request,
        cache,
        engine,
        lambda: engine.project_rollup(timeframe=timeframe, project_id=project_id),
    )


@router.get(
    "/projects/{project_id}",
    response_model=ProjectDetailOut,
    summary="Detalle de descargas de un proyecto",
)
async def project_detail(
    project_id: str,
    request: Request,
    raw: RawReportQuery = Depends(report_query),
    engine: AggregationEngine = Depends(get_aggregation_engine),
    cache: ResponseCache = Depends(get_response_cache),
):
    pid = _path_uuid(project_id, "project")
    timeframe = timeframe_of(raw, rd.DAILY_USERS)
    try:
        return await cached_report(
            request,
            cache,
            engine,
            lambda: engine.project_detail(project_id=pid, timeframe=timeframe),
        )
    except AnalyticsNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="project not found") from e


@router.get(
    "/episodes",
    response_model=List[EpisodeRollupOut],
    summary="Descargas por episodio",
)
async def episode_rollup(
    request: Request,
    raw: RawReportQuery = Depends(report_query),
    engine: AggregationEngine = Depends(get_aggregation_engine),
    cache: ResponseCache = Depends(get_response_cache),
):
    timeframe = timeframe_of(raw, rd.EPISODE_ROLLUP)
    project_id = uuid_of(raw.project_id)
    return await cached_report(
        request,
        cache,
        engine,
        lambda: engine.episode_rollup(timeframe=timeframe, project_id=project_id),
    )


@router.get(
    "/episodes/{episode_id}",
    response_model=EpisodeDetailOut,
    summary="Detalle de descargas de un episodio",
)
async def episode_detail(
    episode_id: str,
    request: Request,
    raw: RawReportQuery = Depends(report_query),
    engine: AggregationEngine = Depends(get_aggregation_engine),
    cache: ResponseCache = Depends(get_response_cache),
):
    eid = _path_uuid(episode_id, "episode")
    timeframe = timeframe_of(raw, rd.DAILY_USERS)
    try:
        return await cached_report(
            request,
            cache,
            engine,
            lambda: engine.episode_detail(episode_id=eid, timeframe=timeframe),
        )
    except AnalyticsNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="episode not found") from e


@router.get(
    "/scripts",
    response_model=List[ScriptRollupOut],
    summary="Descargas por guion",
)
async def script_rollup(
    request: Request,
    raw: RawReportQuery = Depends(report_query),
    engine: AggregationEngine = Depends(get_aggregation_engine),
    cache: ResponseCache = Depends(get_response_cache),
):
    timeframe = timeframe_of(raw, rd.SCRIPT_ROLLUP)
    project_id = uuid_of(raw.project_id)
    return await cached_report(
        request,
        cache,
        engine,
        lambda: engine.script_rollup(timeframe=timeframe, project_id=project_id),
    )


@router.get(
    "/scripts/{script_id}",
    response_model=ScriptDetailOut,
    summary="Detalle de descargas de un guion",
)
async def script_detail(
    script_id: str,
    request: Request,
    raw: RawReportQuery = Depends(report_query),
    engine: AggregationEngine = Depends(get_aggregation_engine),
    cache: ResponseCache = Depends(get_response_cache),
):
    sid = _path_uuid(script_id, "script")
    timeframe = timeframe_of(raw, rd.DAILY_USERS)
    try:
        return await cached_report(
            request,
            cache,
            engine,
            lambda: engine.script_detail(script_id=sid, timeframe=timeframe),
        )
    except AnalyticsNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="script not found") from e


@router.get(
    "/files/{file_id}",
    response_model=FileDetailOut,
    summary="Estadísticas de descarga de un archivo",
)
async def file_detail(
    file_id: str,
    request: Request,
    raw: RawReportQuery = Depends(report_query),
    engine: AggregationEngine = Depends(get_aggregation_engine),
    cache: ResponseCache = Depends(get_response_cache),
):
    fid = _path_uuid(file_id, "file")
    timeframe = timeframe_of(raw, rd.RECENT_DAILY)
    try:
        return await cached_report(
            request,
            cache,
            engine,
            lambda: engine.file_detail(file_id=fid, timeframe=timeframe),
        )
    except AnalyticsNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="file not found") from e


__all__ = ["router", "cache_key", "cached_report", "report_query"]

# Fin del archivo backend/app/modules/analytics/routes/analytics_routes.py
