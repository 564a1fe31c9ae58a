# -*- coding: utf-8 -*-
"""
backend/app/modules/analytics/services/aggregation_engine.py

Motor de agregación de descargas.

Un solo motor parametrizado por descriptores (report_descriptors.py):
- Cada método público es un reporte; recibe parámetros ya normalizados
  (Timeframe, PageRequest, ids parseados) como keyword-only.
- Las sub-consultas independientes de un reporte se lanzan en paralelo con
  asyncio.gather, cada una en su propia sesión; las dependientes (buscar el
  proyecto antes de agregar sus archivos) van en secuencia.
- Cada sub-métrica falla de forma aislada: se registra y se sustituye por su
  valor en cero, el resto del reporte se conserva.
- Todo el reporte cae a su forma en cero si el almacén no está configurado
  o la consulta falla (decorador `degrades_to`).

Los valores de BD se normalizan aquí: Decimal -> int, fechas -> ISO-8601,
UUID -> str.

Autor: RadioHub
Fecha: 2026-09-10
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.sql.selectable import Subquery
from sqlalchemy.sql.elements import ColumnElement

from app.shared.database import StoreClient
from app.modules.analytics.enums import Timeframe
from app.modules.analytics.metrics.analytics_collectors import analytics_submetric_failures_total
from app.modules.analytics.services import report_descriptors as rd
from app.modules.analytics.services.degraded import AnalyticsNotFoundError, degrades_to
from app.modules.analytics.services.normalization import (
    PageRequest,
    pagination,
    to_int,
    to_iso_date,
    to_iso_datetime,
    to_str_id,
)
from app.modules.analytics.services.timeframe import window_start
from app.modules.analytics.services.zero_shapes import (
    HOURS_PER_DAY,
    zero_file_detail,
    zero_file_stats,
    zero_hour_series,
    zero_list,
    zero_logs,
    zero_overview,
    zero_episode_detail,
    zero_project_detail,
    zero_script_detail,
)
from app.modules.files.enums import DownloadStatus, EntityType
from app.modules.files.models import DownloadLog, File
from app.modules.projects.models import Episode, Project, Script

logger = logging.getLogger(__name__)

T = TypeVar("T")
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _normalize(
    mapping: Dict[str, Any],
    *,
    ints: Iterable[str] = (),
    ids: Iterable[str] = (),
    datetimes: Iterable[str] = (),
    dates: Iterable[str] = (),
) -> Dict[str, Any]:
    out = dict(mapping)
    for key in ints:
        out[key] = to_int(out.get(key))
    for key in ids:
        out[key] = to_str_id(out.get(key))
    for key in datetimes:
        out[key] = to_iso_datetime(out.get(key))
    for key in dates:
        out[key] = to_iso_date(out.get(key))
    return out


class AggregationEngine:
    """Reportes de descargas sobre download_logs + catálogo."""

    def __init__(self, store: StoreClient, clock: Optional[Clock] = None):
        self.store = store
        self._clock: Clock = clock or utc_now
        # Se enciende si alguna parte del reporte cayó a su valor en cero
        self.degraded = False

    def now(self) -> datetime:
        return self._clock()

    def _start(self, timeframe: Timeframe) -> datetime:
        return window_start(timeframe, self.now())

    # ------------------------------------------------------------------
    # Ejecución
    # ------------------------------------------------------------------

    async def _rows(self, stmt: Select) -> List[Dict[str, Any]]:
        async with self.store.session() as session:
            result = await session.execute(stmt)
            return [dict(row._mapping) for row in result]

    async def _scalar(self, stmt: Select) -> Any:
        async with self.store.session() as session:
            return (await session.execute(stmt)).scalar()

    async def _metric(self, report: str, metric: str, work: Awaitable[T], fallback: T) -> T:
        try:
            return await work
        except Exception:
            analytics_submetric_failures_total.labels(report, metric).inc()
            self.degraded = True
            logger.warning(
                "[analytics] report=%s metric=%s failed; using zero value",
                report,
                metric,
                exc_info=True,
            )
            return fallback

    # ------------------------------------------------------------------
    # Filtros
    # ------------------------------------------------------------------

    @staticmethod
    def _log_filters(
        *,
        file_id: Optional[UUID] = None,
        user_id: Optional[str] = None,
        entity_type: Optional[EntityType] = None,
        status: Optional[DownloadStatus] = None,
    ) -> List[ColumnElement]:
        where: List[ColumnElement] = []
        if file_id is not None:
            where.append(DownloadLog.file_id == file_id)
        if user_id:
            where.append(DownloadLog.user_id == user_id)
        if entity_type is not None:
            where.append(DownloadLog.entity_type.in_(entity_type.tokens))
        if status is not None:
            where.append(DownloadLog.download_status == status.value)
        return where

    # ------------------------------------------------------------------
    # Overview
    # ------------------------------------------------------------------

    @degrades_to(zero_overview, report="overview")
    async def overview(self, *, timeframe: Timeframe) -> Dict[str, Any]:
        start = self._start(timeframe)
        m = self._metric

        (
            total,
            unique,
            total_bytes,
            popular,
            by_day,
            by_type,
            by_hour,
        ) = await asyncio.gather(
            m("overview", "totalDownloads", self._scalar(rd.TOTAL_DOWNLOADS.statement(start)), 0),
            m("overview", "uniqueDownloaders", self._scalar(rd.UNIQUE_DOWNLOADERS.statement(start)), 0),
            m("overview", "totalDataDownloaded", self._scalar(rd.TOTAL_DATA_DOWNLOADED.statement(start)), 0),
            m("overview", "popularFiles", self._rows(rd.POPULAR_FILES.statement(start)), []),
            m("overview", "downloadsByDay", self._rows(rd.DOWNLOADS_BY_DAY.statement(start)), []),
            m("overview", "downloadsByType", self._rows(rd.DOWNLOADS_BY_TYPE.statement(start)), []),
            m("overview", "downloadsByHour", self._rows(rd.DOWNLOADS_BY_HOUR.statement(start)), []),
        )

        return {
            "timeframe": timeframe.value,
            "totalDownloads": to_int(total),
            "uniqueDownloaders": to_int(unique),
            "totalDataDownloaded": to_int(total_bytes),
            "popularFiles": [
                _normalize(r, ints=("downloadCount", "totalSize"), ids=("fileId",)) for r in popular
            ],
            "downloadsByDay": [
                _normalize(r, ints=("count", "uniqueUsers", "totalSize"), dates=("date",)) for r in by_day
            ],
            "downloadsByType": [_normalize(r, ints=("count", "totalSize")) for r in by_type],
            "downloadsByHour": self._hour_series(by_hour),
        }

    @staticmethod
    def _hour_series(rows: Sequence[Dict[str, Any]]) -> List[Dict[str, int]]:
        series = zero_hour_series()
        for row in rows:
            hour = to_int(row.get("hour"))
            if 0 <= hour < HOURS_PER_DAY:
                series[hour]["count"] += to_int(row.get("count"))
        return series

    # ------------------------------------------------------------------
    # Usuarios
    # ------------------------------------------------------------------

    @degrades_to(zero_list, report="users")
    async def user_downloads(
        self,
        *,
        timeframe: Timeframe,
        page: PageRequest,
        search: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        where: List[ColumnElement] = []
        if search:
            where.append(
                DownloadLog.user_email.icontains(search, autoescape=True)
                | DownloadLog.user_name.icontains(search, autoescape=True)
            )
        stmt = rd.USER_DOWNLOADS.statement(
            self._start(timeframe), where=where, limit=page.limit, offset=page.offset
        )
        rows = await self._rows(stmt)
        return [
            _normalize(r, ints=("downloadCount", "totalSize"), datetimes=("lastDownload",))
            for r in rows
        ]

    # ------------------------------------------------------------------
    # Bitácora
    # ------------------------------------------------------------------

    @degrades_to(zero_logs, report="logs")
    async def download_logs(
        self,
        *,
        timeframe: Timeframe,
        page: PageRequest,
        file_id: Optional[UUID] = None,
        user_id: Optional[str] = None,
        entity_type: Optional[EntityType] = None,
        status: Optional[DownloadStatus] = None,
    ) -> Dict[str, Any]:
        start = self._start(timeframe)
        where = self._log_filters(file_id=file_id, user_id=user_id, entity_type=entity_type, status=status)

        rows, total = await asyncio.gather(
            self._rows(
                rd.DOWNLOAD_LOG_ROWS.statement(start, where=where, limit=page.limit, offset=page.offset)
            ),
            self._metric(
                "logs", "total", self._scalar(rd.DOWNLOAD_LOG_TOTAL.statement(start, where=where)), 0
            ),
        )
        logs = [
            _normalize(
                r,
                ints=("downloadSize",),
                ids=("id", "fileId", "entityId"),
                datetimes=("downloadedAt",),
            )
            for r in rows
        ]
        return {"logs": logs, "pagination": pagination(page, to_int(total), len(logs))}

    # ------------------------------------------------------------------
    # Archivos
    # ------------------------------------------------------------------

    @degrades_to(zero_file_stats, report="files")
    async def file_stats(
        self,
        *,
        timeframe: Timeframe,
        page: PageRequest,
        entity_type: Optional[EntityType] = None,
    ) -> Dict[str, Any]:
        start = self._start(timeframe)
        where: List[ColumnElement] = []
        if entity_type is not None:
            where.append(File.entity_type.in_(entity_type.tokens))

        rows, total = await asyncio.gather(
            self._rows(rd.FILE_STATS.statement(start, where=where, limit=page.limit, offset=page.offset)),
            self._metric(
                "files", "total", self._scalar(rd.FILE_STATS_TOTAL.statement(start, where=where)), 0
            ),
        )
        files = [
            _normalize(
                r,
                ints=("downloadCount", "totalDataDownloaded", "uniqueDownloaders"),
                ids=("fileId",),
                datetimes=("lastDownload",),
            )
            for r in rows
        ]
        return {"files": files, "pagination": pagination(page, to_int(total), len(files))}

    # ------------------------------------------------------------------
    # Rollups jerárquicas
    # ------------------------------------------------------------------

    async def _rollup(
        self,
        descriptor: rd.RollupDescriptor,
        timeframe: Timeframe,
        scope_id: Optional[UUID],
        ids: Sequence[str],
    ) -> List[Dict[str, Any]]:
        stmt = descriptor.statement(self._start(timeframe), scope_id=scope_id)
        ints = ["downloadCount", "totalDataDownloaded", "uniqueDownloaders", "fileCount"]
        if descriptor.split_by_type:
            ints += ["episodeDownloads", "scriptDownloads"]
        return [
            _normalize(r, ints=ints, ids=ids, datetimes=("lastDownload",))
            for r in await self._rows(stmt)
        ]

    @degrades_to(zero_list, report="projects")
    async def project_rollup(
        self, *, timeframe: Timeframe, project_id: Optional[UUID] = None
    ) -> List[Dict[str, Any]]:
        return await self._rollup(rd.PROJECT_ROLLUP, timeframe, project_id, ids=("projectId",))

    @degrades_to(zero_list, report="episodes")
    async def episode_rollup(
        self, *, timeframe: Timeframe, project_id: Optional[UUID] = None
    ) -> List[Dict[str, Any]]:
        return await self._rollup(rd.EPISODE_ROLLUP, timeframe, project_id, ids=("episodeId", "projectId"))

    @degrades_to(zero_list, report="scripts")
    async def script_rollup(
        self, *, timeframe: Timeframe, project_id: Optional[UUID] = None
    ) -> List[Dict[str, Any]]:
        return await self._rollup(rd.SCRIPT_ROLLUP, timeframe, project_id, ids=("scriptId", "projectId"))

    # ------------------------------------------------------------------
    # Detalle por dueño (proyecto, episodio, guion)
    # ------------------------------------------------------------------

    async def _owned_breakdown(
        self, report: str, owner: Subquery, owner_id: UUID, start: datetime
    ) -> Dict[str, Any]:
        """Archivos del dueño, serie diaria y top de usuarios dentro de la ventana."""
        owned = DownloadLog.file_id.in_(select(owner.c.file_id).where(owner.c.owner_id == owner_id))

        file_downloads = (
            select(
                File.id.label("fileId"),
                File.filename.label("filename"),
                File.original_name.label("originalName"),
                File.entity_type.label("entityType"),
                rd.DOWNLOAD_COUNT.label("downloadCount"),
                rd.TOTAL_BYTES.label("totalSize"),
                rd.UNIQUE_USERS.label("uniqueDownloaders"),
                rd.LAST_DOWNLOAD.label("lastDownload"),
            )
            .select_from(owner)
            .join(File, File.id == owner.c.file_id)
            .outerjoin(
                DownloadLog,
                (DownloadLog.file_id == File.id) & (DownloadLog.downloaded_at >= start),
            )
            .where(owner.c.owner_id == owner_id)
            .group_by(File.id, File.filename, File.original_name, File.entity_type)
            .order_by(rd.DOWNLOAD_COUNT.desc(), File.filename.asc(), File.id.asc())
        )

        m = self._metric
        files, by_day, top_users = await asyncio.gather(
            m(report, "fileDownloads", self._rows(file_downloads), []),
            m(report, "downloadsByDay", self._rows(rd.DAILY_USERS.statement(start, where=[owned])), []),
            m(report, "topUsers", self._rows(rd.TOP_USERS.statement(start, where=[owned])), []),
        )

        return {
            "fileDownloads": [
                _normalize(
                    r,
                    ints=("downloadCount", "totalSize", "uniqueDownloaders"),
                    ids=("fileId",),
                    datetimes=("lastDownload",),
                )
                for r in files
            ],
            "downloadsByDay": [
                _normalize(r, ints=("count", "uniqueUsers"), dates=("date",)) for r in by_day
            ],
            "topUsers": [
                _normalize(r, ints=("downloadCount", "totalSize"), datetimes=("lastDownload",))
                for r in top_users
            ],
        }

    async def _catalog_entry(
        self, stmt: Select, entity: str, entity_id: UUID, **normalize: Iterable[str]
    ) -> Dict[str, Any]:
        """Fila del catálogo ya copiada fuera de la sesión; 404 si no existe."""
        rows = await self._rows(stmt)
        if not rows:
            raise AnalyticsNotFoundError(entity, entity_id)
        return _normalize(rows[0], **normalize)

    @degrades_to(zero_project_detail, report="project_detail")
    async def project_detail(self, *, project_id: UUID, timeframe: Timeframe) -> Dict[str, Any]:
        project = await self._catalog_entry(
            select(
                Project.id.label("id"),
                Project.name.label("name"),
                Project.description.label("description"),
            ).where(Project.id == project_id),
            "project",
            project_id,
            ids=("id",),
        )
        breakdown = await self._owned_breakdown(
            "project_detail", rd.file_project_ownership(), project_id, self._start(timeframe)
        )
        return {"project": project, "timeframe": timeframe.value, **breakdown}

    @degrades_to(zero_episode_detail, report="episode_detail")
    async def episode_detail(self, *, episode_id: UUID, timeframe: Timeframe) -> Dict[str, Any]:
        episode = await self._catalog_entry(
            select(
                Episode.id.label("id"),
                Episode.title.label("title"),
                Episode.episode_number.label("episodeNumber"),
                Episode.project_id.label("projectId"),
                Project.name.label("projectName"),
                Episode.created_at.label("createdAt"),
            )
            .select_from(Episode)
            .outerjoin(Project, Project.id == Episode.project_id)
            .where(Episode.id == episode_id),
            "episode",
            episode_id,
            ids=("id", "projectId"),
            datetimes=("createdAt",),
        )
        breakdown = await self._owned_breakdown(
            "episode_detail",
            rd.direct_ownership(EntityType.episodes)(),
            episode_id,
            self._start(timeframe),
        )
        return {"episode": episode, "timeframe": timeframe.value, **breakdown}

    @degrades_to(zero_script_detail, report="script_detail")
    async def script_detail(self, *, script_id: UUID, timeframe: Timeframe) -> Dict[str, Any]:
        script = await self._catalog_entry(
            select(
                Script.id.label("id"),
                Script.title.label("title"),
                Script.project_id.label("projectId"),
                Project.name.label("projectName"),
                Script.created_at.label("createdAt"),
            )
            .select_from(Script)
            .outerjoin(Project, Project.id == Script.project_id)
            .where(Script.id == script_id),
            "script",
            script_id,
            ids=("id", "projectId"),
            datetimes=("createdAt",),
        )
        breakdown = await self._owned_breakdown(
            "script_detail",
            rd.direct_ownership(EntityType.scripts)(),
            script_id,
            self._start(timeframe),
        )
        return {"script": script, "timeframe": timeframe.value, **breakdown}

    # ------------------------------------------------------------------
    # Detalle de archivo
    # ------------------------------------------------------------------

    @degrades_to(zero_file_detail, report="file_detail")
    async def file_detail(self, *, file_id: UUID, timeframe: Timeframe) -> Dict[str, Any]:
        async with self.store.session() as session:
            file = await session.get(File, file_id)
            if file is None:
                raise AnalyticsNotFoundError("file", file_id)
            info = {
                "id": str(file.id),
                "filename": file.filename,
                "originalName": file.original_name,
                "lastAccessedAt": to_iso_datetime(file.last_accessed_at),
                "createdAt": to_iso_datetime(file.created_at),
            }

        start = self._start(timeframe)
        # Contador y top de usuarios sobre todo el historial; serie diaria en la ventana
        epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)
        this_file = [DownloadLog.file_id == file_id]

        m = self._metric
        total, recent, top = await asyncio.gather(
            m("file_detail", "downloadCount", self._scalar(rd.FILE_EVENT_TOTAL.statement(epoch, where=this_file)), 0),
            m("file_detail", "recentDownloads", self._rows(rd.RECENT_DAILY.statement(start, where=this_file)), []),
            m("file_detail", "topDownloaders", self._rows(rd.TOP_DOWNLOADERS.statement(epoch, where=this_file)), []),
        )

        return {
            "file": {
                "id": info["id"],
                "filename": info["filename"],
                "originalName": info["originalName"],
                "downloadCount": to_int(total),
                "lastAccessedAt": info["lastAccessedAt"],
                "createdAt": info["createdAt"],
            },
            "timeframe": timeframe.value,
            "recentDownloads": [
                _normalize(r, ints=("downloadCount", "uniqueUsers"), dates=("date",)) for r in recent
            ],
            "topDownloaders": [
                _normalize(r, ints=("downloadCount",), datetimes=("lastDownload",)) for r in top
            ],
        }


__all__ = ["AggregationEngine", "utc_now"]

# Fin del archivo backend/app/modules/analytics/services/aggregation_engine.py
