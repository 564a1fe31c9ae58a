# -*- coding: utf-8 -*-
"""
backend/app/modules/analytics/services/report_descriptors.py

Descriptores declarativos de los reportes de descargas.

Cada ReportDescriptor fija dimensiones, métricas, agrupación, orden, límite
y ventana por defecto. El motor de agregación (aggregation_engine.py)
construye el SELECT a partir del descriptor y le añade la ventana de tiempo
y los filtros del request; no hay una función por reporte.

Las rollups jerárquicas usan RollupDescriptor: parten de la entidad
(proyecto, episodio o guion), se unen a un mapeo archivo→dueño y, por
LEFT JOIN, a los eventos dentro de la ventana. Así `uniqueDownloaders` es
COUNT(DISTINCT user_id) sobre la unión de todos los archivos del dueño, y
nunca una suma de conteos por rama.

Autor: RadioHub
Fecha: 2026-09-09
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional, Sequence, Tuple

from sqlalchemy import Select, and_, case, distinct, extract, func, select
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.selectable import Subquery

from app.modules.analytics.enums import Timeframe
from app.modules.files.enums import EntityType
from app.modules.files.models import DownloadLog, File
from app.modules.projects.models import Episode, Project, Script

# ---------------------------------------------------------------------------
# Expresiones reutilizables
# ---------------------------------------------------------------------------

DOWNLOAD_COUNT = func.count(DownloadLog.id)
TOTAL_BYTES = func.coalesce(func.sum(DownloadLog.download_size), 0)
UNIQUE_USERS = func.count(distinct(DownloadLog.user_id))
LAST_DOWNLOAD = func.max(DownloadLog.downloaded_at)
DOWNLOAD_DAY = func.date(DownloadLog.downloaded_at)
DOWNLOAD_HOUR = extract("hour", DownloadLog.downloaded_at)

TOP_FILES_LIMIT = 10
TOP_USERS_LIMIT = 10


@dataclass(frozen=True)
class ReportDescriptor:
    """
    Reporte agrupado sobre download_logs.

    - dimensions: columnas etiquetadas (llave JSON = label)
    - metrics: agregados etiquetados
    - group_by: expresiones de agrupación (vacío = escalar)
    - order_by: orden total; siempre termina en una llave estable
    - join_file: INNER JOIN a files (para nombre/filtros del archivo)
    """
    name: str
    dimensions: Tuple[ColumnElement, ...] = ()
    metrics: Tuple[ColumnElement, ...] = ()
    group_by: Tuple[ColumnElement, ...] = ()
    order_by: Tuple[ColumnElement, ...] = ()
    join_file: bool = False
    limit: Optional[int] = None
    default_timeframe: Timeframe = Timeframe.last_30d

    def statement(
        self,
        start: datetime,
        *,
        where: Sequence[ColumnElement] = (),
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Select:
        stmt = select(*self.dimensions, *self.metrics).select_from(DownloadLog)
        if self.join_file:
            stmt = stmt.join(File, File.id == DownloadLog.file_id)
        stmt = stmt.where(DownloadLog.downloaded_at >= start, *where)
        if self.group_by:
            stmt = stmt.group_by(*self.group_by)
        if self.order_by:
            stmt = stmt.order_by(*self.order_by)
        effective_limit = limit if limit is not None else self.limit
        if effective_limit is not None:
            stmt = stmt.limit(effective_limit)
        if offset:
            stmt = stmt.offset(offset)
        return stmt


# ---------------------------------------------------------------------------
# Overview (7d por defecto)
# ---------------------------------------------------------------------------

TOTAL_DOWNLOADS = ReportDescriptor(
    name="overview.totalDownloads",
    metrics=(DOWNLOAD_COUNT.label("value"),),
    default_timeframe=Timeframe.last_7d,
)

UNIQUE_DOWNLOADERS = ReportDescriptor(
    name="overview.uniqueDownloaders",
    metrics=(UNIQUE_USERS.label("value"),),
    default_timeframe=Timeframe.last_7d,
)

TOTAL_DATA_DOWNLOADED = ReportDescriptor(
    name="overview.totalDataDownloaded",
    metrics=(TOTAL_BYTES.label("value"),),
    default_timeframe=Timeframe.last_7d,
)

POPULAR_FILES = ReportDescriptor(
    name="overview.popularFiles",
    dimensions=(
        DownloadLog.file_id.label("fileId"),
        File.filename.label("filename"),
        File.original_name.label("originalName"),
        File.entity_type.label("entityType"),
    ),
    metrics=(
        DOWNLOAD_COUNT.label("downloadCount"),
        TOTAL_BYTES.label("totalSize"),
    ),
    group_by=(DownloadLog.file_id, File.filename, File.original_name, File.entity_type),
    order_by=(DOWNLOAD_COUNT.desc(), File.filename.asc(), DownloadLog.file_id.asc()),
    join_file=True,
    limit=TOP_FILES_LIMIT,
    default_timeframe=Timeframe.last_7d,
)

DOWNLOADS_BY_DAY = ReportDescriptor(
    name="overview.downloadsByDay",
    dimensions=(DOWNLOAD_DAY.label("date"),),
    metrics=(
        DOWNLOAD_COUNT.label("count"),
        UNIQUE_USERS.label("uniqueUsers"),
        TOTAL_BYTES.label("totalSize"),
    ),
    group_by=(DOWNLOAD_DAY,),
    order_by=(DOWNLOAD_DAY.asc(),),
    default_timeframe=Timeframe.last_7d,
)

DOWNLOADS_BY_TYPE = ReportDescriptor(
    name="overview.downloadsByType",
    dimensions=(DownloadLog.entity_type.label("entityType"),),
    metrics=(
        DOWNLOAD_COUNT.label("count"),
        TOTAL_BYTES.label("totalSize"),
    ),
    group_by=(DownloadLog.entity_type,),
    order_by=(DOWNLOAD_COUNT.desc(), DownloadLog.entity_type.asc()),
    default_timeframe=Timeframe.last_7d,
)

DOWNLOADS_BY_HOUR = ReportDescriptor(
    name="overview.downloadsByHour",
    dimensions=(DOWNLOAD_HOUR.label("hour"),),
    metrics=(DOWNLOAD_COUNT.label("count"),),
    group_by=(DOWNLOAD_HOUR,),
    order_by=(DOWNLOAD_HOUR.asc(),),
    default_timeframe=Timeframe.last_7d,
)

# ---------------------------------------------------------------------------
# Usuarios (30d)
# ---------------------------------------------------------------------------

USER_DOWNLOADS = ReportDescriptor(
    name="users",
    dimensions=(
        DownloadLog.user_id.label("userId"),
        DownloadLog.user_email.label("userEmail"),
        DownloadLog.user_name.label("userName"),
        DownloadLog.user_role.label("userRole"),
    ),
    metrics=(
        DOWNLOAD_COUNT.label("downloadCount"),
        TOTAL_BYTES.label("totalSize"),
        LAST_DOWNLOAD.label("lastDownload"),
    ),
    group_by=(
        DownloadLog.user_id,
        DownloadLog.user_email,
        DownloadLog.user_name,
        DownloadLog.user_role,
    ),
    order_by=(DOWNLOAD_COUNT.desc(), DownloadLog.user_id.asc(), DownloadLog.user_email.asc()),
)

# ---------------------------------------------------------------------------
# Archivos (30d, paginado)
# ---------------------------------------------------------------------------

FILE_STATS = ReportDescriptor(
    name="files",
    dimensions=(
        DownloadLog.file_id.label("fileId"),
        File.filename.label("filename"),
        File.original_name.label("originalName"),
        File.entity_type.label("entityType"),
    ),
    metrics=(
        DOWNLOAD_COUNT.label("downloadCount"),
        TOTAL_BYTES.label("totalDataDownloaded"),
        UNIQUE_USERS.label("uniqueDownloaders"),
        LAST_DOWNLOAD.label("lastDownload"),
    ),
    group_by=(DownloadLog.file_id, File.filename, File.original_name, File.entity_type),
    order_by=(DOWNLOAD_COUNT.desc(), File.filename.asc(), DownloadLog.file_id.asc()),
    join_file=True,
)

FILE_STATS_TOTAL = ReportDescriptor(
    name="files.total",
    metrics=(func.count(distinct(DownloadLog.file_id)).label("value"),),
    join_file=True,
)

# ---------------------------------------------------------------------------
# Bitácora (7d, paginada, sin agrupar)
# ---------------------------------------------------------------------------

DOWNLOAD_LOG_ROWS = ReportDescriptor(
    name="logs",
    dimensions=(
        DownloadLog.id.label("id"),
        DownloadLog.file_id.label("fileId"),
        File.filename.label("filename"),
        File.original_name.label("originalName"),
        DownloadLog.user_id.label("userId"),
        DownloadLog.user_email.label("userEmail"),
        DownloadLog.user_name.label("userName"),
        DownloadLog.user_role.label("userRole"),
        DownloadLog.ip_address.label("ipAddress"),
        DownloadLog.download_size.label("downloadSize"),
        DownloadLog.download_duration.label("downloadDuration"),
        DownloadLog.download_status.label("downloadStatus"),
        DownloadLog.entity_type.label("entityType"),
        DownloadLog.entity_id.label("entityId"),
        DownloadLog.referer_page.label("refererPage"),
        DownloadLog.downloaded_at.label("downloadedAt"),
    ),
    order_by=(DownloadLog.downloaded_at.desc(), DownloadLog.id.desc()),
    join_file=True,
    default_timeframe=Timeframe.last_7d,
)

DOWNLOAD_LOG_TOTAL = ReportDescriptor(
    name="logs.total",
    metrics=(DOWNLOAD_COUNT.label("value"),),
    join_file=True,
    default_timeframe=Timeframe.last_7d,
)

# ---------------------------------------------------------------------------
# Detalle de proyecto / archivo
# ---------------------------------------------------------------------------

TOP_USERS = ReportDescriptor(
    name="topUsers",
    dimensions=USER_DOWNLOADS.dimensions,
    metrics=USER_DOWNLOADS.metrics,
    group_by=USER_DOWNLOADS.group_by,
    order_by=USER_DOWNLOADS.order_by,
    limit=TOP_USERS_LIMIT,
)

DAILY_USERS = ReportDescriptor(
    name="downloadsByDay",
    dimensions=(DOWNLOAD_DAY.label("date"),),
    metrics=(
        DOWNLOAD_COUNT.label("count"),
        UNIQUE_USERS.label("uniqueUsers"),
    ),
    group_by=(DOWNLOAD_DAY,),
    order_by=(DOWNLOAD_DAY.asc(),),
)

RECENT_DAILY = ReportDescriptor(
    name="recentDownloads",
    dimensions=(DOWNLOAD_DAY.label("date"),),
    metrics=(
        DOWNLOAD_COUNT.label("downloadCount"),
        UNIQUE_USERS.label("uniqueUsers"),
    ),
    group_by=(DOWNLOAD_DAY,),
    order_by=(DOWNLOAD_DAY.desc(),),
)

TOP_DOWNLOADERS = ReportDescriptor(
    name="topDownloaders",
    dimensions=USER_DOWNLOADS.dimensions,
    metrics=(
        DOWNLOAD_COUNT.label("downloadCount"),
        LAST_DOWNLOAD.label("lastDownload"),
    ),
    group_by=USER_DOWNLOADS.group_by,
    order_by=USER_DOWNLOADS.order_by,
    limit=TOP_USERS_LIMIT,
)

FILE_EVENT_TOTAL = ReportDescriptor(
    name="file.downloadCount",
    metrics=(DOWNLOAD_COUNT.label("value"),),
)


# ---------------------------------------------------------------------------
# Mapeos archivo → dueño
# ---------------------------------------------------------------------------

def file_project_ownership() -> Subquery:
    """
    (file_id, owner_id = project_id, entity_type) para cada archivo activo,
    resolviendo episodios y guiones a su proyecto.
    """
    owner_project = case(
        (File.entity_type.in_(EntityType.projects.tokens), File.entity_id),
        (File.entity_type.in_(EntityType.episodes.tokens), Episode.project_id),
        (File.entity_type.in_(EntityType.scripts.tokens), Script.project_id),
        else_=None,
    )
    return (
        select(
            File.id.label("file_id"),
            owner_project.label("owner_id"),
            File.entity_type.label("entity_type"),
        )
        .select_from(File)
        .outerjoin(
            Episode,
            and_(File.entity_type.in_(EntityType.episodes.tokens), Episode.id == File.entity_id),
        )
        .outerjoin(
            Script,
            and_(File.entity_type.in_(EntityType.scripts.tokens), Script.id == File.entity_id),
        )
        .where(File.is_active.is_(True))
        .subquery("file_owner")
    )


def direct_ownership(entity_type: EntityType) -> Callable[[], Subquery]:
    """(file_id, owner_id = entity_id) para archivos activos de un tipo."""

    def _build() -> Subquery:
        return (
            select(
                File.id.label("file_id"),
                File.entity_id.label("owner_id"),
                File.entity_type.label("entity_type"),
            )
            .where(File.is_active.is_(True), File.entity_type.in_(entity_type.tokens))
            .subquery(f"{entity_type.value}_owner")
        )

    return _build


# ---------------------------------------------------------------------------
# Rollups jerárquicas (30d)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RollupDescriptor:
    """
    Rollup por entidad del catálogo.

    - entity: modelo raíz (Project, Episode, Script)
    - identity: columnas etiquetadas de la entidad
    - parent_joins: JOINs adicionales para columnas de identidad (p.ej. proyecto)
    - ownership: fábrica del mapeo archivo→dueño
    - scope_column: columna para el filtro projectId
    - split_by_type: añade episodeDownloads / scriptDownloads
    """
    name: str
    entity: type
    identity: Tuple[ColumnElement, ...]
    group_by: Tuple[ColumnElement, ...]
    ownership: Callable[[], Subquery]
    scope_column: ColumnElement
    order_tiebreak: Tuple[ColumnElement, ...]
    parent_joins: Tuple[Tuple[type, ColumnElement], ...] = field(default_factory=tuple)
    split_by_type: bool = False
    default_timeframe: Timeframe = Timeframe.last_30d

    def statement(self, start: datetime, *, scope_id=None) -> Select:
        owner = self.ownership()
        metrics = [
            DOWNLOAD_COUNT.label("downloadCount"),
            TOTAL_BYTES.label("totalDataDownloaded"),
            UNIQUE_USERS.label("uniqueDownloaders"),
            func.count(distinct(owner.c.file_id)).label("fileCount"),
            LAST_DOWNLOAD.label("lastDownload"),
        ]
        if self.split_by_type:
            is_episode = owner.c.entity_type.in_(EntityType.episodes.tokens)
            is_script = owner.c.entity_type.in_(EntityType.scripts.tokens)
            metrics.append(func.count(case((is_episode, DownloadLog.id))).label("episodeDownloads"))
            metrics.append(func.count(case((is_script, DownloadLog.id))).label("scriptDownloads"))

        entity_id = self.entity.id  # type: ignore[attr-defined]
        entity_active = self.entity.is_active  # type: ignore[attr-defined]

        stmt = select(*self.identity, *metrics).select_from(self.entity)
        for model, onclause in self.parent_joins:
            stmt = stmt.join(model, onclause)
        stmt = (
            stmt.outerjoin(owner, owner.c.owner_id == entity_id)
            .outerjoin(
                DownloadLog,
                and_(DownloadLog.file_id == owner.c.file_id, DownloadLog.downloaded_at >= start),
            )
            .where(entity_active.is_(True))
        )
        if scope_id is not None:
            stmt = stmt.where(self.scope_column == scope_id)
        return stmt.group_by(*self.group_by).order_by(DOWNLOAD_COUNT.desc(), *self.order_tiebreak)


PROJECT_ROLLUP = RollupDescriptor(
    name="projects",
    entity=Project,
    identity=(
        Project.id.label("projectId"),
        Project.name.label("name"),
    ),
    group_by=(Project.id, Project.name),
    ownership=file_project_ownership,
    scope_column=Project.id,
    order_tiebreak=(Project.name.asc(), Project.id.asc()),
    split_by_type=True,
)

EPISODE_ROLLUP = RollupDescriptor(
    name="episodes",
    entity=Episode,
    identity=(
        Episode.id.label("episodeId"),
        Episode.title.label("title"),
        Episode.episode_number.label("episodeNumber"),
        Episode.project_id.label("projectId"),
        Project.name.label("projectName"),
    ),
    group_by=(Episode.id, Episode.title, Episode.episode_number, Episode.project_id, Project.name),
    ownership=direct_ownership(EntityType.episodes),
    scope_column=Episode.project_id,
    order_tiebreak=(Episode.title.asc(), Episode.id.asc()),
    parent_joins=((Project, Project.id == Episode.project_id),),
)

SCRIPT_ROLLUP = RollupDescriptor(
    name="scripts",
    entity=Script,
    identity=(
        Script.id.label("scriptId"),
        Script.title.label("title"),
        Script.project_id.label("projectId"),
        Project.name.label("projectName"),
    ),
    group_by=(Script.id, Script.title, Script.project_id, Project.name),
    ownership=direct_ownership(EntityType.scripts),
    scope_column=Script.project_id,
    order_tiebreak=(Script.title.asc(), Script.id.asc()),
    parent_joins=((Project, Project.id == Script.project_id),),
)


__all__ = [
    "ReportDescriptor",
    "RollupDescriptor",
    "TOTAL_DOWNLOADS",
    "UNIQUE_DOWNLOADERS",
    "TOTAL_DATA_DOWNLOADED",
    "POPULAR_FILES",
    "DOWNLOADS_BY_DAY",
    "DOWNLOADS_BY_TYPE",
    "DOWNLOADS_BY_HOUR",
    "USER_DOWNLOADS",
    "FILE_STATS",
    "FILE_STATS_TOTAL",
    "DOWNLOAD_LOG_ROWS",
    "DOWNLOAD_LOG_TOTAL",
    "TOP_USERS",
    "DAILY_USERS",
    "RECENT_DAILY",
    "TOP_DOWNLOADERS",
    "FILE_EVENT_TOTAL",
    "PROJECT_ROLLUP",
    "EPISODE_ROLLUP",
    "SCRIPT_ROLLUP",
    "file_project_ownership",
    "direct_ownership",
]

# Fin del archivo backend/app/modules/analytics/services/report_descriptors.py
