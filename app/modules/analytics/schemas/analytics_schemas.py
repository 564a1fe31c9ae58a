# -*- coding: utf-8 -*-
"""
backend/app/modules/analytics/schemas/analytics_schemas.py

Schemas de respuesta de los reportes de descargas.

Todos serializan en camelCase (CamelModel). Las fechas llegan ya
normalizadas por el motor como texto ISO-8601 (`date` = YYYY-MM-DD,
timestamps con zona UTC), por eso se tipan como `str`.

Autor: RadioHub
Fecha: 2026-09-11
"""

from __future__ import annotations

from typing import List, Optional

from app.shared.utils.base_models import CamelModel, Field


# ---------------------------------------------------------------------------
# Bloques comunes
# ---------------------------------------------------------------------------

class PaginationOut(CamelModel):
    page: int
    limit: int
    total: int
    has_more: bool


class HourBucketOut(CamelModel):
    hour: int = Field(..., ge=0, le=23)
    count: int


class DayBucketOut(CamelModel):
    date: str
    count: int
    unique_users: int
    total_size: Optional[int] = None


class UserActivityOut(CamelModel):
    user_id: str
    user_email: Optional[str] = None
    user_name: Optional[str] = None
    user_role: Optional[str] = None
    download_count: int
    total_size: int = 0
    last_download: Optional[str] = None


# ---------------------------------------------------------------------------
# Overview
# ---------------------------------------------------------------------------

class PopularFileOut(CamelModel):
    file_id: str
    filename: str
    original_name: str
    entity_type: str
    download_count: int
    total_size: int


class TypeBucketOut(CamelModel):
    entity_type: str
    count: int
    total_size: int


class OverviewOut(CamelModel):
    timeframe: str
    total_downloads: int
    unique_downloaders: int
    total_data_downloaded: int
    popular_files: List[PopularFileOut]
    downloads_by_day: List[DayBucketOut]
    downloads_by_type: List[TypeBucketOut]
    downloads_by_hour: List[HourBucketOut] = Field(..., min_length=24, max_length=24)


# ---------------------------------------------------------------------------
# Bitácora y archivos
# ---------------------------------------------------------------------------

class DownloadEventOut(CamelModel):
    id: str
    file_id: str
    filename: str
    original_name: str
    user_id: str
    user_email: Optional[str] = None
    user_name: Optional[str] = None
    user_role: Optional[str] = None
    ip_address: Optional[str] = None
    download_size: int
    download_duration: Optional[int] = None
    download_status: str
    entity_type: str
    entity_id: Optional[str] = None
    referer_page: Optional[str] = None
    downloaded_at: Optional[str] = None


class DownloadLogPageOut(CamelModel):
    logs: List[DownloadEventOut]
    pagination: PaginationOut


class FileStatOut(CamelModel):
    file_id: str
    filename: str
    original_name: str
    entity_type: str
    download_count: int
    total_data_downloaded: int
    unique_downloaders: int
    last_download: Optional[str] = None


class FileStatPageOut(CamelModel):
    files: List[FileStatOut]
    pagination: PaginationOut


# ---------------------------------------------------------------------------
# Rollups
# ---------------------------------------------------------------------------

class _RollupMetrics(CamelModel):
    download_count: int
    total_data_downloaded: int
    unique_downloaders: int
    file_count: int
    last_download: Optional[str] = None


class ProjectRollupOut(_RollupMetrics):
    project_id: str
    name: str
    episode_downloads: int
    script_downloads: int


class EpisodeRollupOut(_RollupMetrics):
    episode_id: str
    title: str
    episode_number: Optional[int] = None
    project_id: str
    project_name: str


class ScriptRollupOut(_RollupMetrics):
    script_id: str
    title: str
    project_id: str
    project_name: str


# ---------------------------------------------------------------------------
# Detalles
# ---------------------------------------------------------------------------

class ProjectRefOut(CamelModel):
    id: str
    name: str
    description: Optional[str] = None


class ProjectFileDownloadsOut(CamelModel):
    file_id: str
    filename: str
    original_name: str
    entity_type: str
    download_count: int
    total_size: int
    unique_downloaders: int
    last_download: Optional[str] = None


class ProjectDetailOut(CamelModel):
    project: Optional[ProjectRefOut] = None
    timeframe: str
    file_downloads: List[ProjectFileDownloadsOut]
    downloads_by_day: List[DayBucketOut]
    top_users: List[UserActivityOut]


class EpisodeRefOut(CamelModel):
    id: str
    title: str
    episode_number: Optional[int] = None
    project_id: str
    project_name: Optional[str] = None
    created_at: Optional[str] = None


class EpisodeDetailOut(CamelModel):
    episode: Optional[EpisodeRefOut] = None
    timeframe: str
    file_downloads: List[ProjectFileDownloadsOut]
    downloads_by_day: List[DayBucketOut]
    top_users: List[UserActivityOut]


class ScriptRefOut(CamelModel):
    id: str
    title: str
    project_id: str
    project_name: Optional[str] = None
    created_at: Optional[str] = None


class ScriptDetailOut(CamelModel):
    script: Optional[ScriptRefOut] = None
    timeframe: str
    file_downloads: List[ProjectFileDownloadsOut]
    downloads_by_day: List[DayBucketOut]
    top_users: List[UserActivityOut]


class FileRefOut(CamelModel):
    id: str
    filename: str
    original_name: str
    download_count: int
    last_accessed_at: Optional[str] = None
    created_at: Optional[str] = None


class RecentDayOut(CamelModel):
    date: str
    download_count: int
    unique_users: int


class TopDownloaderOut(CamelModel):
    user_id: str
    user_email: Optional[str] = None
    user_name: Optional[str] = None
    user_role: Optional[str] = None
    download_count: int
    last_download: Optional[str] = None


class FileDetailOut(CamelModel):
    file: Optional[FileRefOut] = None
    timeframe: str
    recent_downloads: List[RecentDayOut]
    top_downloaders: List[TopDownloaderOut]


# ---------------------------------------------------------------------------
# Administración del caché
# ---------------------------------------------------------------------------

class CacheStatsOut(CamelModel):
    name: str
    size: int
    max_size: Optional[int] = None
    default_ttl: float
    hits: int
    misses: int
    evictions: int
    invalidations: int
    expired_removals: int
    hit_rate_percent: float
    total_requests: int


class CacheClearOut(CamelModel):
    success: bool = True
    cleared: int


__all__ = [
    "PaginationOut",
    "HourBucketOut",
    "DayBucketOut",
    "UserActivityOut",
    "PopularFileOut",
    "TypeBucketOut",
    "OverviewOut",
    "DownloadEventOut",
    "DownloadLogPageOut",
    "FileStatOut",
    "FileStatPageOut",
    "ProjectRollupOut",
    "EpisodeRollupOut",
    "ScriptRollupOut",
    "ProjectRefOut",
    "ProjectFileDownloadsOut",
    "ProjectDetailOut",
    "EpisodeRefOut",
    "EpisodeDetailOut",
    "ScriptRefOut",
    "ScriptDetailOut",
    "FileRefOut",
    "RecentDayOut",
    "TopDownloaderOut",
    "FileDetailOut",
    "CacheStatsOut",
    "CacheClearOut",
]

# Fin del archivo backend/app/modules/analytics/schemas/analytics_schemas.py
