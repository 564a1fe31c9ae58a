# -*- coding: utf-8 -*-
"""
backend/app/modules/files/services/download_tracking_service.py

Registro de eventos de descarga.

Dos entradas:
- `track_manual_download`: POST /api/analytics/track-download. Inserta un
  evento para un archivo existente; el tamaño por defecto es el del archivo
  y la duración ausente se guarda como 0 ms.
- `record_download`: descarga servida por GET /api/files/{id}/download.
  Corre como BackgroundTask después de enviar la respuesta; además del
  evento incrementa `download_count` y fija `last_accessed_at`. La
  duración es el tiempo que tomó preparar la respuesta, en ms.

Toda escritura invalida el prefijo `analytics:` del caché de respuestas.

Autor: RadioHub
Fecha: 2026-09-12
"""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import update

from app.shared.cache import ResponseCache
from app.shared.database import StoreClient
from app.modules.analytics import ANALYTICS_CACHE_PREFIX
from app.modules.analytics.metrics.analytics_collectors import download_events_recorded_total
from app.modules.analytics.services.normalization import parse_uuid
from app.modules.auth.services import DownloadActor
from app.modules.files.enums import DownloadStatus
from app.modules.files.facades.errors import FileNotFound, FilePayloadError, TrackingUnavailable
from app.modules.files.models import DownloadLog, File

logger = logging.getLogger(__name__)

DIRECT_REFERER = "direct"
MANUAL_REFERER = "manual-track"
_IPV4_MAPPED_PREFIX = "::ffff:"


@dataclass(frozen=True)
class RequestContext:
    """Datos del request que se copian en el evento."""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    referer: str = DIRECT_REFERER


@dataclass(frozen=True)
class ServedFile:
    file_id: UUID
    original_name: str
    mime_type: str
    content: bytes
    entity_type: str
    entity_id: UUID


def normalize_client_ip(forwarded_for: Optional[str], peer_host: Optional[str]) -> Optional[str]:
    """
    Primer valor de X-Forwarded-For o, si no hay, el host del socket; sin el
    prefijo IPv4-mapped (`::ffff:`).
    """
    candidate = None
    if forwarded_for:
        candidate = forwarded_for.split(",")[0].strip() or None
    candidate = candidate or peer_host
    if candidate and candidate.lower().startswith(_IPV4_MAPPED_PREFIX):
        candidate = candidate[len(_IPV4_MAPPED_PREFIX):]
    return candidate


def _build_event(
    file: File,
    actor: DownloadActor,
    context: RequestContext,
    *,
    size: int,
    status: DownloadStatus,
    duration: int = 0,
) -> DownloadLog:
    return DownloadLog(
        file_id=file.id,
        user_id=actor.user_id,
        user_email=actor.email,
        user_name=actor.name,
        user_role=actor.role,
        ip_address=context.ip_address,
        user_agent=context.user_agent,
        download_size=max(0, int(size)),
        download_duration=max(0, int(duration)),
        download_status=status.value,
        entity_type=file.entity_type,
        entity_id=file.entity_id,
        referer_page=context.referer,
        downloaded_at=datetime.now(timezone.utc),
    )


def _invalidate(cache: Optional[ResponseCache]) -> None:
    if cache is not None:
        dropped = cache.invalidate_prefix(ANALYTICS_CACHE_PREFIX)
        logger.debug("[download_tracking] invalidated %d cached reports", dropped)


class DownloadTrackingService:
    def __init__(self, store: StoreClient, cache: Optional[ResponseCache] = None):
        self.store = store
        self.cache = cache

    def _require_store(self) -> None:
        if not self.store.connected:
            raise TrackingUnavailable()

    # ------------------------------------------------------------------
    # POST /api/analytics/track-download
    # ------------------------------------------------------------------

    async def track_manual_download(
        self,
        *,
        file_id: str,
        actor: DownloadActor,
        context: RequestContext,
        download_size: Optional[int] = None,
        download_duration: Optional[int] = None,
        status: Optional[str] = None,
    ) -> UUID:
        self._require_store()
        fid = parse_uuid(file_id)
        if fid is None:
            raise FileNotFound(file_id)

        event_status = DownloadStatus.parse_or(status, DownloadStatus.completed)
        async with self.store.session() as session:
            file = await session.get(File, fid)
            if file is None:
                raise FileNotFound(fid)
            size = file.file_size if download_size is None else download_size
            event = _build_event(
                file, actor, context, size=size, status=event_status, duration=download_duration or 0
            )
            session.add(event)
            await session.commit()
            event_id = event.id

        download_events_recorded_total.labels("manual", event_status.value).inc()
        logger.info(
            "[download_tracking] manual event id=%s file=%s user=%s status=%s",
            event_id,
            fid,
            actor.user_id,
            event_status.value,
        )
        _invalidate(self.cache)
        return event_id

    # ------------------------------------------------------------------
    # GET /api/files/{file_id}/download
    # ------------------------------------------------------------------

    async def load_served_file(self, file_id: str) -> ServedFile:
        """
        Busca un archivo activo y decodifica su contenido base64.

        Raises:
            TrackingUnavailable: sin almacén.
            FileNotFound: id inválido, inexistente o inactivo.
            FilePayloadError: contenido almacenado ilegible.
        """
        self._require_store()
        fid = parse_uuid(file_id)
        if fid is None:
            raise FileNotFound(file_id)

        async with self.store.session() as session:
            file = await session.get(File, fid)
            if file is None or not file.is_active:
                raise FileNotFound(fid)
            payload = file.file_data or ""
            served = dict(
                file_id=file.id,
                original_name=file.original_name,
                mime_type=file.mime_type,
                entity_type=file.entity_type,
                entity_id=file.entity_id,
            )

        try:
            content = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise FilePayloadError(fid) from e

        return ServedFile(content=content, **served)

    async def record_download(
        self,
        *,
        file_id: UUID,
        actor: DownloadActor,
        context: RequestContext,
        size: int,
        status: DownloadStatus = DownloadStatus.completed,
        duration: int = 0,
    ) -> Optional[UUID]:
        """
        Inserta el evento y actualiza los contadores del archivo en una sola
        transacción. Devuelve el id del evento, o None si el archivo ya no
        existe.
        """
        async with self.store.session() as session:
            file = await session.get(File, file_id)
            if file is None:
                logger.warning("[download_tracking] file %s vanished before tracking", file_id)
                return None
            event = _build_event(file, actor, context, size=size, status=status, duration=duration)
            session.add(event)
            if status is DownloadStatus.completed:
                await session.execute(
                    update(File)
                    .where(File.id == file_id)
                    .values(
                        download_count=File.download_count + 1,
                        last_accessed_at=event.downloaded_at,
                    )
                )
            await session.commit()
            event_id = event.id

        download_events_recorded_total.labels("served", status.value).inc()
        _invalidate(self.cache)
        return event_id

    async def record_download_safely(self, **kwargs) -> None:
        """Variante para BackgroundTasks: la respuesta ya salió, sólo se registra el fallo."""
        try:
            await self.record_download(**kwargs)
        except Exception:
            logger.exception("[download_tracking] failed to record served download file=%s", kwargs.get("file_id"))


__all__ = [
    "DIRECT_REFERER",
    "MANUAL_REFERER",
    "RequestContext",
    "ServedFile",
    "DownloadTrackingService",
    "normalize_client_ip",
]

# Fin del archivo backend/app/modules/files/services/download_tracking_service.py
