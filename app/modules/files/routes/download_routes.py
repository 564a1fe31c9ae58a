# -*- coding: utf-8 -*-
"""
backend/app/modules/files/routes/download_routes.py

Rutas que escriben en la bitácora de descargas.

- GET  /api/files/{file_id}/download
    Sirve el contenido del archivo. El evento de descarga y el incremento de
    `download_count` se registran en una BackgroundTask, después de enviar
    la respuesta. Si el contenido almacenado no se puede decodificar se
    registra un evento "failed" y se responde 500.
- POST /api/analytics/track-download
    Registro manual de un evento (clientes que descargan por otro canal).

Autor: RadioHub
Fecha: 2026-09-12
"""

from __future__ import annotations

import logging
import time
from urllib.parse import quote

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, status
from fastapi.responses import Response

from app.core.dependencies import get_response_cache, get_store
from app.shared.cache import ResponseCache
from app.shared.database import StoreClient
from app.modules.auth.dependencies import get_current_actor
from app.modules.auth.services import DownloadActor
from app.modules.files.enums import DownloadStatus
from app.modules.files.facades.errors import FileNotFound, FilePayloadError, TrackingUnavailable
from app.modules.files.schemas import TrackDownloadIn, TrackDownloadOut
from app.modules.files.services.download_tracking_service import (
    DIRECT_REFERER,
    MANUAL_REFERER,
    DownloadTrackingService,
    RequestContext,
    normalize_client_ip,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Files: downloads"])


def get_tracking_service(
    store: StoreClient = Depends(get_store),
    cache: ResponseCache = Depends(get_response_cache),
) -> DownloadTrackingService:
    return DownloadTrackingService(store, cache)


def request_context(request: Request, default_referer: str = DIRECT_REFERER) -> RequestContext:
    peer = request.client.host if request.client else None
    return RequestContext(
        ip_address=normalize_client_ip(request.headers.get("x-forwarded-for"), peer),
        user_agent=request.headers.get("user-agent"),
        referer=request.headers.get("referer") or default_referer,
    )


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def _content_disposition(filename: str) -> str:
    return f"attachment; filename*=UTF-8''{quote(filename, safe='')}"


@router.get(
    "/api/files/{file_id}/download",
    summary="Descargar archivo",
    response_class=Response,
    responses={404: {"description": "Archivo inexistente o inactivo"}},
)
async def download_file(
    file_id: str,
    request: Request,
    background_tasks: BackgroundTasks,
    actor: DownloadActor = Depends(get_current_actor),
    service: DownloadTrackingService = Depends(get_tracking_service),
):
    started = time.perf_counter()
    context = request_context(request)
    try:
        served = await service.load_served_file(file_id)
    except TrackingUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
    except FileNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except FilePayloadError as e:
        logger.error("[download_tracking] corrupt payload for file=%s", e.file_id)
        # Las BackgroundTasks no corren cuando la ruta termina en error
        await service.record_download_safely(
            file_id=e.file_id,
            actor=actor,
            context=context,
            size=0,
            status=DownloadStatus.failed,
            duration=_elapsed_ms(started),
        )
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)) from e

    background_tasks.add_task(
        service.record_download_safely,
        file_id=served.file_id,
        actor=actor,
        context=context,
        size=len(served.content),
        duration=_elapsed_ms(started),
    )
    return Response(
        content=served.content,
        media_type=served.mime_type,
        headers={"Content-Disposition": _content_disposition(served.original_name)},
    )


@router.post(
    "/api/analytics/track-download",
    response_model=TrackDownloadOut,
    summary="Registrar una descarga manualmente",
    responses={
        404: {"description": "Archivo inexistente"},
        503: {"description": "Almacén no configurado"},
    },
)
async def track_download(
    payload: TrackDownloadIn,
    request: Request,
    actor: DownloadActor = Depends(get_current_actor),
    service: DownloadTrackingService = Depends(get_tracking_service),
):
    try:
        download_id = await service.track_manual_download(
            file_id=payload.file_id,
            actor=actor,
            context=request_context(request, MANUAL_REFERER),
            download_size=payload.download_size,
            download_duration=payload.download_duration,
            status=payload.status,
        )
    except TrackingUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
    except FileNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    return {"success": True, "downloadId": str(download_id)}


__all__ = ["router", "get_tracking_service", "request_context"]

# Fin del archivo backend/app/modules/files/routes/download_routes.py
