# -*- coding: utf-8 -*-
"""
Tests del servicio de registro de descargas.

Cubre:
- Normalización de la IP del cliente
- Registro manual (tamaño y duración por defecto, estado tolerante, errores)
- Descarga servida: decodificación base64, contador del archivo
- Invalidación del caché de reportes en cada escritura
"""

import base64
from uuid import uuid4

import pytest
from sqlalchemy import select

from app.modules.auth.services import ANONYMOUS_ACTOR, DownloadActor
from app.modules.files.enums import DownloadStatus
from app.modules.files.facades.errors import FileNotFound, FilePayloadError, TrackingUnavailable
from app.modules.files.models import DownloadLog, File
from app.modules.files.services import (
    MANUAL_REFERER,
    DownloadTrackingService,
    RequestContext,
    normalize_client_ip,
)

ACTOR = DownloadActor(user_id="u-7", email="lucia@radio.test", name="Lucía", role="producer")


@pytest.fixture
async def audio(seed):
    project = await seed.project()
    episode = await seed.episode(project)
    payload = base64.b64encode(b"ID3-audio-bytes").decode()
    return await seed.file("episodes", episode.id, filename="pilot.mp3", size=2048, data=payload)


@pytest.fixture
def service(store, response_cache):
    return DownloadTrackingService(store, response_cache)


async def _events(store):
    async with store.session() as session:
        return (await session.scalars(select(DownloadLog))).all()


async def _file(store, file_id):
    async with store.session() as session:
        return await session.get(File, file_id)


@pytest.mark.parametrize(
    "forwarded,peer,expected",
    [
        ("203.0.113.9, 10.0.0.1", "127.0.0.1", "203.0.113.9"),
        (None, "::ffff:192.168.1.20", "192.168.1.20"),
        ("", "10.1.1.1", "10.1.1.1"),
        (None, None, None),
    ],
)
def test_normalize_client_ip(forwarded, peer, expected):
    assert normalize_client_ip(forwarded, peer) == expected


@pytest.mark.asyncio
async def test_manual_track_defaults_size_to_file_size(service, store, audio):
    event_id = await service.track_manual_download(
        file_id=str(audio.id),
        actor=ACTOR,
        context=RequestContext(ip_address="10.0.0.5", referer=MANUAL_REFERER),
    )

    events = await _events(store)
    assert [e.id for e in events] == [event_id]
    event = events[0]
    assert event.download_size == 2048
    assert event.download_duration == 0
    assert event.download_status == "completed"
    assert event.user_email == "lucia@radio.test"
    assert event.entity_type == "episodes"
    assert event.entity_id == audio.entity_id
    assert event.referer_page == MANUAL_REFERER


@pytest.mark.asyncio
async def test_manual_track_explicit_size_and_unknown_status(service, store, audio):
    await service.track_manual_download(
        file_id=str(audio.id),
        actor=ANONYMOUS_ACTOR,
        context=RequestContext(),
        download_size=10,
        download_duration=350,
        status="exploded",
    )

    event = (await _events(store))[0]
    assert event.download_size == 10
    assert event.download_duration == 350
    assert event.download_status == "completed"
    assert event.user_id == "anonymous"


@pytest.mark.asyncio
async def test_manual_track_does_not_touch_file_counter(service, store, audio):
    await service.track_manual_download(file_id=str(audio.id), actor=ACTOR, context=RequestContext())

    assert (await _file(store, audio.id)).download_count == 0


@pytest.mark.asyncio
async def test_manual_track_unknown_file(service, store):
    with pytest.raises(FileNotFound):
        await service.track_manual_download(file_id=str(uuid4()), actor=ACTOR, context=RequestContext())
    with pytest.raises(FileNotFound):
        await service.track_manual_download(file_id="nope", actor=ACTOR, context=RequestContext())
    assert await _events(store) == []


@pytest.mark.asyncio
async def test_manual_track_without_store(offline_store):
    service = DownloadTrackingService(offline_store)
    with pytest.raises(TrackingUnavailable):
        await service.track_manual_download(file_id=str(uuid4()), actor=ACTOR, context=RequestContext())


@pytest.mark.asyncio
async def test_writes_invalidate_cached_reports(service, response_cache, audio):
    response_cache.set("analytics:/api/analytics/projects?", [])
    response_cache.set("analytics:/api/analytics/downloads/overview?timeframe=7d", {})
    response_cache.set("unrelated", 1)

    await service.track_manual_download(file_id=str(audio.id), actor=ACTOR, context=RequestContext())

    assert len(response_cache) == 1
    assert response_cache.get("unrelated") == 1


@pytest.mark.asyncio
async def test_load_served_file_decodes_payload(service, audio):
    served = await service.load_served_file(str(audio.id))

    assert served.content == b"ID3-audio-bytes"
    assert served.original_name == "pilot.mp3"
    assert served.mime_type == "audio/mpeg"


@pytest.mark.asyncio
async def test_load_served_file_rejects_inactive_and_corrupt(service, seed, audio):
    inactive = await seed.file("episodes", audio.entity_id, filename="old.mp3", data="QQ==", active=False)
    corrupt = await seed.file("episodes", audio.entity_id, filename="bad.mp3", data="@@not base64@@")

    with pytest.raises(FileNotFound):
        await service.load_served_file(str(inactive.id))
    with pytest.raises(FilePayloadError) as exc:
        await service.load_served_file(str(corrupt.id))
    assert exc.value.file_id == corrupt.id


@pytest.mark.asyncio
async def test_record_download_bumps_counter(service, store, audio):
    await service.record_download(file_id=audio.id, actor=ACTOR, context=RequestContext(), size=15)
    await service.record_download(file_id=audio.id, actor=ACTOR, context=RequestContext(), size=15)

    refreshed = await _file(store, audio.id)
    assert refreshed.download_count == 2
    assert refreshed.last_accessed_at is not None
    assert len(await _events(store)) == 2


@pytest.mark.asyncio
async def test_record_download_keeps_duration(service, store, audio):
    await service.record_download(file_id=audio.id, actor=ACTOR, context=RequestContext(), size=15, duration=42)
    await service.record_download(file_id=audio.id, actor=ACTOR, context=RequestContext(), size=15)

    assert sorted(e.download_duration for e in await _events(store)) == [0, 42]


@pytest.mark.asyncio
async def test_failed_download_is_logged_but_not_counted(service, store, audio):
    await service.record_download(
        file_id=audio.id, actor=ACTOR, context=RequestContext(), size=0, status=DownloadStatus.failed
    )

    assert (await _file(store, audio.id)).download_count == 0
    assert [e.download_status for e in await _events(store)] == ["failed"]


@pytest.mark.asyncio
async def test_record_download_safely_swallows_store_errors(offline_store, caplog):
    service = DownloadTrackingService(offline_store)

    with caplog.at_level("ERROR"):
        await service.record_download_safely(
            file_id=uuid4(), actor=ACTOR, context=RequestContext(), size=1
        )

    assert any("failed to record" in r.message for r in caplog.records)
