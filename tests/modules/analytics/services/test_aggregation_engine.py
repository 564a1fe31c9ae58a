# -*- coding: utf-8 -*-
"""
Tests del motor de agregación sobre SQLite.

Cubre:
- Overview: totales, serie diaria, serie horaria de 24 entradas
- Borde de la ventana (>= start, sin cota superior)
- Bitácora paginada y filtros
- Usuarios con búsqueda
- Estadísticas por archivo
- Modo degradado (almacén desconectado, sub-métrica rota, reporte roto)
"""

from datetime import timedelta

import pytest
from prometheus_client import REGISTRY
from sqlalchemy import literal_column, select, table

from app.modules.analytics.enums import Timeframe
from app.modules.analytics.services import AggregationEngine, page_request
from app.modules.analytics.services import report_descriptors as rd
from app.modules.files.enums import DownloadStatus, EntityType


class BrokenDescriptor:
    """Descriptor cuyo SELECT falla al ejecutarse."""

    def statement(self, *args, **kwargs):
        return select(literal_column("missing_column")).select_from(table("missing_table"))


@pytest.fixture
async def catalog(seed):
    project = await seed.project("Morning Show")
    episode = await seed.episode(project, "Pilot")
    script = await seed.script(project, "Pilot script")
    audio = await seed.file("episodes", episode.id, filename="pilot.mp3", size=100)
    doc = await seed.file("scripts", script.id, filename="pilot.pdf", size=400, mime_type="application/pdf")
    return {"project": project, "episode": episode, "script": script, "audio": audio, "doc": doc}


@pytest.fixture
def engine(store, clock):
    return AggregationEngine(store, clock=clock)


@pytest.mark.asyncio
async def test_overview_totals_and_series(engine, seed, catalog, clock):
    audio, doc = catalog["audio"], catalog["doc"]
    await seed.event(audio, at=clock.now - timedelta(hours=1), user_id="u1")
    await seed.event(audio, at=clock.now - timedelta(hours=3), user_id="u1")
    await seed.event(doc, at=clock.now - timedelta(days=1), user_id="u2")

    report = await engine.overview(timeframe=Timeframe.last_7d)

    assert report["timeframe"] == "7d"
    assert report["totalDownloads"] == 3
    assert report["uniqueDownloaders"] == 2
    assert report["totalDataDownloaded"] == 600

    assert report["downloadsByDay"] == [
        {"date": "2026-09-14", "count": 1, "uniqueUsers": 1, "totalSize": 400},
        {"date": "2026-09-15", "count": 2, "uniqueUsers": 1, "totalSize": 200},
    ]

    hours = report["downloadsByHour"]
    assert [h["hour"] for h in hours] == list(range(24))
    assert sum(h["count"] for h in hours) == report["totalDownloads"]
    assert hours[11]["count"] == 1 and hours[9]["count"] == 1 and hours[12]["count"] == 1

    popular = report["popularFiles"]
    assert popular[0]["fileId"] == str(audio.id)
    assert popular[0]["downloadCount"] == 2
    assert popular[0]["totalSize"] == 200

    assert [(t["entityType"], t["count"]) for t in report["downloadsByType"]] == [
        ("episodes", 2),
        ("scripts", 1),
    ]


@pytest.mark.asyncio
async def test_window_is_inclusive_at_start(engine, seed, catalog, clock):
    audio = catalog["audio"]
    await seed.event(audio, at=clock.now - timedelta(days=7) + timedelta(seconds=1))
    await seed.event(audio, at=clock.now - timedelta(days=7) - timedelta(seconds=1))
    # Sin cota superior: un evento "futuro" también cuenta
    await seed.event(audio, at=clock.now + timedelta(minutes=5))

    report = await engine.overview(timeframe=Timeframe.last_7d)

    assert report["totalDownloads"] == 2


@pytest.mark.asyncio
async def test_empty_store_overview_keeps_full_shape(engine):
    report = await engine.overview(timeframe=Timeframe.last_24h)

    assert report["totalDownloads"] == 0
    assert report["popularFiles"] == []
    assert len(report["downloadsByHour"]) == 24


@pytest.mark.asyncio
async def test_logs_pagination_and_order(engine, seed, catalog, clock):
    audio = catalog["audio"]
    for hours in (1, 2, 3):
        await seed.event(audio, at=clock.now - timedelta(hours=hours), user_id=f"u{hours}")

    first = await engine.download_logs(timeframe=Timeframe.last_7d, page=page_request("1", "2", 50))
    assert [log["userId"] for log in first["logs"]] == ["u1", "u2"]
    assert first["pagination"] == {"page": 1, "limit": 2, "total": 3, "hasMore": True}
    assert first["logs"][0]["filename"] == "pilot.mp3"
    assert first["logs"][0]["downloadedAt"].startswith("2026-09-15T11:00:00")

    second = await engine.download_logs(timeframe=Timeframe.last_7d, page=page_request("2", "2", 50))
    assert [log["userId"] for log in second["logs"]] == ["u3"]
    assert second["pagination"]["hasMore"] is False

    beyond = await engine.download_logs(timeframe=Timeframe.last_7d, page=page_request("9", "2", 50))
    assert beyond["logs"] == []
    assert beyond["pagination"] == {"page": 9, "limit": 2, "total": 3, "hasMore": False}


@pytest.mark.asyncio
async def test_logs_filters(engine, seed, catalog, clock):
    audio, doc = catalog["audio"], catalog["doc"]
    await seed.event(audio, at=clock.now - timedelta(hours=1), user_id="u1")
    await seed.event(doc, at=clock.now - timedelta(hours=2), user_id="u2", status="failed", size=0)
    page = page_request(None, None, 50)

    by_file = await engine.download_logs(timeframe=Timeframe.last_7d, page=page, file_id=doc.id)
    assert [log["fileId"] for log in by_file["logs"]] == [str(doc.id)]

    by_user = await engine.download_logs(timeframe=Timeframe.last_7d, page=page, user_id="u1")
    assert by_user["pagination"]["total"] == 1

    by_type = await engine.download_logs(
        timeframe=Timeframe.last_7d, page=page, entity_type=EntityType.scripts
    )
    assert [log["entityType"] for log in by_type["logs"]] == ["scripts"]

    failed = await engine.download_logs(
        timeframe=Timeframe.last_7d, page=page, status=DownloadStatus.failed
    )
    assert [log["downloadStatus"] for log in failed["logs"]] == ["failed"]


@pytest.mark.asyncio
async def test_singular_entity_tokens_match_plural_filter(engine, seed, clock):
    project = await seed.project()
    legacy = await seed.file("project", project.id, filename="legacy.wav")
    await seed.event(legacy, at=clock.now - timedelta(hours=1))

    report = await engine.download_logs(
        timeframe=Timeframe.last_7d, page=page_request(None, None, 50), entity_type=EntityType.projects
    )

    assert report["pagination"]["total"] == 1


@pytest.mark.asyncio
async def test_user_downloads_search(engine, seed, catalog, clock):
    audio = catalog["audio"]
    await seed.event(audio, at=clock.now - timedelta(hours=1), user_id="u1", email="ana@radio.test", name="Ana Pérez")
    await seed.event(audio, at=clock.now - timedelta(hours=2), user_id="u1", email="ana@radio.test", name="Ana Pérez")
    await seed.event(audio, at=clock.now - timedelta(hours=3), user_id="u2", email="bob@radio.test", name="Bob")
    page = page_request(None, None, 20)

    everyone = await engine.user_downloads(timeframe=Timeframe.last_30d, page=page)
    assert [(u["userId"], u["downloadCount"]) for u in everyone] == [("u1", 2), ("u2", 1)]
    assert everyone[0]["totalSize"] == 200
    assert everyone[0]["lastDownload"].startswith("2026-09-15T11:00:00")

    found = await engine.user_downloads(timeframe=Timeframe.last_30d, page=page, search="ANA")
    assert [u["userId"] for u in found] == ["u1"]

    literal = await engine.user_downloads(timeframe=Timeframe.last_30d, page=page, search="%")
    assert literal == []


@pytest.mark.asyncio
async def test_file_stats_with_type_filter(engine, seed, catalog, clock):
    audio, doc = catalog["audio"], catalog["doc"]
    await seed.event(audio, at=clock.now - timedelta(hours=1), user_id="u1")
    await seed.event(audio, at=clock.now - timedelta(hours=2), user_id="u2")
    await seed.event(doc, at=clock.now - timedelta(hours=3), user_id="u1")
    page = page_request(None, None, 20)

    everything = await engine.file_stats(timeframe=Timeframe.last_30d, page=page)
    assert [f["fileId"] for f in everything["files"]] == [str(audio.id), str(doc.id)]
    assert everything["files"][0]["uniqueDownloaders"] == 2
    assert everything["files"][0]["totalDataDownloaded"] == 200
    assert everything["pagination"]["total"] == 2

    scripts = await engine.file_stats(timeframe=Timeframe.last_30d, page=page, entity_type=EntityType.scripts)
    assert [f["filename"] for f in scripts["files"]] == ["pilot.pdf"]
    assert scripts["pagination"]["total"] == 1


@pytest.mark.asyncio
async def test_offline_store_returns_zero_shapes(offline_store, clock):
    engine = AggregationEngine(offline_store, clock=clock)
    page = page_request("2", "10", 50)

    overview = await engine.overview(timeframe=Timeframe.last_7d)
    assert overview["totalDownloads"] == 0
    assert len(overview["downloadsByHour"]) == 24

    logs = await engine.download_logs(timeframe=Timeframe.last_7d, page=page)
    assert logs == {"logs": [], "pagination": {"page": 2, "limit": 10, "total": 0, "hasMore": False}}

    assert await engine.user_downloads(timeframe=Timeframe.last_30d, page=page) == []
    assert await engine.project_rollup(timeframe=Timeframe.last_30d) == []


@pytest.mark.asyncio
async def test_broken_submetric_is_isolated(engine, seed, catalog, clock, monkeypatch):
    await seed.event(catalog["audio"], at=clock.now - timedelta(hours=1))
    monkeypatch.setattr(rd, "POPULAR_FILES", BrokenDescriptor())
    labels = {"report": "overview", "metric": "popularFiles"}
    before = REGISTRY.get_sample_value("radiohub_analytics_submetric_failures_total", labels) or 0.0

    report = await engine.overview(timeframe=Timeframe.last_7d)

    assert report["popularFiles"] == []
    assert report["totalDownloads"] == 1
    assert sum(h["count"] for h in report["downloadsByHour"]) == 1
    after = REGISTRY.get_sample_value("radiohub_analytics_submetric_failures_total", labels)
    assert after == before + 1


@pytest.mark.asyncio
async def test_broken_report_degrades_to_zero_shape(engine, seed, catalog, clock, monkeypatch):
    await seed.event(catalog["audio"], at=clock.now - timedelta(hours=1))
    monkeypatch.setattr(rd, "DOWNLOAD_LOG_ROWS", BrokenDescriptor())

    report = await engine.download_logs(timeframe=Timeframe.last_7d, page=page_request(None, None, 50))

    assert report == {"logs": [], "pagination": {"page": 1, "limit": 50, "total": 0, "hasMore": False}}
