# -*- coding: utf-8 -*-
"""
Tests de la factoría de la app: import del módulo, lifespan, raíz, /metrics y CORS.
"""

from uuid import uuid4

import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient
from prometheus_client import REGISTRY

from app.shared.scheduler.jobs.cache_cleanup_job import CACHE_SWEEP_JOB_ID

DETAIL_ROUTES = {
    "/api/analytics/projects/{project_id}",
    "/api/analytics/episodes/{episode_id}",
    "/api/analytics/scripts/{script_id}",
    "/api/analytics/files/{file_id}",
}


def test_module_level_app_registers_detail_routes():
    # app.main arma la app al importarse
    from app.main import app

    paths = {getattr(route, "path", None) for route in app.routes}
    assert DETAIL_ROUTES <= paths


@pytest.mark.asyncio
async def test_detail_routes_keep_query_filters_apart_from_path_ids(offline_client):
    resp = await offline_client.get(
        f"/api/analytics/projects/{uuid4()}",
        params={"projectId": "ignored", "fileId": "ignored"},
    )

    assert resp.status_code == 200
    assert resp.json()["project"] is None


@pytest.mark.asyncio
async def test_root(offline_client):
    resp = await offline_client.get("/")

    assert resp.status_code == 200
    assert resp.json() == {"service": "RadioHub", "status": "active"}


@pytest.mark.asyncio
async def test_lifespan_without_scheduler(offline_app):
    async with LifespanManager(offline_app):
        assert offline_app.state.scheduler is None


@pytest.mark.asyncio
async def test_lifespan_starts_and_stops_cache_sweep(app_factory, test_settings, store, response_cache, clock):
    settings = test_settings.model_copy(update={"scheduler_enabled": True})
    fastapi_app = app_factory(settings, store, response_cache, clock)

    async with LifespanManager(fastapi_app):
        scheduler = fastapi_app.state.scheduler
        assert scheduler is not None
        assert scheduler.is_running
        assert scheduler.get_job_status(CACHE_SWEEP_JOB_ID) is not None

    assert scheduler.is_running is False


@pytest.mark.asyncio
async def test_metrics_endpoint_uses_route_templates(async_client, seed):
    project = await seed.project()
    await async_client.get(f"/api/analytics/projects/{project.id}")

    resp = await async_client.get("/metrics")

    assert resp.status_code == 200
    assert "radiohub_http_requests_total" in resp.text
    sample = REGISTRY.get_sample_value(
        "radiohub_http_requests_total",
        {"method": "GET", "path": "/api/analytics/projects/{project_id}", "status": "200"},
    )
    assert sample is not None and sample >= 1


@pytest.mark.asyncio
async def test_cors_wildcard_without_credentials(offline_app):
    transport = ASGITransport(app=offline_app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        resp = await client.get("/", headers={"Origin": "https://dashboard.radiohub.test"})

    assert resp.headers["access-control-allow-origin"] == "*"
    assert "access-control-allow-credentials" not in resp.headers


@pytest.mark.asyncio
async def test_json_responses_declare_utf8(offline_client):
    ok = await offline_client.get("/health")
    missing = await offline_client.get("/api/analytics/projects/not-a-uuid")

    assert ok.headers["content-type"] == "application/json; charset=utf-8"
    assert missing.status_code == 404
    assert missing.headers["content-type"] == "application/json; charset=utf-8"
    assert missing.json() == {"detail": "project not found"}
