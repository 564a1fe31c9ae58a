# -*- coding: utf-8 -*-
import pytest


@pytest.mark.asyncio
async def test_health_ok_with_store(async_client):
    resp = await async_client.get("/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["environment"] == "test"
    assert body["database"] == {"configured": True, "reachable": True}
    assert body["service"]["name"] == "RadioHub"
    assert "timestamp" in body


@pytest.mark.asyncio
async def test_health_degraded_without_store(offline_client):
    resp = await offline_client.get("/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "degraded"
    assert body["database"] == {"configured": False, "reachable": False}
