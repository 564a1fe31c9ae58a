# -*- coding: utf-8 -*-
"""
Tests para el job de barrido del caché de respuestas.

Cubre:
- Ejecución exitosa del barrido y estadísticas retornadas
- Manejo de errores (el job no propaga)
- Registro del job en SchedulerService
"""

import pytest
from unittest.mock import Mock

from app.shared.cache import ResponseCache
from app.shared.scheduler import SchedulerService
from app.shared.scheduler.jobs.cache_cleanup_job import (
    CACHE_SWEEP_JOB_ID,
    cleanup_cache,
    register_cache_sweep_job,
)


@pytest.mark.asyncio
async def test_cleanup_cache_removes_expired_entries(cache_clock):
    cache = ResponseCache(ttl_seconds=60, clock=cache_clock)
    cache.set("analytics:a", 1)
    cache.set("analytics:b", 2)
    cache_clock.advance(61)
    cache.set("analytics:c", 3)

    stats = await cleanup_cache(cache, "analytics_responses")

    assert stats["entries_before"] == 3
    assert stats["entries_after"] == 1
    assert stats["removed_expired"] == 2
    assert stats["cache_name"] == "analytics_responses"
    assert "timestamp" in stats
    assert "duration_ms" in stats


@pytest.mark.asyncio
async def test_cleanup_cache_handles_errors():
    """
    Un barrido fallido se registra y devuelve un resultado con 'error'.
    """
    mock_cache = Mock()
    mock_cache.get_stats.return_value = {"size": 5}
    mock_cache.sweep.side_effect = RuntimeError("boom")

    stats = await cleanup_cache(mock_cache, "broken")

    assert stats["error"] == "boom"
    assert stats["removed_expired"] == 0


@pytest.mark.asyncio
async def test_cleanup_cache_warns_when_nearly_full(cache_clock, caplog):
    cache = ResponseCache(ttl_seconds=60, max_size=10, clock=cache_clock)
    for i in range(10):
        cache.set(f"k{i}", i)

    with caplog.at_level("WARNING"):
        await cleanup_cache(cache, "analytics_responses")

    assert any("capacity" in r.message for r in caplog.records)


def test_register_cache_sweep_job():
    scheduler = SchedulerService()
    cache = ResponseCache()

    job_id = register_cache_sweep_job(scheduler, cache, seconds=60)

    assert job_id == CACHE_SWEEP_JOB_ID
    status = scheduler.get_job_status(CACHE_SWEEP_JOB_ID)
    assert status is not None
    assert "0:01:00" in status["trigger"]


def test_remove_sweep_job():
    scheduler = SchedulerService()
    register_cache_sweep_job(scheduler, ResponseCache(), seconds=60)

    assert scheduler.remove_job(CACHE_SWEEP_JOB_ID) is True
    assert scheduler.get_job_status(CACHE_SWEEP_JOB_ID) is None
    assert scheduler.remove_job(CACHE_SWEEP_JOB_ID) is False
