# -*- coding: utf-8 -*-
"""
Tests para ResponseCache.

Cubre:
- Bordes del TTL (hit en TTL-1ms, miss en TTL+1ms)
- Barrido de expirados
- LRU eviction al llenarse
- Invalidación por prefijo
- Estadísticas
"""

import pytest

from app.shared.cache import ResponseCache


def test_hit_just_before_ttl(response_cache, cache_clock):
    response_cache.set("analytics:/x?", {"value": 1})
    cache_clock.advance(300 - 0.001)

    assert response_cache.get("analytics:/x?") == {"value": 1}


def test_miss_just_after_ttl_and_entry_dropped(response_cache, cache_clock):
    response_cache.set("analytics:/x?", {"value": 1})
    cache_clock.advance(300 + 0.001)

    assert response_cache.get("analytics:/x?") is None
    assert "analytics:/x?" not in response_cache
    assert response_cache.get_stats()["expired_removals"] == 1


def test_miss_exactly_at_ttl(response_cache, cache_clock):
    response_cache.set("k", "v")
    cache_clock.advance(300)

    assert response_cache.get("k") is None


def test_set_replaces_value_and_timestamp(response_cache, cache_clock):
    response_cache.set("k", "old")
    cache_clock.advance(200)
    response_cache.set("k", "new")
    cache_clock.advance(200)

    assert response_cache.get("k") == "new"


def test_sweep_removes_only_expired(response_cache, cache_clock):
    response_cache.set("old", 1)
    cache_clock.advance(250)
    response_cache.set("fresh", 2)
    cache_clock.advance(100)

    removed = response_cache.sweep()

    assert removed == 1
    assert "old" not in response_cache
    assert response_cache.get("fresh") == 2


def test_lru_eviction_discards_least_recently_used(cache_clock):
    cache = ResponseCache(ttl_seconds=60, max_size=2, clock=cache_clock)
    cache.set("a", 1)
    cache.set("b", 2)
    assert cache.get("a") == 1  # "a" pasa a ser el más reciente

    cache.set("c", 3)

    assert "b" not in cache
    assert cache.get("a") == 1
    assert cache.get("c") == 3
    assert cache.get_stats()["evictions"] == 1


def test_invalidate_prefix_only_touches_matching_keys(response_cache):
    response_cache.set("analytics:/api/analytics/projects?", [])
    response_cache.set("analytics:/api/analytics/scripts?", [])
    response_cache.set("other:key", "keep")

    dropped = response_cache.invalidate_prefix("analytics:")

    assert dropped == 2
    assert len(response_cache) == 1
    assert response_cache.get("other:key") == "keep"


def test_clear_returns_count(response_cache):
    response_cache.set("a", 1)
    response_cache.set("b", 2)

    assert response_cache.clear() == 2
    assert len(response_cache) == 0


def test_stats_hit_rate(response_cache):
    response_cache.set("a", 1)
    response_cache.get("a")
    response_cache.get("a")
    response_cache.get("missing")

    stats = response_cache.get_stats()
    assert stats["hits"] == 2
    assert stats["misses"] == 1
    assert stats["hit_rate_percent"] == pytest.approx(66.67)

    response_cache.reset_stats()
    assert response_cache.get_stats()["total_requests"] == 0


def test_ttl_must_be_positive():
    with pytest.raises(ValueError):
        ResponseCache(ttl_seconds=0)
