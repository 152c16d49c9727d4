from __future__ import annotations

from storage.cache import redis_client
from storage.cache.redis_client import CacheClient


def _frozen_clock(monkeypatch, start=1000.0):
    now = [start]
    monkeypatch.setattr(redis_client.time, "monotonic", lambda: now[0])
    return now


def test_memory_cache_round_trips_json():
    cache = CacheClient(None)
    cache.set("k", {"items": [1, 2]})
    assert cache.get("k") == {"items": [1, 2]}
    assert cache.get("missing") is None


def test_default_ttl_expires_memory_entries(monkeypatch):
    now = _frozen_clock(monkeypatch)
    cache = CacheClient(None, default_ttl=1)
    cache.set("flights", {"count": 0})
    now[0] += 0.5
    assert cache.get("flights") == {"count": 0}
    now[0] += 0.7
    assert cache.get("flights") is None
    assert "flights" not in cache.fallback


def test_explicit_ttl_overrides_default(monkeypatch):
    now = _frozen_clock(monkeypatch)
    cache = CacheClient(None, default_ttl=1)
    cache.set("flights", {"count": 2}, ex=60)
    now[0] += 30
    assert cache.get("flights") == {"count": 2}


def test_entries_without_ttl_persist(monkeypatch):
    now = _frozen_clock(monkeypatch)
    cache = CacheClient(None)
    cache.set("flights", [])
    now[0] += 86400
    assert cache.get("flights") == []


def test_clear_drops_everything():
    cache = CacheClient(None, default_ttl=300)
    cache.set("a", 1)
    cache.clear()
    assert cache.get("a") is None
