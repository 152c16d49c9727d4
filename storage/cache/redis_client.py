from __future__ import annotations

import json
import logging
import time
from typing import Any, Optional, Tuple

try:  # pragma: no cover - optional dependency
    import redis
except ImportError:  # pragma: no cover
    redis = None

logger = logging.getLogger(__name__)


class CacheClient:
    """JSON cache backed by redis when reachable, otherwise a process-local dict."""

    def __init__(self, url: str | None, default_ttl: Optional[int] = None):
        # key -> (monotonic expiry or None, serialized payload)
        self.fallback: dict[str, Tuple[Optional[float], str]] = {}
        self.default_ttl = default_ttl
        self.client = None
        if url and redis is not None:
            try:
                self.client = redis.from_url(url)
            except ValueError as exc:
                logger.warning("Invalid REDIS_URL, using in-process cache: %s", exc)
                self.client = None

    def set(self, key: str, value: Any, ex: Optional[int] = None) -> None:
        payload = json.dumps(value)
        ttl = ex if ex is not None else self.default_ttl
        if self.client:
            try:
                self.client.set(key, payload, ex=ttl)
                return
            except redis.RedisError as exc:  # pragma: no cover
                logger.warning("Redis set failed for %s: %s", key, exc)
        expires_at = time.monotonic() + ttl if ttl else None
        self.fallback[key] = (expires_at, payload)

    def get(self, key: str) -> Any | None:
        if self.client:
            try:
                value = self.client.get(key)
                if value is not None:
                    return json.loads(value)
            except redis.RedisError as exc:  # pragma: no cover
                logger.warning("Redis get failed for %s: %s", key, exc)
        entry = self.fallback.get(key)
        if entry is None:
            return None
        expires_at, payload = entry
        if expires_at is not None and time.monotonic() >= expires_at:
            del self.fallback[key]
            return None
        return json.loads(payload)

    def clear(self) -> None:
        if self.client:
            try:
                self.client.flushdb()
            except redis.RedisError as exc:  # pragma: no cover
                logger.warning("Redis flush failed: %s", exc)
        self.fallback.clear()
