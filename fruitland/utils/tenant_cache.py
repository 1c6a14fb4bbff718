# fruitland/utils/tenant_cache.py
"""
Cache backends for the tenant directory.

Entries expire individually after a fixed TTL. The in-memory backend is a
plain dict shared by every request in the process; writes are idempotent so
two concurrent refreshes of the same key only cost an extra datastore read.
Set ``REDIS_URL`` to share entries between processes instead.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Tuple

import redis

from fruitland.core.errors import TransientStoreError

log = logging.getLogger(__name__)


class TenantCache(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        ...

    @abstractmethod
    def set(self, key: str, value: Any, ttl: float) -> None:
        ...

    @abstractmethod
    def invalidate(self, key: str) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


class InMemoryTenantCache(TenantCache):
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Any]] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            self._entries.pop(key, None)
            return None
        return value

    def set(self, key: str, value: Any, ttl: float) -> None:
        self._entries[key] = (self._clock() + ttl, value)

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class RedisTenantCache(TenantCache):
    """
    Tenant cache shared by every process through Redis.

    Values go through ``encode``/``decode`` since Redis only stores strings.
    Expiry is left to Redis. Connection problems surface as
    ``TransientStoreError``, never as a miss.
    """

    def __init__(
        self,
        client: "redis.Redis",
        encode: Callable[[Any], str],
        decode: Callable[[str], Any],
        prefix: str = "fruitland:tenant:",
    ):
        self._client = client
        self._encode = encode
        self._decode = decode
        self._prefix = prefix

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "RedisTenantCache":
        return cls(redis.Redis.from_url(url, decode_responses=True), **kwargs)

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get(self, key: str) -> Optional[Any]:
        try:
            data = self._client.get(self._key(key))
        except redis.RedisError as exc:
            log.warning("Tenant cache read failed for %s: %s", key, exc)
            raise TransientStoreError() from exc
        if data is None:
            return None
        return self._decode(data)

    def set(self, key: str, value: Any, ttl: float) -> None:
        try:
            self._client.set(self._key(key), self._encode(value), px=max(1, int(ttl * 1000)))
        except redis.RedisError as exc:
            log.warning("Tenant cache write failed for %s: %s", key, exc)
            raise TransientStoreError() from exc

    def invalidate(self, key: str) -> None:
        try:
            self._client.delete(self._key(key))
        except redis.RedisError as exc:
            log.warning("Tenant cache invalidation failed for %s: %s", key, exc)
            raise TransientStoreError() from exc

    def clear(self) -> None:
        try:
            keys = list(self._client.scan_iter(match=f"{self._prefix}*"))
            if keys:
                self._client.delete(*keys)
        except redis.RedisError as exc:
            log.warning("Tenant cache clear failed: %s", exc)
            raise TransientStoreError() from exc
