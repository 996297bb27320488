from __future__ import annotations

import json
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Protocol

OUTLET_CACHE_PREFIX = "outlets:"


class CacheStore(ABC):
    @abstractmethod
    async def get(self, key: str) -> dict[str, Any] | None:
        raise NotImplementedError

    @abstractmethod
    async def set(self, key: str, value: dict[str, Any], ttl_seconds: int) -> None:
        raise NotImplementedError

    @abstractmethod
    async def invalidate_prefix(self, prefix: str) -> int:
        raise NotImplementedError


class RedisLikeCacheClient(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def setex(self, key: str, seconds: int, value: str) -> bool: ...

    def scan_iter(self, match: str): ...

    async def delete(self, *keys: str) -> int: ...


class InMemoryCacheStore(CacheStore):
    def __init__(self, clock=time.monotonic) -> None:
        self._items: dict[str, tuple[float, dict[str, Any]]] = {}
        self._clock = clock

    async def get(self, key: str) -> dict[str, Any] | None:
        item = self._items.get(key)
        if item is None:
            return None
        expires_at, value = item
        if expires_at <= self._clock():
            del self._items[key]
            return None
        return value

    async def set(self, key: str, value: dict[str, Any], ttl_seconds: int) -> None:
        self._items[key] = (self._clock() + ttl_seconds, value)

    async def invalidate_prefix(self, prefix: str) -> int:
        stale = [key for key in self._items if key.startswith(prefix)]
        for key in stale:
            del self._items[key]
        return len(stale)


class RedisCacheStore(CacheStore):
    def __init__(self, client: RedisLikeCacheClient) -> None:
        self._client = client

    async def get(self, key: str) -> dict[str, Any] | None:
        raw = await self._client.get(key)
        if not raw:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: dict[str, Any], ttl_seconds: int) -> None:
        await self._client.setex(key, ttl_seconds, json.dumps(value, ensure_ascii=True))

    async def invalidate_prefix(self, prefix: str) -> int:
        keys = [key async for key in self._client.scan_iter(match=f"{prefix}*")]
        if not keys:
            return 0
        return await self._client.delete(*keys)


@dataclass
class OutletCache:
    store: CacheStore
    ttl_seconds: int = 30

    @staticmethod
    def key(*parts: object) -> str:
        return OUTLET_CACHE_PREFIX + ":".join("*" if part is None else str(part) for part in parts)

    async def get(self, key: str) -> dict[str, Any] | None:
        return await self.store.get(key)

    async def set(self, key: str, value: dict[str, Any]) -> None:
        await self.store.set(key, value, self.ttl_seconds)

    async def invalidate_outlets(self) -> int:
        return await self.store.invalidate_prefix(OUTLET_CACHE_PREFIX)
