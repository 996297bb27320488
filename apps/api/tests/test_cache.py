import pytest

from api.cache import InMemoryCacheStore, OutletCache, RedisCacheStore


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class FakeRedis:
    def __init__(self) -> None:
        self.items: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self.items.get(key)

    async def setex(self, key: str, seconds: int, value: str) -> bool:
        self.items[key] = value
        return True

    async def scan_iter(self, match: str):
        prefix = match.rstrip("*")
        for key in list(self.items):
            if key.startswith(prefix):
                yield key

    async def delete(self, *keys: str) -> int:
        for key in keys:
            self.items.pop(key, None)
        return len(keys)


def test_outlet_cache_key_format() -> None:
    assert OutletCache.key("nearest", 19.2, 73.0, None, False) == "outlets:nearest:19.2:73.0:*:False"


@pytest.mark.asyncio
async def test_inmemory_cache_store_get_set() -> None:
    cache = OutletCache(store=InMemoryCacheStore(), ttl_seconds=60)
    key = OutletCache.key("list")
    payload = {"success": True, "data": {"items": [{"id": "outlet-1"}]}, "meta": {}}

    await cache.set(key, payload)

    assert await cache.get(key) == payload


@pytest.mark.asyncio
async def test_inmemory_cache_store_expires_entries() -> None:
    clock = FakeClock()
    cache = OutletCache(store=InMemoryCacheStore(clock=clock), ttl_seconds=30)
    await cache.set("outlets:list", {"success": True})

    clock.now += 31

    assert await cache.get("outlets:list") is None


@pytest.mark.asyncio
async def test_outlet_cache_invalidate_outlets_prefix() -> None:
    cache = OutletCache(store=InMemoryCacheStore(), ttl_seconds=60)
    await cache.set("outlets:nearest:19.2:73.0:*:False", {"success": True})
    await cache.set("other:key", {"success": True})

    removed = await cache.invalidate_outlets()

    assert removed == 1
    assert await cache.get("other:key") is not None
    assert await cache.get("outlets:nearest:19.2:73.0:*:False") is None


@pytest.mark.asyncio
async def test_redis_cache_store_round_trip_and_invalidate() -> None:
    client = FakeRedis()
    cache = OutletCache(store=RedisCacheStore(client), ttl_seconds=60)
    await cache.set("outlets:list", {"success": True, "data": {"items": []}})
    await cache.set("facilities:list", {"success": True})

    assert await cache.get("outlets:list") == {"success": True, "data": {"items": []}}
    assert await cache.invalidate_outlets() == 1
    assert "facilities:list" in client.items
