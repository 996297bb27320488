from __future__ import annotations

import logging

from devkit.config import ServiceSettings, load_settings
from outlet_locator.constants import LocatorSettings

from api.cache import CacheStore, InMemoryCacheStore, OutletCache, RedisCacheStore
from api.circuit_breaker import CircuitBreaker
from api.clients.outlet_directory_client import OutletDirectoryClient
from api.errors import OutletNotFoundError
from api.repositories.external_outlet_repository import ExternalOutletRepository
from api.repositories.outlet_repository import InMemoryOutletRepository
from api.repositories.postgres_outlet_repository import PostgresOutletRepository
from api.services.outlet_service import OutletLocatorService, OutletRepositoryLike

logger = logging.getLogger(__name__)

_settings = load_settings("outlet-locator-api")


def _build_repository(settings: ServiceSettings) -> OutletRepositoryLike:
    if settings.OUTLET_DIRECTORY_BASE_URL:
        return ExternalOutletRepository(
            OutletDirectoryClient(base_url=settings.OUTLET_DIRECTORY_BASE_URL, timeout_seconds=5.0),
        )
    if settings.DATABASE_URL:
        return PostgresOutletRepository(dsn=settings.DATABASE_URL)
    return InMemoryOutletRepository()


def _build_cache_store(settings: ServiceSettings) -> CacheStore:
    if not settings.REDIS_URL:
        return InMemoryCacheStore()
    try:
        import redis.asyncio as redis

        return RedisCacheStore(redis.from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True))
    except Exception:
        logger.warning("redis_cache_unavailable", extra={"component": "api"}, exc_info=True)
        return InMemoryCacheStore()


def _locator_settings(settings: ServiceSettings) -> LocatorSettings:
    return LocatorSettings(
        base_delivery_minutes=settings.LOCATOR_BASE_DELIVERY_MINUTES,
        travel_minutes_per_km=settings.LOCATOR_TRAVEL_MINUTES_PER_KM,
        default_limit=settings.LOCATOR_DEFAULT_LIMIT,
    )


_outlet_service = OutletLocatorService(_build_repository(_settings), settings=_locator_settings(_settings))
_circuit_breaker = CircuitBreaker(
    failure_threshold=3,
    recovery_timeout_seconds=30,
    ignored_exceptions=(OutletNotFoundError, ValueError),
)
_outlet_cache = OutletCache(store=_build_cache_store(_settings), ttl_seconds=_settings.API_CACHE_TTL_SECONDS)


def get_outlet_service() -> OutletLocatorService:
    return _outlet_service


def get_circuit_breaker() -> CircuitBreaker:
    return _circuit_breaker


def get_outlet_cache() -> OutletCache:
    return _outlet_cache


def get_service_settings() -> ServiceSettings:
    return _settings
