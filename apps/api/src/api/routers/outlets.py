from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from api.cache import OutletCache
from api.circuit_breaker import CircuitBreaker, CircuitOpenError
from api.dependencies import get_circuit_breaker, get_outlet_cache, get_outlet_service
from api.errors import ApiError, OutletNotFoundError, OutletRecordError
from api.response import success_response
from api.services.outlet_service import OutletLocatorService

router = APIRouter(prefix="/v1/outlets", tags=["outlets"])

DIRECTORY_TIMEOUT_SECONDS = 5.0


async def _call_with_guards(
    cache: OutletCache,
    circuit_breaker: CircuitBreaker,
    cache_key: str,
    action: Callable[[], Awaitable[BaseModel]],
) -> dict:
    cached = await cache.get(cache_key)
    if cached is not None:
        return cached
    try:
        data = await asyncio.wait_for(
            circuit_breaker.call(action, now_seconds=time.time()),
            timeout=DIRECTORY_TIMEOUT_SECONDS,
        )
    except OutletNotFoundError as exc:
        raise ApiError("NOT_FOUND", "Outlet not found", 404) from exc
    except CircuitOpenError as exc:
        raise ApiError("UPSTREAM_UNAVAILABLE", "Please retry later", 503) from exc
    except TimeoutError as exc:
        raise ApiError("UPSTREAM_TIMEOUT", "Upstream timeout", 504) from exc
    except OutletRecordError as exc:
        raise ApiError("UPSTREAM_FAILURE", "Outlet directory returned an invalid record", 502) from exc
    except ApiError:
        raise
    except ValueError as exc:
        raise ApiError("VALIDATION_ERROR", str(exc), 422) from exc
    except Exception as exc:
        raise ApiError("UPSTREAM_FAILURE", "Outlet lookup failed", 502) from exc
    payload = success_response(data.model_dump(), meta={})
    await cache.set(cache_key, payload)
    return payload


@router.get("")
async def list_outlets(
    service: OutletLocatorService = Depends(get_outlet_service),
    circuit_breaker: CircuitBreaker = Depends(get_circuit_breaker),
    cache: OutletCache = Depends(get_outlet_cache),
) -> dict:
    return await _call_with_guards(
        cache=cache,
        circuit_breaker=circuit_breaker,
        cache_key=OutletCache.key("list"),
        action=service.list_outlets,
    )


@router.get("/nearest")
async def nearest_outlets(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    limit: int | None = Query(default=None, ge=1, le=100),
    only_in_service_area: bool = False,
    service: OutletLocatorService = Depends(get_outlet_service),
    circuit_breaker: CircuitBreaker = Depends(get_circuit_breaker),
    cache: OutletCache = Depends(get_outlet_cache),
) -> dict:
    return await _call_with_guards(
        cache=cache,
        circuit_breaker=circuit_breaker,
        cache_key=OutletCache.key("nearest", lat, lng, limit, only_in_service_area),
        action=lambda: service.nearest_outlets(lat, lng, limit, only_in_service_area),
    )


@router.get("/{outlet_id}/order-eligibility")
async def order_eligibility(
    outlet_id: str,
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    service: OutletLocatorService = Depends(get_outlet_service),
    circuit_breaker: CircuitBreaker = Depends(get_circuit_breaker),
    cache: OutletCache = Depends(get_outlet_cache),
) -> dict:
    return await _call_with_guards(
        cache=cache,
        circuit_breaker=circuit_breaker,
        cache_key=OutletCache.key("eligibility", outlet_id, lat, lng),
        action=lambda: service.order_eligibility(outlet_id, lat, lng),
    )


@router.get("/{outlet_id}/delivery-quote")
async def delivery_quote(
    outlet_id: str,
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    service: OutletLocatorService = Depends(get_outlet_service),
    circuit_breaker: CircuitBreaker = Depends(get_circuit_breaker),
    cache: OutletCache = Depends(get_outlet_cache),
) -> dict:
    return await _call_with_guards(
        cache=cache,
        circuit_breaker=circuit_breaker,
        cache_key=OutletCache.key("quote", outlet_id, lat, lng),
        action=lambda: service.delivery_quote(outlet_id, lat, lng),
    )
