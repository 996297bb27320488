from __future__ import annotations

import hmac
import logging

from fastapi import APIRouter, Depends, Header

from devkit.config import ServiceSettings

from api.cache import OutletCache
from api.dependencies import get_outlet_cache, get_service_settings
from api.errors import ApiError
from api.response import success_response

router = APIRouter(prefix="/internal/outlets", tags=["internal-outlets"])
logger = logging.getLogger(__name__)


def _validate_internal_token(expected: str | None, header_token: str | None) -> None:
    if not expected:
        raise ApiError("INTERNAL_AUTH_NOT_CONFIGURED", "Internal API token is not configured", 503)
    if not header_token or not hmac.compare_digest(header_token, expected):
        raise ApiError("UNAUTHORIZED", "Invalid internal token", 401)


@router.post("/cache/invalidate")
async def invalidate_outlet_cache(
    cache: OutletCache = Depends(get_outlet_cache),
    settings: ServiceSettings = Depends(get_service_settings),
    x_internal_token: str | None = Header(default=None),
) -> dict:
    _validate_internal_token(settings.INTERNAL_API_TOKEN, x_internal_token)
    removed = await cache.invalidate_outlets()
    logger.info("outlet_cache_invalidated", extra={"component": "api", "removed": removed})
    return success_response({"removed": removed}, meta={})
