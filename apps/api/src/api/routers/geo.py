from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_outlet_service
from api.response import success_response
from api.services.outlet_service import OutletLocatorService

router = APIRouter(prefix="/v1/geo", tags=["geo"])


@router.get("/distance")
async def distance(
    origin_lat: float = Query(..., ge=-90, le=90),
    origin_lng: float = Query(..., ge=-180, le=180),
    target_lat: float = Query(..., ge=-90, le=90),
    target_lng: float = Query(..., ge=-180, le=180),
    service: OutletLocatorService = Depends(get_outlet_service),
) -> dict:
    result = await service.distance_km(origin_lat, origin_lng, target_lat, target_lng)
    return success_response(result.model_dump(), meta={"unit": "km"})
