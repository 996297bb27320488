from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from outlet_locator.models import OutletLocation
from outlet_locator.records import outlet_from_record

from api.errors import OutletRecordError

logger = logging.getLogger(__name__)

SEED_OUTLETS: tuple[dict[str, Any], ...] = (
    {
        "id": "outlet-vashi",
        "name": "Vashi Kitchen",
        "latitude": 19.0771,
        "longitude": 72.9986,
        "delivery_radius_km": 6,
        "service_area_type": "radius",
        "is_active": True,
        "estimated_delivery_time_minutes": 25,
        "delivery_fee_type": "tiered",
        "base_delivery_distance_km": 3,
        "base_delivery_fee": 30,
        "per_km_delivery_fee": 8,
    },
    {
        "id": "outlet-thane",
        "name": "Thane Central",
        "latitude": 19.1568,
        "longitude": 72.9940,
        "delivery_radius_km": 10,
        "service_area_type": "geofence",
        "geofence_coordinates": [
            {"lat": 19.10, "lng": 72.94},
            {"lat": 19.10, "lng": 73.06},
            {"lat": 19.24, "lng": 73.06},
            {"lat": 19.24, "lng": 72.94},
        ],
        "is_active": True,
        "estimated_delivery_time_minutes": 30,
        "delivery_fee_type": "flat",
        "delivery_fee": 40,
    },
    {
        "id": "outlet-powai",
        "name": "Powai Express",
        "latitude": 19.1176,
        "longitude": 72.9060,
        "delivery_radius_km": 5,
        "service_area_type": "radius",
        "is_active": False,
    },
)


def outlets_from_rows(rows: Iterable[Mapping[str, Any]], source: str) -> tuple[OutletLocation, ...]:
    outlets = []
    for row in rows:
        try:
            outlets.append(outlet_from_record(row))
        except ValueError as exc:
            logger.warning(
                "outlet_record_skipped",
                extra={"component": source, "outlet_id": row.get("id"), "reason": str(exc)},
            )
    return tuple(outlets)


def outlet_from_row(row: Mapping[str, Any], source: str) -> OutletLocation:
    try:
        return outlet_from_record(row)
    except ValueError as exc:
        logger.warning(
            "outlet_record_rejected",
            extra={"component": source, "outlet_id": row.get("id"), "reason": str(exc)},
        )
        raise OutletRecordError(str(row.get("id")), str(exc)) from exc


class InMemoryOutletRepository:
    def __init__(self, rows: Iterable[Mapping[str, Any]] = SEED_OUTLETS) -> None:
        self._outlets = outlets_from_rows(rows, source="in_memory_outlets")

    async def list_outlets(self) -> tuple[OutletLocation, ...]:
        return self._outlets

    async def get_outlet(self, outlet_id: str) -> OutletLocation | None:
        return next((outlet for outlet in self._outlets if outlet.id == outlet_id), None)
