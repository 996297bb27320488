"""Mapping between outlet directory rows and core types.

Directory rows use the snake_case column names of the outlets table. Missing
optional columns fall back to the storefront defaults: a 10 km radius service
area, no geofence polygon and an active outlet.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from outlet_locator.constants import DEFAULT_DELIVERY_RADIUS_KM
from outlet_locator.models import (
    DeliveryFeeConfig,
    DeliveryFeeType,
    GeoPoint,
    OutletLocation,
    RankedOutlet,
    ServiceAreaType,
    build_service_area,
)


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    return float(value)


def _service_area_type(raw: Any) -> ServiceAreaType:
    # Unknown area types fall back to a plain radius check.
    try:
        return ServiceAreaType(raw)
    except ValueError:
        return ServiceAreaType.RADIUS


def _fee_type(raw: Any) -> DeliveryFeeType | None:
    # Anything other than a known fee type is charged as a flat fee.
    try:
        return DeliveryFeeType(raw)
    except ValueError:
        return None


def _parse_polygon(raw: Any) -> tuple[GeoPoint, ...]:
    if not raw:
        return ()
    if not isinstance(raw, (list, tuple)):
        raise ValueError("geofence_coordinates must be a list of points")
    points = []
    for vertex in raw:
        try:
            points.append(GeoPoint(lat=float(vertex["lat"]), lng=float(vertex["lng"])))
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"invalid geofence vertex: {vertex!r}") from exc
    return tuple(points)


def outlet_from_record(row: Mapping[str, Any]) -> OutletLocation:
    if row.get("id") is None:
        raise ValueError("outlet record is missing id")
    if row.get("latitude") is None or row.get("longitude") is None:
        raise ValueError(f"outlet {row['id']} has no coordinates")

    radius_raw = row.get("delivery_radius_km")
    delivery_radius_km = DEFAULT_DELIVERY_RADIUS_KM if radius_raw is None else float(radius_raw)
    area_type = _service_area_type(row.get("service_area_type"))
    baseline = row.get("estimated_delivery_time_minutes")
    is_active = row.get("is_active")

    return OutletLocation(
        id=str(row["id"]),
        name=str(row.get("name") or ""),
        location=GeoPoint(lat=float(row["latitude"]), lng=float(row["longitude"])),
        delivery_radius_km=delivery_radius_km,
        service_area=build_service_area(
            area_type,
            delivery_radius_km,
            _parse_polygon(row.get("geofence_coordinates")),
        ),
        is_active=True if is_active is None else bool(is_active),
        estimated_delivery_time=_optional_float(baseline),
        fees=DeliveryFeeConfig(
            fee_type=_fee_type(row.get("delivery_fee_type")),
            delivery_fee=_optional_float(row.get("delivery_fee")),
            base_delivery_distance_km=_optional_float(row.get("base_delivery_distance_km")),
            base_delivery_fee=_optional_float(row.get("base_delivery_fee")),
            per_km_delivery_fee=_optional_float(row.get("per_km_delivery_fee")),
        ),
    )


def outlet_to_dict(outlet: OutletLocation) -> dict[str, Any]:
    area = outlet.service_area
    polygon = getattr(area, "polygon", ())
    return {
        "id": outlet.id,
        "name": outlet.name,
        "latitude": outlet.location.lat,
        "longitude": outlet.location.lng,
        "delivery_radius_km": outlet.delivery_radius_km,
        "service_area_type": area.area_type.value,
        "geofence_coordinates": [{"lat": point.lat, "lng": point.lng} for point in polygon],
        "is_active": outlet.is_active,
        "estimated_delivery_time_minutes": outlet.estimated_delivery_time,
    }


def ranked_outlet_to_dict(ranked: RankedOutlet) -> dict[str, Any]:
    payload = outlet_to_dict(ranked.outlet)
    payload.update(
        {
            "distance_km": round(ranked.distance_km, 3),
            "is_in_service_area": ranked.is_in_service_area,
            "estimated_delivery_minutes": ranked.estimated_delivery_time,
            "delivery_fee": ranked.delivery_fee,
        }
    )
    return payload
