from __future__ import annotations

from collections.abc import Sequence

from outlet_locator.distance import haversine_distance_km
from outlet_locator.models import (
    CustomerLocation,
    GeofenceArea,
    GeoPoint,
    OutletLocation,
    RadiusArea,
    UndrawnGeofenceArea,
)


def is_point_inside_radius(center: GeoPoint, point: GeoPoint, radius_km: float) -> bool:
    if radius_km < 0:
        raise ValueError("radius_km must be >= 0")
    return haversine_distance_km(center, point) <= radius_km


def point_in_polygon(point: GeoPoint, polygon: Sequence[GeoPoint]) -> bool:
    """Even-odd ray cast with ``lat`` as x and ``lng`` as y.

    Points exactly on an edge or vertex may land on either side.
    """
    if len(polygon) < 3:
        return False

    x, y = point.lat, point.lng
    inside = False
    j = len(polygon) - 1
    for i in range(len(polygon)):
        xi, yi = polygon[i].lat, polygon[i].lng
        xj, yj = polygon[j].lat, polygon[j].lng
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def is_in_service_area(customer: CustomerLocation, outlet: OutletLocation) -> bool:
    if not outlet.is_active:
        return False

    area = outlet.service_area
    if isinstance(area, GeofenceArea):
        return point_in_polygon(customer.point, area.polygon)
    if isinstance(area, (RadiusArea, UndrawnGeofenceArea)):
        return haversine_distance_km(customer.point, outlet.location) <= area.radius_km
    raise TypeError(f"unsupported service area: {type(area).__name__}")
