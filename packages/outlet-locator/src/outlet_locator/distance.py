import math

from outlet_locator.constants import EARTH_RADIUS_KM
from outlet_locator.models import GeoPoint


def haversine_distance_km(start: GeoPoint, end: GeoPoint) -> float:
    start_lat = math.radians(start.lat)
    end_lat = math.radians(end.lat)
    delta_lat = math.radians(end.lat - start.lat)
    delta_lng = math.radians(end.lng - start.lng)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(start_lat) * math.cos(end_lat) * math.sin(delta_lng / 2) ** 2
    )
    # Rounding can push `a` a hair past 1 for antipodal points.
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c
