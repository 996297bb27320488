"""Outlet locator core package."""

from outlet_locator.constants import DEFAULT_SETTINGS, LocatorSettings
from outlet_locator.delivery_fee import calculate_delivery_fee, has_tiered_pricing
from outlet_locator.distance import haversine_distance_km
from outlet_locator.geofence import is_in_service_area, is_point_inside_radius, point_in_polygon
from outlet_locator.models import (
    CustomerLocation,
    DeliveryFeeConfig,
    DeliveryFeeType,
    GeofenceArea,
    GeoPoint,
    OrderLocationCheck,
    OutletLocation,
    RadiusArea,
    RankedOutlet,
    ServiceArea,
    ServiceAreaType,
    UndrawnGeofenceArea,
    build_service_area,
)
from outlet_locator.ranking import (
    estimate_delivery_minutes,
    find_nearest_outlets,
    rank_outlet,
    validate_order_location,
)
from outlet_locator.records import outlet_from_record, outlet_to_dict, ranked_outlet_to_dict

__all__ = [
    "CustomerLocation",
    "DEFAULT_SETTINGS",
    "DeliveryFeeConfig",
    "DeliveryFeeType",
    "GeoPoint",
    "GeofenceArea",
    "LocatorSettings",
    "OrderLocationCheck",
    "OutletLocation",
    "RadiusArea",
    "RankedOutlet",
    "ServiceArea",
    "ServiceAreaType",
    "UndrawnGeofenceArea",
    "build_service_area",
    "calculate_delivery_fee",
    "estimate_delivery_minutes",
    "find_nearest_outlets",
    "has_tiered_pricing",
    "haversine_distance_km",
    "is_in_service_area",
    "is_point_inside_radius",
    "outlet_from_record",
    "outlet_to_dict",
    "point_in_polygon",
    "rank_outlet",
    "ranked_outlet_to_dict",
    "validate_order_location",
]
