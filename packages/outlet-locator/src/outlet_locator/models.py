from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


@dataclass(frozen=True)
class CustomerLocation:
    point: GeoPoint
    address: str | None = None


class ServiceAreaType(str, Enum):
    RADIUS = "radius"
    GEOFENCE = "geofence"


class DeliveryFeeType(str, Enum):
    FLAT = "flat"
    TIERED = "tiered"


@dataclass(frozen=True)
class RadiusArea:
    radius_km: float

    @property
    def area_type(self) -> ServiceAreaType:
        return ServiceAreaType.RADIUS


@dataclass(frozen=True)
class GeofenceArea:
    polygon: tuple[GeoPoint, ...]

    @property
    def area_type(self) -> ServiceAreaType:
        return ServiceAreaType.GEOFENCE


@dataclass(frozen=True)
class UndrawnGeofenceArea:
    """Geofence selected for an outlet that has no polygon drawn yet.

    Evaluated as a radius check so customers are not silently excluded.
    """

    radius_km: float

    @property
    def area_type(self) -> ServiceAreaType:
        return ServiceAreaType.GEOFENCE


ServiceArea = RadiusArea | GeofenceArea | UndrawnGeofenceArea


def build_service_area(
    area_type: ServiceAreaType | str,
    delivery_radius_km: float,
    geofence_coordinates: Iterable[GeoPoint] | None = None,
) -> ServiceArea:
    resolved = ServiceAreaType(area_type)
    if resolved is ServiceAreaType.RADIUS:
        return RadiusArea(radius_km=delivery_radius_km)
    polygon = tuple(geofence_coordinates or ())
    if not polygon:
        return UndrawnGeofenceArea(radius_km=delivery_radius_km)
    return GeofenceArea(polygon=polygon)


@dataclass(frozen=True)
class DeliveryFeeConfig:
    fee_type: DeliveryFeeType | None = None
    delivery_fee: float | None = None
    base_delivery_distance_km: float | None = None
    base_delivery_fee: float | None = None
    per_km_delivery_fee: float | None = None


@dataclass(frozen=True)
class OutletLocation:
    id: str
    name: str
    location: GeoPoint
    delivery_radius_km: float
    service_area: ServiceArea
    is_active: bool = True
    estimated_delivery_time: float | None = None
    fees: DeliveryFeeConfig = field(default_factory=DeliveryFeeConfig)

    def __post_init__(self) -> None:
        if self.delivery_radius_km < 0:
            raise ValueError("delivery_radius_km must be >= 0")


@dataclass(frozen=True)
class RankedOutlet:
    outlet: OutletLocation
    distance_km: float
    is_in_service_area: bool
    estimated_delivery_time: float
    delivery_fee: float


@dataclass(frozen=True)
class OrderLocationCheck:
    can_order: bool
    distance_km: float
    estimated_delivery_time: float
    reason: str | None = None
