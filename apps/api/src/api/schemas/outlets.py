from pydantic import BaseModel, Field


class GeofenceVertex(BaseModel):
    lat: float
    lng: float


class OutletItem(BaseModel):
    id: str
    name: str
    latitude: float
    longitude: float
    delivery_radius_km: float
    service_area_type: str
    geofence_coordinates: list[GeofenceVertex] = Field(default_factory=list)
    is_active: bool
    estimated_delivery_time_minutes: float | None = None


class RankedOutletItem(OutletItem):
    distance_km: float
    is_in_service_area: bool
    estimated_delivery_minutes: float
    delivery_fee: float


class OutletListResult(BaseModel):
    items: list[OutletItem]


class NearestOutletsResult(BaseModel):
    items: list[RankedOutletItem]
    only_in_service_area: bool


class OrderEligibilityResult(BaseModel):
    outlet_id: str
    can_order: bool
    reason: str | None = None
    distance_km: float
    estimated_delivery_minutes: float


class DeliveryQuoteResult(BaseModel):
    outlet_id: str
    distance_km: float
    is_in_service_area: bool
    estimated_delivery_minutes: float
    delivery_fee: float


class GeoDistanceResult(BaseModel):
    distance_km: float
