from __future__ import annotations

from typing import Protocol

from outlet_locator.constants import DEFAULT_SETTINGS, LocatorSettings
from outlet_locator.distance import haversine_distance_km
from outlet_locator.models import CustomerLocation, GeoPoint, OutletLocation
from outlet_locator.ranking import find_nearest_outlets, rank_outlet, validate_order_location
from outlet_locator.records import outlet_to_dict, ranked_outlet_to_dict

from api.errors import OutletNotFoundError
from api.schemas.outlets import (
    DeliveryQuoteResult,
    GeoDistanceResult,
    NearestOutletsResult,
    OrderEligibilityResult,
    OutletItem,
    OutletListResult,
    RankedOutletItem,
)


class OutletRepositoryLike(Protocol):
    async def list_outlets(self) -> tuple[OutletLocation, ...]: ...

    async def get_outlet(self, outlet_id: str) -> OutletLocation | None: ...


def _customer(lat: float, lng: float) -> CustomerLocation:
    return CustomerLocation(point=GeoPoint(lat=lat, lng=lng))


class OutletLocatorService:
    def __init__(
        self,
        repository: OutletRepositoryLike,
        settings: LocatorSettings = DEFAULT_SETTINGS,
    ) -> None:
        self._repository = repository
        self._settings = settings

    async def list_outlets(self) -> OutletListResult:
        outlets = await self._repository.list_outlets()
        return OutletListResult(items=[OutletItem(**outlet_to_dict(outlet)) for outlet in outlets])

    async def nearest_outlets(
        self,
        lat: float,
        lng: float,
        limit: int | None,
        only_in_service_area: bool,
    ) -> NearestOutletsResult:
        outlets = await self._repository.list_outlets()
        ranked = find_nearest_outlets(
            _customer(lat, lng),
            outlets,
            limit,
            only_in_service_area=only_in_service_area,
            settings=self._settings,
        )
        return NearestOutletsResult(
            items=[RankedOutletItem(**ranked_outlet_to_dict(item)) for item in ranked],
            only_in_service_area=only_in_service_area,
        )

    async def order_eligibility(self, outlet_id: str, lat: float, lng: float) -> OrderEligibilityResult:
        outlet = await self._require_outlet(outlet_id)
        check = validate_order_location(_customer(lat, lng), outlet, self._settings)
        return OrderEligibilityResult(
            outlet_id=outlet.id,
            can_order=check.can_order,
            reason=check.reason,
            distance_km=round(check.distance_km, 3),
            estimated_delivery_minutes=check.estimated_delivery_time,
        )

    async def delivery_quote(self, outlet_id: str, lat: float, lng: float) -> DeliveryQuoteResult:
        outlet = await self._require_outlet(outlet_id)
        ranked = rank_outlet(_customer(lat, lng), outlet, self._settings)
        return DeliveryQuoteResult(
            outlet_id=outlet.id,
            distance_km=round(ranked.distance_km, 3),
            is_in_service_area=ranked.is_in_service_area,
            estimated_delivery_minutes=ranked.estimated_delivery_time,
            delivery_fee=ranked.delivery_fee,
        )

    async def distance_km(
        self,
        origin_lat: float,
        origin_lng: float,
        target_lat: float,
        target_lng: float,
    ) -> GeoDistanceResult:
        origin = GeoPoint(lat=origin_lat, lng=origin_lng)
        target = GeoPoint(lat=target_lat, lng=target_lng)
        return GeoDistanceResult(distance_km=round(haversine_distance_km(origin, target), 3))

    async def _require_outlet(self, outlet_id: str) -> OutletLocation:
        outlet = await self._repository.get_outlet(outlet_id)
        if outlet is None:
            raise OutletNotFoundError(outlet_id)
        return outlet
