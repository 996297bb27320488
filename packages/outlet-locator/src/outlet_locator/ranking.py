from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from outlet_locator.constants import DEFAULT_SETTINGS, LocatorSettings
from outlet_locator.delivery_fee import calculate_delivery_fee
from outlet_locator.distance import haversine_distance_km
from outlet_locator.geofence import is_in_service_area
from outlet_locator.models import CustomerLocation, OrderLocationCheck, OutletLocation, RankedOutlet

logger = logging.getLogger(__name__)

CLOSED_OUTLET_REASON = "This outlet is currently closed"


def estimate_delivery_minutes(
    distance_km: float,
    baseline_minutes: float | None,
    settings: LocatorSettings = DEFAULT_SETTINGS,
) -> float:
    baseline = baseline_minutes or settings.base_delivery_minutes
    # Half-minutes round up.
    return baseline + math.floor(distance_km * settings.travel_minutes_per_km + 0.5)


def out_of_area_reason(outlet: OutletLocation) -> str:
    return (
        "Delivery not available at this location. "
        f"We deliver within {outlet.delivery_radius_km:g}km radius."
    )


def rank_outlet(
    customer: CustomerLocation,
    outlet: OutletLocation,
    settings: LocatorSettings = DEFAULT_SETTINGS,
) -> RankedOutlet:
    distance_km = haversine_distance_km(customer.point, outlet.location)
    return RankedOutlet(
        outlet=outlet,
        distance_km=distance_km,
        is_in_service_area=is_in_service_area(customer, outlet),
        estimated_delivery_time=estimate_delivery_minutes(
            distance_km,
            outlet.estimated_delivery_time,
            settings,
        ),
        delivery_fee=calculate_delivery_fee(outlet.fees, distance_km),
    )


def find_nearest_outlets(
    customer: CustomerLocation,
    outlets: Iterable[OutletLocation],
    limit: int | None = None,
    *,
    only_in_service_area: bool = False,
    settings: LocatorSettings = DEFAULT_SETTINGS,
) -> list[RankedOutlet]:
    """Rank active outlets by great-circle distance from the customer.

    Out-of-area outlets stay in the result unless ``only_in_service_area`` is
    set, in which case they are dropped before truncating to ``limit``.
    """
    resolved_limit = settings.default_limit if limit is None else limit
    if resolved_limit <= 0:
        raise ValueError("limit must be > 0")

    ranked = [rank_outlet(customer, outlet, settings) for outlet in outlets if outlet.is_active]
    ranked.sort(key=lambda item: item.distance_km)
    if only_in_service_area:
        ranked = [item for item in ranked if item.is_in_service_area]
    logger.debug(
        "outlets_ranked",
        extra={
            "component": "outlet_locator",
            "candidates": len(ranked),
            "limit": resolved_limit,
            "only_in_service_area": only_in_service_area,
        },
    )
    return ranked[:resolved_limit]


def validate_order_location(
    customer: CustomerLocation,
    outlet: OutletLocation,
    settings: LocatorSettings = DEFAULT_SETTINGS,
) -> OrderLocationCheck:
    distance_km = haversine_distance_km(customer.point, outlet.location)
    eta = estimate_delivery_minutes(distance_km, outlet.estimated_delivery_time, settings)

    if not outlet.is_active:
        return OrderLocationCheck(
            can_order=False,
            distance_km=distance_km,
            estimated_delivery_time=eta,
            reason=CLOSED_OUTLET_REASON,
        )
    if not is_in_service_area(customer, outlet):
        return OrderLocationCheck(
            can_order=False,
            distance_km=distance_km,
            estimated_delivery_time=eta,
            reason=out_of_area_reason(outlet),
        )
    return OrderLocationCheck(can_order=True, distance_km=distance_km, estimated_delivery_time=eta)
