from __future__ import annotations

from outlet_locator.models import DeliveryFeeConfig, DeliveryFeeType


def has_tiered_pricing(fees: DeliveryFeeConfig) -> bool:
    if fees.fee_type != DeliveryFeeType.TIERED:
        return False
    tier = (fees.base_delivery_distance_km, fees.base_delivery_fee, fees.per_km_delivery_fee)
    return all(value is not None and value >= 0 for value in tier)


def calculate_delivery_fee(fees: DeliveryFeeConfig, distance_km: float) -> float:
    if not has_tiered_pricing(fees):
        return float(fees.delivery_fee or 0)

    assert fees.base_delivery_distance_km is not None
    assert fees.base_delivery_fee is not None
    assert fees.per_km_delivery_fee is not None
    if distance_km <= fees.base_delivery_distance_km:
        return float(fees.base_delivery_fee)
    extra_km = distance_km - fees.base_delivery_distance_km
    return round(fees.base_delivery_fee + extra_km * fees.per_km_delivery_fee, 2)
