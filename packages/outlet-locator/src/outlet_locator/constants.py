from __future__ import annotations

from dataclasses import dataclass

EARTH_RADIUS_KM = 6371.0

DEFAULT_BASE_DELIVERY_MINUTES = 30
TRAVEL_MINUTES_PER_KM = 2
DEFAULT_RESULT_LIMIT = 5
DEFAULT_DELIVERY_RADIUS_KM = 10.0


@dataclass(frozen=True)
class LocatorSettings:
    """Tunables for ETA estimation and result sizing."""

    base_delivery_minutes: float = DEFAULT_BASE_DELIVERY_MINUTES
    travel_minutes_per_km: float = TRAVEL_MINUTES_PER_KM
    default_limit: int = DEFAULT_RESULT_LIMIT


DEFAULT_SETTINGS = LocatorSettings()
