from __future__ import annotations

import json
from typing import Any, Awaitable, Callable

from outlet_locator.models import OutletLocation

from api.repositories.outlet_repository import outlet_from_row, outlets_from_rows

OUTLET_COLUMNS = """
    id,
    name,
    latitude,
    longitude,
    delivery_radius_km,
    service_area_type,
    geofence_coordinates,
    is_active,
    estimated_delivery_time_minutes,
    delivery_fee_type,
    delivery_fee,
    base_delivery_distance_km,
    base_delivery_fee,
    per_km_delivery_fee
"""

LIST_OUTLETS_SQL = f"""
SELECT {OUTLET_COLUMNS}
FROM outlets
WHERE latitude IS NOT NULL AND longitude IS NOT NULL
ORDER BY id
"""

GET_OUTLET_SQL = f"""
SELECT {OUTLET_COLUMNS}
FROM outlets
WHERE id::text = $1
"""


class PostgresOutletRepository:
    def __init__(
        self,
        dsn: str,
        pool_factory: Callable[[str], Awaitable[Any]] | None = None,
    ) -> None:
        self._dsn = dsn
        self._pool = None
        self._pool_factory = pool_factory

    async def list_outlets(self) -> tuple[OutletLocation, ...]:
        pool = await self._get_pool()
        rows = await pool.fetch(LIST_OUTLETS_SQL)
        return outlets_from_rows((self._to_record(row) for row in rows), source="postgres_outlets")

    async def get_outlet(self, outlet_id: str) -> OutletLocation | None:
        pool = await self._get_pool()
        row = await pool.fetchrow(GET_OUTLET_SQL, outlet_id)
        if row is None:
            return None
        return outlet_from_row(self._to_record(row), source="postgres_outlets")

    async def _get_pool(self) -> Any:
        if self._pool is None:
            self._pool = await self._create_pool()
        return self._pool

    async def _create_pool(self) -> Any:
        if self._pool_factory:
            return await self._pool_factory(self._dsn)
        try:
            import asyncpg
        except ImportError as exc:
            raise RuntimeError("asyncpg is required for postgres outlet repository") from exc
        return await asyncpg.create_pool(dsn=self._dsn, min_size=1, max_size=5)

    @staticmethod
    def _to_record(row: Any) -> dict[str, Any]:
        record = dict(row)
        # asyncpg hands jsonb back as text unless a codec is registered.
        polygon = record.get("geofence_coordinates")
        if isinstance(polygon, str):
            record["geofence_coordinates"] = json.loads(polygon)
        return record
