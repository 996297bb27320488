from __future__ import annotations

from outlet_locator.models import OutletLocation

from api.clients.outlet_directory_client import OutletDirectoryClient
from api.repositories.outlet_repository import outlet_from_row, outlets_from_rows


class ExternalOutletRepository:
    def __init__(self, client: OutletDirectoryClient) -> None:
        self._client = client

    async def list_outlets(self) -> tuple[OutletLocation, ...]:
        rows = await self._client.fetch_outlets()
        return outlets_from_rows(rows, source="external_outlets")

    async def get_outlet(self, outlet_id: str) -> OutletLocation | None:
        row = await self._client.fetch_outlet(outlet_id)
        if row is None:
            return None
        return outlet_from_row(row, source="external_outlets")
