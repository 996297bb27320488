from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx

from api.errors import ApiError


class OutletDirectoryClient:
    """HTTP client for a remote outlet directory returning outlet table rows."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 5.0,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._client_factory = client_factory

    async def fetch_outlets(self) -> list[dict[str, Any]]:
        response = await self._get("/outlets")
        payload = response.json()
        return list(payload.get("data", []))

    async def fetch_outlet(self, outlet_id: str) -> dict[str, Any] | None:
        response = await self._get(f"/outlets/{outlet_id}", allow_not_found=True)
        if response.status_code == 404:
            return None
        return response.json().get("data")

    async def _get(self, path: str, allow_not_found: bool = False) -> httpx.Response:
        factory = self._client_factory or (lambda: httpx.AsyncClient(timeout=self._timeout_seconds))
        try:
            async with factory() as client:
                response = await client.get(f"{self._base_url}{path}")
                if allow_not_found and response.status_code == 404:
                    return response
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise ApiError("UPSTREAM_TIMEOUT", "Outlet directory timeout", 504) from exc
        except httpx.HTTPStatusError as exc:
            raise ApiError("UPSTREAM_HTTP_ERROR", "Outlet directory returned error", 502) from exc
        except httpx.HTTPError as exc:
            raise ApiError("UPSTREAM_FAILURE", "Outlet directory request failed", 502) from exc
        return response
