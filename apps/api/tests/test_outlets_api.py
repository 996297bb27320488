import math

from fastapi.testclient import TestClient

from api.app import create_app
from api.cache import InMemoryCacheStore, OutletCache
from api.circuit_breaker import CircuitBreaker
from api.dependencies import get_circuit_breaker, get_outlet_cache, get_outlet_service
from api.errors import OutletNotFoundError, OutletRecordError
from api.repositories.outlet_repository import InMemoryOutletRepository
from api.services.outlet_service import OutletLocatorService

THANE_CUSTOMER = "lat=19.20&lng=73.00"


def _isolated_client(service) -> TestClient:
    app = create_app()
    cache = OutletCache(store=InMemoryCacheStore(), ttl_seconds=60)
    circuit_breaker = CircuitBreaker(
        failure_threshold=1,
        recovery_timeout_seconds=30,
        ignored_exceptions=(OutletNotFoundError, ValueError),
    )
    app.dependency_overrides[get_outlet_service] = lambda: service
    app.dependency_overrides[get_outlet_cache] = lambda: cache
    app.dependency_overrides[get_circuit_breaker] = lambda: circuit_breaker
    return TestClient(app)


class CountingRepository(InMemoryOutletRepository):
    def __init__(self) -> None:
        super().__init__()
        self.list_calls = 0

    async def list_outlets(self):
        self.list_calls += 1
        return await super().list_outlets()


class BrokenRepository:
    async def list_outlets(self):
        raise ConnectionError("directory down")

    async def get_outlet(self, outlet_id: str):
        raise ConnectionError("directory down")


def test_list_outlets_includes_inactive_outlets() -> None:
    client = TestClient(create_app())

    response = client.get("/v1/outlets")
    body = response.json()

    assert response.status_code == 200
    assert body["success"] is True
    ids = {item["id"] for item in body["data"]["items"]}
    assert ids == {"outlet-vashi", "outlet-thane", "outlet-powai"}


def test_nearest_outlets_ranks_active_outlets_by_distance() -> None:
    client = TestClient(create_app())

    response = client.get(f"/v1/outlets/nearest?{THANE_CUSTOMER}")
    items = response.json()["data"]["items"]

    assert response.status_code == 200
    assert [item["id"] for item in items] == ["outlet-thane", "outlet-vashi"]
    assert items[0]["is_in_service_area"] is True
    assert items[1]["is_in_service_area"] is False
    assert items[0]["distance_km"] < items[1]["distance_km"]
    assert items[0]["delivery_fee"] == 40
    assert items[0]["service_area_type"] == "geofence"


def test_nearest_outlets_can_filter_to_service_area() -> None:
    client = TestClient(create_app())

    response = client.get(f"/v1/outlets/nearest?{THANE_CUSTOMER}&only_in_service_area=true")
    body = response.json()

    assert response.status_code == 200
    assert [item["id"] for item in body["data"]["items"]] == ["outlet-thane"]
    assert body["data"]["only_in_service_area"] is True


def test_nearest_outlets_rejects_out_of_range_coordinates() -> None:
    client = TestClient(create_app())

    response = client.get("/v1/outlets/nearest?lat=123&lng=73.00")
    body = response.json()

    assert response.status_code == 422
    assert body["success"] is False
    assert body["error"]["code"] == "VALIDATION_ERROR"


def test_nearest_outlets_uses_cache_for_same_query() -> None:
    repository = CountingRepository()
    client = _isolated_client(OutletLocatorService(repository))

    first = client.get(f"/v1/outlets/nearest?{THANE_CUSTOMER}&limit=1")
    second = client.get(f"/v1/outlets/nearest?{THANE_CUSTOMER}&limit=1")

    assert first.status_code == 200
    assert second.json() == first.json()
    assert repository.list_calls == 1


def test_order_eligibility_inside_service_area() -> None:
    client = TestClient(create_app())

    response = client.get(f"/v1/outlets/outlet-thane/order-eligibility?{THANE_CUSTOMER}")
    data = response.json()["data"]

    assert response.status_code == 200
    assert data["can_order"] is True
    assert data["reason"] is None
    assert data["estimated_delivery_minutes"] == 30 + math.floor(data["distance_km"] * 2 + 0.5)


def test_order_eligibility_outside_radius_explains_reason() -> None:
    client = TestClient(create_app())

    response = client.get(f"/v1/outlets/outlet-vashi/order-eligibility?{THANE_CUSTOMER}")
    data = response.json()["data"]

    assert data["can_order"] is False
    assert "6km" in data["reason"]


def test_order_eligibility_closed_outlet() -> None:
    client = TestClient(create_app())

    response = client.get("/v1/outlets/outlet-powai/order-eligibility?lat=19.1176&lng=72.9060")
    data = response.json()["data"]

    assert data["can_order"] is False
    assert data["reason"] == "This outlet is currently closed"


def test_unknown_outlet_is_not_found() -> None:
    client = TestClient(create_app())

    response = client.get(f"/v1/outlets/missing/delivery-quote?{THANE_CUSTOMER}")
    body = response.json()

    assert response.status_code == 404
    assert body["error"]["code"] == "NOT_FOUND"


def test_delivery_quote_uses_tiered_fee() -> None:
    client = TestClient(create_app())

    response = client.get("/v1/outlets/outlet-vashi/delivery-quote?lat=19.0771&lng=72.9986")
    data = response.json()["data"]

    assert response.status_code == 200
    assert data["distance_km"] == 0
    assert data["delivery_fee"] == 30
    assert data["is_in_service_area"] is True
    assert data["estimated_delivery_minutes"] == 25


def test_directory_failures_open_the_circuit() -> None:
    client = _isolated_client(OutletLocatorService(BrokenRepository()))

    first = client.get(f"/v1/outlets/nearest?{THANE_CUSTOMER}")
    second = client.get(f"/v1/outlets/nearest?{THANE_CUSTOMER}&limit=2")

    assert first.status_code == 502
    assert first.json()["error"]["code"] == "UPSTREAM_FAILURE"
    assert second.status_code == 503
    assert second.json()["error"]["code"] == "UPSTREAM_UNAVAILABLE"


class MalformedRowRepository:
    async def list_outlets(self):
        return ()

    async def get_outlet(self, outlet_id: str):
        raise OutletRecordError(outlet_id, "delivery_radius_km must be >= 0")


def test_malformed_directory_row_is_an_upstream_failure() -> None:
    client = _isolated_client(OutletLocatorService(MalformedRowRepository()))

    first = client.get(f"/v1/outlets/outlet-bad/order-eligibility?{THANE_CUSTOMER}")
    second = client.get(f"/v1/outlets/outlet-bad/delivery-quote?{THANE_CUSTOMER}")

    assert first.status_code == 502
    assert first.json()["error"]["code"] == "UPSTREAM_FAILURE"
    assert second.status_code == 503
