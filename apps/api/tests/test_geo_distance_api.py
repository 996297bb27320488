import pytest
from fastapi.testclient import TestClient

from api.app import create_app


def test_geo_distance_response_shape() -> None:
    client = TestClient(create_app())

    response = client.get(
        "/v1/geo/distance?origin_lat=19.1568&origin_lng=72.9940&target_lat=19.2568&target_lng=72.9940"
    )
    body = response.json()

    assert response.status_code == 200
    assert body["success"] is True
    assert body["meta"]["unit"] == "km"
    assert body["data"]["distance_km"] == pytest.approx(11.12, abs=0.05)


def test_geo_distance_requires_all_coordinates() -> None:
    client = TestClient(create_app())

    response = client.get("/v1/geo/distance?origin_lat=19.1568&origin_lng=72.9940")

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
