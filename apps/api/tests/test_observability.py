from fastapi.testclient import TestClient

from api.app import create_app


def test_trace_header_is_propagated() -> None:
    client = TestClient(create_app())

    response = client.get("/healthz", headers={"x-trace-id": "trace-abc"})

    assert response.status_code == 200
    assert response.headers["x-trace-id"] == "trace-abc"


def test_api_latency_metric_is_collected() -> None:
    app = create_app()
    client = TestClient(app)

    response = client.get("/healthz")
    metrics = app.state.api_metrics.snapshot()

    assert response.status_code == 200
    assert metrics[-1]["route"] == "/healthz"
    assert metrics[-1]["status_code"] == 200
    assert metrics[-1]["duration_ms"] >= 0


def test_outlet_routes_are_labelled_by_template() -> None:
    app = create_app()
    client = TestClient(app)

    client.get("/v1/outlets/outlet-thane/order-eligibility?lat=19.2&lng=73.0")
    metrics = app.state.api_metrics.snapshot()

    assert metrics[-1]["route"] in {
        "/v1/outlets/{outlet_id}/order-eligibility",
        "/v1/outlets/outlet-thane/order-eligibility",
    }


def test_prometheus_metrics_endpoint_exposes_http_metrics() -> None:
    app = create_app()
    client = TestClient(app)

    client.get("/healthz")
    response = client.get("/metrics")

    assert response.status_code == 200
    assert "outlet_api_http_requests_total" in response.text
    assert "outlet_api_http_request_duration_ms" in response.text
