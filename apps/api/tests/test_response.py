from api.observability import set_trace_id
from api.response import error_response, success_response


def test_success_response_shape() -> None:
    payload = success_response({"id": "outlet-1"}, {"unit": "km"})
    assert payload["success"] is True
    assert payload["data"] == {"id": "outlet-1"}
    assert payload["meta"] == {"unit": "km"}


def test_success_response_defaults_meta() -> None:
    assert success_response([])["meta"] == {}


def test_error_response_shape() -> None:
    set_trace_id("")
    payload = error_response("NOT_FOUND", "missing")
    assert payload["success"] is False
    assert payload["error"] == {"code": "NOT_FOUND", "message": "missing"}


def test_error_response_carries_trace_id() -> None:
    set_trace_id("trace-xyz")
    try:
        payload = error_response("UPSTREAM_FAILURE", "down")
    finally:
        set_trace_id("")
    assert payload["error"]["trace_id"] == "trace-xyz"
