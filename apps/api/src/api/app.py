from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from devkit.observability import configure_logging, configure_otel, configure_probe_access_log_filter

from api.errors import ApiError
from api.middleware import ObservabilityMiddleware
from api.observability import (
    CompositeApiMetricsCollector,
    InMemoryApiMetricsCollector,
    PrometheusApiMetricsCollector,
)
from api.response import error_response, success_response
from api.routers.geo import router as geo_router
from api.routers.internal_outlets import router as internal_outlets_router
from api.routers.outlets import router as outlets_router


def create_app() -> FastAPI:
    app = FastAPI(title="Outlet Locator API", version="0.1.0")
    configure_logging()
    configure_otel(service_name="outlet-locator-api")
    configure_probe_access_log_filter()
    app.state.api_metrics = InMemoryApiMetricsCollector()
    app.state.prom_metrics = PrometheusApiMetricsCollector()
    app.state.composite_metrics = CompositeApiMetricsCollector(
        [app.state.api_metrics, app.state.prom_metrics]
    )
    app.add_middleware(ObservabilityMiddleware, collector=app.state.composite_metrics)
    app.include_router(outlets_router)
    app.include_router(geo_router)
    app.include_router(internal_outlets_router)

    @app.get("/healthz")
    async def healthz() -> dict:
        return success_response({"status": "ok"}, meta={})

    @app.get("/readyz")
    async def readyz() -> dict:
        return success_response({"status": "ready"}, meta={})

    @app.get("/metrics")
    async def metrics() -> Response:
        payload = app.state.prom_metrics.render()
        return Response(content=payload, media_type="text/plain; version=0.0.4")

    @app.exception_handler(ApiError)
    async def handle_api_error(_: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=error_response(exc.code, exc.message))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        message = "; ".join(err["msg"] for err in exc.errors())
        return JSONResponse(
            status_code=422,
            content=error_response("VALIDATION_ERROR", message),
        )

    return app


app = create_app()
