from __future__ import annotations

from contextvars import ContextVar
from dataclasses import asdict, dataclass
from typing import Protocol

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

_trace_id_ctx: ContextVar[str] = ContextVar("trace_id", default="")


def set_trace_id(trace_id: str) -> None:
    _trace_id_ctx.set(trace_id)


def get_trace_id() -> str:
    return _trace_id_ctx.get()


@dataclass(frozen=True)
class ApiRequestMetric:
    method: str
    route: str
    status_code: int
    duration_ms: float
    trace_id: str


class ApiMetricCollector(Protocol):
    def observe(self, metric: ApiRequestMetric) -> None: ...


class InMemoryApiMetricsCollector(ApiMetricCollector):
    def __init__(self, max_items: int = 1000) -> None:
        self._metrics: list[ApiRequestMetric] = []
        self._max_items = max_items

    def observe(self, metric: ApiRequestMetric) -> None:
        self._metrics.append(metric)
        if len(self._metrics) > self._max_items:
            del self._metrics[: len(self._metrics) - self._max_items]

    def snapshot(self) -> list[dict]:
        return [asdict(item) for item in self._metrics]


class PrometheusApiMetricsCollector(ApiMetricCollector):
    def __init__(self) -> None:
        self._registry = CollectorRegistry()
        self._request_counter = Counter(
            "outlet_api_http_requests_total",
            "Total outlet locator HTTP requests",
            labelnames=("method", "route", "status_code"),
            registry=self._registry,
        )
        self._latency_histogram = Histogram(
            "outlet_api_http_request_duration_ms",
            "Outlet locator HTTP request latency in milliseconds",
            labelnames=("method", "route"),
            buckets=(1, 5, 10, 25, 50, 100, 250, 500, 1000, 3000),
            registry=self._registry,
        )

    def observe(self, metric: ApiRequestMetric) -> None:
        self._request_counter.labels(metric.method, metric.route, str(metric.status_code)).inc()
        self._latency_histogram.labels(metric.method, metric.route).observe(metric.duration_ms)

    def render(self) -> str:
        return generate_latest(self._registry).decode("utf-8")


class CompositeApiMetricsCollector(ApiMetricCollector):
    def __init__(self, collectors: list[ApiMetricCollector]) -> None:
        self._collectors = collectors

    def observe(self, metric: ApiRequestMetric) -> None:
        for collector in self._collectors:
            collector.observe(metric)
