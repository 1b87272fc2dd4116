from __future__ import annotations

from collections import deque
from dataclasses import asdict, dataclass
from typing import Protocol

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

LATENCY_BUCKETS_MS = (5, 10, 25, 50, 100, 250, 500, 1000, 3000)


@dataclass(frozen=True)
class RequestMetric:
    method: str
    route: str
    status_code: int
    duration_ms: float
    trace_id: str


class RequestMetricCollector(Protocol):
    def observe(self, metric: RequestMetric) -> None: ...


class InMemoryRequestMetrics:
    """Most recent request metrics, oldest dropped first."""

    def __init__(self, max_entries: int = 1000) -> None:
        self._metrics: deque[RequestMetric] = deque(maxlen=max_entries)

    def observe(self, metric: RequestMetric) -> None:
        self._metrics.append(metric)

    def snapshot(self) -> list[dict]:
        return [asdict(item) for item in self._metrics]


class PrometheusRequestMetrics:
    """Request counters and latency keyed by route template, not raw path."""

    def __init__(self) -> None:
        self._registry = CollectorRegistry()
        self._requests = Counter(
            "directory_http_requests_total",
            "Directory API HTTP requests",
            labelnames=("method", "route", "status_code"),
            registry=self._registry,
        )
        self._latency = Histogram(
            "directory_http_request_duration_ms",
            "Directory API HTTP request latency in milliseconds",
            labelnames=("method", "route"),
            buckets=LATENCY_BUCKETS_MS,
            registry=self._registry,
        )

    def observe(self, metric: RequestMetric) -> None:
        self._requests.labels(metric.method, metric.route, str(metric.status_code)).inc()
        self._latency.labels(metric.method, metric.route).observe(metric.duration_ms)

    def render(self) -> str:
        return generate_latest(self._registry).decode("utf-8")


class CompositeRequestMetrics:
    def __init__(self, collectors: list[RequestMetricCollector]) -> None:
        self._collectors = collectors

    def observe(self, metric: RequestMetric) -> None:
        for collector in self._collectors:
            collector.observe(metric)
