from __future__ import annotations

from time import perf_counter
from uuid import uuid4

from opentelemetry import trace
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from directory_api.observability import RequestMetric, RequestMetricCollector

TRACE_HEADER = "x-trace-id"
UNMATCHED_ROUTE = "<unmatched>"


def route_template(request: Request) -> str:
    # "/v1/facilities/{facility_id}" rather than one label per facility id
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return path if isinstance(path, str) else UNMATCHED_ROUTE


class ObservabilityMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, collector: RequestMetricCollector, service_name: str = "directory-api") -> None:
        super().__init__(app)
        self._collector = collector
        self._tracer = trace.get_tracer(service_name)

    async def dispatch(self, request: Request, call_next) -> Response:
        trace_id = request.headers.get(TRACE_HEADER) or uuid4().hex
        request.state.trace_id = trace_id
        started = perf_counter()
        status_code = 500
        with self._tracer.start_as_current_span("directory.request") as span:
            span.set_attribute("http.method", request.method)
            span.set_attribute("directory.trace_id", trace_id)
            try:
                response = await call_next(request)
                status_code = response.status_code
            finally:
                route = route_template(request)
                span.set_attribute("http.route", route)
                span.set_attribute("http.status_code", status_code)
                self._collector.observe(
                    RequestMetric(
                        method=request.method,
                        route=route,
                        status_code=status_code,
                        duration_ms=(perf_counter() - started) * 1000.0,
                        trace_id=trace_id,
                    )
                )

        response.headers[TRACE_HEADER] = trace_id
        return response
