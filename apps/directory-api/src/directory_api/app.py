from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from devkit.observability import configure_logging, configure_otel, configure_probe_access_log_filter
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from directory_api.dependencies import get_settings, seed_demo_data
from directory_api.errors import ApiError
from directory_api.middleware import ObservabilityMiddleware
from directory_api.observability import (
    CompositeRequestMetrics,
    InMemoryRequestMetrics,
    PrometheusRequestMetrics,
)
from directory_api.response import error_response, success_response
from directory_api.routers.facilities import router as facilities_router
from directory_api.routers.geo import router as geo_router


@asynccontextmanager
async def _lifespan(_: FastAPI) -> AsyncIterator[None]:
    await seed_demo_data()
    yield


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    configure_otel(service_name=settings.SERVICE_NAME)
    configure_probe_access_log_filter()

    app = FastAPI(title="Facility Directory API", version="0.1.0", lifespan=_lifespan)
    app.state.api_metrics = InMemoryRequestMetrics()
    app.state.prom_metrics = PrometheusRequestMetrics()
    app.state.composite_metrics = CompositeRequestMetrics([app.state.api_metrics, app.state.prom_metrics])
    app.add_middleware(
        ObservabilityMiddleware,
        collector=app.state.composite_metrics,
        service_name=settings.SERVICE_NAME,
    )
    app.include_router(facilities_router)
    app.include_router(geo_router)

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
