"""FastAPI application entrypoint for the placeholder image service."""

from time import monotonic
from typing import Any

from fastapi import FastAPI
from fastapi.requests import Request
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles

from placeholder.config import get_settings
from placeholder.images.errors import DimensionTooLarge, ImageRequestError, InvalidDimension
from placeholder.images.imager import PlaceholderImager
from placeholder.images.routes import router as images_router
from placeholder.lib.logger import configure_logging, get_logger
from placeholder.lib.metrics import (
    IMAGE_FAILED,
    IMAGE_REJECTED_INVALID,
    IMAGE_REJECTED_TOO_LARGE,
    METRICS,
)
from placeholder.stats import StatsPipeline, StatsStore, router as stats_router

settings = get_settings()

configure_logging(settings.log_level)
logger = get_logger("placeholder")
request_logger = get_logger("placeholder.request")

app = FastAPI(title="Placeholder Images", version="1.0.0")
STARTED_AT = monotonic()

app.state.stats_store = StatsStore(recent_limit=settings.recent_limit, top_limit=settings.top_limit)
app.state.stats_pipeline = StatsPipeline()
app.state.imager = PlaceholderImager(
    background=settings.background_color,
    foreground=settings.foreground_color,
)
app.state.max_dimension = settings.max_dimension
app.state.metrics = METRICS

app.include_router(images_router, prefix="/img", tags=["images"])
app.include_router(stats_router, prefix="/stats", tags=["stats"])

_REJECTION_COUNTERS = {
    DimensionTooLarge: IMAGE_REJECTED_TOO_LARGE,
    InvalidDimension: IMAGE_REJECTED_INVALID,
}


@app.exception_handler(ImageRequestError)
async def image_request_error_handler(request: Request, exc: ImageRequestError) -> Response:
    """Log the failure and answer with the bare status code."""

    context = {"path": request.url.path, "status": exc.status_code}
    if exc.status_code >= 500:
        METRICS.increment(IMAGE_FAILED)
        logger.error(exc.message, extra=context, exc_info=exc.__cause__ or exc)
    else:
        METRICS.increment(_REJECTION_COUNTERS.get(type(exc), IMAGE_REJECTED_INVALID))
        logger.warning(exc.message, extra=context)
    return Response(status_code=exc.status_code)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> Response:
    logger.error(
        "Unexpected failure handling %s %s",
        request.method,
        request.url.path,
        extra={"path": request.url.path, "status": 500},
        exc_info=exc,
    )
    return Response(status_code=500)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next: Any) -> Response:
    started = monotonic()
    response = await call_next(request)
    request_logger.info(
        "%s %s",
        request.method,
        request.url.path + (f"?{request.url.query}" if request.url.query else ""),
        extra={
            "status": response.status_code,
            "latency_ms": int((monotonic() - started) * 1000),
        },
    )
    return response


@app.get("/health", tags=["system"], summary="Liveness and uptime")
async def health_check() -> JSONResponse:
    """Report that the process is serving, with seconds since the app was built."""
    uptime = round(monotonic() - STARTED_AT, 3)
    return JSONResponse({"ok": True, "data": {"status": "healthy", "uptime_seconds": uptime}})


@app.get("/metrics", tags=["system"], summary="Metrics endpoint")
async def metrics_endpoint() -> JSONResponse:
    snapshot = METRICS.snapshot()
    return JSONResponse({"ok": True, "data": snapshot})


# Mounted last so API routes win over same-named files.
if settings.static_dir.is_dir():
    app.mount("/", StaticFiles(directory=str(settings.static_dir), html=True), name="public")
