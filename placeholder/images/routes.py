"""Image route: validate, record stats, then hand off to the imager."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response

from placeholder.images.errors import ImagerFailure
from placeholder.images.imager import Imager
from placeholder.images.validation import DEFAULT_MAX_DIMENSION, validate_request
from placeholder.lib.logger import get_logger
from placeholder.lib.metrics import IMAGE_SERVED, METRICS
from placeholder.stats.pipeline import StatsPipeline
from placeholder.stats.routes import get_stats_store
from placeholder.stats.store import StatsStore

router = APIRouter()
logger = get_logger(__name__)


def get_imager(request: Request) -> Imager:
    imager: Imager | None = getattr(request.app.state, "imager", None)
    if imager is None:
        raise RuntimeError("Imager not configured on application state")
    return imager


def get_stats_pipeline(request: Request) -> StatsPipeline:
    pipeline: StatsPipeline | None = getattr(request.app.state, "stats_pipeline", None)
    if pipeline is None:
        pipeline = StatsPipeline()
        request.app.state.stats_pipeline = pipeline
    return pipeline


@router.get("/{width}/{height}", summary="Generate a placeholder image")
async def serve_image(
    request: Request,
    width: str,
    height: str,
    square: str | None = Query(default=None),
    text: str | None = Query(default=None),
    store: StatsStore = Depends(get_stats_store),
    pipeline: StatsPipeline = Depends(get_stats_pipeline),
    imager: Imager = Depends(get_imager),
) -> Response:
    """Render a ``width`` x ``height`` placeholder.

    Validation failures raise before any stats are touched; stats are committed
    before the imager is awaited.
    """

    max_dimension = getattr(request.app.state, "max_dimension", DEFAULT_MAX_DIMENSION)
    descriptor = validate_request(width, height, square, text, max_dimension=max_dimension)

    pipeline.run(
        store,
        descriptor,
        path=request.url.path,
        referrer=request.headers.get("referer"),
    )

    try:
        response = await imager.send_image(
            descriptor.width,
            descriptor.height,
            descriptor.square,
            descriptor.text,
        )
    except Exception as exc:
        raise ImagerFailure(f"Imager failed for {descriptor.width}x{descriptor.height}") from exc

    METRICS.increment(IMAGE_SERVED)
    return response
