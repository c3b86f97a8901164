"""Read and reset routes for the request statistics."""

from __future__ import annotations

from typing import Callable, Sequence

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from placeholder.lib.logger import get_logger
from placeholder.lib.metrics import METRICS, STATS_RESET
from placeholder.stats.store import StatsStore

router = APIRouter()
logger = get_logger(__name__)


def get_stats_store(request: Request) -> StatsStore:
    store: StatsStore | None = getattr(request.app.state, "stats_store", None)
    if store is None:
        raise RuntimeError("Stats store not configured on application state")
    return store


def _serve(name: str, reader: Callable[[], Sequence[object]]) -> Response:
    try:
        items = reader()
        payload = [item.model_dump(mode="json") if isinstance(item, BaseModel) else item for item in items]
    except Exception:
        logger.exception("Failed to read stats", extra={"collection": name})
        return Response(status_code=500)
    return JSONResponse(payload)


@router.get("/paths/recent", summary="Most recent distinct image paths")
async def recent_paths(store: StatsStore = Depends(get_stats_store)) -> Response:
    return _serve("recent_paths", store.recent_paths)


@router.get("/sizes/recent", summary="Most recent distinct image sizes")
async def recent_sizes(store: StatsStore = Depends(get_stats_store)) -> Response:
    return _serve("recent_sizes", store.recent_sizes)


@router.get("/texts/recent", summary="Most recent distinct custom texts")
async def recent_texts(store: StatsStore = Depends(get_stats_store)) -> Response:
    return _serve("recent_texts", store.recent_texts)


@router.get("/sizes/top", summary="Most requested image sizes")
async def top_sizes(store: StatsStore = Depends(get_stats_store)) -> Response:
    return _serve("top_sizes", store.top_sizes)


@router.get("/referrers/top", summary="Most frequent referrers")
async def top_referrers(store: StatsStore = Depends(get_stats_store)) -> Response:
    return _serve("top_referrers", store.top_referrers)


@router.delete("", summary="Clear all statistics")
async def reset_stats(store: StatsStore = Depends(get_stats_store)) -> Response:
    """Empty every collection; the response carries no body."""

    store.reset()
    METRICS.increment(STATS_RESET)
    logger.info("Stats reset")
    return Response(status_code=200)
