"""Aggregation stages applied to the stats store for every accepted image request."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence
from urllib.parse import quote

from placeholder.images.schemas import RequestDescriptor
from placeholder.lib.logger import get_logger
from placeholder.stats.collections import increment, push_unique
from placeholder.stats.schemas import SizeEntry, TopReferrerRecord, TopSizeRecord
from placeholder.stats.store import StatsState, StatsStore

logger = get_logger(__name__)

# Characters JavaScript's encodeURIComponent leaves untouched besides alphanumerics.
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass(frozen=True)
class StageContext:
    descriptor: RequestDescriptor
    path: str
    referrer: str | None
    limit: int


Stage = Callable[[StatsState, StageContext], None]


def canonical_url(path: str, descriptor: RequestDescriptor) -> str:
    """Rebuild the request URL from the query values that were actually used."""

    query = "&".join(
        f"{name}={quote(str(value), safe=_URI_COMPONENT_SAFE)}"
        for name, value in descriptor.queries.items()
        if value
    )
    return f"{path}?{query}" if query else path


def size_key(width: int, height: int) -> str:
    return f"{width}x{height}"


def record_recent_path(state: StatsState, context: StageContext) -> None:
    url = canonical_url(context.path, context.descriptor)
    state.recent_paths = push_unique(state.recent_paths, url, limit=context.limit)


def record_recent_size(state: StatsState, context: StageContext) -> None:
    entry = SizeEntry(w=context.descriptor.width, h=context.descriptor.height)
    state.recent_sizes = push_unique(
        state.recent_sizes, entry, key=lambda size: (size.w, size.h), limit=context.limit
    )


def record_recent_text(state: StatsState, context: StageContext) -> None:
    text = context.descriptor.text
    if not text:
        return
    state.recent_texts = push_unique(state.recent_texts, text, limit=context.limit)


def record_top_size(state: StatsState, context: StageContext) -> None:
    width, height = context.descriptor.width, context.descriptor.height
    state.top_sizes = increment(
        state.top_sizes,
        size_key(width, height),
        lambda: TopSizeRecord(w=width, h=height, n=0),
    )


def record_top_referrer(state: StatsState, context: StageContext) -> None:
    referrer = context.referrer
    if not referrer:
        return
    state.top_referrers = increment(
        state.top_referrers,
        referrer,
        lambda: TopReferrerRecord(ref=referrer, n=0),
    )


DEFAULT_STAGES: tuple[Stage, ...] = (
    record_recent_path,
    record_recent_size,
    record_recent_text,
    record_top_size,
    record_top_referrer,
)


class StatsPipeline:
    """Run every stage against the store inside a single mutation scope."""

    def __init__(self, stages: Sequence[Stage] = DEFAULT_STAGES) -> None:
        self._stages = tuple(stages)

    def run(
        self,
        store: StatsStore,
        descriptor: RequestDescriptor,
        *,
        path: str,
        referrer: str | None = None,
    ) -> None:
        context = StageContext(
            descriptor=descriptor,
            path=path,
            referrer=referrer,
            limit=store.recent_limit,
        )
        with store.mutate() as state:
            for stage in self._stages:
                stage(state, context)
        logger.debug(
            "stats recorded",
            extra={"path": path, "width": descriptor.width, "height": descriptor.height},
        )
