"""Process-wide container for the request statistics collections."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

from placeholder.stats.collections import DEFAULT_LIMIT, top_n
from placeholder.stats.schemas import SizeEntry, TopReferrerRecord, TopSizeRecord


@dataclass
class StatsState:
    """The five collections; each field is replaced wholesale, never edited in place."""

    recent_paths: tuple[str, ...] = ()
    recent_sizes: tuple[SizeEntry, ...] = ()
    recent_texts: tuple[str, ...] = ()
    top_sizes: dict[str, TopSizeRecord] = field(default_factory=dict)
    top_referrers: dict[str, TopReferrerRecord] = field(default_factory=dict)


class StatsStore:
    """Own the stats collections and serialize every read, write and reset."""

    def __init__(self, *, recent_limit: int = DEFAULT_LIMIT, top_limit: int = DEFAULT_LIMIT) -> None:
        if recent_limit < 1:
            raise ValueError("recent_limit must be >= 1")
        self.recent_limit = recent_limit
        self.top_limit = top_limit
        self._lock = threading.Lock()
        self._state = StatsState()

    @contextmanager
    def mutate(self) -> Iterator[StatsState]:
        """Hold the store lock while a pipeline run reassigns collections."""

        with self._lock:
            yield self._state

    def recent_paths(self) -> list[str]:
        with self._lock:
            return list(self._state.recent_paths)

    def recent_sizes(self) -> list[SizeEntry]:
        with self._lock:
            return list(self._state.recent_sizes)

    def recent_texts(self) -> list[str]:
        with self._lock:
            return list(self._state.recent_texts)

    def top_sizes(self, n: int | None = None) -> list[TopSizeRecord]:
        with self._lock:
            return top_n(self._state.top_sizes, self.top_limit if n is None else n)

    def top_referrers(self, n: int | None = None) -> list[TopReferrerRecord]:
        with self._lock:
            return top_n(self._state.top_referrers, self.top_limit if n is None else n)

    def reset(self) -> None:
        """Drop every collection at once."""

        with self._lock:
            self._state = StatsState()
