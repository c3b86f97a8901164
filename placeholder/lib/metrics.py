"""In-memory outcome counters for image requests and stats maintenance."""

from __future__ import annotations

import threading
from collections import Counter

IMAGE_SERVED = "image.served"
IMAGE_REJECTED_INVALID = "image.rejected.invalid"
IMAGE_REJECTED_TOO_LARGE = "image.rejected.too_large"
IMAGE_FAILED = "image.failed"
STATS_RESET = "stats.reset"


class MetricsRegistry:
    """Thread-safe named counters exposed on ``/metrics``."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: Counter[str] = Counter()

    def increment(self, name: str, value: int = 1) -> None:
        with self._lock:
            self._counters[name] += value

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counters)

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()


METRICS = MetricsRegistry()
