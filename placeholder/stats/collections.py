"""Value-returning helpers for bounded recency lists and frequency tables.

Neither helper mutates its input: callers read the current collection, build
the next value with one of these functions and assign it back.
"""

from __future__ import annotations

from itertools import chain, islice
from operator import attrgetter
from typing import Callable, Hashable, Mapping, Sequence, TypeVar

from placeholder.stats.schemas import CountedRecord

T = TypeVar("T")
R = TypeVar("R", bound=CountedRecord)

DEFAULT_LIMIT = 10


def _identity(value: T) -> T:
    return value


def push_unique(
    items: Sequence[T],
    item: T,
    *,
    key: Callable[[T], Hashable] | None = None,
    limit: int = DEFAULT_LIMIT,
) -> tuple[T, ...]:
    """Return ``items`` with ``item`` moved to the front, deduplicated and capped at ``limit``.

    Equality is decided on ``key(element)``; without a key the elements themselves
    are compared.
    """

    if limit < 1:
        raise ValueError("limit must be >= 1")
    key_of = key or _identity
    marker = key_of(item)
    rest = (existing for existing in items if key_of(existing) != marker)
    return tuple(islice(chain((item,), rest), limit))


def increment(table: Mapping[str, R], key: str, factory: Callable[[], R]) -> dict[str, R]:
    """Return a copy of ``table`` with the record under ``key`` counted once more.

    Missing keys are seeded with ``factory()``, which must produce a record with ``n == 0``.
    """

    updated = dict(table)
    record = updated.get(key)
    if record is None:
        record = factory()
    updated[key] = record.model_copy(update={"n": record.n + 1})
    return updated


def top_n(table: Mapping[str, R], n: int = DEFAULT_LIMIT) -> list[R]:
    """Return the ``n`` highest-count records; ties keep insertion order."""

    if n <= 0:
        return []
    return sorted(table.values(), key=attrgetter("n"), reverse=True)[:n]
