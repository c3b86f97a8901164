"""Coercion and validation of raw image request parameters."""

from __future__ import annotations

import math
import re

from placeholder.images.errors import DimensionTooLarge, InvalidDimension
from placeholder.images.schemas import RequestDescriptor

DEFAULT_MAX_DIMENSION = 2000
_SPACE_ALIAS = "+"

_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_PREFIXED_INTEGER = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_INFINITY = re.compile(r"[+-]?Infinity")


def coerce_dimension(raw: str) -> float:
    """Convert a raw path or query value to a number the way JavaScript's ``Number()`` does.

    Blank input counts as ``0``. Accepted forms are signed decimal literals with
    an optional exponent, unsigned ``0x``/``0o``/``0b`` integers and the exact
    spelling ``Infinity``; anything else becomes ``nan`` so it fails the integer
    check.
    """

    value = raw.strip()
    if not value:
        return 0.0
    if _INFINITY.fullmatch(value):
        return -math.inf if value.startswith("-") else math.inf
    if _PREFIXED_INTEGER.fullmatch(value):
        return float(int(value, 0))
    if _DECIMAL.fullmatch(value):
        return float(value)
    return math.nan


def normalize_text(text: str | None) -> str | None:
    if text == _SPACE_ALIAS:
        return " "
    return text


def _is_positive_integer(value: float) -> bool:
    return math.isfinite(value) and value > 0 and value.is_integer()


def validate_request(
    width: str,
    height: str,
    square: str | None = None,
    text: str | None = None,
    *,
    max_dimension: int = DEFAULT_MAX_DIMENSION,
) -> RequestDescriptor:
    """Build a :class:`RequestDescriptor` from raw strings.

    ``square`` takes part in both checks whenever it is present, even when empty.
    The size bound is checked before integrality, so ``/img/3000/abc`` is a 403.

    Raises:
        DimensionTooLarge: a dimension exceeds ``max_dimension``.
        InvalidDimension: a dimension is not a positive integer.
    """

    dimensions = {"width": coerce_dimension(width), "height": coerce_dimension(height)}
    if square is not None:
        dimensions["square"] = coerce_dimension(square)

    too_large = [name for name, value in dimensions.items() if value > max_dimension]
    if too_large:
        raise DimensionTooLarge(
            f"Size is too big, {', '.join(too_large)} must not exceed {max_dimension}"
        )

    invalid = [name for name, value in dimensions.items() if not _is_positive_integer(value)]
    if invalid:
        raise InvalidDimension(
            f"Dimension not valid, {', '.join(invalid)} must be a positive integer"
        )

    square_value = dimensions.get("square")
    return RequestDescriptor(
        width=int(dimensions["width"]),
        height=int(dimensions["height"]),
        square=int(square_value) if square_value is not None else None,
        text=normalize_text(text),
    )
