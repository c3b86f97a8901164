"""Validated image request descriptor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RequestDescriptor:
    """Canonical form of an accepted ``/img/{width}/{height}`` request."""

    width: int
    height: int
    square: int | None = None
    text: str | None = None

    @property
    def params(self) -> dict[str, int]:
        return {"width": self.width, "height": self.height}

    @property
    def queries(self) -> dict[str, Any]:
        """Query values in the order they are re-serialized into recent paths."""

        return {"square": self.square, "text": self.text}
