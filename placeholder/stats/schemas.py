"""Pydantic records held by the stats store and returned by the stats routes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field


class SizeEntry(BaseModel):
    """A requested width/height pair; equal when both dimensions match."""

    model_config = ConfigDict(frozen=True)

    w: int = Field(..., gt=0)
    h: int = Field(..., gt=0)


class CountedRecord(BaseModel):
    """Base for frequency table records; subclasses declare ``n`` last so it serializes last."""

    model_config = ConfigDict(frozen=True)

    if TYPE_CHECKING:
        n: int


class TopSizeRecord(CountedRecord):
    w: int = Field(..., gt=0)
    h: int = Field(..., gt=0)
    n: int = Field(default=0, ge=0)


class TopReferrerRecord(CountedRecord):
    ref: str = Field(..., min_length=1)
    n: int = Field(default=0, ge=0)
