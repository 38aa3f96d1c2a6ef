"""Listing filter and page envelope for paginated listings."""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class IntensityFilter(BaseModel):
    """Optional intensity restriction shared by marker and alert listings."""

    intensity: str | None = None


class Page(BaseModel, Generic[T]):
    """One page of results plus totals."""

    content: list[T]
    page: int = Field(..., ge=0, description="Zero-based page index")
    size: int = Field(..., ge=1, description="Requested page size")
    total_elements: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)

    @classmethod
    def build(cls, content: list, page: int, size: int, total_elements: int) -> "Page":
        """Build a page computing ``total_pages`` from the totals."""
        return cls(
            content=content,
            page=page,
            size=size,
            total_elements=total_elements,
            total_pages=math.ceil(total_elements / size) if size else 0,
        )
