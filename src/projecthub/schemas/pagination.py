"""Offset pagination schemas."""

import math
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

from src.projecthub.schemas.base import CamelModel

T = TypeVar("T")


class PageMeta(CamelModel):
    """Pagination metadata returned alongside a page of results."""

    total: int = Field(description="Number of records matching the filter.")
    page: int = Field(description="1-based page number that was requested.")
    limit: int = Field(description="Page size that was requested.")
    total_pages: int = Field(description="ceil(total / limit).")

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PageMeta":
        return cls(total=total, page=page, limit=limit, total_pages=math.ceil(total / limit))


class PaginatedResponse(BaseModel, Generic[T]):
    """Page of results in the success envelope.

    A page past the last one is empty rather than an error.
    """

    success: Literal[True] = True
    data: list[T]
    meta: PageMeta


def page_offset(page: int, limit: int) -> int:
    """Row offset of a 1-based page."""
    return (page - 1) * limit
