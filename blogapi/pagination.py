"""Pagination utilities.

Page numbers are 0-based. Out-of-range requests are clamped, never rejected.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# offset = page * size must fit a signed 64-bit SQL integer
MAX_PAGE = (2**63 - 1) // MAX_PAGE_SIZE


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortField(str, Enum):
    """Columns a post listing may be ordered by."""

    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    TITLE = "title"
    ID = "id"


# Accept the camelCase names used by existing clients as well.
_SORT_ALIASES = {
    "createdat": SortField.CREATED_AT,
    "created_at": SortField.CREATED_AT,
    "updatedat": SortField.UPDATED_AT,
    "updated_at": SortField.UPDATED_AT,
    "title": SortField.TITLE,
    "id": SortField.ID,
}


@dataclass(frozen=True)
class PageRequest:
    page: int = 0
    size: int = DEFAULT_PAGE_SIZE
    sort_field: SortField = SortField.CREATED_AT
    sort_dir: SortDirection = SortDirection.DESC

    @property
    def offset(self) -> int:
        return self.page * self.size

    @classmethod
    def clamped(
        cls,
        page: int | None = None,
        size: int | None = None,
        sort_field: SortField | str | None = None,
        sort_dir: SortDirection | str | None = None,
    ) -> "PageRequest":
        """Build a request, pulling every value into its valid range.

        Examples:
            >>> PageRequest.clamped(page=-3, size=500)
            PageRequest(page=0, size=100, ...)
        """
        page = min(max(page or 0, 0), MAX_PAGE)
        if size is None:
            size = DEFAULT_PAGE_SIZE
        size = min(max(size, 1), MAX_PAGE_SIZE)
        return cls(
            page=page,
            size=size,
            sort_field=_parse_sort_field(sort_field),
            sort_dir=_parse_sort_dir(sort_dir),
        )

    @classmethod
    def from_query(
        cls, page: int | None, size: int | None, sort: str | None
    ) -> "PageRequest":
        """Parse a `field[,dir]` sort expression, e.g. ``createdAt,desc``."""
        sort_field = sort_dir = None
        if sort:
            parts = [p.strip() for p in sort.split(",")]
            sort_field = parts[0]
            if len(parts) > 1:
                sort_dir = parts[1]
        return cls.clamped(page=page, size=size, sort_field=sort_field, sort_dir=sort_dir)


def _parse_sort_field(value: SortField | str | None) -> SortField:
    if isinstance(value, SortField):
        return value
    if not value:
        return SortField.CREATED_AT
    return _SORT_ALIASES.get(value.lower(), SortField.CREATED_AT)


def _parse_sort_dir(value: SortDirection | str | None) -> SortDirection:
    if isinstance(value, SortDirection):
        return value
    if value and value.lower() == "asc":
        return SortDirection.ASC
    return SortDirection.DESC


@dataclass
class Page(Generic[T]):
    """One page of results plus enough metadata to know if more exist."""

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 0
    size: int = DEFAULT_PAGE_SIZE

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.size) if self.size else 0

    @property
    def has_next(self) -> bool:
        return (self.page + 1) * self.size < self.total

    @classmethod
    def empty(cls, request: PageRequest) -> "Page[T]":
        return cls(items=[], total=0, page=request.page, size=request.size)
