"""Pagination DTOs shared by the catalog listings."""

import math
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10


@dataclass(frozen=True)
class PageRequest:
    """1-based page number and page size."""

    current_page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE

    @classmethod
    def normalize(
        cls,
        current_page: Optional[Any] = None,
        per_page: Optional[Any] = None,
    ) -> "PageRequest":
        """Build a request, falling back to 1/10 for missing or invalid values."""
        return cls(
            current_page=_positive_int(current_page, DEFAULT_PAGE),
            per_page=_positive_int(per_page, DEFAULT_PER_PAGE),
        )

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    current_page: int
    per_page: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.per_page)

    @classmethod
    def of(cls, items: list[T], total: int, request: PageRequest) -> "Page[T]":
        return cls(
            items=items,
            total=total,
            current_page=request.current_page,
            per_page=request.per_page,
        )


def _positive_int(value: Optional[Any], default: int) -> int:
    try:
        number = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default
