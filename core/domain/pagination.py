"""
Pagination primitives shared by list queries.
"""
import math
from dataclasses import dataclass
from typing import Generic, List, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageRequest:
    """1-based page number and page size."""

    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    def __post_init__(self):
        """Validate bounds."""
        if self.page < 1:
            raise ValueError("Page must be at least 1")
        if self.limit < 1 or self.limit > MAX_PAGE_SIZE:
            raise ValueError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")

    @property
    def offset(self) -> int:
        """Number of rows to skip."""
        return (self.page - 1) * self.limit


@dataclass
class Page(Generic[T]):
    """One page of results plus the totals a client needs to navigate."""

    items: List[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        """ceil(total / limit)."""
        return math.ceil(self.total / self.limit) if self.limit else 0

    @classmethod
    def of(cls, items: List[T], total: int, request: PageRequest) -> "Page[T]":
        """Build a page from a slice and the request that produced it."""
        return cls(items=items, total=total, page=request.page, limit=request.limit)
