"""
Paging of the learner's progress and vocabulary lists.

List endpoints accept any ``page`` and ``limit`` and pull them into range
instead of rejecting them:

    Pagination.clamped(page=0, page_size=500)  # page 1, MAX_PAGE_SIZE rows
    Pagination.clamped(page=10**20, page_size=None)  # page MAX_PAGE
"""

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# Keeps the row offset within a signed 64-bit integer
MAX_PAGE = (2**63 - 1) // MAX_PAGE_SIZE


@dataclass(frozen=True)
class Pagination:
    """A 1-indexed page of ``page_size`` rows."""

    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if not 1 <= self.page <= MAX_PAGE:
            raise ValueError(f"page must be within 1..{MAX_PAGE}, got {self.page}")
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be within 1..{MAX_PAGE_SIZE}, got {self.page_size}")

    @classmethod
    def clamped(cls, page: int | None, page_size: int | None) -> "Pagination":
        """Build a page from raw query values, defaulting and clamping them."""
        if page_size is None:
            page_size = DEFAULT_PAGE_SIZE
        return cls(
            page=min(max(page or 1, 1), MAX_PAGE),
            page_size=min(max(page_size, 1), MAX_PAGE_SIZE),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """One page of rows plus the number of rows matching the whole query."""

    items: list[T]
    total: int
    pagination: Pagination

    @property
    def page(self) -> int:
        return self.pagination.page

    @property
    def page_size(self) -> int:
        return self.pagination.page_size

    @property
    def total_pages(self) -> int:
        """Pages needed for ``total`` rows; 0 when nothing matches."""
        return math.ceil(self.total / self.page_size)
