"""
Paged query results returned by repository list methods.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from math import ceil
from typing import Generic, List, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a larger result set."""

    items: List[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10

    @property
    def pages(self) -> int:
        if self.limit <= 0:
            return 0
        return ceil(self.total / self.limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @staticmethod
    def bounds(page: int, limit: int) -> tuple:
        """Normalized ``(page, limit, offset)`` for a page request."""
        page = max(int(page or 1), 1)
        limit = max(int(limit or 10), 1)
        return page, limit, (page - 1) * limit
