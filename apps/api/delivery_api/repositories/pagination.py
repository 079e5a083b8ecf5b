"""
Page request/response containers used by repositories and routers.
"""
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page index plus page size."""

    page: int = 0
    size: int = 10

    def __post_init__(self):
        if self.page < 0:
            raise ValueError("page must be >= 0")
        if self.size < 1:
            raise ValueError("size must be >= 1")

    @property
    def offset(self) -> int:
        return self.page * self.size

    @property
    def limit(self) -> int:
        return self.size


@dataclass
class Page(Generic[T]):
    """
    One page of results.

    ``total`` is the number of rows matching the filter across all pages,
    not the length of ``items``.
    """

    items: Sequence[T]
    request: PageRequest
    total: int

    @property
    def total_pages(self) -> int:
        return (self.total + self.request.size - 1) // self.request.size

    @property
    def has_next(self) -> bool:
        return self.request.offset + len(self.items) < self.total

    def map(self, fn) -> "Page":
        return Page(items=[fn(item) for item in self.items], request=self.request, total=self.total)
