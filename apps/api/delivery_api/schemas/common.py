"""
Shared response envelopes.
"""
from typing import Generic, List, TypeVar

from pydantic import BaseModel

from delivery_api.repositories.pagination import Page

T = TypeVar("T")


class PageResponse(BaseModel, Generic[T]):
    """Response model for one page of a listing."""
    items: List[T]
    page: int
    size: int
    total: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page) -> "PageResponse[T]":
        return cls(
            items=list(page.items),
            page=page.request.page,
            size=page.request.size,
            total=page.total,
            total_pages=page.total_pages,
        )


class MessageResponse(BaseModel):
    message: str
