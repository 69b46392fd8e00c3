# This project was developed with assistance from AI tools.
"""Shared schema components."""

from lending.listing import Page
from pydantic import BaseModel


class Pagination(BaseModel):
    """Page-number pagination metadata for list responses."""

    total: int
    page: int
    page_size: int
    total_pages: int
    has_more: bool

    @classmethod
    def from_page(cls, page: Page) -> "Pagination":
        return cls(
            total=page.total_items,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
            has_more=page.has_next,
        )
