"""
Pagination utilities.
Provides the same envelope for every list view.
"""
from typing import List, Sequence, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class PaginationParams(BaseModel):
    """Pagination parameters."""
    page: int = 1
    limit: int = 20

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def create_paginated_response(
    items: List[T],
    total: int,
    page: int,
    limit: int
) -> dict:
    """
    Create a paginated response dictionary.

    Args:
        items: List of items for current page
        total: Total count of all items
        page: Current page number
        limit: Items per page

    Returns:
        Dictionary with pagination metadata
    """
    pages = (total + limit - 1) // limit if limit > 0 else 0

    return {
        "items": items,
        "total": total,
        "page": page,
        "limit": limit,
        "pages": pages,
        "has_next": page < pages,
        "has_prev": page > 1
    }


def paginate(items: Sequence[T], page: int = 1, limit: int = 20) -> dict:
    """Slice an already filtered and ordered sequence into one page."""
    params = PaginationParams(page=max(page, 1), limit=limit)
    window = list(items[params.offset:params.offset + params.limit]) if limit > 0 else []
    return create_paginated_response(window, len(items), params.page, params.limit)
