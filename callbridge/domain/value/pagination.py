"""Pagination value object."""

import math

from callbridge.domain.value.common import ValueObject


class Pagination(ValueObject):
    """Page metadata returned alongside list results."""

    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_prev_page: bool

    @property
    def offset(self) -> int:
        """Number of items to skip for the current page."""
        return (self.current_page - 1) * self.items_per_page


def calculate_pagination(page: int, limit: int, total: int) -> Pagination:
    """Build page metadata, clamping ``page`` into ``[1, total_pages]``.

    An empty collection still reports page 1 (of 0 pages).
    """
    if limit < 1:
        raise ValueError("limit must be at least 1")
    total_pages = math.ceil(total / limit)
    current_page = max(1, min(page, total_pages))
    return Pagination(
        current_page=current_page,
        total_pages=total_pages,
        total_items=total,
        items_per_page=limit,
        has_next_page=current_page < total_pages,
        has_prev_page=current_page > 1,
    )
