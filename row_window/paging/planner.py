"""Pagination planner.

Normalizes raw page/limit input into a result window. Invalid input is
recovered by defaulting, never reported as an error. No upper bound on
the page size is enforced here.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class PageWindow:
    """Result window ``[offset, offset + limit)`` for one page."""

    page: int
    limit: int
    offset: int

    @property
    def upper(self) -> int:
        """Highest 1-based row number inside the window."""
        return self.offset + self.limit


def plan_page(
    raw_page: int | None,
    raw_limit: int | None,
    default_limit: int = DEFAULT_LIMIT,
) -> PageWindow:
    """Compute the window for a page request.

    ``page`` falls back to 1 and ``limit`` to *default_limit* when missing
    or not positive.
    """
    page = raw_page if raw_page is not None and raw_page > 0 else DEFAULT_PAGE
    limit = raw_limit if raw_limit is not None and raw_limit > 0 else default_limit
    return PageWindow(page=page, limit=limit, offset=(page - 1) * limit)


def total_pages(total_items: int, items_per_page: int) -> int:
    """``ceil(total_items / items_per_page)``; 0 when there are no items."""
    if total_items <= 0:
        return 0
    return math.ceil(total_items / items_per_page)
