"""Repository layer - paged aggregate repositories."""

from __future__ import annotations

from row_window.repository.base import Repository
from row_window.repository.page import Page, PaginationMeta

__all__ = [
    "Repository",
    "Page",
    "PaginationMeta",
]
