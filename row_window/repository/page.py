"""Paged result containers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from row_window.paging.planner import PageWindow, total_pages

T = TypeVar("T")


@dataclass(frozen=True)
class PaginationMeta:
    """Derived page metadata; never persisted."""

    total_items: int
    current_page: int
    items_per_page: int
    total_pages: int

    @classmethod
    def for_window(cls, window: PageWindow, total_items: int) -> PaginationMeta:
        return cls(
            total_items=total_items,
            current_page=window.page,
            items_per_page=window.limit,
            total_pages=total_pages(total_items, window.limit),
        )

    def as_dict(self) -> dict[str, int]:
        return {
            "totalItems": self.total_items,
            "currentPage": self.current_page,
            "itemsPerPage": self.items_per_page,
            "totalPages": self.total_pages,
        }


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of aggregates plus its metadata."""

    meta: PaginationMeta
    items: list[T] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {"items": self.items, "meta": self.meta.as_dict()}
