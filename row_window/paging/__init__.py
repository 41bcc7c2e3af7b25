"""Paging layer - page planning, windowed parent fetch, related-row fetch."""

from __future__ import annotations

from row_window.paging.fetcher import ParentPage, WindowedFetcher
from row_window.paging.planner import DEFAULT_LIMIT, PageWindow, plan_page, total_pages
from row_window.paging.predicates import PageFilter, PageSort, QueryFields
from row_window.paging.related import RelatedRowFetcher

__all__ = [
    "DEFAULT_LIMIT",
    "PageWindow",
    "plan_page",
    "total_pages",
    "PageFilter",
    "PageSort",
    "QueryFields",
    "ParentPage",
    "WindowedFetcher",
    "RelatedRowFetcher",
]
