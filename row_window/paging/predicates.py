"""Filter and sort clauses for parent queries.

All filter values are bound parameters. Search text is matched as a
case-insensitive substring with LIKE wildcards escaped.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from row_window.core.enums import SortField, SortOrder
from row_window.core.exceptions import InvalidSortFieldError
from row_window.core.params import LIKE_ESCAPE, like_contains
from row_window.mapping.columns import ColumnMappingTable, Slot


@dataclass(frozen=True)
class PageFilter:
    """Optional store equality and search substring, combined with AND."""

    store: str | None = None
    search: str | None = None

    def __post_init__(self) -> None:
        # Blank input means "no filter"
        for name in ("store", "search"):
            value = getattr(self, name)
            if value is not None and not value.strip():
                object.__setattr__(self, name, None)


@dataclass(frozen=True)
class PageSort:
    field: SortField = SortField.REGISTERED_AT
    order: SortOrder = SortOrder.DESC


@dataclass(frozen=True)
class QueryFields:
    """Which mapped root fields the filter and sort clauses read."""

    store_field: str
    search_fields: tuple[str, ...]
    sort_fields: Mapping[SortField, tuple[str, ...]] = field(default_factory=dict)


def build_conditions(
    page_filter: PageFilter,
    table: ColumnMappingTable,
    fields: QueryFields,
) -> tuple[list[str], dict[str, Any]]:
    """Return the WHERE conditions (to be AND-ed) and their parameters."""
    conditions: list[str] = []
    params: dict[str, Any] = {}

    if page_filter.store is not None:
        conditions.append(f"{table.qualified(Slot.ORDER, fields.store_field)} = :store")
        params["store"] = page_filter.store.strip()

    if page_filter.search is not None:
        # Both sides go through the store's UPPER() so they fold identically
        matches = [
            f"UPPER({table.qualified(Slot.ORDER, name)})"
            f" LIKE UPPER(:search) ESCAPE '{LIKE_ESCAPE}'"
            for name in fields.search_fields
        ]
        conditions.append("(" + " OR ".join(matches) + ")")
        params["search"] = like_contains(page_filter.search.strip())

    return conditions, params


def where_clause(conditions: list[str]) -> str:
    if not conditions:
        return ""
    return " WHERE " + " AND ".join(conditions)


def build_order_by(
    sort: PageSort,
    table: ColumnMappingTable,
    fields: QueryFields,
    key_field: str,
) -> str:
    """Render the ORDER BY items for *sort*, ending with the parent key.

    The parent key tie-breaker makes the order total so consecutive
    windows never overlap.

    Raises:
        InvalidSortFieldError: If the sort field or order is not allowed.
    """
    allowed = [f.name for f in fields.sort_fields]
    if not isinstance(sort.field, SortField) or sort.field not in fields.sort_fields:
        raise InvalidSortFieldError(sort.field, allowed)
    if not isinstance(sort.order, SortOrder):
        raise InvalidSortFieldError(sort.order, [o.name for o in SortOrder])

    names = list(fields.sort_fields[sort.field])
    if key_field not in names:
        names.append(key_field)
    direction = sort.order.value
    return ", ".join(f"{table.qualified(Slot.ORDER, name)} {direction}" for name in names)
