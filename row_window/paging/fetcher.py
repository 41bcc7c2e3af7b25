"""Windowed parent fetcher.

Runs the COUNT query and, when anything matches, the windowed SELECT
over the filtered, sorted parent table. Neither query joins child
tables, so the count reflects parent cardinality only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from row_window.core.engine import Engine, SqlQuery
from row_window.mapping.columns import ColumnMappingTable, Slot
from row_window.paging.planner import PageWindow
from row_window.paging.predicates import (
    PageFilter,
    PageSort,
    QueryFields,
    build_conditions,
    build_order_by,
    where_clause,
)
from row_window.paging.window import window_params, windowed_select

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParentPage:
    """Parent rows of one window plus the unwindowed parent count."""

    parent_rows: list[dict[str, Any]] = field(default_factory=list)
    total_items: int = 0


class WindowedFetcher:
    """Builds and runs the count + windowed parent queries."""

    def __init__(
        self,
        engine: Engine,
        table: ColumnMappingTable,
        fields: QueryFields,
        key_field: str,
    ) -> None:
        self._engine = engine
        self._table = table
        self._fields = fields
        self._key_field = key_field

    def count_query(self, page_filter: PageFilter) -> SqlQuery:
        conditions, params = build_conditions(page_filter, self._table, self._fields)
        sql = (
            f"SELECT COUNT(*) AS total_items FROM {self._table.from_clause(Slot.ORDER)}"
            f"{where_clause(conditions)}"
        )
        return SqlQuery(sql=sql, params=params, label="parents.count")

    def window_query(
        self,
        page_filter: PageFilter,
        sort: PageSort,
        window: PageWindow,
    ) -> SqlQuery:
        order_by = build_order_by(sort, self._table, self._fields, self._key_field)
        conditions, params = build_conditions(page_filter, self._table, self._fields)
        sql = windowed_select(
            self._engine.backend,
            select_list=", ".join(self._table.select_list(Slot.ORDER)),
            from_where=self._table.from_clause(Slot.ORDER) + where_clause(conditions),
            order_by=order_by,
        )
        params.update(window_params(window))
        return SqlQuery(sql=sql, params=params, label="parents.window")

    def fetch_page(
        self,
        page_filter: PageFilter,
        sort: PageSort,
        window: PageWindow,
    ) -> ParentPage:
        """Return the parent rows inside *window* and the total match count.

        Raises:
            InvalidSortFieldError: Before any query runs, if *sort* is not allowed.
        """
        # Sort validation happens before the store is touched
        build_order_by(sort, self._table, self._fields, self._key_field)

        total_items = int(self._engine.fetch_scalar(self.count_query(page_filter)) or 0)
        if total_items == 0:
            logger.debug("No parent rows match %s", page_filter)
            return ParentPage(parent_rows=[], total_items=0)

        parent_rows = self._engine.fetch_all(self.window_query(page_filter, sort, window))
        logger.debug(
            "Window [%d, %d) returned %d of %d parent row(s)",
            window.offset,
            window.upper,
            len(parent_rows),
            total_items,
        )
        return ParentPage(parent_rows=parent_rows, total_items=total_items)
