"""Related-row fetcher.

Loads every child row of one page of parents with a single query: the
parent table LEFT JOINed to each child table on the parent business key,
restricted to the page's keys. Missing children come back as all-NULL
columns.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from row_window.core.engine import Engine, SqlQuery
from row_window.core.params import in_list
from row_window.mapping.columns import ColumnMappingTable, Slot
from row_window.mapping.plan import AggregatePlan
from row_window.paging.predicates import PageFilter, QueryFields, build_conditions, where_clause

logger = logging.getLogger(__name__)


class RelatedRowFetcher:
    """Builds and runs the child join query for a resolved key set."""

    def __init__(
        self,
        engine: Engine,
        table: ColumnMappingTable,
        plan: AggregatePlan,
        fields: QueryFields,
        chunk_size: int = 1000,
    ) -> None:
        self._engine = engine
        self._table = table
        self._plan = plan
        self._fields = fields
        self._chunk_size = chunk_size

    def join_clause(self) -> str:
        """Parent table plus one LEFT JOIN per collection in the plan."""
        table = self._table
        parent_key = table.qualified(Slot.ORDER, self._plan.root_plan.key_fields[0])
        joins = [table.from_clause(Slot.ORDER)]
        for coll in self._plan.collection_plans:
            child = table.source(coll.entity_plan.slot)
            joins.append(
                f"LEFT JOIN {child.table} {child.alias}"
                f" ON {child.alias}.{child.join_column} = {parent_key}"
            )
        return " ".join(joins)

    def select_list(self) -> list[str]:
        table = self._table
        root_key = table.column(Slot.ORDER, self._plan.root_plan.key_fields[0])
        items = [table.select_item(root_key)]
        for coll in self._plan.collection_plans:
            items.extend(table.select_list(coll.entity_plan.slot))
        return items

    def order_by(self) -> str:
        table = self._table
        items = [table.qualified(Slot.ORDER, self._plan.root_plan.key_fields[0])]
        for coll in self._plan.collection_plans:
            entity_plan = coll.entity_plan
            items.extend(table.qualified(entity_plan.slot, name) for name in entity_plan.key_fields)
        return ", ".join(items)

    def related_query(self, parent_keys: list[Any], page_filter: PageFilter) -> SqlQuery:
        key_column = self._table.qualified(Slot.ORDER, self._plan.root_plan.key_fields[0])
        key_predicate, params = in_list(key_column, parent_keys, "parent_key", self._chunk_size)

        # Only the store filter is re-applied; search already narrowed the keys
        conditions, filter_params = build_conditions(
            PageFilter(store=page_filter.store), self._table, self._fields
        )
        params.update(filter_params)

        sql = (
            f"SELECT {', '.join(self.select_list())} FROM {self.join_clause()}"
            f"{where_clause([key_predicate, *conditions])}"
            f" ORDER BY {self.order_by()}"
        )
        return SqlQuery(sql=sql, params=params, label="parents.related")

    def fetch_related(
        self,
        parent_keys: Iterable[Any],
        page_filter: PageFilter | None = None,
    ) -> list[dict[str, Any]]:
        """Return the flat join rows of *parent_keys*; ``[]`` without querying if empty."""
        keys = list(dict.fromkeys(k for k in parent_keys if k is not None))
        if not keys:
            return []
        rows: list[dict[str, Any]] = self._engine.fetch_all(
            self.related_query(keys, page_filter or PageFilter())
        )
        logger.debug("Fetched %d related row(s) for %d parent key(s)", len(rows), len(keys))
        return rows
