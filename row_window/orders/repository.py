"""Order repository.

``find_page`` runs the two-phase page strategy: count and window the
parent table, then fetch the child join rows for just that window's
order numbers and fold them into aggregates. ``find_by_order_number``
loads one order with a single combined join query.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from row_window.core.engine import Engine, SqlQuery
from row_window.core.settings import Settings, get_settings
from row_window.mapping.builder import aggregate
from row_window.mapping.columns import ColumnMappingTable, Slot
from row_window.mapping.plan import AggregatePlan
from row_window.orders.columns import ORDER_QUERY_FIELDS, build_order_table
from row_window.orders.models import Invoice, LineItem, OrderAggregate, PaymentTransaction
from row_window.orders.request import OrderPageRequest
from row_window.paging.fetcher import WindowedFetcher
from row_window.paging.planner import plan_page
from row_window.paging.predicates import PageFilter, PageSort
from row_window.paging.related import RelatedRowFetcher
from row_window.repository.base import Repository
from row_window.repository.page import Page, PaginationMeta

logger = logging.getLogger(__name__)


def build_order_plan(table: ColumnMappingTable) -> AggregatePlan:
    """Compile the OrderAggregate plan against *table*."""
    return (
        aggregate(OrderAggregate, table)
        .key("order_number")
        .collection("line_items", LineItem, Slot.LINE_ITEMS, key="ean")
        .collection("invoices", Invoice, Slot.INVOICES, key="invoice_number")
        .collection("transactions", PaymentTransaction, Slot.TRANSACTIONS, key="approval_code")
        .build()
    )


class OrderRepository(Repository[OrderAggregate]):
    """Read-only paged access to order aggregates."""

    def __init__(
        self,
        engine: Engine,
        settings: Settings | None = None,
        table: ColumnMappingTable | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.table = table or build_order_table(self.settings.order_schema)
        super().__init__(engine, mapping=build_order_plan(self.table))

        plan = self.mapper.plan
        key_field = plan.root_plan.key_fields[0]
        self.windowed = WindowedFetcher(engine, self.table, ORDER_QUERY_FIELDS, key_field)
        self.related = RelatedRowFetcher(
            engine,
            self.table,
            plan,
            ORDER_QUERY_FIELDS,
            chunk_size=self.settings.in_list_chunk_size,
        )

    def find_page(
        self,
        request: OrderPageRequest | Mapping[str, Any] | None = None,
    ) -> Page[OrderAggregate]:
        """Return one filtered, sorted page of orders with their children.

        Raises:
            RequestValidationError: If a raw *request* mapping is invalid.
            InvalidSortFieldError: If the sort is outside the allow-list.
            QueryExecutionError: If either query fails.
        """
        if request is None:
            request = OrderPageRequest()
        elif not isinstance(request, OrderPageRequest):
            request = OrderPageRequest.parse(request)

        return self.find_filtered_page(
            request.filter, request.sort, request.page, request.limit
        )

    def find_filtered_page(
        self,
        page_filter: PageFilter,
        sort: PageSort,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[OrderAggregate]:
        window = plan_page(page, limit, default_limit=self.settings.default_page_size)
        parent_page = self.windowed.fetch_page(page_filter, sort, window)
        meta = PaginationMeta.for_window(window, parent_page.total_items)

        if not parent_page.parent_rows:
            logger.debug("Page %d is empty (%d order(s) match)", window.page, meta.total_items)
            return Page(meta=meta, items=[])

        key_column = self.mapper.plan.root_key_column
        parent_keys = [row[key_column] for row in parent_page.parent_rows]
        related_rows = self.related.fetch_related(parent_keys, page_filter)
        items = self.mapper.aggregate(parent_page.parent_rows, related_rows)

        logger.info(
            "Loaded page %d/%d: %d of %d order(s)",
            meta.current_page,
            meta.total_pages,
            len(items),
            meta.total_items,
        )
        return Page(meta=meta, items=items)

    def find_by_order_number(self, order_number: str) -> OrderAggregate | None:
        """Load one order and its children with a single join query."""
        table = self.table
        slots = (Slot.ORDER, *(c.entity_plan.slot for c in self.mapper.plan.collection_plans))
        key_column = table.qualified(Slot.ORDER, self.mapper.plan.root_plan.key_fields[0])
        query = SqlQuery(
            sql=(
                f"SELECT {', '.join(table.select_list(*slots))}"
                f" FROM {self.related.join_clause()}"
                f" WHERE {key_column} = :order_number"
                f" ORDER BY {self.related.order_by()}"
            ),
            params={"order_number": order_number},
            label="orders.by_order_number",
        )
        results: list[OrderAggregate] = self.engine.fetch_all(query, mapper=self.mapper)
        return results[0] if results else None
