"""Order aggregates: models, column mapping, request boundary, repository."""

from __future__ import annotations

from row_window.orders.columns import ORDER_QUERY_FIELDS, build_order_table
from row_window.orders.models import Invoice, LineItem, OrderAggregate, PaymentTransaction
from row_window.orders.repository import OrderRepository, build_order_plan
from row_window.orders.request import OrderPageRequest

__all__ = [
    "OrderAggregate",
    "LineItem",
    "Invoice",
    "PaymentTransaction",
    "ORDER_QUERY_FIELDS",
    "build_order_table",
    "build_order_plan",
    "OrderPageRequest",
    "OrderRepository",
]
