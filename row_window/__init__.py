"""RowWindow - paged aggregate reconstruction over flat join results."""

from __future__ import annotations

from row_window.core.connection import ConnectionConfig, ConnectionManager
from row_window.core.engine import Engine, SqlQuery
from row_window.core.enums import DatabaseBackend, SortField, SortOrder
from row_window.core.exceptions import (
    AdapterError,
    ColumnMappingError,
    ColumnMismatchError,
    ConnectionError,  # noqa: A004
    ExecutionError,
    InvalidSortFieldError,
    MappingError,
    PlanCompilationError,
    PoolError,
    QueryExecutionError,
    RequestValidationError,
    RowWindowError,
    StrictModeViolation,
)
from row_window.core.settings import Settings, configure_logging, get_settings
from row_window.mapping.aggregate import AggregateMapper
from row_window.orders.repository import OrderRepository
from row_window.orders.request import OrderPageRequest
from row_window.repository.page import Page, PaginationMeta

__all__ = [
    # Connection
    "ConnectionConfig",
    "ConnectionManager",
    # Engine
    "Engine",
    "SqlQuery",
    # Settings
    "Settings",
    "get_settings",
    "configure_logging",
    # Mapping
    "AggregateMapper",
    # Orders
    "OrderRepository",
    "OrderPageRequest",
    "Page",
    "PaginationMeta",
    # Enums
    "DatabaseBackend",
    "SortField",
    "SortOrder",
    # Exceptions
    "RowWindowError",
    "ExecutionError",
    "QueryExecutionError",
    "RequestValidationError",
    "InvalidSortFieldError",
    "MappingError",
    "ColumnMappingError",
    "ColumnMismatchError",
    "StrictModeViolation",
    "PlanCompilationError",
    "AdapterError",
    "ConnectionError",
    "PoolError",
]
