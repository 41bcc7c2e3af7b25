"""Query execution engine.

The Engine takes generated ``SqlQuery`` objects, executes them through the
adapter with their bound parameters, and optionally applies a mapper to
results.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from row_window.core.connection import ConnectionConfig, ConnectionManager
from row_window.core.enums import DatabaseBackend
from row_window.core.exceptions import QueryExecutionError
from row_window.mapping.protocol import Mapper

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SqlQuery:
    """SQL text with `:name` placeholders, its bound values and a log label."""

    sql: str
    params: dict[str, Any] = field(default_factory=dict)
    label: str = "<inline>"


def _rows_to_dicts(cursor: Any) -> list[dict[str, Any]]:
    """Convert cursor results to list of dicts.

    Handles both tuple-like rows and dict-like rows from different adapters.
    """
    if cursor.description is None:
        return []
    columns = [desc[0] for desc in cursor.description]
    rows = cursor.fetchall()
    if not rows:
        return []

    # The Oracle row factory already yields dicts
    if isinstance(rows[0], dict):
        return [dict(row) for row in rows]

    return [dict(zip(columns, row, strict=True)) for row in rows]


class Engine:
    """Synchronous query execution engine."""

    def __init__(self, connection_manager: ConnectionManager) -> None:
        self._connection_manager = connection_manager

    @classmethod
    def from_config(cls, config: ConnectionConfig) -> Engine:
        """Create an Engine from a ConnectionConfig."""
        return cls(ConnectionManager(config))

    @property
    def backend(self) -> DatabaseBackend:
        """SQL dialect of the underlying adapter."""
        return self._connection_manager.adapter.backend

    def fetch_all(self, query: SqlQuery, *, mapper: Mapper[Any] | None = None) -> Any:
        """Fetch all matching rows."""
        with self._connection_manager.get_connection() as conn:
            cursor = self._execute(conn, query)
            rows = _rows_to_dicts(cursor)

        logger.debug("Query '%s' returned %d row(s)", query.label, len(rows))
        if mapper is not None:
            return mapper.map_many(rows)
        return rows

    def fetch_scalar(self, query: SqlQuery) -> Any:
        """Fetch a single scalar value (first column of first row)."""
        with self._connection_manager.get_connection() as conn:
            cursor = self._execute(conn, query)
            row = cursor.fetchone()

        if row is None:
            return None
        if isinstance(row, dict):
            return next(iter(row.values()))
        return row[0]

    def close(self) -> None:
        """Release every pooled connection."""
        self._connection_manager.close_pool()

    def _execute(self, conn: Any, query: SqlQuery) -> Any:
        logger.debug("Executing '%s' with %d bound parameter(s)", query.label, len(query.params))
        try:
            return self._connection_manager.adapter.execute(conn, query.sql, query.params)
        except Exception as e:
            logger.error("Query '%s' failed: %s", query.label, e)
            raise QueryExecutionError(query.label, str(e)) from e
