"""SQLite adapter - stdlib sqlite3."""

from __future__ import annotations

import sqlite3
from typing import Any

from row_window.core.connection import ConnectionConfig
from row_window.core.enums import DatabaseBackend
from row_window.core.exceptions import PoolError


class SqliteSyncAdapter:
    """Synchronous SQLite adapter using stdlib sqlite3.

    Window functions (ROW_NUMBER) need SQLite 3.25 or newer.
    """

    @property
    def backend(self) -> DatabaseBackend:
        return DatabaseBackend.SQLITE

    def create_pool(self, config: ConnectionConfig) -> list[sqlite3.Connection]:
        """Create a 'pool' (list of connections) for SQLite."""
        pool: list[sqlite3.Connection] = []
        for _ in range(config.pool_size):
            conn = sqlite3.connect(config.database)
            conn.row_factory = sqlite3.Row
            pool.append(conn)
        return pool

    def acquire_connection(self, pool: list[sqlite3.Connection]) -> sqlite3.Connection:
        """Acquire a connection from the pool."""
        if not pool:
            raise PoolError("No connections available in pool")
        return pool.pop()

    def release_connection(
        self, connection: sqlite3.Connection, pool: list[sqlite3.Connection]
    ) -> None:
        """Release a connection back to the pool."""
        pool.append(connection)

    def close_pool(self, pool: list[sqlite3.Connection]) -> None:
        """Close all connections in the pool."""
        for conn in pool:
            conn.close()
        pool.clear()

    def execute(
        self,
        connection: sqlite3.Connection,
        sql: str,
        params: dict[str, Any] | None = None,
    ) -> sqlite3.Cursor:
        """Execute SQL and return a cursor."""
        return connection.execute(sql, params or {})
