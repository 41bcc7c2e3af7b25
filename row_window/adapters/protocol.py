"""Database adapter protocol.

Every adapter module implements this protocol so the engine and the
window builders can stay backend-agnostic.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from row_window.core.connection import ConnectionConfig
from row_window.core.enums import DatabaseBackend


@runtime_checkable
class SyncAdapter(Protocol):
    """Synchronous database adapter protocol."""

    @property
    def backend(self) -> DatabaseBackend:
        """SQL dialect spoken by this adapter, used to pick a windowing strategy."""
        ...

    def create_pool(self, config: ConnectionConfig) -> Any:
        """Create a connection pool."""
        ...

    def acquire_connection(self, pool: Any) -> Any:
        """Acquire a connection from the pool."""
        ...

    def release_connection(self, connection: Any, pool: Any) -> None:
        """Release a connection back to the pool."""
        ...

    def close_pool(self, pool: Any) -> None:
        """Close the pool and release all connections."""
        ...

    def execute(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Execute SQL and return a cursor-like object."""
        ...
