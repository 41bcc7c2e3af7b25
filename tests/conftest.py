"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from row_window.core.connection import ConnectionConfig, ConnectionManager
from row_window.core.engine import Engine
from row_window.core.settings import Settings
from row_window.mapping.columns import ColumnMappingTable
from row_window.orders.columns import build_order_table

ORDER_DDL = (
    "CREATE TABLE WEB_ORDENES ("
    "ID TEXT PRIMARY KEY, ORDEN TEXT NOT NULL, RNC TEXT, NOMBRE TEXT, APELLIDOS TEXT, "
    "DIRECCION TEXT, CIUDAD TEXT, COMENTARIO TEXT, TELEFONO TEXT, EMAIL TEXT, PAIS TEXT, "
    "ESTATUS INTEGER, TOTAL REAL, ITBIS REAL, FECHA_REGISTRO TEXT, HORA_REGISTRO TEXT, "
    "TARJETA TEXT, PTLOG TEXT, CLUB TEXT, WEB TEXT, TIENDA TEXT, NCF TEXT, TIPO_NCF TEXT, "
    "ESTATUS_DELIV INTEGER, RNC_NAME TEXT, OTRO_NOMBRE TEXT, OTRO_NOMBRE_DOC TEXT, "
    "ORDEN_REFERENCIA TEXT, ORDEN_DESDE TEXT, TOTAL_DESCUENTO REAL, PRINT INTEGER)",
    "CREATE TABLE WEB_ARTICULOS ("
    "ID TEXT PRIMARY KEY, ORDEN TEXT, FACTURA TEXT, CANT REAL, EAN TEXT, DESCRIPCION TEXT, "
    "PRECIO REAL, TOTAL REAL, ESTATUS INTEGER, FECHA TEXT, WEB TEXT, UNMANEJO TEXT, "
    "TOTAL_DISCOUNT REAL)",
    "CREATE TABLE WEB_FACTURAS ("
    "ID TEXT PRIMARY KEY, ORDEN TEXT, FACTURAS TEXT, DEPTO TEXT, ESTATUS TEXT, WEB TEXT, "
    "TIENDA TEXT, DELIVERY TEXT, ITBIS REAL, NCF TEXT, TIPO_NCF TEXT, TOTAL REAL)",
    "CREATE TABLE WEB_TRANSACIONES ("
    "ID TEXT PRIMARY KEY, ORDEN TEXT, TOTAL REAL, TARJETA TEXT, APROBACION TEXT, "
    "REFERENCIA TEXT, ESTATUS INTEGER, MENSAJE TEXT, FECHA_APROBACION TEXT, "
    "HORA_APROBACION TEXT, WEB TEXT, TRANS_ID TEXT, TOTAL_AUT REAL, KIND TEXT, "
    "TIPO_PAGO INTEGER, GATEWAY TEXT)",
)


def _insert(conn: Any, table: str, values: dict[str, Any]) -> None:
    columns = ", ".join(values)
    placeholders = ", ".join(f":{name}" for name in values)
    conn.execute(f"INSERT INTO {table} ({columns}) VALUES ({placeholders})", values)


@pytest.fixture
def sqlite_config() -> ConnectionConfig:
    """SQLite in-memory connection config (one connection, one database)."""
    return ConnectionConfig(driver="sqlite", database=":memory:", pool_size=1)


@pytest.fixture
def settings() -> Settings:
    """Settings for an unqualified (schema-less) order table set."""
    return Settings(order_schema=None, default_page_size=10, in_list_chunk_size=1000)


@pytest.fixture
def order_table() -> ColumnMappingTable:
    return build_order_table(None)


@pytest.fixture
def connection_manager(sqlite_config: ConnectionConfig) -> Iterator[ConnectionManager]:
    manager = ConnectionManager(sqlite_config)
    with manager.get_connection() as conn:
        for ddl in ORDER_DDL:
            conn.execute(ddl)
        conn.commit()
    yield manager
    manager.close_pool()


@pytest.fixture
def engine(connection_manager: ConnectionManager) -> Engine:
    return Engine(connection_manager)


@pytest.fixture
def seed(connection_manager: ConnectionManager):
    """Helper to insert rows into the order tables.

    Usage:
        seed("WEB_ORDENES", {"ID": "1", "ORDEN": "ORD-001", ...})
    """

    def _seed(table: str, *rows: dict[str, Any]) -> None:
        with connection_manager.get_connection() as conn:
            for row in rows:
                _insert(conn, table, row)
            conn.commit()

    return _seed


def _order_row(number: int, **overrides: Any) -> dict[str, Any]:
    """A WEB_ORDENES row for order ``ORD-<number>``, registered on day *number*."""
    row = {
        "ID": str(number),
        "ORDEN": f"ORD-{number:03d}",
        "RNC": f"RNC{number:04d}",
        "NOMBRE": "Ana",
        "APELLIDOS": "Perez",
        "EMAIL": f"customer{number}@example.com",
        "ESTATUS": 1,
        "TOTAL": 100.0 + number,
        "ITBIS": 18.0,
        "FECHA_REGISTRO": f"2024-01-{number:02d}",
        "HORA_REGISTRO": "10:00:00",
        "TIENDA": "PL08" if number % 2 else "PL01",
        "PRINT": 0,
    }
    row.update(overrides)
    return row


@pytest.fixture
def order_row():
    """Factory for WEB_ORDENES rows; see ``_order_row``."""
    return _order_row
