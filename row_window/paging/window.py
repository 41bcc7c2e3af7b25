"""Windowed SELECT builders.

Both strategies wrap the filtered parent query in two bounded selections:
the middle layer numbers rows in sorted order and keeps those numbered
``<= :window_upper``; the outer layer keeps those numbered
``> :window_lower``. Neither relies on an OFFSET keyword.

Oracle numbers rows with ROWNUM over a pre-sorted inline view, SQLite with
ROW_NUMBER() OVER (ORDER BY ...).
"""

from __future__ import annotations

from typing import Any

from row_window.core.enums import DatabaseBackend
from row_window.paging.planner import PageWindow

ROW_NUMBER_COLUMN = "row_num"


def rownum_window(select_list: str, from_where: str, order_by: str) -> str:
    """Oracle: ROWNUM is assigned after the inline view is sorted."""
    return (
        f"SELECT bounded.* FROM ("
        f"SELECT sorted_rows.*, ROWNUM AS {ROW_NUMBER_COLUMN} FROM ("
        f"SELECT {select_list} FROM {from_where} ORDER BY {order_by}"
        f") sorted_rows WHERE ROWNUM <= :window_upper"
        f") bounded WHERE bounded.{ROW_NUMBER_COLUMN} > :window_lower"
        f" ORDER BY bounded.{ROW_NUMBER_COLUMN}"
    )


def row_number_window(select_list: str, from_where: str, order_by: str) -> str:
    """SQLite 3.25+: analytic ROW_NUMBER()."""
    return (
        f"SELECT bounded.* FROM ("
        f"SELECT numbered.* FROM ("
        f"SELECT {select_list}, ROW_NUMBER() OVER (ORDER BY {order_by}) AS {ROW_NUMBER_COLUMN}"
        f" FROM {from_where}"
        f") numbered WHERE numbered.{ROW_NUMBER_COLUMN} <= :window_upper"
        f") bounded WHERE bounded.{ROW_NUMBER_COLUMN} > :window_lower"
        f" ORDER BY bounded.{ROW_NUMBER_COLUMN}"
    )


_STRATEGIES = {
    DatabaseBackend.ORACLE: rownum_window,
    DatabaseBackend.SQLITE: row_number_window,
}


def windowed_select(
    backend: DatabaseBackend,
    select_list: str,
    from_where: str,
    order_by: str,
) -> str:
    """Render the windowed query for *backend*.

    Args:
        backend: Target dialect.
        select_list: Comma-separated ``alias.COLUMN AS alias`` items.
        from_where: ``table alias`` plus any WHERE clause.
        order_by: ORDER BY items without the keyword.
    """
    return _STRATEGIES[backend](select_list, from_where, order_by)


def window_params(window: PageWindow) -> dict[str, Any]:
    return {"window_lower": window.offset, "window_upper": window.upper}
