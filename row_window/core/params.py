"""SQL parameter helpers.

Generated queries always use `:name` placeholders, which both sqlite3 and
oracledb bind natively. ``in_list`` expands a value list into individually
bound placeholders; ``like_contains`` builds an escaped LIKE pattern.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

LIKE_ESCAPE = "!"


def in_list(
    column: str,
    values: Sequence[Any],
    prefix: str,
    chunk_size: int = 1000,
) -> tuple[str, dict[str, Any]]:
    """Build a bound ``column IN (...)`` predicate over *values*.

    Lists longer than *chunk_size* are split into several IN groups joined
    with OR. The returned fragment is parenthesized.

    Raises:
        ValueError: If *values* is empty or *chunk_size* is not positive.
    """
    if not values:
        raise ValueError("in_list requires at least one value")
    if chunk_size < 1:
        raise ValueError("chunk_size must be positive")

    params: dict[str, Any] = {}
    groups: list[str] = []
    for start in range(0, len(values), chunk_size):
        names = []
        for index, value in enumerate(values[start : start + chunk_size], start=start):
            name = f"{prefix}_{index}"
            params[name] = value
            names.append(f":{name}")
        groups.append(f"{column} IN ({', '.join(names)})")

    return "(" + " OR ".join(groups) + ")", params


def like_contains(text: str) -> str:
    """Return a ``%text%`` pattern with LIKE wildcards escaped.

    Case is left alone; the SQL folds both sides with the same ``UPPER()``.
    Pair with ``ESCAPE '!'`` in the SQL text.
    """
    escaped = (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
