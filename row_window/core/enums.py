"""Backend and sort enumerations."""

from __future__ import annotations

from enum import Enum


class DatabaseBackend(Enum):
    """Supported database backends."""

    SQLITE = "sqlite"
    ORACLE = "oracle"


class SortField(Enum):
    """Parent fields a page may be sorted by."""

    REGISTERED_AT = "REGISTERED_AT"
    ORDER_NUMBER = "ORDER_NUMBER"
    STORE = "STORE"


class SortOrder(Enum):
    """Sort direction."""

    ASC = "ASC"
    DESC = "DESC"
