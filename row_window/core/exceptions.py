"""RowWindow exception hierarchy.

Driver exceptions are wrapped at the engine boundary and chained with
``raise ... from``; everything above the engine propagates unchanged.
"""

from __future__ import annotations


class RowWindowError(Exception):
    """Base exception for all RowWindow errors."""


# --- Execution ---


class ExecutionError(RowWindowError):
    """Base for query execution and request errors."""


class QueryExecutionError(ExecutionError):
    """Raised when the store fails to execute a generated query."""

    def __init__(self, query_label: str, detail: str) -> None:
        self.query_label = query_label
        super().__init__(f"Query '{query_label}' failed: {detail}")


class RequestValidationError(ExecutionError):
    """Raised when a page request does not pass boundary validation."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Invalid page request: {'; '.join(errors)}")


class InvalidSortFieldError(ExecutionError):
    """Raised when a sort field is outside the allow-list."""

    def __init__(self, sort_field: object, allowed: list[str]) -> None:
        self.sort_field = sort_field
        self.allowed = allowed
        super().__init__(f"Unsupported sort field {sort_field!r}; expected one of {allowed}")


# --- Mapping ---


class MappingError(RowWindowError):
    """Base for mapping errors."""


class ColumnMappingError(MappingError):
    """Raised for a malformed or missing column mapping table entry."""


class ColumnMismatchError(MappingError):
    """Raised when a row stream lacks columns the aggregate plan maps."""

    def __init__(self, target_class: str, missing_columns: list[str]) -> None:
        self.target_class = target_class
        self.missing_columns = missing_columns
        super().__init__(f"Cannot map to {target_class}: missing columns {missing_columns}")


class StrictModeViolation(MappingError):
    """Raised in strict mode for mapping integrity violations."""


class PlanCompilationError(MappingError):
    """Raised when an AggregatePlan fails validation during build()."""


# --- Adapter ---


class AdapterError(RowWindowError):
    """Base for adapter errors."""


class ConnectionError(AdapterError):  # noqa: A001
    """Raised on connection failures."""


class PoolError(AdapterError):
    """Raised on connection pool failures."""
