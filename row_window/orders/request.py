"""Order page request model.

Validates the raw query shape at the boundary. Non-positive ``page`` and
``limit`` are accepted here and defaulted later by the planner; an
unknown sort field or sort order is rejected.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from row_window.core.enums import SortField, SortOrder
from row_window.core.exceptions import RequestValidationError
from row_window.paging.predicates import PageFilter, PageSort


class OrderPageRequest(BaseModel):
    """Filtered, sorted page request for orders."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    page: int | None = None
    limit: int | None = None
    search: str | None = Field(default=None, max_length=150)
    store: str | None = None
    sort_by: SortField = Field(default=SortField.REGISTERED_AT, alias="sortBy")
    sort_order: SortOrder = Field(default=SortOrder.DESC, alias="sortOrder")

    @field_validator("sort_by", "sort_order", mode="before")
    @classmethod
    def upper_case_enum(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @classmethod
    def parse(cls, raw: Mapping[str, Any]) -> OrderPageRequest:
        """Validate *raw* request data.

        Raises:
            RequestValidationError: If any field fails validation.
        """
        try:
            return cls.model_validate(dict(raw))
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            raise RequestValidationError(errors) from e

    @property
    def filter(self) -> PageFilter:
        return PageFilter(store=self.store, search=self.search)

    @property
    def sort(self) -> PageSort:
        return PageSort(field=self.sort_by, order=self.sort_order)
