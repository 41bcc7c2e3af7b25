"""Repository base class.

A repository owns the engine its queries run on and the aggregate mapper
that folds their flat join rows. Subclasses add the paged and single-key
lookups for one aggregate root.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from row_window.core.engine import Engine
from row_window.mapping.aggregate import AggregateMapper
from row_window.mapping.plan import AggregatePlan

T = TypeVar("T")


class Repository(Generic[T]):
    """Base class for read-only aggregate repositories.

    Subclasses build their queries from a column mapping table, run them on
    ``self.engine`` and fold the rows with ``self.mapper``.
    """

    def __init__(
        self,
        engine: Engine,
        mapping: AggregatePlan | None = None,
        mapper: AggregateMapper[T] | None = None,
    ) -> None:
        self.engine = engine
        # Accept either a plan (to build AggregateMapper) or a mapper directly
        if mapper is not None:
            self.mapper: AggregateMapper[T] = mapper
        elif mapping is not None:
            self.mapper = AggregateMapper(mapping)
        else:
            raise ValueError("Repository needs an aggregate plan or a mapper")
