"""Aggregate reconstruction mapper.

Folds flat join rows (parent x child1 x child2 x child3) into nested
aggregates in a single O(n) pass over each row stream, using identity maps
for parents and natural-key sets for children.

Two entry points share the same folding:

* ``aggregate(parent_rows, related_rows)`` seeds parents from an already
  paged, sorted parent row set and attaches children from a separate
  related-row stream. Related rows for unseeded parents are skipped.
* ``aggregate_direct(rows)`` (also ``map_many``) seeds parents lazily from
  a single combined join stream.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from row_window.core.exceptions import ColumnMismatchError, StrictModeViolation
from row_window.mapping.plan import AggregatePlan, EntityPlan

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _extract_fields(row: dict[str, Any], field_map: dict[str, str]) -> dict[str, Any]:
    """Extract fields from a row using the plan's attribute -> alias map."""
    return {attr_name: row[column] for attr_name, column in field_map.items()}


def _natural_key(row: dict[str, Any], entity_plan: EntityPlan) -> Any:
    columns = entity_plan.key_columns
    if len(columns) == 1:
        return row[columns[0]]
    return tuple(row[c] for c in columns)


class _Fold:
    """Identity maps for one fold: parents by key, child keys per parent."""

    def __init__(self, plan: AggregatePlan) -> None:
        self.plan = plan
        self.roots: dict[Any, Any] = {}  # insertion order is result order
        self.child_keys: dict[Any, dict[str, set[Any]]] = {}

    def seed(self, root_key: Any, row: dict[str, Any]) -> None:
        if root_key in self.roots:
            return
        plan = self.plan
        root_fields = _extract_fields(row, plan.root_plan.field_map)
        for coll in plan.collection_plans:
            root_fields[coll.attribute_name] = []
        self.roots[root_key] = plan.root_plan.target_class(**root_fields)
        self.child_keys[root_key] = {coll.attribute_name: set() for coll in plan.collection_plans}

    def attach(self, root_key: Any, row: dict[str, Any]) -> None:
        root_instance = self.roots[root_key]
        seen = self.child_keys[root_key]
        for coll in self.plan.collection_plans:
            entity_plan = coll.entity_plan
            # NULL discriminator: outer-join filler, not a child row
            if row[entity_plan.discriminator_column] is None:
                continue

            child_key = _natural_key(row, entity_plan)
            if child_key in seen[coll.attribute_name]:
                continue

            child_instance = entity_plan.target_class(
                **_extract_fields(row, entity_plan.field_map)
            )
            getattr(root_instance, coll.attribute_name).append(child_instance)
            seen[coll.attribute_name].add(child_key)

    def results(self) -> list[Any]:
        return list(self.roots.values())


class AggregateMapper(Generic[T]):
    """Aggregate reconstruction mapper.

    Reconstructs aggregate object graphs from joined SQL result sets.
    Deduplicates children by natural key within each parent.
    """

    def __init__(self, plan: AggregatePlan) -> None:
        self._plan = plan

    @property
    def plan(self) -> AggregatePlan:
        return self._plan

    def map_many(self, rows: list[dict[str, Any]]) -> list[T]:
        """Fold a combined parent+children row stream (one-pass form)."""
        return self.aggregate_direct(rows)

    def aggregate_direct(self, rows: Iterable[dict[str, Any]]) -> list[T]:
        """Fold rows that carry both parent and child columns.

        Parents are created on first encounter, in the order their keys
        first appear.
        """
        rows = list(rows)
        if not rows:
            return []

        plan = self._plan
        self._validate(rows[0], self._all_columns(), "joined rows")

        fold = _Fold(plan)
        root_key_col = plan.root_key_column
        for row in rows:
            root_key = row[root_key_col]
            if root_key is None:
                continue
            fold.seed(root_key, row)
            fold.attach(root_key, row)

        results = fold.results()
        logger.debug("Folded %d joined row(s) into %d aggregate(s)", len(rows), len(results))
        return results

    def aggregate(
        self,
        parent_rows: Iterable[dict[str, Any]],
        related_rows: Iterable[dict[str, Any]],
    ) -> list[T]:
        """Fold separately fetched parent and related rows (two-phase form).

        One aggregate is seeded per distinct parent key in *parent_rows*,
        preserving their order. Related rows whose parent was not seeded
        are skipped.
        """
        parent_rows = list(parent_rows)
        related_rows = list(related_rows)
        if not parent_rows:
            return []

        plan = self._plan
        root_key_col = plan.root_key_column
        self._validate(parent_rows[0], list(plan.root_plan.field_map.values()), "parent rows")
        if related_rows:
            self._validate(related_rows[0], self._related_columns(), "related rows")

        fold = _Fold(plan)
        for row in parent_rows:
            root_key = row[root_key_col]
            if root_key is not None:
                fold.seed(root_key, row)

        skipped = 0
        for row in related_rows:
            root_key = row[root_key_col]
            if root_key not in fold.roots:
                skipped += 1
                continue
            fold.attach(root_key, row)

        results = fold.results()
        logger.debug(
            "Folded %d parent row(s) and %d related row(s) into %d aggregate(s); "
            "%d related row(s) had no seeded parent",
            len(parent_rows),
            len(related_rows),
            len(results),
            skipped,
        )
        return results

    def _all_columns(self) -> list[str]:
        plan = self._plan
        columns = list(plan.root_plan.field_map.values())
        for coll in plan.collection_plans:
            columns.extend(coll.entity_plan.field_map.values())
        return columns

    def _related_columns(self) -> list[str]:
        plan = self._plan
        columns = [plan.root_key_column]
        for coll in plan.collection_plans:
            columns.extend(coll.entity_plan.field_map.values())
        return columns

    def _validate(self, sample_row: dict[str, Any], required: list[str], stream: str) -> None:
        """Fail fast when a row stream lacks mapped columns."""
        plan = self._plan
        row_columns = set(sample_row.keys())
        missing = [c for c in required if c not in row_columns]
        if missing:
            raise ColumnMismatchError(
                f"{plan.root_plan.target_class.__name__} ({stream})", missing
            )

        if not plan.strict:
            return

        known_prefixes = plan.known_prefixes
        for col in row_columns:
            if "__" in col:
                prefix = col[: col.index("__") + 2]
                if prefix not in known_prefixes:
                    raise StrictModeViolation(
                        f"Unknown prefix group '{prefix}' in column '{col}'. "
                        f"Known prefixes: {sorted(known_prefixes)}"
                    )
