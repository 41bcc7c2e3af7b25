"""Aggregate mapping DSL builder.

Provides a fluent builder that binds aggregate classes to a
ColumnMappingTable and compiles them into an AggregatePlan. Every field
the classes declare must be backed by a column mapping; gaps are
reported by ``build()`` rather than discovered while folding rows.
"""

from __future__ import annotations

import dataclasses
import inspect

from row_window.core.exceptions import PlanCompilationError
from row_window.mapping.columns import ColumnMappingTable, Slot
from row_window.mapping.plan import AggregatePlan, CollectionPlan, EntityPlan


def _get_field_names(cls: type) -> list[str]:
    """Extract field names from a class (dataclass, Pydantic, or plain)."""
    # Pydantic model
    if hasattr(cls, "model_fields"):
        return list(cls.model_fields.keys())

    # Dataclass
    if dataclasses.is_dataclass(cls):
        return [f.name for f in dataclasses.fields(cls)]

    # Plain class - use __init__ parameters
    try:
        sig = inspect.signature(cls.__init__)  # type: ignore[misc]
        return [name for name in sig.parameters if name != "self"]
    except (ValueError, TypeError):
        return []


def aggregate(
    root_class: type,
    table: ColumnMappingTable,
    slot: Slot = Slot.ORDER,
) -> AggregateMappingBuilder:
    """Entry point for the aggregate mapping DSL.

    Args:
        root_class: The aggregate root class.
        table: Column mapping table the plan reads aliases from.
        slot: Slot holding the root's columns.

    Returns:
        A builder for chaining mapping declarations.
    """
    return AggregateMappingBuilder(root_class, table, slot)


class AggregateMappingBuilder:
    """Fluent builder for aggregate mapping definitions."""

    def __init__(self, root_class: type, table: ColumnMappingTable, slot: Slot) -> None:
        self._root_class = root_class
        self._table = table
        self._slot = slot
        self._key_field: str | None = None
        # name, cls, slot, key fields, discriminator
        self._collections: list[tuple[str, type, Slot, tuple[str, ...], str | None]] = []
        self._strict_mode = False

    def key(self, field_name: str) -> AggregateMappingBuilder:
        """Set the parent business key of the root entity."""
        self._key_field = field_name
        return self

    def collection(
        self,
        name: str,
        entity_class: type,
        slot: Slot,
        key: str | tuple[str, ...],
        discriminator: str | None = None,
    ) -> AggregateMappingBuilder:
        """Declare a child collection (one-to-many).

        Args:
            name: Attribute on the root class holding the list.
            entity_class: Child class built from each distinct row.
            slot: Slot holding the child's columns.
            key: Natural key field(s); children are deduplicated on it.
            discriminator: Field whose non-null value marks a real child row.
                Defaults to the first key field.
        """
        key_fields = (key,) if isinstance(key, str) else tuple(key)
        self._collections.append((name, entity_class, slot, key_fields, discriminator))
        return self

    def strict(self, enabled: bool = True) -> AggregateMappingBuilder:
        """Reject rows carrying column prefix groups the plan does not know."""
        self._strict_mode = enabled
        return self

    def build(self) -> AggregatePlan:
        """Compile and validate the mapping into an AggregatePlan."""
        if self._key_field is None:
            raise PlanCompilationError("Root entity must have a key field set via .key()")

        root_fields = _get_field_names(self._root_class)
        collection_names = {name for name, *_ in self._collections}
        for name in collection_names:
            if name not in root_fields:
                raise PlanCompilationError(
                    f"{self._root_class.__name__} has no attribute '{name}' for a collection"
                )

        scalar_fields = [n for n in root_fields if n not in collection_names]
        if self._key_field not in scalar_fields:
            raise PlanCompilationError(
                f"Key field '{self._key_field}' is not a field of {self._root_class.__name__}"
            )

        root_plan = self._entity_plan(
            self._root_class, self._slot, scalar_fields, (self._key_field,), None
        )

        used_slots = [self._slot]
        collection_plans = []
        for name, cls, slot, key_fields, discriminator in self._collections:
            if slot in used_slots:
                raise PlanCompilationError(
                    f"Duplicate slot {slot.name}: each entity must have its own slot"
                )
            used_slots.append(slot)
            entity_plan = self._entity_plan(
                cls, slot, _get_field_names(cls), key_fields, discriminator
            )
            collection_plans.append(CollectionPlan(attribute_name=name, entity_plan=entity_plan))

        return AggregatePlan(
            root_plan=root_plan,
            collection_plans=collection_plans,
            strict=self._strict_mode,
        )

    def _entity_plan(
        self,
        cls: type,
        slot: Slot,
        field_names: list[str],
        key_fields: tuple[str, ...],
        discriminator: str | None,
    ) -> EntityPlan:
        if not self._table.has_source(slot):
            raise PlanCompilationError(f"Slot {slot.name} has no table source")
        if not key_fields:
            raise PlanCompilationError(f"{cls.__name__} needs at least one key field")

        unmapped = [n for n in field_names if not self._table.has_column(slot, n)]
        if unmapped:
            raise PlanCompilationError(
                f"No column mapping for {cls.__name__} field(s) {unmapped} in slot {slot.name}"
            )

        discriminator = discriminator or key_fields[0]
        for name in (*key_fields, discriminator):
            if name not in field_names:
                raise PlanCompilationError(
                    f"Key or discriminator '{name}' is not a field of {cls.__name__}"
                )

        return EntityPlan(
            target_class=cls,
            slot=slot,
            key_fields=key_fields,
            discriminator=discriminator,
            field_map={n: self._table.column(slot, n).alias for n in field_names},
        )
