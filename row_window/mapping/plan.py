"""Aggregate mapping plan data classes.

Frozen dataclasses representing compiled, validated mapping plans.
Used by AggregateMapper at execution time.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from row_window.mapping.columns import Slot


@dataclass(frozen=True)
class EntityPlan:
    """Mapping plan for a single entity (root or collection member)."""

    target_class: type
    slot: Slot
    key_fields: tuple[str, ...]
    discriminator: str
    field_map: dict[str, str]  # attribute_name -> row column alias

    @property
    def prefix(self) -> str:
        return self.slot.prefix

    @property
    def key_columns(self) -> tuple[str, ...]:
        return tuple(self.field_map[name] for name in self.key_fields)

    @property
    def discriminator_column(self) -> str:
        return self.field_map[self.discriminator]


@dataclass(frozen=True)
class CollectionPlan:
    """Mapping plan for a child collection (one-to-many relationship)."""

    attribute_name: str
    entity_plan: EntityPlan


@dataclass(frozen=True)
class AggregatePlan:
    """Compiled, validated aggregate mapping plan."""

    root_plan: EntityPlan
    collection_plans: list[CollectionPlan] = field(default_factory=list)
    strict: bool = False

    @property
    def root_key_column(self) -> str:
        return self.root_plan.key_columns[0]

    @property
    def known_prefixes(self) -> set[str]:
        return {self.root_plan.prefix} | {c.entity_plan.prefix for c in self.collection_plans}
