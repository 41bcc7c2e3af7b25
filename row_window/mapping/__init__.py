"""Mapping layer - fold row dicts into aggregate objects."""

from __future__ import annotations

from row_window.mapping.aggregate import AggregateMapper
from row_window.mapping.builder import AggregateMappingBuilder, aggregate
from row_window.mapping.columns import ColumnMapping, ColumnMappingTable, Slot, TableSource
from row_window.mapping.plan import AggregatePlan, CollectionPlan, EntityPlan

__all__ = [
    "AggregateMapper",
    "AggregateMappingBuilder",
    "aggregate",
    "AggregatePlan",
    "EntityPlan",
    "CollectionPlan",
    "ColumnMapping",
    "ColumnMappingTable",
    "Slot",
    "TableSource",
]
