"""Unit tests for AggregateMappingBuilder."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from row_window.core.exceptions import PlanCompilationError
from row_window.mapping.builder import aggregate
from row_window.mapping.columns import ColumnMapping, ColumnMappingTable, Slot, TableSource
from row_window.orders.columns import build_order_table
from row_window.orders.repository import build_order_plan


@dataclass
class Item:
    code: str
    qty: int


@dataclass
class Basket:
    number: str
    items: list = field(default_factory=list)


@pytest.fixture
def table() -> ColumnMappingTable:
    return ColumnMappingTable(
        sources=(
            TableSource(Slot.ORDER, "BASKETS", "b", "NUMBER"),
            TableSource(Slot.LINE_ITEMS, "ITEMS", "i", "BASKET"),
        ),
        columns=(
            ColumnMapping("NUMBER", Slot.ORDER, "number"),
            ColumnMapping("CODE", Slot.LINE_ITEMS, "code"),
            ColumnMapping("QTY", Slot.LINE_ITEMS, "qty"),
        ),
    )


class TestAggregateBuilder:
    def test_build_plan(self, table: ColumnMappingTable) -> None:
        plan = (
            aggregate(Basket, table)
            .key("number")
            .collection("items", Item, Slot.LINE_ITEMS, key="code")
            .build()
        )
        assert plan.root_plan.field_map == {"number": "order__number"}
        assert plan.root_key_column == "order__number"
        assert len(plan.collection_plans) == 1

        items = plan.collection_plans[0]
        assert items.attribute_name == "items"
        assert items.entity_plan.field_map == {"code": "line_item__code", "qty": "line_item__qty"}
        assert items.entity_plan.discriminator_column == "line_item__code"
        assert plan.known_prefixes == {"order__", "line_item__"}
        assert plan.strict is False

    def test_composite_key_and_discriminator(self, table: ColumnMappingTable) -> None:
        plan = (
            aggregate(Basket, table)
            .key("number")
            .collection("items", Item, Slot.LINE_ITEMS, key=("code", "qty"), discriminator="qty")
            .strict()
            .build()
        )
        entity_plan = plan.collection_plans[0].entity_plan
        assert entity_plan.key_columns == ("line_item__code", "line_item__qty")
        assert entity_plan.discriminator_column == "line_item__qty"
        assert plan.strict is True

    def test_missing_key_raises(self, table: ColumnMappingTable) -> None:
        with pytest.raises(PlanCompilationError, match="key field"):
            aggregate(Basket, table).build()

    def test_unknown_key_field_raises(self, table: ColumnMappingTable) -> None:
        with pytest.raises(PlanCompilationError, match="not a field"):
            aggregate(Basket, table).key("id").build()

    def test_unknown_collection_attribute_raises(self, table: ColumnMappingTable) -> None:
        with pytest.raises(PlanCompilationError, match="no attribute 'lines'"):
            aggregate(Basket, table).key("number").collection(
                "lines", Item, Slot.LINE_ITEMS, key="code"
            ).build()

    def test_unmapped_field_raises(self, table: ColumnMappingTable) -> None:
        @dataclass
        class PricedItem:
            code: str
            qty: int
            price: float

        with pytest.raises(PlanCompilationError, match=r"\['price'\]"):
            aggregate(Basket, table).key("number").collection(
                "items", PricedItem, Slot.LINE_ITEMS, key="code"
            ).build()

    def test_slot_without_source_raises(self, table: ColumnMappingTable) -> None:
        with pytest.raises(PlanCompilationError, match="no table source"):
            aggregate(Basket, table).key("number").collection(
                "items", Item, Slot.INVOICES, key="code"
            ).build()

    def test_duplicate_slot_raises(self, table: ColumnMappingTable) -> None:
        with pytest.raises(PlanCompilationError, match="Duplicate slot"):
            aggregate(Basket, table).key("number").collection(
                "items", Item, Slot.ORDER, key="code"
            ).build()

    def test_unknown_discriminator_raises(self, table: ColumnMappingTable) -> None:
        with pytest.raises(PlanCompilationError, match="'sku'"):
            aggregate(Basket, table).key("number").collection(
                "items", Item, Slot.LINE_ITEMS, key="code", discriminator="sku"
            ).build()


class TestOrderPlan:
    def test_order_plan_compiles(self) -> None:
        plan = build_order_plan(build_order_table(None))
        assert plan.root_key_column == "order__order_number"
        names = [c.attribute_name for c in plan.collection_plans]
        assert names == ["line_items", "invoices", "transactions"]
        keys = [c.entity_plan.key_columns for c in plan.collection_plans]
        assert keys == [
            ("line_item__ean",),
            ("invoice__invoice_number",),
            ("transaction__approval_code",),
        ]
