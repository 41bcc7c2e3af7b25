"""Unit tests for AggregateMapper."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from row_window.core.exceptions import ColumnMismatchError, StrictModeViolation
from row_window.mapping.aggregate import AggregateMapper
from row_window.mapping.builder import aggregate
from row_window.mapping.columns import ColumnMapping, ColumnMappingTable, Slot, TableSource


@dataclass
class Item:
    ean: str | None
    qty: int | None


@dataclass
class Bill:
    number: str | None
    total: float | None


@dataclass
class Payment:
    approval: str | None
    amount: float | None


@dataclass
class Order:
    number: str
    store: str
    items: list = field(default_factory=list)
    bills: list = field(default_factory=list)
    payments: list = field(default_factory=list)


TABLE = ColumnMappingTable(
    sources=(
        TableSource(Slot.ORDER, "ORDERS", "o", "NUMBER"),
        TableSource(Slot.LINE_ITEMS, "ITEMS", "li", "ORDER_NUMBER"),
        TableSource(Slot.INVOICES, "BILLS", "inv", "ORDER_NUMBER"),
        TableSource(Slot.TRANSACTIONS, "PAYMENTS", "tx", "ORDER_NUMBER"),
    ),
    columns=(
        ColumnMapping("NUMBER", Slot.ORDER, "number"),
        ColumnMapping("STORE", Slot.ORDER, "store"),
        ColumnMapping("EAN", Slot.LINE_ITEMS, "ean"),
        ColumnMapping("QTY", Slot.LINE_ITEMS, "qty"),
        ColumnMapping("NUMBER", Slot.INVOICES, "number"),
        ColumnMapping("TOTAL", Slot.INVOICES, "total"),
        ColumnMapping("APPROVAL", Slot.TRANSACTIONS, "approval"),
        ColumnMapping("AMOUNT", Slot.TRANSACTIONS, "amount"),
    ),
)


def _builder():
    return (
        aggregate(Order, TABLE)
        .key("number")
        .collection("items", Item, Slot.LINE_ITEMS, key="ean")
        .collection("bills", Bill, Slot.INVOICES, key="number")
        .collection("payments", Payment, Slot.TRANSACTIONS, key="approval")
    )


@pytest.fixture
def mapper() -> AggregateMapper[Order]:
    return AggregateMapper(_builder().build())


def parent(number: str, store: str = "PL08") -> dict[str, Any]:
    return {"order__number": number, "order__store": store, "row_num": 1}


def joined(
    number: str,
    item: tuple[Any, Any] = (None, None),
    bill: tuple[Any, Any] = (None, None),
    payment: tuple[Any, Any] = (None, None),
    store: str = "PL08",
) -> dict[str, Any]:
    return {
        "order__number": number,
        "order__store": store,
        "line_item__ean": item[0],
        "line_item__qty": item[1],
        "invoice__number": bill[0],
        "invoice__total": bill[1],
        "transaction__approval": payment[0],
        "transaction__amount": payment[1],
    }


def fan_out(number: str) -> list[dict[str, Any]]:
    """3 items x 2 payments x 1 bill: six cartesian rows."""
    return [
        joined(number, item=(ean, 1), bill=("F-1", 50.0), payment=(approval, 25.0))
        for ean in ("E1", "E2", "E3")
        for approval in ("A1", "A2")
    ]


class TestTwoPhaseAggregate:
    def test_fan_out_is_deduplicated(self, mapper: AggregateMapper[Order]) -> None:
        rows = fan_out("ORD-1")
        assert len(rows) == 6

        (order,) = mapper.aggregate([parent("ORD-1")], rows)

        assert [i.ean for i in order.items] == ["E1", "E2", "E3"]
        assert [b.number for b in order.bills] == ["F-1"]
        assert [p.approval for p in order.payments] == ["A1", "A2"]

    def test_parent_order_follows_parent_rows(self, mapper: AggregateMapper[Order]) -> None:
        related = [joined("ORD-1", item=("E1", 1)), joined("ORD-2", item=("E2", 2))]
        result = mapper.aggregate([parent("ORD-2"), parent("ORD-1")], related)
        assert [o.number for o in result] == ["ORD-2", "ORD-1"]
        assert result[0].items == [Item(ean="E2", qty=2)]

    def test_rows_of_other_pages_never_leak(self, mapper: AggregateMapper[Order]) -> None:
        related = [joined("ORD-1", item=("E1", 1)), joined("ORD-9", item=("E9", 9))]
        result = mapper.aggregate([parent("ORD-1")], related)
        assert len(result) == 1
        assert [i.ean for i in result[0].items] == ["E1"]

    def test_childless_parent_has_empty_collections(
        self, mapper: AggregateMapper[Order]
    ) -> None:
        (order,) = mapper.aggregate([parent("ORD-1")], [joined("ORD-1")])
        assert order.items == []
        assert order.bills == []
        assert order.payments == []

    def test_parent_without_related_rows_kept(self, mapper: AggregateMapper[Order]) -> None:
        result = mapper.aggregate([parent("ORD-1"), parent("ORD-2")], [])
        assert [o.number for o in result] == ["ORD-1", "ORD-2"]
        assert all(o.items == [] and o.bills == [] and o.payments == [] for o in result)

    def test_duplicate_parent_rows_seed_once(self, mapper: AggregateMapper[Order]) -> None:
        result = mapper.aggregate([parent("ORD-1"), parent("ORD-1")], [])
        assert len(result) == 1

    def test_parent_fields_come_from_parent_rows(self, mapper: AggregateMapper[Order]) -> None:
        related = [joined("ORD-1", store="OTHER", item=("E1", 1))]
        (order,) = mapper.aggregate([parent("ORD-1", store="PL08")], related)
        assert order.store == "PL08"

    def test_empty_parent_rows(self, mapper: AggregateMapper[Order]) -> None:
        assert mapper.aggregate([], [joined("ORD-1", item=("E1", 1))]) == []

    def test_missing_parent_column_is_fatal(self, mapper: AggregateMapper[Order]) -> None:
        with pytest.raises(ColumnMismatchError, match="order__store"):
            mapper.aggregate([{"order__number": "ORD-1"}], [])

    def test_missing_related_column_is_fatal(self, mapper: AggregateMapper[Order]) -> None:
        row = joined("ORD-1", item=("E1", 1))
        del row["transaction__amount"]
        with pytest.raises(ColumnMismatchError, match="transaction__amount") as exc_info:
            mapper.aggregate([parent("ORD-1")], [row])
        assert exc_info.value.missing_columns == ["transaction__amount"]


class TestOnePassAggregate:
    def test_fan_out_is_deduplicated(self, mapper: AggregateMapper[Order]) -> None:
        (order,) = mapper.aggregate_direct(fan_out("ORD-1"))
        assert len(order.items) == 3
        assert len(order.bills) == 1
        assert len(order.payments) == 2

    def test_parents_seeded_in_first_seen_order(self, mapper: AggregateMapper[Order]) -> None:
        rows = [
            joined("ORD-2", item=("E1", 1)),
            joined("ORD-1", item=("E1", 1)),
            joined("ORD-2", item=("E2", 1)),
        ]
        result = mapper.aggregate_direct(rows)
        assert [o.number for o in result] == ["ORD-2", "ORD-1"]
        assert [i.ean for i in result[0].items] == ["E1", "E2"]
        assert [i.ean for i in result[1].items] == ["E1"]

    def test_same_natural_key_in_different_parents(
        self, mapper: AggregateMapper[Order]
    ) -> None:
        rows = [joined("ORD-1", payment=("A1", 1.0)), joined("ORD-2", payment=("A1", 2.0))]
        result = mapper.aggregate_direct(rows)
        assert [len(o.payments) for o in result] == [1, 1]

    def test_first_row_wins_for_duplicate_key(self, mapper: AggregateMapper[Order]) -> None:
        rows = [joined("ORD-1", item=("E1", 1)), joined("ORD-1", item=("E1", 5))]
        (order,) = mapper.aggregate_direct(rows)
        assert order.items == [Item(ean="E1", qty=1)]

    def test_null_root_key_skipped(self, mapper: AggregateMapper[Order]) -> None:
        rows = [joined(None, item=("E1", 1)), joined("ORD-1")]  # type: ignore[arg-type]
        result = mapper.aggregate_direct(rows)
        assert [o.number for o in result] == ["ORD-1"]

    def test_map_many_is_one_pass_form(self, mapper: AggregateMapper[Order]) -> None:
        assert mapper.map_many(fan_out("ORD-1")) == mapper.aggregate_direct(fan_out("ORD-1"))

    def test_empty_rows(self, mapper: AggregateMapper[Order]) -> None:
        assert mapper.aggregate_direct([]) == []

    def test_missing_child_column_is_fatal(self, mapper: AggregateMapper[Order]) -> None:
        row = joined("ORD-1")
        del row["invoice__total"]
        with pytest.raises(ColumnMismatchError):
            mapper.aggregate_direct([row])


class TestDiscriminator:
    def test_discriminator_distinct_from_key(self) -> None:
        plan = (
            aggregate(Order, TABLE)
            .key("number")
            .collection("items", Item, Slot.LINE_ITEMS, key="ean")
            .collection("bills", Bill, Slot.INVOICES, key="number")
            .collection(
                "payments", Payment, Slot.TRANSACTIONS, key="approval", discriminator="amount"
            )
            .build()
        )
        mapper: AggregateMapper[Order] = AggregateMapper(plan)
        rows = [joined("ORD-1", payment=("A1", None)), joined("ORD-1", payment=("A2", 10.0))]
        (order,) = mapper.aggregate_direct(rows)
        assert [p.approval for p in order.payments] == ["A2"]


class TestStrictMode:
    def test_unknown_prefix_rejected(self) -> None:
        mapper: AggregateMapper[Order] = AggregateMapper(_builder().strict().build())
        row = joined("ORD-1")
        row["customer__name"] = "Ana"
        with pytest.raises(StrictModeViolation, match="customer__"):
            mapper.aggregate_direct([row])

    def test_unprefixed_columns_allowed(self) -> None:
        mapper: AggregateMapper[Order] = AggregateMapper(_builder().strict().build())
        result = mapper.aggregate([parent("ORD-1")], [joined("ORD-1")])
        assert len(result) == 1

    def test_lenient_mode_ignores_unknown_prefix(self, mapper: AggregateMapper[Order]) -> None:
        row = joined("ORD-1")
        row["customer__name"] = "Ana"
        assert len(mapper.aggregate_direct([row])) == 1
