"""Declarative column mapping table.

Each ``ColumnMapping`` says where one logical field comes from (a source
column) and where it lands in the aggregate (a ``Slot``). Generated SQL
aliases every column as ``<slot prefix><field name>``, so rows coming
back from the store can be folded without parsing alias strings.

Tables are validated on construction and are immutable afterwards.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from row_window.core.exceptions import ColumnMappingError

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_$#]*$")
_QUALIFIED = re.compile(r"^[A-Za-z_][A-Za-z0-9_$#]*(\.[A-Za-z_][A-Za-z0-9_$#]*)?$")
_FIELD = re.compile(r"^[a-z_][a-z0-9_]*$")


class Slot(Enum):
    """Target slot of a mapped column: the root or one child collection."""

    ORDER = "order"
    LINE_ITEMS = "line_item"
    INVOICES = "invoice"
    TRANSACTIONS = "transaction"

    @property
    def prefix(self) -> str:
        return f"{self.value}__"


@dataclass(frozen=True)
class TableSource:
    """Table that feeds a slot.

    ``join_column`` is the column carrying the parent business key: the key
    itself on the root table, the foreign key on child tables.
    """

    slot: Slot
    table: str
    alias: str
    join_column: str


@dataclass(frozen=True)
class ColumnMapping:
    """One source column mapped to one aggregate field."""

    source_column: str
    slot: Slot
    field_name: str

    @property
    def alias(self) -> str:
        return self.slot.prefix + self.field_name


@dataclass(frozen=True)
class ColumnMappingTable:
    """Immutable, validated set of table sources and column mappings."""

    sources: tuple[TableSource, ...]
    columns: tuple[ColumnMapping, ...]

    def __post_init__(self) -> None:
        sources: dict[Slot, TableSource] = {}
        aliases: set[str] = set()
        for source in self.sources:
            if source.slot in sources:
                raise ColumnMappingError(f"Slot {source.slot.name} has more than one table source")
            if not _QUALIFIED.match(source.table):
                raise ColumnMappingError(f"Malformed table name {source.table!r}")
            if not _IDENTIFIER.match(source.alias) or not _IDENTIFIER.match(source.join_column):
                raise ColumnMappingError(f"Malformed alias or join column for {source.table!r}")
            if source.alias in aliases:
                raise ColumnMappingError(f"Table alias {source.alias!r} is used twice")
            aliases.add(source.alias)
            sources[source.slot] = source

        if Slot.ORDER not in sources:
            raise ColumnMappingError("Mapping table has no ORDER table source")

        by_field: dict[tuple[Slot, str], ColumnMapping] = {}
        for column in self.columns:
            if column.slot not in sources:
                raise ColumnMappingError(
                    f"Column {column.source_column!r} targets slot {column.slot.name} "
                    "which has no table source"
                )
            if not _IDENTIFIER.match(column.source_column):
                raise ColumnMappingError(f"Malformed source column {column.source_column!r}")
            if not _FIELD.match(column.field_name):
                raise ColumnMappingError(f"Malformed field name {column.field_name!r}")
            key = (column.slot, column.field_name)
            if key in by_field:
                raise ColumnMappingError(
                    f"Field '{column.field_name}' is mapped twice in slot {column.slot.name}"
                )
            by_field[key] = column

        # Frozen dataclass: lookup indexes are attached once, here
        object.__setattr__(self, "_sources", sources)
        object.__setattr__(self, "_by_field", by_field)

    def source(self, slot: Slot) -> TableSource:
        try:
            return self._sources[slot]  # type: ignore[attr-defined, no-any-return]
        except KeyError:
            raise ColumnMappingError(f"No table source for slot {slot.name}") from None

    def has_source(self, slot: Slot) -> bool:
        return slot in self._sources  # type: ignore[attr-defined]

    def column(self, slot: Slot, field_name: str) -> ColumnMapping:
        """Look up the mapping for *field_name* in *slot*.

        Raises:
            ColumnMappingError: If the field is not mapped.
        """
        try:
            return self._by_field[(slot, field_name)]  # type: ignore[attr-defined, no-any-return]
        except KeyError:
            raise ColumnMappingError(
                f"No column mapping for field '{field_name}' in slot {slot.name}"
            ) from None

    def has_column(self, slot: Slot, field_name: str) -> bool:
        return (slot, field_name) in self._by_field  # type: ignore[attr-defined]

    def columns_for(self, slot: Slot) -> tuple[ColumnMapping, ...]:
        return tuple(c for c in self.columns if c.slot is slot)

    def qualified(self, slot: Slot, field_name: str) -> str:
        """Return ``alias.COLUMN`` for a mapped field."""
        return f"{self.source(slot).alias}.{self.column(slot, field_name).source_column}"

    def select_item(self, mapping: ColumnMapping) -> str:
        return f"{self.source(mapping.slot).alias}.{mapping.source_column} AS {mapping.alias}"

    def select_list(self, *slots: Slot) -> list[str]:
        """Render ``alias.COLUMN AS prefix__field`` items for the given slots, in table order."""
        return [self.select_item(c) for c in self.columns if c.slot in slots]

    def from_clause(self, slot: Slot) -> str:
        source = self.source(slot)
        return f"{source.table} {source.alias}"
