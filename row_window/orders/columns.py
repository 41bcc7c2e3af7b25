"""Column mapping table and query fields for the order schema."""

from __future__ import annotations

from functools import lru_cache

from row_window.core.enums import SortField
from row_window.mapping.columns import ColumnMapping, ColumnMappingTable, Slot, TableSource
from row_window.paging.predicates import QueryFields

ORDER_TABLE = "WEB_ORDENES"
LINE_ITEM_TABLE = "WEB_ARTICULOS"
INVOICE_TABLE = "WEB_FACTURAS"
TRANSACTION_TABLE = "WEB_TRANSACIONES"

# Child tables reference the order by its business key, not by ID
JOIN_COLUMN = "ORDEN"

# (source column, field name) per slot, in select-list order
_ORDER_COLUMNS = (
    ("ID", "id"),
    ("ORDEN", "order_number"),
    ("RNC", "tax_id"),
    ("NOMBRE", "first_name"),
    ("APELLIDOS", "last_name"),
    ("DIRECCION", "address"),
    ("CIUDAD", "city"),
    ("COMENTARIO", "comment"),
    ("TELEFONO", "phone"),
    ("EMAIL", "email"),
    ("PAIS", "country"),
    ("ESTATUS", "status"),
    ("TOTAL", "total"),
    ("ITBIS", "tax"),
    ("FECHA_REGISTRO", "registered_date"),
    ("HORA_REGISTRO", "registered_time"),
    ("TARJETA", "card"),
    ("PTLOG", "ptlog"),
    ("CLUB", "club"),
    ("WEB", "web"),
    ("TIENDA", "store"),
    ("NCF", "ncf"),
    ("TIPO_NCF", "ncf_type"),
    ("ESTATUS_DELIV", "delivery_status"),
    ("RNC_NAME", "tax_id_name"),
    ("OTRO_NOMBRE", "alternate_name"),
    ("OTRO_NOMBRE_DOC", "alternate_name_document"),
    ("ORDEN_REFERENCIA", "reference_order"),
    ("ORDEN_DESDE", "order_source"),
    ("TOTAL_DESCUENTO", "total_discount"),
    ("PRINT", "printed"),
)

_LINE_ITEM_COLUMNS = (
    ("ID", "id"),
    ("ORDEN", "order_number"),
    ("FACTURA", "invoice"),
    ("CANT", "quantity"),
    ("EAN", "ean"),
    ("DESCRIPCION", "description"),
    ("PRECIO", "price"),
    ("TOTAL", "total"),
    ("ESTATUS", "status"),
    ("FECHA", "date"),
    ("WEB", "web"),
    ("UNMANEJO", "handling_unit"),
    ("TOTAL_DISCOUNT", "total_discount"),
)

_INVOICE_COLUMNS = (
    ("ID", "id"),
    ("ORDEN", "order_number"),
    ("FACTURAS", "invoice_number"),
    ("DEPTO", "department"),
    ("ESTATUS", "status"),
    ("WEB", "web"),
    ("TIENDA", "store"),
    ("DELIVERY", "delivery"),
    ("ITBIS", "tax"),
    ("NCF", "ncf"),
    ("TIPO_NCF", "ncf_type"),
    ("TOTAL", "total"),
)

_TRANSACTION_COLUMNS = (
    ("ID", "id"),
    ("ORDEN", "order_number"),
    ("TOTAL", "total"),
    ("TARJETA", "card"),
    ("APROBACION", "approval_code"),
    ("REFERENCIA", "reference"),
    ("ESTATUS", "status"),
    ("MENSAJE", "message"),
    ("FECHA_APROBACION", "approval_date"),
    ("HORA_APROBACION", "approval_time"),
    ("WEB", "web"),
    ("TRANS_ID", "trans_id"),
    ("TOTAL_AUT", "authorized_total"),
    ("KIND", "kind"),
    ("TIPO_PAGO", "payment_type"),
    ("GATEWAY", "gateway"),
)

ORDER_QUERY_FIELDS = QueryFields(
    store_field="store",
    search_fields=("order_number", "tax_id", "email"),
    sort_fields={
        SortField.REGISTERED_AT: ("registered_date", "registered_time"),
        SortField.ORDER_NUMBER: ("order_number",),
        SortField.STORE: ("store",),
    },
)


def _qualify(schema: str | None, table: str) -> str:
    return f"{schema}.{table}" if schema else table


@lru_cache
def build_order_table(schema: str | None = None) -> ColumnMappingTable:
    """Return the mapping table for the order tables in *schema*.

    Built and validated once per schema; the result is shared read-only.
    """
    sources = (
        TableSource(Slot.ORDER, _qualify(schema, ORDER_TABLE), "o", JOIN_COLUMN),
        TableSource(Slot.LINE_ITEMS, _qualify(schema, LINE_ITEM_TABLE), "li", JOIN_COLUMN),
        TableSource(Slot.INVOICES, _qualify(schema, INVOICE_TABLE), "inv", JOIN_COLUMN),
        TableSource(Slot.TRANSACTIONS, _qualify(schema, TRANSACTION_TABLE), "tx", JOIN_COLUMN),
    )
    columns: list[ColumnMapping] = []
    for slot, pairs in (
        (Slot.ORDER, _ORDER_COLUMNS),
        (Slot.LINE_ITEMS, _LINE_ITEM_COLUMNS),
        (Slot.INVOICES, _INVOICE_COLUMNS),
        (Slot.TRANSACTIONS, _TRANSACTION_COLUMNS),
    ):
        columns.extend(ColumnMapping(source, slot, name) for source, name in pairs)
    return ColumnMappingTable(sources=sources, columns=tuple(columns))
