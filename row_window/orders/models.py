"""Order aggregate and its child entities.

Plain dataclasses; the aggregate mapper builds them with keyword arguments
named after the fields of the order column mapping table. Values arrive as
the driver returns them: DECIMAL columns come back as ``Decimal`` from
Oracle and ``float`` from SQLite, DATE columns as ``date``/``datetime`` or
ISO strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

Amount = Decimal | float
DateValue = date | str


@dataclass
class LineItem:
    """One WEB_ARTICULOS row. Natural key: ``ean``."""

    id: str
    order_number: str | None
    invoice: str | None
    quantity: Amount | None
    ean: str | None
    description: str | None
    price: Amount | None
    total: Amount | None
    status: int | None
    date: DateValue | None
    web: str | None
    handling_unit: str | None
    total_discount: Amount | None


@dataclass
class Invoice:
    """One WEB_FACTURAS row. Natural key: ``invoice_number``."""

    id: str
    order_number: str | None
    invoice_number: str | None
    department: str | None
    status: str | None
    web: str | None
    store: str | None
    delivery: str | None
    tax: Amount | None
    ncf: str | None
    ncf_type: str | None
    total: Amount | None


@dataclass
class PaymentTransaction:
    """One WEB_TRANSACIONES row. Natural key: ``approval_code``."""

    id: str
    order_number: str | None
    total: Amount | None
    card: str | None
    approval_code: str | None
    reference: str | None
    status: int | None
    message: str | None
    approval_date: DateValue | None
    approval_time: str | None
    web: str | None
    trans_id: str | None
    authorized_total: Amount | None
    kind: str | None
    payment_type: int | None
    gateway: str | None


@dataclass
class OrderAggregate:
    """A WEB_ORDENES row with its line items, invoices and transactions.

    ``order_number`` is the business key the child tables join on.
    """

    id: str
    order_number: str
    tax_id: str | None
    first_name: str | None
    last_name: str | None
    address: str | None
    city: str | None
    comment: str | None
    phone: str | None
    email: str | None
    country: str | None
    status: int | None
    total: Amount | None
    tax: Amount | None
    registered_date: DateValue | None
    registered_time: str | None
    card: str | None
    ptlog: str | None
    club: str | None
    web: str | None
    store: str | None
    ncf: str | None
    ncf_type: str | None
    delivery_status: int | None
    tax_id_name: str | None
    alternate_name: str | None
    alternate_name_document: str | None
    reference_order: str | None
    order_source: str | None
    total_discount: Amount | None
    printed: int | None
    line_items: list[LineItem] = field(default_factory=list)
    invoices: list[Invoice] = field(default_factory=list)
    transactions: list[PaymentTransaction] = field(default_factory=list)
