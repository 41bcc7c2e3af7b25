"""
Example 02: Single Order Lookup

This example loads one order with a single combined join query. The
join multiplies rows (3 line items x 2 transactions x 1 invoice = 6 rows);
the one-pass fold collapses them back into distinct children.
"""

from row_window import ConnectionConfig, ConnectionManager, Engine, OrderRepository, Settings

SCHEMA = """
CREATE TABLE WEB_ORDENES (
    ID TEXT PRIMARY KEY, ORDEN TEXT, RNC TEXT, NOMBRE TEXT, APELLIDOS TEXT, DIRECCION TEXT,
    CIUDAD TEXT, COMENTARIO TEXT, TELEFONO TEXT, EMAIL TEXT, PAIS TEXT, ESTATUS INTEGER,
    TOTAL REAL, ITBIS REAL, FECHA_REGISTRO TEXT, HORA_REGISTRO TEXT, TARJETA TEXT, PTLOG TEXT,
    CLUB TEXT, WEB TEXT, TIENDA TEXT, NCF TEXT, TIPO_NCF TEXT, ESTATUS_DELIV INTEGER,
    RNC_NAME TEXT, OTRO_NOMBRE TEXT, OTRO_NOMBRE_DOC TEXT, ORDEN_REFERENCIA TEXT,
    ORDEN_DESDE TEXT, TOTAL_DESCUENTO REAL, PRINT INTEGER
);
CREATE TABLE WEB_ARTICULOS (
    ID TEXT PRIMARY KEY, ORDEN TEXT, FACTURA TEXT, CANT REAL, EAN TEXT, DESCRIPCION TEXT,
    PRECIO REAL, TOTAL REAL, ESTATUS INTEGER, FECHA TEXT, WEB TEXT, UNMANEJO TEXT,
    TOTAL_DISCOUNT REAL
);
CREATE TABLE WEB_FACTURAS (
    ID TEXT PRIMARY KEY, ORDEN TEXT, FACTURAS TEXT, DEPTO TEXT, ESTATUS TEXT, WEB TEXT,
    TIENDA TEXT, DELIVERY TEXT, ITBIS REAL, NCF TEXT, TIPO_NCF TEXT, TOTAL REAL
);
CREATE TABLE WEB_TRANSACIONES (
    ID TEXT PRIMARY KEY, ORDEN TEXT, TOTAL REAL, TARJETA TEXT, APROBACION TEXT,
    REFERENCIA TEXT, ESTATUS INTEGER, MENSAJE TEXT, FECHA_APROBACION TEXT,
    HORA_APROBACION TEXT, WEB TEXT, TRANS_ID TEXT, TOTAL_AUT REAL, KIND TEXT,
    TIPO_PAGO INTEGER, GATEWAY TEXT
);
INSERT INTO WEB_ORDENES (ID, ORDEN, NOMBRE, EMAIL, TIENDA, TOTAL)
    VALUES ('1', 'ORD-100', 'Ana', 'ana@example.com', 'PL08', 150.0);
INSERT INTO WEB_ARTICULOS (ID, ORDEN, EAN, DESCRIPCION, CANT)
    VALUES ('L1', 'ORD-100', '7460001', 'Coffee', 1),
           ('L2', 'ORD-100', '7460002', 'Sugar', 2),
           ('L3', 'ORD-100', '7460003', 'Milk', 1);
INSERT INTO WEB_FACTURAS (ID, ORDEN, FACTURAS, TOTAL)
    VALUES ('F1', 'ORD-100', 'B0100000001', 150.0);
INSERT INTO WEB_TRANSACIONES (ID, ORDEN, APROBACION, TOTAL)
    VALUES ('T1', 'ORD-100', 'AP0001', 100.0),
           ('T2', 'ORD-100', 'AP0002', 50.0);
"""


def main():
    config = ConnectionConfig(driver="sqlite", database=":memory:", pool_size=1)
    manager = ConnectionManager(config)
    with manager.get_connection() as conn:
        conn.executescript(SCHEMA)

    engine = Engine(manager)
    repository = OrderRepository(engine, settings=Settings(order_schema=None))

    order = repository.find_by_order_number("ORD-100")
    print(f"Order {order.order_number} for {order.first_name} ({order.email})")
    print("  Line items:  ", [(i.ean, i.description) for i in order.line_items])
    print("  Invoices:    ", [i.invoice_number for i in order.invoices])
    print("  Transactions:", [(t.approval_code, t.total) for t in order.transactions])

    print("Missing order:", repository.find_by_order_number("ORD-404"))
    engine.close()


if __name__ == "__main__":
    main()
