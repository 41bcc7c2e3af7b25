"""
Example 01: Paged Orders

This example pages through orders stored in a SQLite file. Each page is
loaded with two queries (count + windowed parents, then the child join
for just that page) and folded into OrderAggregate objects.
"""

import sqlite3
import tempfile

from row_window import ConnectionConfig, Engine, OrderRepository, Settings, configure_logging

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
"""


def create_database() -> str:
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    conn = sqlite3.connect(db_path)
    conn.executescript(SCHEMA)
    for n in range(1, 13):
        store = "PL08" if n % 2 else "PL01"
        registered = f"2024-03-{n:02d}"
        conn.execute(
            "INSERT INTO WEB_ORDENES"
            " (ID, ORDEN, EMAIL, TIENDA, FECHA_REGISTRO, HORA_REGISTRO, TOTAL)"
            " VALUES (?, ?, ?, ?, ?, ?, ?)",
            (str(n), f"ORD-{n:03d}", f"c{n}@example.com", store, registered, "09:30", 25 * n),
        )
        for ean in ("7460001", "7460002"):
            conn.execute(
                "INSERT INTO WEB_ARTICULOS (ID, ORDEN, EAN, DESCRIPCION, CANT)"
                " VALUES (?, ?, ?, ?, 1)",
                (f"{n}-{ean}", f"ORD-{n:03d}", ean, f"Product {ean}"),
            )
        conn.execute(
            "INSERT INTO WEB_TRANSACIONES (ID, ORDEN, APROBACION, TOTAL) VALUES (?, ?, ?, ?)",
            (f"T{n}", f"ORD-{n:03d}", f"AP{n:04d}", 25.0 * n),
        )
    conn.commit()
    conn.close()
    return db_path


def main():
    configure_logging(Settings(log_level="DEBUG"))

    db_path = create_database()
    engine = Engine.from_config(ConnectionConfig(driver="sqlite", database=db_path, pool_size=1))
    repository = OrderRepository(engine, settings=Settings(order_schema=None))

    # Page 2 of the PL08 orders, oldest first
    page = repository.find_page(
        {"page": 2, "limit": 4, "store": "PL08", "sortBy": "REGISTERED_AT", "sortOrder": "ASC"}
    )
    print("Meta:", page.meta.as_dict())
    for order in page.items:
        eans = [item.ean for item in order.line_items]
        approvals = [t.approval_code for t in order.transactions]
        print(f"  {order.order_number} {order.registered_date} items={eans} payments={approvals}")

    # A page past the end is empty but still reports the true total
    empty = repository.find_page({"page": 10, "limit": 4})
    print("Past the end:", empty.items, empty.meta.as_dict())

    engine.close()


if __name__ == "__main__":
    main()
