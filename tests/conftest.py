"""Shared fixtures for db2entity tests."""

import pytest
from sqlalchemy import create_engine, text

from db2entity.codegen import ColumnInfo, GeneratorConfig, PrimaryKeyInfo
from db2entity.codegen.languages.java import JavaGenerator
from db2entity.schema_reader import MetadataProvider

SHOP_DDL = [
    "CREATE TABLE warehouse (id INTEGER PRIMARY KEY, name VARCHAR(80))",
    "CREATE TABLE customer (id INTEGER PRIMARY KEY, full_name VARCHAR(120), born DATE)",
    """CREATE TABLE order_items (
        order_id INTEGER NOT NULL,
        product_id INTEGER NOT NULL,
        qty INTEGER,
        PRIMARY KEY (order_id, product_id)
    )""",
    """CREATE TABLE shipment (
        id INTEGER PRIMARY KEY,
        from_warehouse_id INTEGER REFERENCES warehouse(id),
        to_warehouse_id INTEGER REFERENCES warehouse(id),
        shipped_at TIMESTAMP
    )""",
]


class FakeMetadataProvider(MetadataProvider):
    """In-memory provider fed from plain dicts."""

    def __init__(self, tables):
        """
        Args:
            tables: table name -> dict with ``columns``, ``pk`` and ``fks`` keys
        """
        self.tables = tables
        self.closed = False

    def list_tables(self):
        return list(self.tables)

    def list_columns(self, table_name):
        return [
            {"name": name, "type_name": type_name, "size": size}
            for name, type_name, size in self.tables[table_name]["columns"]
        ]

    def list_primary_key_columns(self, table_name):
        return list(self.tables[table_name].get("pk", []))

    def list_imported_foreign_keys(self, table_name):
        return list(self.tables[table_name].get("fks", []))

    def close(self):
        self.closed = True


@pytest.fixture
def shop_tables():
    return {
        "warehouse": {
            "columns": [("id", "SERIAL", 10), ("name", "VARCHAR", 80)],
            "pk": ["id"],
        },
        "order_items": {
            "columns": [
                ("order_id", "INT4", 10),
                ("product_id", "INT4", 10),
                ("qty", "INT4", 10),
            ],
            # Reported in a different order than the column scan
            "pk": ["product_id", "order_id"],
        },
        "shipment": {
            "columns": [
                ("id", "BIGINT", 19),
                ("from_warehouse_id", "INT4", 10),
                ("to_warehouse_id", "INT4", 10),
                ("shipped_at", "TIMESTAMPTZ", 35),
            ],
            "pk": ["id"],
            "fks": [("from_warehouse_id", "warehouse"), ("to_warehouse_id", "warehouse")],
        },
    }


@pytest.fixture
def fake_provider(shop_tables):
    return FakeMetadataProvider(shop_tables)


@pytest.fixture
def java_generator():
    return JavaGenerator(GeneratorConfig(package_name="com.shop.model"))


@pytest.fixture
def order_items_metadata():
    columns = [
        ColumnInfo("order_id", "INT", 10),
        ColumnInfo("product_id", "INT", 10),
        ColumnInfo("qty", "INT", 10),
    ]
    return columns, PrimaryKeyInfo(("order_id", "product_id")), {}


@pytest.fixture
def sqlite_url(tmp_path):
    """File-backed SQLite database with a small shop schema."""
    db_path = tmp_path / "shop.db"
    url = f"sqlite:///{db_path}"
    engine = create_engine(url)
    with engine.begin() as conn:
        for statement in SHOP_DDL:
            conn.execute(text(statement))
    engine.dispose()
    return url
