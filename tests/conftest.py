"""Shared pytest fixtures for schema analyser tests."""

from datetime import datetime

import pytest
from typing import Dict, Any, List

from schema_analyser.database import SchemaAnalyser
from tests.database.fixtures import FakeConnection, TaggedMySqlDialect

CUSTOMERS_MODIFIED = datetime(2024, 1, 5, 10, 30, 0)
ORDERS_MODIFIED = datetime(2024, 2, 1, 8, 0, 0)
VIEW_MODIFIED = datetime(2024, 3, 1, 12, 0, 0)
PROCEDURE_MODIFIED = datetime(2024, 4, 2, 9, 15, 0)
FUNCTION_MODIFIED = datetime(2024, 4, 3, 9, 15, 0)


def _column(table: str, name: str, data_type: str, column_type: str, **extra) -> Dict[str, Any]:
    row = {
        "pureName": table,
        "columnName": name,
        "isNullable": "NO",
        "dataType": data_type,
        "charMaxLength": None,
        "numericPrecision": None,
        "numericScale": None,
        "defaultValue": None,
        "columnComment": "",
        "columnType": column_type,
        "extra": "",
    }
    row.update(extra)
    return row


def _index(table: str, name: str, column: str, non_unique: int, index_type: str = "BTREE") -> Dict[str, Any]:
    return {
        "constraintName": name,
        "tableName": table,
        "columnName": column,
        "indexType": index_type,
        "nonUnique": non_unique,
    }


@pytest.fixture
def catalog_rows() -> Dict[str, List[Dict[str, Any]]]:
    """Catalog rows of a small shop database keyed by query name."""
    return {
        "tables": [
            {"pureName": "customers", "modifyDate": CUSTOMERS_MODIFIED, "tableRowCount": 42},
            {"pureName": "orders", "modifyDate": ORDERS_MODIFIED, "tableRowCount": 120},
        ],
        "columns": [
            _column("customers", "id", "int", "int unsigned", extra="auto_increment", numericPrecision=10, numericScale=0),
            _column("customers", "email", "varchar", "varchar(255)", charMaxLength=255),
            _column("customers", "name", "varchar", "varchar(100)", charMaxLength=100, isNullable="YES",
                    columnComment="Display name"),
            _column("orders", "id", "bigint", "bigint", extra="auto_increment", numericPrecision=19, numericScale=0),
            _column("orders", "customer_id", "int", "int unsigned", numericPrecision=10, numericScale=0),
            _column("orders", "total", "decimal", "decimal(10,2) unsigned zerofill", numericPrecision=10,
                    numericScale=2, defaultValue="0.00"),
            _column("orders", "status", "varchar", "varchar(20)", charMaxLength=20, defaultValue="new"),
            _column("orders", "created_at", "timestamp", "timestamp",
                    extra="DEFAULT_GENERATED on update CURRENT_TIMESTAMP", defaultValue="CURRENT_TIMESTAMP"),
            _column("active_customers", "id", "int", "int unsigned", numericPrecision=10, numericScale=0),
            _column("active_customers", "email", "varchar", "varchar(255)", charMaxLength=255),
        ],
        "primaryKeys": [
            {"pureName": "customers", "columnName": "id", "constraintName": "PRIMARY"},
            {"pureName": "orders", "columnName": "id", "constraintName": "PRIMARY"},
        ],
        "foreignKeys": [
            {
                "constraintName": "fk_orders_customer",
                "pureName": "orders",
                "updateAction": "CASCADE",
                "deleteAction": "RESTRICT",
                "refTableName": "customers",
                "columnName": "customer_id",
                "refColumnName": "id",
            },
        ],
        "views": [
            {"pureName": "active_customers", "modifyDate": VIEW_MODIFIED},
        ],
        "viewTexts": [
            {
                "pureName": "active_customers",
                "viewDefinition": "select `shop`.`customers`.`id` AS `id`,`shop`.`customers`.`email` AS `email` "
                                  "from `shop`.`customers`",
            },
        ],
        "programmables": [
            {
                "pureName": "refresh_totals",
                "objectType": "PROCEDURE",
                "modifyDate": PROCEDURE_MODIFIED,
                "returnDataType": "",
                "routineDefinition": "BEGIN\n  UPDATE orders SET total = total;\nEND",
                "isDeterministic": "NO",
            },
            {
                "pureName": "order_total",
                "objectType": "FUNCTION",
                "modifyDate": FUNCTION_MODIFIED,
                "returnDataType": "decimal",
                "routineDefinition": "BEGIN\n  RETURN 1;\nEND",
                "isDeterministic": "YES",
            },
            {
                "pureName": "random_code",
                "objectType": "FUNCTION",
                "modifyDate": FUNCTION_MODIFIED,
                "returnDataType": "varchar",
                "routineDefinition": "RETURN UUID()",
                "isDeterministic": "NO",
            },
        ],
        "indexes": [
            _index("customers", "uq_customers_email", "email", 0),
            _index("customers", "idx_customers_name", "name", 1),
            _index("orders", "idx_orders_customer", "customer_id", 1),
            _index("orders", "idx_orders_status_created", "status", 1),
            _index("orders", "idx_orders_status_created", "created_at", 1),
            _index("orders", "uq_orders_customer_status", "customer_id", 0),
            _index("orders", "uq_orders_customer_status", "status", 0),
            _index("orders", "ux_orders_created", "created_at", 0, index_type="HASH"),
        ],
        "uniqueNames": [
            {"constraintName": "uq_customers_email"},
            {"constraintName": "uq_orders_customer_status"},
        ],
        "tableModifications": [
            {"pureName": "customers", "objectType": "BASE TABLE", "modifyDate": CUSTOMERS_MODIFIED,
             "tableRowCount": 42},
            {"pureName": "orders", "objectType": "BASE TABLE", "modifyDate": ORDERS_MODIFIED,
             "tableRowCount": 120},
            {"pureName": "active_customers", "objectType": "VIEW", "modifyDate": VIEW_MODIFIED,
             "tableRowCount": None},
        ],
        "procedureModifications": [
            {"Db": "shop", "Name": "refresh_totals", "Type": "PROCEDURE", "Modified": PROCEDURE_MODIFIED},
        ],
        "functionModifications": [
            {"Db": "shop", "Name": "order_total", "Type": "FUNCTION", "Modified": FUNCTION_MODIFIED},
            {"Db": "shop", "Name": "random_code", "Type": "FUNCTION", "Modified": FUNCTION_MODIFIED},
        ],
    }


@pytest.fixture
def dialect():
    """MySQL dialect with tagged templates."""
    return TaggedMySqlDialect()


@pytest.fixture
def fake_connection(catalog_rows):
    """Fake connection answering the shop catalog."""
    return FakeConnection(responses=catalog_rows)


@pytest.fixture
def analyser(fake_connection, dialect):
    """Schema analyser over the fake shop catalog."""
    return SchemaAnalyser(fake_connection, dialect, "shop")
