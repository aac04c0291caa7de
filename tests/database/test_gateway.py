"""Tests for the catalog query gateway."""

import logging

import pytest

from schema_analyser.database.gateway import ObjectFilter, QueryGateway
from schema_analyser.database.models import ObjectKind
from schema_analyser.database.progress import LoggingProgressSink, ProgressSink
from schema_analyser.database.rows import IndexRow, TableRow
from schema_analyser.errors import QueryError, RowValidationError, UnknownQueryError, ConnectionError
from tests.database.fixtures import FakeConnection


class RecordingSink(ProgressSink):
    def __init__(self):
        self.messages = []

    def notify(self, message):
        self.messages.append(message)


@pytest.fixture
def gateway(fake_connection, dialect):
    return QueryGateway(fake_connection, dialect.queries, "shop")


class TestCreateQuery:
    """Test template rendering."""

    def test_database_substitution(self, gateway):
        sql, params = gateway.create_query("tables")
        assert "TABLE_SCHEMA = 'shop'" in sql
        assert "#DATABASE#" not in sql
        assert params is None

    def test_object_condition_removed_in_full_run(self, gateway):
        sql, _ = gateway.create_query("columns")
        assert "TABLE_NAME is not null" in sql
        assert "OBJECT_ID_CONDITION" not in sql

    def test_object_filter_binds_name(self, fake_connection, dialect):
        gateway = QueryGateway(
            fake_connection, dialect.queries, "shop",
            object_filter=ObjectFilter(kind=ObjectKind.TABLES, pure_name="orders"),
        )

        sql, params = gateway.create_query("columns")

        assert "TABLE_NAME = %s" in sql
        assert params == ("orders",)

    @pytest.mark.parametrize("object_filter", [
        None,
        ObjectFilter(kind=ObjectKind.TABLES, pure_name="orders"),
        ObjectFilter(kind=ObjectKind.VIEWS, pure_name="active_customers"),
        ObjectFilter(kind=ObjectKind.FUNCTIONS, pure_name="order_total"),
    ])
    def test_rendered_condition_is_single_spaced(self, fake_connection, dialect, object_filter):
        gateway = QueryGateway(fake_connection, dialect.queries, "shop", object_filter=object_filter)

        for name in dialect.queries:
            rendered = gateway.create_query(name)
            if rendered is None:
                continue
            sql, _ = rendered
            assert "  is not null" not in sql, name
            assert "  = %s" not in sql, name
            assert "OBJECT_ID_CONDITION" not in sql, name

    def test_object_filter_skips_other_kinds(self, fake_connection, dialect):
        gateway = QueryGateway(
            fake_connection, dialect.queries, "shop",
            object_filter=ObjectFilter(kind=ObjectKind.VIEWS, pure_name="active_customers"),
        )

        assert gateway.create_query("indexes") is None
        assert gateway.create_query("viewTexts") is not None

    def test_unknown_query(self, gateway):
        with pytest.raises(UnknownQueryError) as exc_info:
            gateway.create_query("triggers")
        assert exc_info.value.code == "UNKNOWN_QUERY"


class TestQuery:
    """Test strict and tolerant execution."""

    @pytest.mark.asyncio
    async def test_rows_are_typed(self, gateway):
        rows = await gateway.query("tables", TableRow)

        assert [row.pure_name for row in rows] == ["customers", "orders"]
        assert rows[1].table_row_count == 120

    @pytest.mark.asyncio
    async def test_strict_failure_raises(self, catalog_rows, dialect):
        connection = FakeConnection(catalog_rows, failures={"tables"})
        gateway = QueryGateway(connection, dialect.queries, "shop")

        with pytest.raises(QueryError) as exc_info:
            await gateway.query("tables", TableRow)

        assert exc_info.value.details["query"] == "tables"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_strict_keeps_analyser_errors(self, dialect):
        class Unreachable(FakeConnection):
            async def query(self, sql, params=None):
                raise ConnectionError("server gone")

        gateway = QueryGateway(Unreachable(), dialect.queries, "shop")

        with pytest.raises(ConnectionError):
            await gateway.query("tables", TableRow)

    @pytest.mark.asyncio
    async def test_tolerant_failure_returns_empty(self, catalog_rows, dialect):
        connection = FakeConnection(catalog_rows, failures={"indexes"})
        gateway = QueryGateway(connection, dialect.queries, "shop")

        assert await gateway.safe_query("indexes", IndexRow) == []
        assert connection.executed_names == ["indexes"]

    @pytest.mark.asyncio
    async def test_invalid_rows_raise_even_when_tolerant(self, dialect):
        connection = FakeConnection({"indexes": [{"tableName": "orders"}]})
        gateway = QueryGateway(connection, dialect.queries, "shop")

        with pytest.raises(RowValidationError) as exc_info:
            await gateway.safe_query("indexes", IndexRow)

        assert exc_info.value.details["errors"]

    @pytest.mark.asyncio
    async def test_skipped_query_does_not_hit_server(self, fake_connection, dialect):
        gateway = QueryGateway(
            fake_connection, dialect.queries, "shop",
            object_filter=ObjectFilter(kind=ObjectKind.FUNCTIONS, pure_name="order_total"),
        )

        assert await gateway.safe_query("indexes", IndexRow) == []
        assert fake_connection.executed == []

    @pytest.mark.asyncio
    async def test_progress_message_sent_before_query(self, fake_connection, dialect):
        sink = RecordingSink()
        gateway = QueryGateway(fake_connection, dialect.queries, "shop", progress=sink)

        await gateway.query("tables", TableRow, "Loading tables")
        await gateway.query("tables", TableRow)

        assert sink.messages == ["Loading tables"]


def test_logging_progress_sink(caplog):
    sink = LoggingProgressSink()

    with caplog.at_level(logging.INFO, logger="schema_analyser.database.progress"):
        sink.notify("Loading tables")
        sink.notify(None)

    assert "Loading tables" in caplog.text
    assert "Analysis finished" in caplog.text
