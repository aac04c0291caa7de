"""Test fixtures package."""

from .fake_connection import FakeConnection, TaggedMySqlDialect, query_name

__all__ = [
    "FakeConnection",
    "TaggedMySqlDialect",
    "query_name",
]
