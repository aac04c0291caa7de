"""Database structure analysis for schema-analyser.

This module extracts tables, views, columns, keys, indexes and stored
routines from a database catalog and normalizes them into an
engine-independent structure model, with a MySQL / MariaDB implementation.
"""

from .models import (
    ObjectKind,
    Column,
    ColumnReference,
    Key,
    ForeignKey,
    Index,
    SchemaObject,
    Table,
    View,
    Procedure,
    Function,
    DatabaseStructure,
    FastSnapshotEntry,
    FastSnapshot,
)
from .base import CatalogConnection, AnalyserDialect
from .type_mappers import TypeClassifier, MySqlTypeClassifier
from .progress import ProgressSink, NullProgressSink, LoggingProgressSink
from .gateway import QueryGateway, ObjectFilter
from .analyser import SchemaAnalyser
from .mysql import MySqlConnection, MySqlDialect

__all__ = [
    # Data models
    "ObjectKind",
    "Column",
    "ColumnReference",
    "Key",
    "ForeignKey",
    "Index",
    "SchemaObject",
    "Table",
    "View",
    "Procedure",
    "Function",
    "DatabaseStructure",
    "FastSnapshotEntry",
    "FastSnapshot",
    # Base classes
    "CatalogConnection",
    "AnalyserDialect",
    "TypeClassifier",
    "ProgressSink",
    "NullProgressSink",
    "LoggingProgressSink",
    # Analysis
    "QueryGateway",
    "ObjectFilter",
    "SchemaAnalyser",
    # MySQL
    "MySqlTypeClassifier",
    "MySqlConnection",
    "MySqlDialect",
]
