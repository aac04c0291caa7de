"""Typed records for catalog query result rows.

Each catalog query returns rows as plain mappings keyed by the column aliases
used in the query templates (``pureName``, ``columnName`` ...). These records
validate the rows at the query gateway so the analyser works with attributes
instead of untyped dictionaries. Fields the server may leave out are optional.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class CatalogRow(BaseModel):
    """Base class for catalog rows."""

    class Config:
        populate_by_name = True
        extra = "ignore"


class TableRow(CatalogRow):
    """Row of the ``tables`` query."""
    pure_name: str = Field(alias="pureName")
    modify_date: Any = Field(default=None, alias="modifyDate")
    table_row_count: Optional[int] = Field(default=None, alias="tableRowCount")


class ColumnRow(CatalogRow):
    """Row of the ``columns`` query; ``pure_name`` is the owning table or view."""
    pure_name: str = Field(alias="pureName")
    column_name: str = Field(alias="columnName")
    is_nullable: Any = Field(default=None, alias="isNullable")
    data_type: Optional[str] = Field(default=None, alias="dataType")
    char_max_length: Optional[int] = Field(default=None, alias="charMaxLength")
    numeric_precision: Optional[int] = Field(default=None, alias="numericPrecision")
    numeric_scale: Optional[int] = Field(default=None, alias="numericScale")
    default_value: Any = Field(default=None, alias="defaultValue")
    column_comment: Optional[str] = Field(default=None, alias="columnComment")
    column_type: Any = Field(default=None, alias="columnType")
    extra: Optional[str] = None


class PrimaryKeyRow(CatalogRow):
    """Row of the ``primaryKeys`` query, one per key column."""
    pure_name: str = Field(alias="pureName")
    column_name: str = Field(alias="columnName")
    constraint_name: Optional[str] = Field(default=None, alias="constraintName")


class ForeignKeyRow(CatalogRow):
    """Row of the ``foreignKeys`` query, one per column pair."""
    constraint_name: str = Field(alias="constraintName")
    pure_name: str = Field(alias="pureName")
    update_action: Optional[str] = Field(default=None, alias="updateAction")
    delete_action: Optional[str] = Field(default=None, alias="deleteAction")
    ref_table_name: Optional[str] = Field(default=None, alias="refTableName")
    column_name: str = Field(alias="columnName")
    ref_column_name: Optional[str] = Field(default=None, alias="refColumnName")


class ViewRow(CatalogRow):
    """Row of the ``views`` query."""
    pure_name: str = Field(alias="pureName")
    modify_date: Any = Field(default=None, alias="modifyDate")


class ViewTextRow(CatalogRow):
    """Row of the ``viewTexts`` query."""
    pure_name: str = Field(alias="pureName")
    view_definition: Optional[str] = Field(default=None, alias="viewDefinition")


class ProgrammableRow(CatalogRow):
    """Row of the ``programmables`` query; ``object_type`` is PROCEDURE or FUNCTION."""
    pure_name: str = Field(alias="pureName")
    object_type: str = Field(alias="objectType")
    modify_date: Any = Field(default=None, alias="modifyDate")
    return_data_type: Optional[str] = Field(default=None, alias="returnDataType")
    routine_definition: Optional[str] = Field(default=None, alias="routineDefinition")
    is_deterministic: Optional[str] = Field(default=None, alias="isDeterministic")


class IndexRow(CatalogRow):
    """Row of the ``indexes`` query, one per index column."""
    constraint_name: str = Field(alias="constraintName")
    table_name: str = Field(alias="tableName")
    column_name: Optional[str] = Field(default=None, alias="columnName")
    index_type: Optional[str] = Field(default=None, alias="indexType")
    non_unique: Optional[bool] = Field(default=False, alias="nonUnique")


class UniqueNameRow(CatalogRow):
    """Row of the ``uniqueNames`` query."""
    constraint_name: str = Field(alias="constraintName")


class TableModificationRow(CatalogRow):
    """Row of the ``tableModifications`` query; ``object_type`` is BASE TABLE or VIEW."""
    pure_name: str = Field(alias="pureName")
    object_type: str = Field(alias="objectType")
    modify_date: Any = Field(default=None, alias="modifyDate")
    table_row_count: Optional[int] = Field(default=None, alias="tableRowCount")


class RoutineStatusRow(CatalogRow):
    """Row of ``SHOW PROCEDURE STATUS`` / ``SHOW FUNCTION STATUS``."""
    name: str = Field(alias="Name")
    modified: Any = Field(default=None, alias="Modified")
