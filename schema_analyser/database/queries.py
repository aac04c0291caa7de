"""Named catalog query templates.

Templates are plain SQL text with two markers:

* ``#DATABASE#`` is replaced by the name of the analysed database.
* ``=OBJECT_ID_CONDITION`` is replaced by ``is not null`` in a full run and by a
  bound ``= %s`` parameter when a single object is analysed.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet

from .models import ObjectKind

DATABASE_MARKER = "#DATABASE#"
OBJECT_ID_CONDITION = "=OBJECT_ID_CONDITION"


@dataclass(frozen=True)
class CatalogQuery:
    """A named query template and the object kinds it describes."""
    name: str
    sql: str
    kinds: FrozenSet[ObjectKind] = field(default_factory=frozenset)


def _kinds(*kinds: ObjectKind) -> FrozenSet[ObjectKind]:
    return frozenset(kinds)


MYSQL_QUERIES: Dict[str, CatalogQuery] = {
    query.name: query for query in [
        CatalogQuery(
            name="tables",
            kinds=_kinds(ObjectKind.TABLES),
            sql="""
select
    TABLE_NAME as pureName,
    case when ENGINE = 'InnoDB' then CREATE_TIME else coalesce(UPDATE_TIME, CREATE_TIME) end as modifyDate,
    TABLE_ROWS as tableRowCount
from information_schema.tables
where TABLE_SCHEMA = '#DATABASE#' and TABLE_TYPE = 'BASE TABLE' and TABLE_NAME =OBJECT_ID_CONDITION
""",
        ),
        CatalogQuery(
            name="columns",
            kinds=_kinds(ObjectKind.TABLES, ObjectKind.VIEWS),
            sql="""
select
    TABLE_NAME as pureName,
    COLUMN_NAME as columnName,
    IS_NULLABLE as isNullable,
    DATA_TYPE as dataType,
    CHARACTER_MAXIMUM_LENGTH as charMaxLength,
    NUMERIC_PRECISION as numericPrecision,
    NUMERIC_SCALE as numericScale,
    COLUMN_DEFAULT as defaultValue,
    COLUMN_COMMENT as columnComment,
    COLUMN_TYPE as columnType,
    EXTRA as extra
from information_schema.columns
where TABLE_SCHEMA = '#DATABASE#' and TABLE_NAME =OBJECT_ID_CONDITION
order by TABLE_NAME, ORDINAL_POSITION
""",
        ),
        CatalogQuery(
            name="primaryKeys",
            kinds=_kinds(ObjectKind.TABLES),
            sql="""
select
    TABLE_NAME as pureName,
    COLUMN_NAME as columnName,
    CONSTRAINT_NAME as constraintName
from information_schema.key_column_usage
where TABLE_SCHEMA = '#DATABASE#' and TABLE_NAME =OBJECT_ID_CONDITION and CONSTRAINT_NAME = 'PRIMARY'
order by TABLE_NAME, ORDINAL_POSITION
""",
        ),
        CatalogQuery(
            name="foreignKeys",
            kinds=_kinds(ObjectKind.TABLES),
            sql="""
select
    rc.CONSTRAINT_NAME as constraintName,
    rc.TABLE_NAME as pureName,
    rc.UPDATE_RULE as updateAction,
    rc.DELETE_RULE as deleteAction,
    rc.REFERENCED_TABLE_NAME as refTableName,
    kcu.COLUMN_NAME as columnName,
    kcu.REFERENCED_COLUMN_NAME as refColumnName
from information_schema.referential_constraints rc
inner join information_schema.key_column_usage kcu
    on rc.TABLE_NAME = kcu.TABLE_NAME
    and rc.CONSTRAINT_NAME = kcu.CONSTRAINT_NAME
    and rc.CONSTRAINT_SCHEMA = kcu.CONSTRAINT_SCHEMA
where rc.CONSTRAINT_SCHEMA = '#DATABASE#' and rc.TABLE_NAME =OBJECT_ID_CONDITION
order by kcu.ORDINAL_POSITION
""",
        ),
        CatalogQuery(
            name="views",
            kinds=_kinds(ObjectKind.VIEWS),
            sql="""
select
    TABLE_NAME as pureName,
    coalesce(UPDATE_TIME, CREATE_TIME) as modifyDate
from information_schema.tables
where TABLE_SCHEMA = '#DATABASE#' and TABLE_NAME =OBJECT_ID_CONDITION and TABLE_TYPE = 'VIEW'
""",
        ),
        CatalogQuery(
            name="viewTexts",
            kinds=_kinds(ObjectKind.VIEWS),
            sql="""
select
    TABLE_NAME as pureName,
    VIEW_DEFINITION as viewDefinition
from information_schema.views
where TABLE_SCHEMA = '#DATABASE#' and TABLE_NAME =OBJECT_ID_CONDITION
""",
        ),
        CatalogQuery(
            name="programmables",
            kinds=_kinds(ObjectKind.PROCEDURES, ObjectKind.FUNCTIONS),
            sql="""
select
    ROUTINE_NAME as pureName,
    ROUTINE_TYPE as objectType,
    coalesce(LAST_ALTERED, CREATED) as modifyDate,
    DATA_TYPE as returnDataType,
    ROUTINE_DEFINITION as routineDefinition,
    IS_DETERMINISTIC as isDeterministic
from information_schema.routines
where ROUTINE_SCHEMA = '#DATABASE#' and ROUTINE_NAME =OBJECT_ID_CONDITION
""",
        ),
        CatalogQuery(
            name="indexes",
            kinds=_kinds(ObjectKind.TABLES),
            sql="""
select
    INDEX_NAME as constraintName,
    TABLE_NAME as tableName,
    COLUMN_NAME as columnName,
    INDEX_TYPE as indexType,
    NON_UNIQUE as nonUnique
from information_schema.statistics
where TABLE_SCHEMA = '#DATABASE#' and TABLE_NAME =OBJECT_ID_CONDITION and INDEX_NAME != 'PRIMARY'
order by TABLE_NAME, INDEX_NAME, SEQ_IN_INDEX
""",
        ),
        CatalogQuery(
            name="uniqueNames",
            kinds=_kinds(ObjectKind.TABLES),
            sql="""
select CONSTRAINT_NAME as constraintName
from information_schema.table_constraints
where CONSTRAINT_SCHEMA = '#DATABASE#' and CONSTRAINT_TYPE = 'UNIQUE'
""",
        ),
        CatalogQuery(
            name="tableModifications",
            sql="""
select
    TABLE_NAME as pureName,
    TABLE_TYPE as objectType,
    case when ENGINE = 'InnoDB' then CREATE_TIME else coalesce(UPDATE_TIME, CREATE_TIME) end as modifyDate,
    TABLE_ROWS as tableRowCount
from information_schema.tables
where TABLE_SCHEMA = '#DATABASE#'
""",
        ),
        CatalogQuery(
            name="procedureModifications",
            sql="SHOW PROCEDURE STATUS WHERE Db = '#DATABASE#'",
        ),
        CatalogQuery(
            name="functionModifications",
            sql="SHOW FUNCTION STATUS WHERE Db = '#DATABASE#'",
        ),
    ]
}
