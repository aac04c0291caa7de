"""Database structure models produced by schema analysis.

All models are immutable snapshots built fresh on every analysis call. The only
identity that survives across calls is the ``object_id`` / ``content_hash`` pair,
which callers compare to decide whether an object needs re-analysis.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Tuple


class ObjectKind(str, Enum):
    """Kinds of schema objects; also the bucket names of the returned model."""
    TABLES = "tables"
    VIEWS = "views"
    PROCEDURES = "procedures"
    FUNCTIONS = "functions"


@dataclass(frozen=True)
class Column:
    """Represents a table or view column."""
    column_name: str
    data_type: Optional[str] = None
    not_null: bool = False
    auto_increment: bool = False
    default_value: Any = None
    column_comment: Optional[str] = None
    is_unsigned: bool = False
    is_zerofill: bool = False


@dataclass(frozen=True)
class ColumnReference:
    """A column taking part in a key or index.

    ``ref_column_name`` is only set for foreign keys, where it names the
    matching column of the referenced table.
    """
    column_name: str
    ref_column_name: Optional[str] = None


@dataclass(frozen=True)
class Key:
    """Primary key or unique constraint: a named, ordered set of columns."""
    constraint_name: Optional[str]
    constraint_type: str
    columns: Tuple[ColumnReference, ...] = ()


@dataclass(frozen=True)
class ForeignKey:
    """Foreign key pointing to another table."""
    constraint_name: str
    pure_name: str
    ref_table_name: Optional[str] = None
    update_action: Optional[str] = None
    delete_action: Optional[str] = None
    columns: Tuple[ColumnReference, ...] = ()
    constraint_type: str = "foreignKey"


@dataclass(frozen=True)
class Index:
    """Non-constraint index on a table."""
    constraint_name: str
    index_type: Optional[str] = None
    is_unique: bool = False
    columns: Tuple[ColumnReference, ...] = ()


@dataclass(frozen=True)
class SchemaObject:
    """Common part of every analysed object."""
    KIND: ClassVar[Optional[ObjectKind]] = None

    object_id: str
    pure_name: str
    content_hash: Any = None
    create_sql: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Table(SchemaObject):
    """Represents a database table."""
    KIND: ClassVar[ObjectKind] = ObjectKind.TABLES

    columns: Tuple[Column, ...] = ()
    primary_key: Optional[Key] = None
    foreign_keys: Tuple[ForeignKey, ...] = ()
    indexes: Tuple[Index, ...] = ()
    uniques: Tuple[Key, ...] = ()
    table_row_count: Optional[int] = None

    def get_column(self, column_name: str) -> Optional[Column]:
        """Find a column by name."""
        for column in self.columns:
            if column.column_name == column_name:
                return column
        return None


@dataclass(frozen=True)
class View(SchemaObject):
    """Represents a database view."""
    KIND: ClassVar[ObjectKind] = ObjectKind.VIEWS

    columns: Tuple[Column, ...] = ()
    requires_format: bool = True


@dataclass(frozen=True)
class Procedure(SchemaObject):
    """Represents a stored procedure."""
    KIND: ClassVar[ObjectKind] = ObjectKind.PROCEDURES

    routine_definition: Optional[str] = None


@dataclass(frozen=True)
class Function(SchemaObject):
    """Represents a stored function."""
    KIND: ClassVar[ObjectKind] = ObjectKind.FUNCTIONS

    routine_definition: Optional[str] = None
    return_data_type: Optional[str] = None
    is_deterministic: Optional[str] = None


@dataclass(frozen=True)
class DatabaseStructure:
    """Result of a full analysis, partitioned by object kind.

    ``object_id`` is unique within one partition only; callers should key
    objects by ``(kind, object_id)``.
    """
    tables: Tuple[Table, ...] = ()
    views: Tuple[View, ...] = ()
    procedures: Tuple[Procedure, ...] = ()
    functions: Tuple[Function, ...] = ()

    def objects(self, kind: ObjectKind) -> Tuple[SchemaObject, ...]:
        """Get the objects of one kind."""
        return getattr(self, ObjectKind(kind).value)

    def get_object(self, kind: ObjectKind, object_id: str) -> Optional[SchemaObject]:
        """Find an object by kind and id."""
        for obj in self.objects(kind):
            if obj.object_id == object_id:
                return obj
        return None

    def get_table(self, pure_name: str) -> Optional[Table]:
        """Find a table by name."""
        return self.get_object(ObjectKind.TABLES, pure_name)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FastSnapshotEntry:
    """Identity and fingerprint of one object, used only as a diff key."""
    object_id: str
    pure_name: str
    content_hash: Any = None
    table_row_count: Optional[int] = None


@dataclass(frozen=True)
class FastSnapshot:
    """Result of a fast snapshot, partitioned like DatabaseStructure."""
    tables: Tuple[FastSnapshotEntry, ...] = ()
    views: Tuple[FastSnapshotEntry, ...] = ()
    procedures: Tuple[FastSnapshotEntry, ...] = ()
    functions: Tuple[FastSnapshotEntry, ...] = ()

    def entries(self, kind: ObjectKind) -> Tuple[FastSnapshotEntry, ...]:
        """Get the entries of one kind."""
        return getattr(self, ObjectKind(kind).value)

    def content_hashes(self, kind: ObjectKind) -> Dict[str, Any]:
        """Map object id to content hash for one kind."""
        return {entry.object_id: entry.content_hash for entry in self.entries(kind)}

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
