"""Schema analyser: full analysis, fast snapshot and single-object analysis.

A full analysis loads every catalog section with one query each and joins the
rows in memory by object name. A fast snapshot only loads names and
modification fingerprints so callers can tell which objects changed since a
previous run and re-analyse just those with ``analyse_object``.
"""

import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..errors import ObjectNotFoundError
from .base import AnalyserDialect, CatalogConnection
from .gateway import ObjectFilter, QueryGateway
from .keys import extract_foreign_keys, extract_primary_key
from .models import (
    Column,
    ColumnReference,
    DatabaseStructure,
    FastSnapshot,
    FastSnapshotEntry,
    Function,
    Index,
    Key,
    ObjectKind,
    Procedure,
    SchemaObject,
    Table,
    View,
)
from .normalizer import content_hash, get_column_info
from .progress import ProgressSink
from .rows import (
    ColumnRow,
    ForeignKeyRow,
    IndexRow,
    PrimaryKeyRow,
    ProgrammableRow,
    RoutineStatusRow,
    TableModificationRow,
    TableRow,
    UniqueNameRow,
    ViewRow,
    ViewTextRow,
)

logger = logging.getLogger(__name__)


def _group_index_rows(
    table_name: str,
    index_rows: Sequence[IndexRow],
    unique_names: Set[str],
    unique: bool,
) -> Dict[str, List[IndexRow]]:
    """Group the index rows of a table by constraint name.

    ``unique`` selects the indexes backing a unique constraint; otherwise the
    plain indexes are selected. Groups keep the order of their first row and
    columns keep row order.
    """
    grouped: Dict[str, List[IndexRow]] = {}
    for row in index_rows:
        if row.table_name != table_name:
            continue
        if (row.constraint_name in unique_names) != unique:
            continue
        grouped.setdefault(row.constraint_name, []).append(row)
    return grouped


def _column_refs(rows: Sequence[IndexRow]) -> Tuple[ColumnReference, ...]:
    return tuple(ColumnReference(column_name=row.column_name) for row in rows)


class SchemaAnalyser:
    """Analyses one database through a connection and an engine dialect.

    Example usage:
        async with MySqlConnection(database="shop") as connection:
            analyser = SchemaAnalyser(connection, MySqlDialect(), "shop")
            structure = await analyser.run_full_analysis()
            snapshot = await analyser.get_fast_snapshot()
    """

    def __init__(
        self,
        connection: CatalogConnection,
        dialect: AnalyserDialect,
        database_name: str,
        progress: Optional[ProgressSink] = None,
    ):
        self.connection = connection
        self.dialect = dialect
        self.database_name = database_name
        self.progress = progress

    def _gateway(self, object_filter: Optional[ObjectFilter] = None) -> QueryGateway:
        return QueryGateway(
            self.connection,
            self.dialect.queries,
            self.database_name,
            progress=self.progress,
            object_filter=object_filter,
        )

    async def run_full_analysis(self) -> DatabaseStructure:
        """Load the complete structure of the database."""
        structure = await self._run_analysis(self._gateway())
        logger.info(
            "Analysed %s: %d tables, %d views, %d procedures, %d functions",
            self.database_name,
            len(structure.tables),
            len(structure.views),
            len(structure.procedures),
            len(structure.functions),
        )
        return structure

    async def analyse_object(self, kind: ObjectKind, pure_name: str) -> SchemaObject:
        """Load the complete structure of one object.

        Raises:
            ObjectNotFoundError: If the database has no such object
        """
        kind = ObjectKind(kind)
        gateway = self._gateway(ObjectFilter(kind=kind, pure_name=pure_name))
        structure = await self._run_analysis(gateway)
        obj = structure.get_object(kind, pure_name)
        if obj is None:
            raise ObjectNotFoundError(kind.value, pure_name)
        return obj

    async def _run_analysis(self, gateway: QueryGateway) -> DatabaseStructure:
        tables = await gateway.query("tables", TableRow, "Loading tables")
        columns = await gateway.query("columns", ColumnRow, "Loading columns")
        pk_rows = await gateway.safe_query("primaryKeys", PrimaryKeyRow, "Loading primary keys")
        fk_rows = await gateway.safe_query("foreignKeys", ForeignKeyRow, "Loading foreign keys")
        views = await gateway.safe_query("views", ViewRow, "Loading views")
        programmables = await gateway.query("programmables", ProgrammableRow, "Loading programmables")
        view_texts = await gateway.safe_query("viewTexts", ViewTextRow, "Loading view texts")
        index_rows = await gateway.safe_query("indexes", IndexRow, "Loading indexes")
        unique_rows = await gateway.safe_query("uniqueNames", UniqueNameRow, "Loading uniques")
        gateway.feedback("Finalizing DB structure")

        unique_names = {row.constraint_name for row in unique_rows}
        view_definitions = {row.pure_name: row.view_definition for row in view_texts}

        structure = DatabaseStructure(
            tables=tuple(
                self._build_table(table, columns, pk_rows, fk_rows, index_rows, unique_names)
                for table in tables
            ),
            views=tuple(self._build_view(view, columns, view_definitions) for view in views),
            procedures=tuple(
                self._build_procedure(row) for row in programmables if row.object_type == "PROCEDURE"
            ),
            functions=tuple(
                self._build_function(row) for row in programmables if row.object_type == "FUNCTION"
            ),
        )
        gateway.feedback(None)
        return structure

    def _columns_of(self, pure_name: str, columns: Sequence[ColumnRow]) -> Tuple[Column, ...]:
        classifier = self.dialect.type_classifier
        return tuple(get_column_info(row, classifier) for row in columns if row.pure_name == pure_name)

    def _build_table(
        self,
        table: TableRow,
        columns: Sequence[ColumnRow],
        pk_rows: Sequence[PrimaryKeyRow],
        fk_rows: Sequence[ForeignKeyRow],
        index_rows: Sequence[IndexRow],
        unique_names: Set[str],
    ) -> Table:
        indexes = _group_index_rows(table.pure_name, index_rows, unique_names, unique=False)
        uniques = _group_index_rows(table.pure_name, index_rows, unique_names, unique=True)
        return Table(
            object_id=table.pure_name,
            pure_name=table.pure_name,
            content_hash=content_hash(table.modify_date),
            columns=self._columns_of(table.pure_name, columns),
            primary_key=extract_primary_key(table.pure_name, pk_rows),
            foreign_keys=tuple(extract_foreign_keys(table.pure_name, fk_rows)),
            indexes=tuple(
                Index(
                    constraint_name=name,
                    index_type=rows[0].index_type,
                    is_unique=not rows[0].non_unique,
                    columns=_column_refs(rows),
                )
                for name, rows in indexes.items()
            ),
            uniques=tuple(
                Key(constraint_name=name, constraint_type="unique", columns=_column_refs(rows))
                for name, rows in uniques.items()
            ),
            table_row_count=table.table_row_count,
        )

    def _build_view(
        self,
        view: ViewRow,
        columns: Sequence[ColumnRow],
        view_definitions: Dict[str, Optional[str]],
    ) -> View:
        definition = view_definitions.get(view.pure_name)
        create_sql = None
        if definition is not None:
            create_sql = self.dialect.view_create_sql(view.pure_name, definition)
        return View(
            object_id=view.pure_name,
            pure_name=view.pure_name,
            content_hash=content_hash(view.modify_date),
            create_sql=create_sql,
            columns=self._columns_of(view.pure_name, columns),
            requires_format=True,
        )

    def _build_procedure(self, row: ProgrammableRow) -> Procedure:
        # routine bodies are NULL without privileges on the routine
        create_sql = None
        if row.routine_definition is not None:
            create_sql = self.dialect.procedure_create_sql(row.pure_name, row.routine_definition)
        return Procedure(
            object_id=row.pure_name,
            pure_name=row.pure_name,
            content_hash=content_hash(row.modify_date),
            create_sql=create_sql,
            routine_definition=row.routine_definition,
        )

    def _build_function(self, row: ProgrammableRow) -> Function:
        create_sql = None
        if row.routine_definition is not None:
            create_sql = self.dialect.function_create_sql(
                row.pure_name,
                row.return_data_type,
                row.is_deterministic == "YES",
                row.routine_definition,
            )
        return Function(
            object_id=row.pure_name,
            pure_name=row.pure_name,
            content_hash=content_hash(row.modify_date),
            create_sql=create_sql,
            routine_definition=row.routine_definition,
            return_data_type=row.return_data_type,
            is_deterministic=row.is_deterministic,
        )

    async def get_fast_snapshot(self) -> FastSnapshot:
        """Load only names and fingerprints of all objects."""
        gateway = self._gateway()
        modifications = await gateway.query("tableModifications", TableModificationRow)
        procedures = await gateway.query("procedureModifications", RoutineStatusRow)
        functions = await gateway.query("functionModifications", RoutineStatusRow)

        snapshot = FastSnapshot(
            tables=tuple(
                FastSnapshotEntry(
                    object_id=row.pure_name,
                    pure_name=row.pure_name,
                    content_hash=content_hash(row.modify_date),
                    table_row_count=row.table_row_count,
                )
                for row in modifications if row.object_type == "BASE TABLE"
            ),
            views=tuple(
                FastSnapshotEntry(
                    object_id=row.pure_name,
                    pure_name=row.pure_name,
                    content_hash=content_hash(row.modify_date),
                )
                for row in modifications if row.object_type == "VIEW"
            ),
            procedures=tuple(_routine_entry(row) for row in procedures),
            functions=tuple(_routine_entry(row) for row in functions),
        )
        logger.debug(
            "Fast snapshot of %s: %d tables, %d views, %d procedures, %d functions",
            self.database_name,
            len(snapshot.tables),
            len(snapshot.views),
            len(snapshot.procedures),
            len(snapshot.functions),
        )
        return snapshot


def _routine_entry(row: RoutineStatusRow) -> FastSnapshotEntry:
    return FastSnapshotEntry(
        object_id=row.name,
        pure_name=row.name,
        content_hash=content_hash(row.modified),
    )
