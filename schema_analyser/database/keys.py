"""Primary and foreign key extraction from key-column rows."""

from typing import Dict, List, Optional, Sequence

from .models import ColumnReference, ForeignKey, Key
from .rows import ForeignKeyRow, PrimaryKeyRow


def extract_primary_key(pure_name: str, pk_rows: Sequence[PrimaryKeyRow]) -> Optional[Key]:
    """Build the primary key of a table from the primary key rows.

    Args:
        pure_name: Table name
        pk_rows: All primary key rows of the database, in key column order

    Returns:
        The primary key, or None when the table has no primary key rows
    """
    matching = [row for row in pk_rows if row.pure_name == pure_name]
    if not matching:
        return None
    return Key(
        constraint_name=matching[0].constraint_name,
        constraint_type="primaryKey",
        columns=tuple(ColumnReference(column_name=row.column_name) for row in matching),
    )


def extract_foreign_keys(pure_name: str, fk_rows: Sequence[ForeignKeyRow]) -> List[ForeignKey]:
    """Group foreign key rows of a table by constraint name.

    Constraints keep the order of their first row; columns keep row order.
    """
    grouped: Dict[str, List[ForeignKeyRow]] = {}
    for row in fk_rows:
        if row.pure_name == pure_name:
            grouped.setdefault(row.constraint_name, []).append(row)

    foreign_keys = []
    for constraint_name, rows in grouped.items():
        first = rows[0]
        foreign_keys.append(ForeignKey(
            constraint_name=constraint_name,
            pure_name=first.pure_name,
            ref_table_name=first.ref_table_name,
            update_action=first.update_action,
            delete_action=first.delete_action,
            columns=tuple(
                ColumnReference(column_name=row.column_name, ref_column_name=row.ref_column_name)
                for row in rows
            ),
        ))
    return foreign_keys
