"""Conversion of raw catalog rows into model values."""

from datetime import date
from typing import Any, Set

from .models import Column
from .rows import ColumnRow
from .type_mappers import TypeClassifier


def content_hash(modify_date: Any) -> Any:
    """Normalize a modification timestamp into a comparable fingerprint.

    Dates are rendered as ISO-8601 strings; anything else is an opaque token
    from the server and is returned unchanged.
    """
    if isinstance(modify_date, date):
        return modify_date.isoformat()
    return modify_date


def _column_type_tokens(column_type: Any) -> Set[str]:
    if not isinstance(column_type, str):
        return set()
    return {token.strip().lower() for token in column_type.split()}


def _full_data_type(row: ColumnRow, classifier: TypeClassifier) -> str:
    data_type = row.data_type
    if row.char_max_length and classifier.is_string_family(data_type):
        return f"{data_type}({row.char_max_length})"
    if row.numeric_precision and row.numeric_scale and classifier.is_numeric_family(data_type):
        return f"{data_type}({row.numeric_precision},{row.numeric_scale})"
    return data_type


def _is_not_null(is_nullable: Any) -> bool:
    if not is_nullable:
        return True
    return isinstance(is_nullable, str) and is_nullable.lower() == "no"


def get_column_info(row: ColumnRow, classifier: TypeClassifier) -> Column:
    """Build a Column from one row of the columns query.

    Missing metadata never raises: an absent length or precision just skips
    the parenthesised suffix, and absent flags read as false.
    """
    tokens = _column_type_tokens(row.column_type)
    return Column(
        column_name=row.column_name,
        data_type=_full_data_type(row, classifier),
        not_null=_is_not_null(row.is_nullable),
        auto_increment=bool(row.extra and "auto_increment" in row.extra.lower()),
        default_value=row.default_value,
        column_comment=row.column_comment,
        is_unsigned="unsigned" in tokens,
        is_zerofill="zerofill" in tokens,
    )
