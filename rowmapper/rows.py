"""
Build table rows from arbitrary objects.

``as_row`` derives one candidate column per readable property of an object,
reconciles the candidates into the table's columns and fills a new row from
the object's values. Population is best-effort: a value that cannot be
converted or written leaves its cell unset instead of failing the row.
"""

import logging
from typing import Any, Dict, List, Mapping

from rowmapper.conversion import try_convert
from rowmapper.entities.column import ColumnDescriptor
from rowmapper.entities.table import Row, Table
from rowmapper.entities.util import assert_parameter_not_null, is_empty
from rowmapper.reflection import get_properties
from rowmapper.shared_exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


def make_columns(source: Any) -> List[ColumnDescriptor]:
    """
    Return one candidate column per readable property of ``source``.

    Read-only properties produce read-only columns.

    Raises:
        NullReferenceError: If ``source`` is None.
    """
    assert_parameter_not_null(
        source, "Cannot make columns from a null source.", "source"
    )
    return [
        ColumnDescriptor(
            name=prop.name,
            data_type=prop.data_type,
            read_only=not prop.can_write,
        )
        for prop in get_properties(source)
        if prop.can_read
    ]


def _write_cell(row: Row, column: ColumnDescriptor, value: Any) -> None:
    was_read_only = column.read_only
    column.read_only = False
    try:
        row[column] = value
    finally:
        column.read_only = was_read_only


def populate_row(
    row: Row,
    source: Any,
    mapping: Mapping[ColumnDescriptor, ColumnDescriptor],
) -> None:
    """
    Copy values from ``source`` into ``row``.

    Iterates the candidates in ``mapping`` (in insertion order) and writes
    each candidate's property value into the column it was reconciled to.
    Read-only destination columns are unlocked for the single write.

    Raises:
        NullReferenceError: If any argument is None.
        InvalidArgumentError: If ``mapping`` is empty.
    """
    assert_parameter_not_null(row, "Cannot populate a null row.", "row")
    assert_parameter_not_null(
        source, "Cannot add values to a row from a null source.", "source"
    )
    assert_parameter_not_null(mapping, "The column mapping is null.", "mapping")
    if is_empty(mapping):
        raise InvalidArgumentError("The column mapping is empty.", "mapping")

    suppress = row.table.config.suppress_conversion_errors
    for candidate, column in mapping.items():
        try:
            value = getattr(source, candidate.name)
            _write_cell(row, column, try_convert(value, column.data_type).unwrap())
        except Exception as exc:  # pylint: disable=broad-except
            if not suppress:
                raise
            logger.debug(
                "Left column %s unset for %s: %s",
                column.name,
                type(source).__name__,
                exc,
            )


def as_row(source: Any, table: Table) -> Row:
    """
    Add a row for ``source`` to ``table`` and return it.

    Columns for properties the table does not have yet are added first, see
    ``rowmapper.reconciler.reconcile``.

    Raises:
        NullReferenceError: If ``source`` or ``table`` is None.
        InvalidArgumentError: If no columns can be derived from ``source``.
    """
    assert_parameter_not_null(
        source, "Cannot convert a null source to a row.", "source"
    )
    assert_parameter_not_null(table, "Cannot add a row to a null table.", "table")

    columns = make_columns(source)
    if not columns:
        raise InvalidArgumentError(
            f"No columns could be derived from {type(source).__name__}.", "source"
        )

    mapping: Dict[ColumnDescriptor, ColumnDescriptor] = table.add_columns(columns)
    row = table.new_row()
    populate_row(row, source, mapping)
    return table.add_row(row)
