from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

from rowmapper.config import RowMapperConfig
from rowmapper.constants import DB_NULL
from rowmapper.entities.column import ColumnDescriptor
from rowmapper.entities.util import (
    _repr_str,
    assert_parameter_not_null,
    assert_type,
    format_type_error,
)
from rowmapper.reconciler import reconcile
from rowmapper.shared_exceptions import (
    ConversionFailure,
    InvalidArgumentError,
    ReadOnlyColumnError,
)

ColumnKey = Union[ColumnDescriptor, str]


def _accepts(column: ColumnDescriptor, value: Any) -> bool:
    if value is None or value is DB_NULL:
        return True
    # bool is an int subclass but never belongs in an int column
    if isinstance(value, bool) and column.data_type is int:
        return False
    return isinstance(value, column.data_type)


class Row:
    """
    One row of a ``Table``.

    Cells hold ``DB_NULL`` until written. A row reads the table's column list
    on every access, so columns added after the row was created show up as
    unset cells.
    """

    def __init__(self, table: "Table"):
        assert_parameter_not_null(
            table, "Cannot create a row for a null table.", "table"
        )
        self.table = table
        self._values: Dict[str, Any] = {}

    def __getitem__(self, key: ColumnKey) -> Any:
        column = self.table.column(key)
        return self._values.get(column.name, DB_NULL)

    def __setitem__(self, key: ColumnKey, value: Any) -> None:
        """Write a cell.

        Raises:
            KeyError: If the column is not part of the table.
            ReadOnlyColumnError: If the column is read-only.
            ConversionFailure: If ``value`` does not fit the column's type.
        """
        column = self.table.column(key)
        if column.read_only:
            raise ReadOnlyColumnError(f"Column '{column.name}' is read only.")
        if not _accepts(column, value):
            raise ConversionFailure(
                format_type_error(column.name, value, column.data_type)
            )
        self._values[column.name] = value

    def is_null(self, key: ColumnKey) -> bool:
        value = self[key]
        return value is None or value is DB_NULL

    def to_dict(self) -> Dict[str, Any]:
        return {column.name: self[column] for column in self.table.columns}

    def __repr__(self) -> str:
        return f"Row({self.to_dict()!r})"


class Table:
    """
    An ordered set of uniquely named columns plus the rows written to them.

    Attributes:
        name (Optional[str]): Table name, informational only.
        columns (List[ColumnDescriptor]): Columns in display order.
        rows (List[Row]): Rows added with ``add_row``.
        config (RowMapperConfig): Reconciliation and population settings.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        columns: Optional[Sequence[ColumnDescriptor]] = None,
        config: Optional[RowMapperConfig] = None,
    ):
        self.name = name
        self.config = config if config is not None else RowMapperConfig()
        self.columns: List[ColumnDescriptor] = []
        self.rows: List[Row] = []
        for column in columns or []:
            self.add_column(column)

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def column(self, key: ColumnKey) -> ColumnDescriptor:
        """Return the column for a descriptor or name.

        Raises:
            KeyError: If no such column belongs to this table.
        """
        if isinstance(key, ColumnDescriptor):
            if any(column is key for column in self.columns):
                return key
            raise KeyError(f"Column '{key.name}' does not belong to this table")
        for column in self.columns:
            if column.name == key:
                return column
        raise KeyError(f"Column {_repr_str(key)} does not belong to this table")

    def add_column(self, column: ColumnDescriptor) -> ColumnDescriptor:
        """Append ``column``.

        Raises:
            InvalidArgumentError: If a column with the same name exists.
        """
        assert_parameter_not_null(column, "Cannot add a null column.", "column")
        assert_type("column", column, ColumnDescriptor)
        if column.name in self.column_names:
            raise InvalidArgumentError(
                f"A column named '{column.name}' already exists.", "column"
            )
        self.columns.append(column)
        return column

    def add_columns(
        self, candidates: Sequence[ColumnDescriptor]
    ) -> Dict[ColumnDescriptor, ColumnDescriptor]:
        """Reconcile ``candidates`` into this table's columns.

        See ``rowmapper.reconciler.reconcile``.
        """
        return reconcile(self.columns, candidates, self.config.column_match)

    def new_row(self) -> Row:
        """Create an empty row that is not yet part of the table."""
        return Row(self)

    def add_row(self, row: Row) -> Row:
        assert_parameter_not_null(row, "Cannot add a null row.", "row")
        if row.table is not self:
            raise InvalidArgumentError("The row belongs to a different table.", "row")
        self.rows.append(row)
        return row

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __repr__(self) -> str:
        return (
            "Table("
            f"name={_repr_str(self.name)}, "
            f"columns={self.column_names}, "
            f"rows={len(self.rows)}"
            ")"
        )
