from dataclasses import dataclass
from typing import Optional

from rowmapper.entities.util import _repr_str, assert_type


@dataclass(eq=False)
class ColumnDescriptor:
    """
    Describes one column of a ``Table``.

    Descriptors compare and hash by identity. The reconciler keys its
    candidate-to-column mapping on them, and two candidates with the same
    name taken from different objects are still different columns.

    Attributes:
        name (str): Column name, unique within its owning table.
        data_type (type): Python type stored in the column.
        read_only (bool): Whether the column rejects writes.
        caption (Optional[str]): Display caption. Set to the originating
            property name when the column was renamed on a type collision.
        expression (Optional[str]): Computed-column expression, carried
            through unchanged.
        renamed_from (Optional[str]): Name of the candidate column this column
            was created for when the reconciler renamed it on a type
            collision. None for columns added any other way.
    """

    name: str
    data_type: type
    read_only: bool = False
    caption: Optional[str] = None
    expression: Optional[str] = None
    renamed_from: Optional[str] = None

    def __post_init__(self) -> None:
        """Validates fields after dataclass initialization.

        Raises:
            ValueError: If any field is of an invalid type or value.
        """
        assert_type("name", self.name, str, ValueError)
        if not self.name.strip():
            raise ValueError("name must be a non-empty string")

        assert_type("data_type", self.data_type, type, ValueError)
        assert_type("read_only", self.read_only, bool, ValueError)

        if self.caption is not None:
            assert_type("caption", self.caption, str, ValueError)
        if self.expression is not None:
            assert_type("expression", self.expression, str, ValueError)
        if self.renamed_from is not None:
            assert_type("renamed_from", self.renamed_from, str, ValueError)

    @property
    def display_name(self) -> str:
        """The caption if one is set, otherwise the column name."""
        return self.caption or self.name

    def __repr__(self) -> str:
        return (
            "ColumnDescriptor("
            f"name={_repr_str(self.name)}, "
            f"data_type={self.data_type.__name__}, "
            f"read_only={self.read_only}, "
            f"caption={_repr_str(self.caption)}, "
            f"expression={_repr_str(self.expression)}, "
            f"renamed_from={_repr_str(self.renamed_from)}"
            ")"
        )
