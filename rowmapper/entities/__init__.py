"""
Entity classes for the rowmapper package.
"""

from rowmapper.entities.column import ColumnDescriptor  # noqa: F401
from rowmapper.entities.table import Row, Table  # noqa: F401

__all__ = [
    "ColumnDescriptor",
    "Row",
    "Table",
]
