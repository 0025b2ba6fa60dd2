"""
This module defines the enums shared by the reconciler, the table entities
and configuration.
"""

from enum import Enum


class ColumnMatchMode(str, Enum):
    """How a candidate column name is compared with existing column names."""

    PREFIX = "PREFIX"  # Existing name starts with the candidate name
    EXACT = "EXACT"  # Names are equal


class _DBNullType:
    """Type of ``DB_NULL``, the marker for a cell that was never written."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "DB_NULL"


DB_NULL = _DBNullType()
