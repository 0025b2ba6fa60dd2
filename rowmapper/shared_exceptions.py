"""Custom exceptions for rowmapper operations."""


class RowMapperError(Exception):
    """Base exception for all rowmapper errors."""


# Argument exceptions
class NullReferenceError(RowMapperError, ValueError):
    """Raised when a required argument is ``None``."""

    def __init__(self, message: str, name: str | None = None):
        super().__init__(message)
        self.name = name


class InvalidArgumentError(RowMapperError, ValueError):
    """
    Raised when an argument is present but unusable, such as an empty
    candidate column list or a name that is already taken.
    """

    def __init__(self, message: str, name: str | None = None):
        super().__init__(message)
        self.name = name


# Value exceptions
class ConversionFailure(RowMapperError, ValueError):
    """
    Raised when a value cannot be converted to, or stored in, a column's
    data type.

    Row population catches this per column and leaves the cell unset.
    """


class ReadOnlyColumnError(RowMapperError):
    """Raised when writing to a column that is marked read-only."""
