from collections.abc import Sized
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Type
from uuid import UUID

from rowmapper.shared_exceptions import InvalidArgumentError, NullReferenceError


def _repr_str(value: Any) -> str:
    """
    Return a string wrapped in single quotes, or the literal 'None' if value
    is None.
    """
    return "None" if value is None else f"'{value}'"


def format_type_error(name: str, value: Any, expected: type | tuple[type, ...]) -> str:
    """Return a standardized type error message."""
    if isinstance(expected, tuple):
        expected_names = ", ".join(t.__name__ for t in expected)
    else:
        expected_names = expected.__name__
    return f"{name} must be {expected_names}, got {type(value).__name__}"


def assert_type(
    name: str,
    value: Any,
    expected: type | tuple[type, ...],
    exc_type: type[Exception] = TypeError,
) -> None:
    """Raise an exception if ``value`` is not an instance of ``expected``."""
    if not isinstance(value, expected):
        raise exc_type(format_type_error(name, value, expected))


def normalize_enum(candidate: Any, enum_cls: Type[Enum]) -> str:
    """Return the normalized ``enum_cls`` value for ``candidate``.

    Args:
        candidate: A string or Enum instance to normalize.
        enum_cls: The Enum class to normalize against.

    Returns:
        str: The ``.value`` of the matching Enum member.

    Raises:
        ValueError: If ``candidate`` is not valid for ``enum_cls``.
    """
    if isinstance(candidate, enum_cls):
        return str(candidate.value)
    if isinstance(candidate, str):
        try:
            return str(enum_cls(candidate.strip().upper()).value)
        except ValueError as exc:
            options = ", ".join(e.value for e in enum_cls)
            raise ValueError(
                f"{enum_cls.__name__} must be one of: {options}\n" f"Got: {candidate}"
            ) from exc
    raise ValueError(
        f"{enum_cls.__name__} must be a str or {enum_cls.__name__} instance"
    )


# ============================================================================
# Guard clauses
# ============================================================================


def is_null(value: Any) -> bool:
    return value is None


def is_not_null(value: Any) -> bool:
    return value is not None


def is_empty(value: Any) -> bool:
    """
    Return True if ``value`` holds nothing.

    Strings are compared after trimming whitespace, anything else sized by
    its length (a ``Table`` reports its row count).

    Raises:
        NullReferenceError: If ``value`` is None.
        TypeError: If ``value`` is neither a string nor sized.
    """
    assert_parameter_not_null(value, "The collection cannot be null.", "value")
    if isinstance(value, str):
        return len(value.strip()) == 0
    if isinstance(value, Sized):
        return len(value) == 0
    raise TypeError(format_type_error("value", value, (str, Sized)))


def is_not_empty(value: Any) -> bool:
    return not is_empty(value)


def is_null_or_empty(value: Optional[str]) -> bool:
    return value is None or is_empty(value)


def assert_parameter_not_null(value: Any, message: str, name: str) -> None:
    """Raise ``NullReferenceError`` if ``value`` is None."""
    if value is None:
        raise NullReferenceError(f"{message} (parameter '{name}')", name)


def assert_parameter_not_empty(value: Any, message: str, name: str) -> None:
    """
    Raise ``NullReferenceError`` if ``value`` is None and
    ``InvalidArgumentError`` if it is empty.
    """
    assert_parameter_not_null(value, message, name)
    if is_empty(value):
        raise InvalidArgumentError(f"{message} (parameter '{name}')", name)


def assert_equals(
    value: Any,
    expected: Any,
    message: Optional[str] = None,
    exc_type: type[Exception] = InvalidArgumentError,
) -> None:
    """Raise ``exc_type`` if ``value`` does not equal ``expected``."""
    if value != expected:
        if is_null_or_empty(message):
            message = f"{value} does not equal expected value of {expected}"
        raise exc_type(message)


# Zero values for the types whose default is not simply ``None``.
_DEFAULT_VALUES = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    Decimal: Decimal(0),
    str: "",
    bytes: b"",
    datetime: datetime.min,
    date: date.min,
    time: time.min,
    UUID: UUID(int=0),
}


def is_default(value: Any) -> bool:
    """
    Return True if ``value`` equals the zero value of its own type.

    ``None`` is the default of every other type.
    """
    if value is None:
        return True
    value_type = type(value)
    if value_type not in _DEFAULT_VALUES:
        return False
    return value == _DEFAULT_VALUES[value_type]


def is_not_default(value: Any) -> bool:
    return not is_default(value)


def is_null_or_default(value: Any) -> bool:
    return is_null(value) or is_default(value)


def is_not_null_or_default(value: Any) -> bool:
    return not is_null_or_default(value)
