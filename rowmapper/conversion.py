"""
Coercion of loosely typed values into nullable Python values.

The ``to_nullable_*`` helpers never raise: ``None``, blank strings and
anything that cannot be converted all come back as ``None``. ``try_convert``
wraps the same rules for an arbitrary target type and reports failures as a
``ConversionResult`` instead of an exception.
"""

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Any, Callable, Dict, Optional, Tuple
from uuid import UUID

from dateutil import parser as date_parser

from rowmapper.constants import DB_NULL
from rowmapper.shared_exceptions import ConversionFailure

INT32_RANGE = (-(2**31), 2**31 - 1)
INT64_RANGE = (-(2**63), 2**63 - 1)

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


def _is_blank(source: Any) -> bool:
    return isinstance(source, str) and not source.strip()


def coalesce_db_null(value: Any, alternative: Any = None) -> Any:
    """Return ``alternative`` if ``value`` is ``DB_NULL``, else ``value``."""
    return alternative if value is DB_NULL else value


def to_nullable_datetime(source: Any) -> Optional[datetime]:
    """
    Convert ``source`` to a ``datetime``.

    Strings are parsed with ``dateutil``; missing date parts are filled from
    today. Dates become midnight of that day.
    """
    if source is None or _is_blank(source):
        return None
    if isinstance(source, datetime):
        return source
    if isinstance(source, date):
        return datetime.combine(source, time.min)
    if isinstance(source, str):
        try:
            return date_parser.parse(source.strip())
        except (ValueError, OverflowError):
            return None
    return None


def to_nullable_bool(source: Any) -> Optional[bool]:
    """Convert ``source`` to a ``bool``.

    Only "true" and "false" (any case) are accepted as strings. Numbers are
    true when non-zero.
    """
    if source is None or _is_blank(source):
        return None
    if isinstance(source, bool):
        return source
    if isinstance(source, str):
        lowered = source.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        return None
    if isinstance(source, (int, float, Decimal)):
        if isinstance(source, float) and math.isnan(source):
            return None
        return source != 0
    return None


def to_nullable_uuid(source: Any) -> Optional[UUID]:
    if source is None or _is_blank(source):
        return None
    if isinstance(source, UUID):
        return source
    if isinstance(source, str):
        try:
            return UUID(source.strip())
        except ValueError:
            return None
    return None


def to_nullable_decimal(source: Any) -> Optional[Decimal]:
    if source is None or _is_blank(source):
        return None
    if isinstance(source, bool):
        return Decimal(int(source))
    if not isinstance(source, (int, float, str, Decimal)):
        return None
    try:
        result = Decimal(str(source).strip())
    except InvalidOperation:
        return None
    return result if result.is_finite() else None


def to_nullable_float(source: Any) -> Optional[float]:
    if source is None or _is_blank(source):
        return None
    if isinstance(source, (bool, int, float, Decimal)):
        return float(source)
    if isinstance(source, str):
        try:
            return float(source.strip())
        except ValueError:
            return None
    return None


def _to_nullable_integer(
    source: Any, bounds: Optional[Tuple[int, int]]
) -> Optional[int]:
    if source is None or _is_blank(source):
        return None
    if isinstance(source, bool):
        result = int(source)
    elif isinstance(source, int):
        result = source
    elif isinstance(source, float):
        if not math.isfinite(source):
            return None
        # round() on a float rounds half to even
        result = round(source)
    elif isinstance(source, Decimal):
        if not source.is_finite():
            return None
        result = int(source.to_integral_value(rounding=ROUND_HALF_EVEN))
    elif isinstance(source, str):
        text = source.strip()
        if not _INTEGER_PATTERN.match(text):
            return None
        result = int(text)
    else:
        return None

    if bounds is not None and not bounds[0] <= result <= bounds[1]:
        return None
    return result


def to_nullable_int32(source: Any) -> Optional[int]:
    """Convert ``source`` to an int in the signed 32-bit range."""
    return _to_nullable_integer(source, INT32_RANGE)


def to_nullable_int64(source: Any) -> Optional[int]:
    """Convert ``source`` to an int in the signed 64-bit range."""
    return _to_nullable_integer(source, INT64_RANGE)


def _to_nullable_date(source: Any) -> Optional[date]:
    result = to_nullable_datetime(source)
    return result.date() if result is not None else None


_CONVERTERS: Dict[type, Callable[[Any], Any]] = {
    bool: to_nullable_bool,
    int: lambda source: _to_nullable_integer(source, None),
    float: to_nullable_float,
    Decimal: to_nullable_decimal,
    str: str,
    UUID: to_nullable_uuid,
    datetime: to_nullable_datetime,
    date: _to_nullable_date,
}


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of ``try_convert``: either a value or the failure."""

    value: Any = None
    error: Optional[ConversionFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the converted value or raise the failure."""
        if self.error is not None:
            raise self.error
        return self.value


def try_convert(value: Any, target_type: type) -> ConversionResult:
    """
    Convert ``value`` to ``target_type`` without raising.

    ``None`` and ``DB_NULL`` pass through unchanged, as do values that are
    already instances of ``target_type``. Known types use the nullable
    helpers above; any other type is called with ``value`` as its only
    argument.
    """
    if not isinstance(target_type, type):
        return ConversionResult(
            error=ConversionFailure(
                f"target_type must be a type, got {type(target_type).__name__}"
            )
        )
    if value is None or value is DB_NULL or target_type is object:
        return ConversionResult(value=value)
    if isinstance(value, target_type) and not (
        isinstance(value, bool) and target_type is int
    ):
        return ConversionResult(value=value)

    converter = _CONVERTERS.get(target_type)
    if converter is not None:
        converted = converter(value)
        if converted is None:
            return ConversionResult(
                error=ConversionFailure(
                    f"Cannot convert {value!r} to {target_type.__name__}"
                )
            )
        return ConversionResult(value=converted)

    try:
        return ConversionResult(value=target_type(value))
    except Exception as exc:  # pylint: disable=broad-except
        failure = ConversionFailure(
            f"Cannot convert {value!r} to {target_type.__name__}: {exc}"
        )
        failure.__cause__ = exc
        return ConversionResult(error=failure)
