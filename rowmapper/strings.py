"""String formatting, matching and encoding helpers."""

import logging
import re
from enum import Enum
from io import StringIO
from typing import Any, Iterable, List, Optional, Type, TypeVar

from rowmapper.entities.util import (
    assert_parameter_not_empty,
    assert_parameter_not_null,
    is_null_or_empty,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


def format_string(source: str, *args: Any, **kwargs: Any) -> str:
    """``str.format`` that rejects a None format string."""
    assert_parameter_not_null(
        source, "Cannot use null string as a format expression.", "source"
    )
    return source.format(*args, **kwargs)


def append_format(source: Optional[str], fmt: str, *args: Any, **kwargs: Any) -> str:
    """Return ``source`` (None counts as "") followed by the formatted ``fmt``."""
    assert_parameter_not_empty(
        fmt, "Cannot perform formatting of null or empty string.", "fmt"
    )
    return (source or "") + format_string(fmt, *args, **kwargs)


def is_in(source: Optional[str], strings: Iterable[str]) -> bool:
    assert_parameter_not_null(strings, "The string array cannot be null.", "strings")
    return any(current == source for current in strings)


def to_console(source: str, *args: Any, **kwargs: Any) -> str:
    """Print ``source`` (formatted when arguments are given) and return it."""
    result = format_string(source, *args, **kwargs) if args or kwargs else source
    print(result)
    return result


def to_debug(source: str, *args: Any, **kwargs: Any) -> str:
    """Log ``source`` at DEBUG (formatted when arguments are given) and return it."""
    result = format_string(source, *args, **kwargs) if args or kwargs else source
    logger.debug(result)
    return result


def repeat_to_debug(char: str, count: int) -> str:
    """Log ``char`` repeated ``count`` times, e.g. a separator line."""
    return to_debug(char * count)


def as_string_builder(source: Optional[str]) -> StringIO:
    """Return a ``StringIO`` positioned after ``source`` for appending."""
    builder = StringIO()
    builder.write(source or "")
    return builder


def matches(source: str, pattern: str) -> List[re.Match]:
    return list(re.finditer(pattern, source))


def match(source: str, pattern: str) -> Optional[re.Match]:
    """Return the first match of ``pattern`` anywhere in ``source``."""
    return re.search(pattern, source)


def to_ascii_bytes(source: str) -> bytes:
    """Encode ``source`` as ASCII, replacing other characters with ``?``."""
    return source.encode("ascii", errors="replace")


def to_byte_array(source: str, encoding: str = "utf-8") -> bytes:
    return source.encode(encoding)


def null_if_empty(source: Optional[str]) -> Optional[str]:
    return None if is_null_or_empty(source) else source


def parse_enum(source: str, enum_cls: Type[E]) -> E:
    """
    Return the member of ``enum_cls`` named ``source``, falling back to the
    member whose value is ``source``.

    Raises:
        ValueError: If ``source`` names no member.
    """
    assert_parameter_not_null(source, "Cannot parse a null string.", "source")
    try:
        return enum_cls[source]
    except KeyError:
        pass
    try:
        return enum_cls(source)
    except ValueError as exc:
        options = ", ".join(member.name for member in enum_cls)
        raise ValueError(
            f"{enum_cls.__name__} must be one of: {options}\nGot: {source}"
        ) from exc


def equals_ignore_case(source: Optional[str], target: Optional[str]) -> bool:
    if source is None or target is None:
        return source is None and target is None
    return source.casefold() == target.casefold()
