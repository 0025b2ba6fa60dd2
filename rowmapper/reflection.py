"""
Introspection helpers: property discovery, attribute access, instantiation
and property copying between unrelated objects.

A *property* here is any public, readable attribute of an object: dataclass
fields, public instance attributes, and ``property`` descriptors on the
class, in that order. Names starting with an underscore are skipped.
"""

import dataclasses
import inspect
import logging
import types
import typing
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union

from rowmapper.conversion import try_convert
from rowmapper.entities.util import (
    assert_equals,
    assert_parameter_not_empty,
    assert_parameter_not_null,
)
from rowmapper.shared_exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropertyInfo:
    """A readable attribute discovered on an object."""

    name: str
    data_type: type
    can_read: bool = True
    can_write: bool = True


def _checkable(cls: type) -> type:
    # Non-runtime Protocols and similar classes reject isinstance checks
    try:
        isinstance(None, cls)
    except TypeError:
        return object
    return cls


def _resolve_type(hint: Any) -> Optional[type]:
    """Reduce a type hint to a plain class, unwrapping ``Optional[X]``.

    ``Any`` resolves to ``object``. Returns None when the hint names no single
    class, so callers can fall back to the value's own type.
    """
    if hint is Any:
        return object
    if isinstance(hint, type):
        return _checkable(hint)
    origin = typing.get_origin(hint)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        if len(args) == 1:
            return _resolve_type(args[0])
        return None
    if isinstance(origin, type):
        return _checkable(origin)
    return None


def _type_hints(obj: Any) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(obj)
    except Exception:  # pylint: disable=broad-except
        # Unresolvable forward references; fall back to the raw annotations
        return dict(getattr(obj, "__annotations__", {}))


def _value_type(source: Any, name: str) -> type:
    try:
        value = getattr(source, name)
    except Exception:  # pylint: disable=broad-except
        return object
    return object if value is None else type(value)


def get_properties(source: Any) -> List[PropertyInfo]:
    """Return the public properties of ``source`` in declaration order.

    Raises:
        NullReferenceError: If ``source`` is None.
    """
    assert_parameter_not_null(
        source, "Cannot get properties of null object.", "source"
    )
    cls = type(source)
    result: List[PropertyInfo] = []
    seen = set()

    if dataclasses.is_dataclass(source) and not isinstance(source, type):
        hints = _type_hints(cls)
        frozen = cls.__dataclass_params__.frozen
        for field in dataclasses.fields(source):
            if field.name.startswith("_"):
                continue
            data_type = _resolve_type(hints.get(field.name, field.type))
            result.append(
                PropertyInfo(
                    name=field.name,
                    data_type=data_type or _value_type(source, field.name),
                    can_write=not frozen,
                )
            )
            seen.add(field.name)

    # Instance attributes keep the order __init__ assigned them in
    for name, value in getattr(source, "__dict__", {}).items():
        if name.startswith("_") or name in seen:
            continue
        if isinstance(getattr(cls, name, None), property):
            continue
        seen.add(name)
        result.append(
            PropertyInfo(
                name=name,
                data_type=object if value is None else type(value),
            )
        )

    for klass in cls.__mro__:
        for name, member in vars(klass).items():
            if name.startswith("_") or name in seen:
                continue
            if not isinstance(member, property):
                continue
            seen.add(name)
            data_type = None
            if member.fget is not None:
                data_type = _resolve_type(_type_hints(member.fget).get("return"))
            result.append(
                PropertyInfo(
                    name=name,
                    data_type=data_type or _value_type(source, name),
                    can_read=member.fget is not None,
                    can_write=member.fset is not None,
                )
            )

    return result


def get_property(source: Any, name: str) -> Optional[PropertyInfo]:
    """Return the named property of ``source``, or None if it has none.

    Raises:
        NullReferenceError: If ``source`` or ``name`` is None.
        InvalidArgumentError: If ``name`` is empty.
    """
    assert_parameter_not_null(
        source, "Cannot get properties of null object.", "source"
    )
    assert_parameter_not_empty(
        name, "Cannot get property when name is null or empty.", "name"
    )
    return next(
        (prop for prop in get_properties(source) if prop.name == name), None
    )


def get_value(source: Any, name: str) -> Any:
    """Return the value of the named property.

    Raises:
        InvalidArgumentError: If ``source`` has no readable property ``name``.
    """
    prop = get_property(source, name)
    if prop is None or not prop.can_read:
        raise InvalidArgumentError(
            f"{type(source).__name__} has no readable property '{name}'", "name"
        )
    return getattr(source, name)


def get_value_or_default(source: Any, name: str, default: Any = None) -> Any:
    prop = get_property(source, name)
    if prop is None or not prop.can_read:
        return default
    return getattr(source, name)


def create_instance(
    cls: type, *args: Any, expected_type: Optional[type] = None, **kwargs: Any
) -> Any:
    """
    Instantiate ``cls`` with the given arguments.

    Args:
        cls: The class to instantiate.
        *args: Positional constructor arguments.
        expected_type: If given, ``cls`` must be exactly this type.
        **kwargs: Keyword constructor arguments.

    Returns:
        A new instance of ``cls``.

    Raises:
        NullReferenceError: If ``cls`` is None.
        InvalidArgumentError: If ``cls`` is not ``expected_type`` or no
            constructor signature accepts the arguments, including arguments
            whose type contradicts the constructor's annotations.
    """
    assert_parameter_not_null(cls, "The type to instantiate is null.", "cls")
    if expected_type is not None:
        assert_equals(
            cls,
            expected_type,
            "The expected type must match the type instance.",
        )

    no_match = InvalidArgumentError(
        f"There are no constructors for {cls.__qualname__} that match the "
        "arguments provided.",
        "args",
    )
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        # Some builtins expose no signature; let the call decide
        signature = None

    if signature is not None:
        try:
            bound = signature.bind(*args, **kwargs)
        except TypeError as exc:
            raise no_match from exc
        hints = _type_hints(cls.__init__)
        for name, value in bound.arguments.items():
            parameter = signature.parameters[name]
            if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
                continue
            hint = _resolve_type(hints.get(name))
            if hint is not None and value is not None and not isinstance(value, hint):
                raise no_match

    return cls(*args, **kwargs)


def populate_into(source: Any, target: Any) -> None:
    """
    Copy every readable property of ``source`` onto the writable property of
    the same name on ``target``.

    Values are converted to the target property's type where possible and
    copied unchanged otherwise. A property that cannot be read or assigned is
    skipped.
    """
    assert_parameter_not_null(source, "Cannot populate from a null source.", "source")
    assert_parameter_not_null(target, "Cannot populate a null target.", "target")

    targets = {prop.name: prop for prop in get_properties(target)}
    for prop in get_properties(source):
        target_prop = targets.get(prop.name)
        if not prop.can_read or target_prop is None or not target_prop.can_write:
            continue
        try:
            value = getattr(source, prop.name)
            converted = try_convert(value, target_prop.data_type)
            if converted.ok:
                value = converted.value
            setattr(target, prop.name, value)
        except Exception as exc:  # pylint: disable=broad-except
            logger.debug("Skipped property %s: %s", prop.name, exc)


def property_name(getter: Union[property, Callable[..., Any]]) -> str:
    """
    Return the attribute name a getter reads.

    Accepts a ``property`` (``property_name(Person.age)``), a named function,
    or a lambda whose last attribute access is the property
    (``property_name(lambda: person.age)``).

    Raises:
        InvalidArgumentError: If no name can be determined.
    """
    assert_parameter_not_null(getter, "The getter cannot be null.", "getter")
    if isinstance(getter, property):
        getter = getter.fget
    name = getattr(getter, "__name__", None)
    if name == "<lambda>":
        names = getter.__code__.co_names
        name = names[-1] if names else None
    if not name:
        raise InvalidArgumentError(
            "The name of the member cannot be obtained.", "getter"
        )
    return name
