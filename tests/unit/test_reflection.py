from dataclasses import dataclass
from typing import Any, List, Optional

import pytest

from rowmapper import (
    InvalidArgumentError,
    NullReferenceError,
    PropertyInfo,
    create_instance,
    get_properties,
    get_property,
    get_value,
    get_value_or_default,
    populate_into,
    property_name,
)


@dataclass
class Order:
    order_id: int
    total: float
    notes: Optional[str] = None
    tags: List[str] = None


@dataclass(frozen=True)
class FrozenOrder:
    order_id: int


class OrderView:
    def __init__(self, order_id=None, total=None, status=None):
        self.order_id = order_id
        self.total = total
        self.status = status
        self._secret = "hidden"

    @property
    def summary(self) -> str:
        return f"{self.order_id}: {self.total}"


@dataclass
class Envelope:
    body: Any
    sender: "UnknownSender" = None  # noqa: F821


class Settable:
    def __init__(self):
        self._level = 0

    @property
    def level(self) -> int:
        return self._level

    @level.setter
    def level(self, value):
        self._level = value


class Broken:
    def __init__(self):
        self.order_id = "1"

    @property
    def total(self) -> float:
        raise RuntimeError("cannot read total")


class TestGetProperties:
    """Test cases for property discovery."""

    @pytest.mark.unit
    def test_dataclass_fields(self):
        props = get_properties(Order(1, 9.5))
        assert props == [
            PropertyInfo("order_id", int),
            PropertyInfo("total", float),
            PropertyInfo("notes", str),
            PropertyInfo("tags", list),
        ]

    @pytest.mark.unit
    def test_frozen_dataclass_fields_are_not_writable(self):
        assert get_properties(FrozenOrder(1)) == [
            PropertyInfo("order_id", int, can_write=False)
        ]

    @pytest.mark.unit
    def test_plain_object_attributes_then_properties(self):
        props = get_properties(OrderView(1, 2.0))
        assert [p.name for p in props] == ["order_id", "total", "status", "summary"]
        summary = props[3]
        assert summary.data_type is str
        assert summary.can_write is False
        # None values give no type information
        assert props[2].data_type is object

    @pytest.mark.unit
    def test_any_and_unresolved_hints(self):
        props = get_properties(Envelope({"k": 1}, "ops"))
        assert props == [
            PropertyInfo("body", object),
            PropertyInfo("sender", str),
        ]
        # Unset values with unresolvable hints carry no type information
        assert get_property(Envelope(1), "sender").data_type is object

    @pytest.mark.unit
    def test_property_with_setter_is_writable(self):
        assert get_property(Settable(), "level") == PropertyInfo("level", int)

    @pytest.mark.unit
    def test_null_source_raises(self):
        with pytest.raises(NullReferenceError, match="source"):
            get_properties(None)


class TestGetValue:
    """Test cases for attribute access helpers."""

    @pytest.mark.unit
    def test_get_property_missing_returns_none(self):
        assert get_property(OrderView(), "missing") is None

    @pytest.mark.unit
    def test_get_property_argument_guards(self):
        with pytest.raises(NullReferenceError):
            get_property(None, "order_id")
        with pytest.raises(NullReferenceError):
            get_property(OrderView(), None)
        with pytest.raises(InvalidArgumentError):
            get_property(OrderView(), " ")

    @pytest.mark.unit
    def test_get_value(self):
        assert get_value(OrderView(7, 1.5), "summary") == "7: 1.5"
        with pytest.raises(
            InvalidArgumentError, match="no readable property 'missing'"
        ):
            get_value(OrderView(), "missing")

    @pytest.mark.unit
    def test_get_value_or_default(self):
        assert get_value_or_default(OrderView(7), "order_id") == 7
        assert get_value_or_default(OrderView(), "missing") is None
        assert get_value_or_default(OrderView(), "missing", "n/a") == "n/a"


class TestCreateInstance:
    """Test cases for create_instance."""

    @pytest.mark.unit
    def test_create_with_arguments(self):
        order = create_instance(Order, 1, 9.5, notes="rush")
        assert order == Order(1, 9.5, "rush")

    @pytest.mark.unit
    def test_create_with_default_constructor(self):
        assert isinstance(create_instance(OrderView), OrderView)

    @pytest.mark.unit
    def test_expected_type_must_match(self):
        with pytest.raises(InvalidArgumentError, match="expected type must match"):
            create_instance(Order, 1, 9.5, expected_type=OrderView)
        assert create_instance(Order, 1, 9.5, expected_type=Order).order_id == 1

    @pytest.mark.unit
    def test_unmatched_arguments_raise(self):
        with pytest.raises(InvalidArgumentError, match="no constructors for Order"):
            create_instance(Order, 1, 9.5, "note", ["tag"], "extra")
        with pytest.raises(InvalidArgumentError, match="no constructors for Order"):
            create_instance(Order, "one", 9.5)

    @pytest.mark.unit
    def test_builtin_types(self):
        assert create_instance(int, "5") == 5

    @pytest.mark.unit
    def test_null_class_raises(self):
        with pytest.raises(NullReferenceError):
            create_instance(None)


class TestPopulateInto:
    """Test cases for copying properties between objects."""

    @pytest.mark.unit
    def test_copies_common_properties(self):
        target = OrderView()
        populate_into(Order(3, 12.0, notes="ignored"), target)
        assert target.order_id == 3
        assert target.total == 12.0
        assert target.status is None
        assert not hasattr(target, "notes")

    @pytest.mark.unit
    def test_converts_to_target_type(self):
        target = Order(0, 0.0)
        populate_into(OrderView("5", "2.5"), target)
        assert target.order_id == 5
        assert target.total == 2.5

    @pytest.mark.unit
    def test_keeps_raw_value_when_conversion_fails(self):
        target = Order(0, 0.0)
        populate_into(OrderView("five"), target)
        assert target.order_id == "five"

    @pytest.mark.unit
    def test_skips_read_only_and_unreadable_properties(self):
        target = FrozenOrder(1)
        populate_into(OrderView(9), target)
        assert target.order_id == 1

        order = Order(0, 0.0)
        populate_into(Broken(), order)
        assert order.order_id == 1
        assert order.total == 0.0

    @pytest.mark.unit
    def test_null_arguments_raise(self):
        with pytest.raises(NullReferenceError):
            populate_into(None, OrderView())
        with pytest.raises(NullReferenceError):
            populate_into(OrderView(), None)


class TestPropertyName:
    """Test cases for property_name."""

    @pytest.mark.unit
    def test_property_object(self):
        assert property_name(OrderView.summary) == "summary"

    @pytest.mark.unit
    def test_lambda(self):
        view = OrderView()
        assert property_name(lambda: view.status) == "status"

    @pytest.mark.unit
    def test_named_function(self):
        def total():
            return 0

        assert property_name(total) == "total"

    @pytest.mark.unit
    def test_lambda_without_attribute_raises(self):
        with pytest.raises(InvalidArgumentError, match="cannot be obtained"):
            property_name(lambda: 1)
