from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

import pytest
from freezegun import freeze_time

from rowmapper import (
    DB_NULL,
    ConversionFailure,
    coalesce_db_null,
    to_nullable_bool,
    to_nullable_datetime,
    to_nullable_decimal,
    to_nullable_float,
    to_nullable_int32,
    to_nullable_int64,
    to_nullable_uuid,
    try_convert,
)

SAMPLE_UUID = "3f52804b-2fad-4e00-92c8-b593da3a8ed3"


class Color(Enum):
    RED = "red"


@pytest.mark.unit
@pytest.mark.parametrize(
    "helper",
    [
        to_nullable_bool,
        to_nullable_datetime,
        to_nullable_decimal,
        to_nullable_float,
        to_nullable_int32,
        to_nullable_int64,
        to_nullable_uuid,
    ],
)
def test_nullable_helpers_return_none_for_missing_input(helper):
    assert helper(None) is None
    assert helper("") is None
    assert helper("   ") is None


@pytest.mark.unit
def test_to_nullable_datetime():
    assert to_nullable_datetime("2021-01-01T12:30:45") == datetime(
        2021, 1, 1, 12, 30, 45
    )
    assert to_nullable_datetime(date(2021, 1, 1)) == datetime(2021, 1, 1)
    moment = datetime(2020, 5, 17, 8, 0)
    assert to_nullable_datetime(moment) is moment
    assert to_nullable_datetime("not a date") is None
    assert to_nullable_datetime(20210101) is None


@pytest.mark.unit
@freeze_time("2021-01-01T00:00:00")
def test_to_nullable_datetime_fills_missing_date_from_today():
    assert to_nullable_datetime("10:30") == datetime(2021, 1, 1, 10, 30)


@pytest.mark.unit
def test_to_nullable_bool():
    assert to_nullable_bool(True) is True
    assert to_nullable_bool(" TRUE ") is True
    assert to_nullable_bool("false") is False
    assert to_nullable_bool(0) is False
    assert to_nullable_bool(2.5) is True
    assert to_nullable_bool("yes") is None
    assert to_nullable_bool(object()) is None


@pytest.mark.unit
def test_to_nullable_uuid():
    assert to_nullable_uuid(SAMPLE_UUID) == UUID(SAMPLE_UUID)
    value = UUID(SAMPLE_UUID)
    assert to_nullable_uuid(value) is value
    assert to_nullable_uuid("not-a-uuid") is None
    assert to_nullable_uuid(42) is None


@pytest.mark.unit
def test_to_nullable_decimal():
    assert to_nullable_decimal("12.50") == Decimal("12.50")
    assert to_nullable_decimal(3) == Decimal(3)
    assert to_nullable_decimal(0.1) == Decimal("0.1")
    assert to_nullable_decimal(True) == Decimal(1)
    assert to_nullable_decimal("abc") is None
    assert to_nullable_decimal(float("nan")) is None


@pytest.mark.unit
def test_to_nullable_float():
    assert to_nullable_float("1.5") == 1.5
    assert to_nullable_float(Decimal("2.25")) == 2.25
    assert to_nullable_float(3) == 3.0
    assert to_nullable_float("abc") is None
    assert to_nullable_float([1]) is None


@pytest.mark.unit
def test_to_nullable_int32():
    assert to_nullable_int32("42") == 42
    assert to_nullable_int32(" -7 ") == -7
    assert to_nullable_int32(True) == 1
    assert to_nullable_int32(2.5) == 2
    assert to_nullable_int32(3.5) == 4
    assert to_nullable_int32(Decimal("2.5")) == 2
    assert to_nullable_int32("1.5") is None
    assert to_nullable_int32(2**31) is None
    assert to_nullable_int32(float("inf")) is None


@pytest.mark.unit
def test_to_nullable_int64():
    assert to_nullable_int64(2**31) == 2**31
    assert to_nullable_int64(str(2**63 - 1)) == 2**63 - 1
    assert to_nullable_int64(2**63) is None


@pytest.mark.unit
def test_coalesce_db_null():
    assert coalesce_db_null(DB_NULL) is None
    assert coalesce_db_null(DB_NULL, 0) == 0
    assert coalesce_db_null(None, 0) is None
    assert coalesce_db_null(5, 0) == 5


class TestTryConvert:
    """Test cases for try_convert."""

    @pytest.mark.unit
    def test_passes_through_missing_values(self):
        assert try_convert(None, int).value is None
        assert try_convert(DB_NULL, int).value is DB_NULL

    @pytest.mark.unit
    def test_passes_through_matching_instances(self):
        value = datetime(2021, 1, 1)
        result = try_convert(value, datetime)
        assert result.ok
        assert result.value is value

    @pytest.mark.unit
    def test_bool_is_converted_for_int_targets(self):
        result = try_convert(True, int)
        assert result.value == 1
        assert type(result.value) is int

    @pytest.mark.unit
    def test_known_targets(self):
        assert try_convert("42", int).value == 42
        assert try_convert(42, str).value == "42"
        assert try_convert("true", bool).value is True
        assert try_convert("2021-01-01", date).value == date(2021, 1, 1)
        assert try_convert(SAMPLE_UUID, UUID).value == UUID(SAMPLE_UUID)

    @pytest.mark.unit
    def test_unknown_targets_call_the_type(self):
        assert try_convert("red", Color).value is Color.RED
        assert try_convert([1, 2], tuple).value == (1, 2)

    @pytest.mark.unit
    def test_failure_is_reported_not_raised(self):
        result = try_convert("abc", int)
        assert not result.ok
        assert isinstance(result.error, ConversionFailure)
        with pytest.raises(ConversionFailure, match="Cannot convert 'abc' to int"):
            result.unwrap()

    @pytest.mark.unit
    def test_failure_from_type_call_keeps_cause(self):
        result = try_convert("blue", Color)
        assert not result.ok
        assert isinstance(result.error.__cause__, ValueError)

    @pytest.mark.unit
    def test_invalid_target_type(self):
        result = try_convert(1, "int")
        assert not result.ok
        assert "target_type must be a type" in str(result.error)
