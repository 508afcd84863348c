"""Tests for type coercion by type tag."""

from datetime import UTC, date, datetime, time
from decimal import Decimal

import pytest
from sqlalchemy import Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from pathconfig.domain.enums import TypeTag
from pathconfig.domain.exceptions import CoercionException
from pathconfig.routing.coercion import CONVERTERS, RecordValue, coerce


class _Base(DeclarativeBase):
    pass


class _Widget(_Base):
    __tablename__ = "widget"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String)


def test_every_tag_has_a_converter() -> None:
    assert set(CONVERTERS) == set(TypeTag)


def test_unknown_or_missing_tag_passes_value_through() -> None:
    raw = {"a": 1}
    assert coerce(raw, "Unknown") is raw
    assert coerce(raw, None) is raw
    assert coerce(raw, "") is raw


def test_none_stays_none_for_known_tags() -> None:
    assert coerce(None, "Integer") is None


def test_tag_lookup_is_case_insensitive() -> None:
    assert coerce("5", "integer") == 5
    assert coerce("5", "INTEGER") == 5


@pytest.mark.parametrize(
    ("raw", "tag", "expected", "expected_type"),
    [
        ("true", "Boolean", True, bool),
        (0, "Boolean", False, bool),
        ("42", "Integer", 42, int),
        ("9000000000", "Long", 9000000000, int),
        ("1.5", "Double", 1.5, float),
        ("1.10", "Decimal", Decimal("1.10"), Decimal),
        (42, "String", "42", str),
        (b"bytes", "String", "bytes", str),
    ],
)
def test_scalar_conversions(raw, tag, expected, expected_type) -> None:
    result = coerce(raw, tag)
    assert result == expected
    assert type(result) is expected_type


def test_integer_zero() -> None:
    result = coerce(0, "Integer")
    assert result == 0
    assert isinstance(result, int)


def test_collections() -> None:
    assert coerce(("a", "b"), "List") == ["a", "b"]
    assert coerce("a", "List") == ["a"]
    assert coerce(["a", "a", "b"], "Set") == {"a", "b"}
    assert coerce({"k": 1}, "List") == [{"k": 1}]
    assert coerce(3, "Set") == {3}


def test_map_from_mapping_model_and_record() -> None:
    assert coerce({"k": 1}, "Map") == {"k": 1}
    assert coerce(RecordValue(id=1, name="x"), "Map") == {"id": 1, "name": "x"}
    assert coerce(_Widget(id=3, name="w"), "Map") == {"id": 3, "name": "w"}


def test_record_from_mapping_and_orm_instance() -> None:
    record = coerce({"id": "r1", "label": "x"}, "Record")
    assert isinstance(record, RecordValue)
    assert record.id == "r1"
    assert record.model_extra == {"label": "x"}

    widget = _Widget(id=1, name="w")
    assert coerce(widget, "Record") is widget


def test_dates_and_times() -> None:
    assert coerce("2024-05-01", "Date") == date(2024, 5, 1)
    assert coerce(datetime(2024, 5, 1, 12, 30), "Date") == date(2024, 5, 1)
    assert coerce("12:30:00", "Time") == time(12, 30)
    assert coerce("2024-05-01T12:30:00", "DateTime") == datetime(
        2024, 5, 1, 12, 30, tzinfo=UTC
    )
    assert coerce(date(2024, 5, 1), "DateTime") == datetime(2024, 5, 1, tzinfo=UTC)


def test_callback_wraps_plain_values() -> None:
    fn = coerce(7, "Callback")
    assert callable(fn)
    assert fn() == 7
    assert fn("ignored", "args") == 7

    def existing() -> int:
        return 1

    assert coerce(existing, "Callback") is existing


@pytest.mark.parametrize(
    ("raw", "tag"),
    [
        ("abc", "Integer"),
        ("maybe", "Boolean"),
        ("not-a-date", "Date"),
        (5, "Map"),
        ([1, 2], "Record"),
    ],
)
def test_unconvertible_values_raise(raw, tag) -> None:
    with pytest.raises(CoercionException) as exc_info:
        coerce(raw, tag)
    assert exc_info.value.error_code == "COERCION_ERROR"
    assert exc_info.value.details["type"] == tag
