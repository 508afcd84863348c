"""Type coercion of read results by the ``type`` query parameter.

Each TypeTag maps to one converter. Unknown or missing tags return the
raw value unchanged; None stays None for every tag. Scalar conversions
use pydantic's lax validation (``"42"`` -> 42, ``"true"`` -> True,
ISO strings -> date/time/datetime).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import InstanceState

from pathconfig.domain.enums import TypeTag
from pathconfig.domain.exceptions import CoercionException
from pathconfig.shared.utils.datetime import ensure_utc


class RecordValue(BaseModel):
    """Structured record built from a mapping (Record tag on non-ORM values)."""

    model_config = ConfigDict(extra="allow")

    id: Any = None


_BOOL = TypeAdapter(bool)
_INT = TypeAdapter(int)
_FLOAT = TypeAdapter(float)
_DECIMAL = TypeAdapter(Decimal)
_DATE = TypeAdapter(date)
_TIME = TypeAdapter(time)
_DATETIME = TypeAdapter(datetime)


def is_mapped_instance(value: Any) -> bool:
    """True for SQLAlchemy ORM instances (records from the SQL record store)."""
    return isinstance(sa_inspect(value, raiseerr=False), InstanceState)


def record_to_mapping(value: Any) -> dict[str, Any]:
    """Column values of an ORM instance keyed by attribute name."""
    state = sa_inspect(value)
    return {attr.key: getattr(value, attr.key) for attr in state.mapper.column_attrs}


def _to_str(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def _iterable(value: Any) -> Iterable[Any]:
    """Iterate collections; wrap scalars (strings and mappings included) in a 1-tuple."""
    if isinstance(value, (str, bytes, Mapping)):
        return (value,)
    if isinstance(value, Iterable):
        return value
    return (value,)


def _to_list(value: Any) -> list[Any]:
    return list(_iterable(value))


def _to_set(value: Any) -> set[Any]:
    return set(_iterable(value))


def _to_map(value: Any) -> dict[Any, Any]:
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, BaseModel):
        return value.model_dump()
    if is_mapped_instance(value):
        return record_to_mapping(value)
    raise TypeError("expected a mapping, model or record")


def _to_record(value: Any) -> Any:
    if is_mapped_instance(value) or isinstance(value, BaseModel):
        return value
    if isinstance(value, Mapping):
        return RecordValue.model_validate(dict(value))
    raise TypeError("expected a mapping or record")


def _to_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    return _DATE.validate_python(value)


def _to_time(value: Any) -> time:
    if isinstance(value, datetime):
        return value.time()
    return _TIME.validate_python(value)


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, date) and not isinstance(value, datetime):
        value = datetime.combine(value, time())
    return ensure_utc(_DATETIME.validate_python(value))


def _to_callback(value: Any) -> Callable[..., Any]:
    if callable(value):
        return value

    def constant(*_args: Any) -> Any:
        return value

    return constant


CONVERTERS: dict[TypeTag, Callable[[Any], Any]] = {
    TypeTag.BOOLEAN: _BOOL.validate_python,
    TypeTag.INTEGER: _INT.validate_python,
    TypeTag.LONG: _INT.validate_python,
    TypeTag.DOUBLE: _FLOAT.validate_python,
    TypeTag.DECIMAL: _DECIMAL.validate_python,
    TypeTag.STRING: _to_str,
    TypeTag.LIST: _to_list,
    TypeTag.SET: _to_set,
    TypeTag.MAP: _to_map,
    TypeTag.RECORD: _to_record,
    TypeTag.DATE: _to_date,
    TypeTag.TIME: _to_time,
    TypeTag.DATETIME: _to_datetime,
    TypeTag.CALLBACK: _to_callback,
}


def coerce(raw: Any, type_tag: str | None) -> Any:
    """Convert *raw* to the representation named by *type_tag*.

    Raises:
        CoercionException: If the tag is recognized but the value cannot be converted.
    """
    tag = TypeTag.lookup(type_tag)
    if tag is None or raw is None:
        return raw
    try:
        return CONVERTERS[tag](raw)
    except ValidationError as e:
        raise CoercionException(tag.value, raw, e.errors()[0]["msg"]) from e
    except (TypeError, ValueError, UnicodeDecodeError) as e:
        raise CoercionException(tag.value, raw, str(e)) from e
