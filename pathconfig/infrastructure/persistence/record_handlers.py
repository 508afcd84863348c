"""Callback factories that back config paths with records.

query_reader and query_field_writer turn a query builder into read/write
callbacks; register_entry_handlers wires the built-in /Settings/${key}
path to the config_entry table.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from sqlalchemy import select

from pathconfig.domain.enums import Scope
from pathconfig.infrastructure.persistence.models import ConfigEntry
from pathconfig.infrastructure.persistence.record_store import RecordStore
from pathconfig.routing.dispatcher import Config
from pathconfig.routing.registry import Handler

logger = logging.getLogger(__name__)

SETTINGS_PATH = "/Settings/${key}"

QueryBuilder = Callable[[dict[str, str | None]], Any]


def query_reader(
    store: RecordStore,
    build_query: QueryBuilder,
    *,
    first: bool = False,
) -> Callable[[dict[str, str | None]], Any]:
    """Read callback returning the records selected by build_query(params).

    With first=True the callback returns the first record, or None.
    """

    async def on_read(params: dict[str, str | None]) -> Any:
        records = await store.query(build_query(params))
        if first:
            return records[0] if records else None
        return records

    return on_read


def query_field_writer(
    store: RecordStore,
    build_query: QueryBuilder,
) -> Callable[[dict[str, str | None], Mapping[str, Any]], Any]:
    """Write callback applying the written data as field values to every selected record."""

    async def on_write(params: dict[str, str | None], data: Mapping[str, Any]) -> list[Any]:
        records = await store.query(build_query(params))
        if not records:
            logger.debug("No records selected for %s; nothing updated", params)
            return []
        return await store.update(records, data)

    return on_write


def _entry_query(params: dict[str, str | None]) -> Any:
    return select(ConfigEntry).where(ConfigEntry.key == params["key"])


def register_entry_handlers(
    config: Config,
    store: RecordStore,
    *,
    cache_enabled: bool = True,
    scope: Scope | str = Scope.ORG,
) -> Handler:
    """Register /Settings/${key} backed by config_entry rows.

    Reads return the stored value. Writes take ``{"value": ...}``: an
    existing row is updated, a missing one inserted, and a null or absent
    value deletes the row.
    """
    read_entry = query_reader(store, _entry_query, first=True)

    async def on_read(params: dict[str, str | None]) -> Any:
        entry = await read_entry(params)
        return entry.value if entry is not None else None

    async def on_write(params: dict[str, str | None], data: Mapping[str, Any]) -> None:
        records = await store.query(_entry_query(params))
        value = data.get("value")
        if value is None:
            await store.delete(records)
        elif records:
            await store.update(records, {"value": value})
        else:
            await store.insert(ConfigEntry(key=params["key"], value=value))

    return config.register_read_write(
        SETTINGS_PATH, on_read, on_write, cache_enabled=cache_enabled, scope=scope
    )
