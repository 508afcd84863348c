"""Record store: protocol and SQLAlchemy implementation.

The router never talks to storage directly; handler callbacks do, through
a RecordStore. SqlRecordStore runs each operation in its own transaction
(commit on success, rollback on exception), so callbacks registered once
at startup can be invoked from any request.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Protocol

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pathconfig.infrastructure.persistence.database import get_session_factory

logger = logging.getLogger(__name__)


class RecordStore(Protocol):
    """Structured-record persistence used by handler callbacks."""

    async def query(self, statement: Any) -> list[Any]:
        """Return records selected by statement."""
        ...

    async def insert(self, record: Any) -> Any:
        """Persist a new record and return it."""
        ...

    async def update(self, records: Any, fields: Mapping[str, Any]) -> list[Any]:
        """Apply fields to one record or many and persist them."""
        ...

    async def delete(self, records: Any) -> int:
        """Delete one record or many; return how many were deleted."""
        ...


def as_record_list(records: Any) -> list[Any]:
    """Normalize one record or an iterable of records to a list."""
    if records is None:
        return []
    if isinstance(records, (list, tuple, set)):
        return list(records)
    if isinstance(records, Iterable) and not isinstance(records, (str, bytes, Mapping)):
        return list(records)
    return [records]


def field_updater(fields: Mapping[str, Any]) -> Callable[[Any], list[Any]]:
    """Return a callback that sets every (field, value) of *fields* on one record or many.

    Example:
        deactivate = field_updater({"active": False})
        deactivate(user)            # one record
        deactivate([user1, user2])  # many
    """
    updates = dict(fields)

    def apply(records: Any) -> list[Any]:
        items = as_record_list(records)
        for record in items:
            for name, value in updates.items():
                setattr(record, name, value)
        return items

    return apply


class SqlRecordStore:
    """RecordStore over SQLAlchemy AsyncSession, one transaction per operation."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None) -> None:
        """Initialize with a session factory (defaults to the app's, created lazily).

        Raises:
            RecordStoreNotConfiguredException: If no factory is given and DATABASE_URL is unset.
        """
        self._session_factory = session_factory or get_session_factory()

    async def query(self, statement: Select[Any]) -> list[Any]:
        """Execute a select statement and return ORM records."""
        async with self._session_factory() as session:
            result = await session.execute(statement)
            return list(result.scalars().all())

    async def insert(self, record: Any) -> Any:
        """Persist a new record; returns it refreshed with server defaults."""
        async with self._session_factory() as session:
            async with session.begin():
                session.add(record)
                await session.flush()
                await session.refresh(record)
        logger.debug("Inserted %s", type(record).__name__)
        return record

    async def update(self, records: Any, fields: Mapping[str, Any]) -> list[Any]:
        """Merge records into a session, apply fields and commit."""
        items = as_record_list(records)
        if not items:
            return []
        async with self._session_factory() as session:
            async with session.begin():
                merged = [await session.merge(record) for record in items]
                field_updater(fields)(merged)
                await session.flush()
        logger.debug("Updated %s record(s): %s", len(merged), sorted(fields))
        return merged

    async def delete(self, records: Any) -> int:
        """Delete records (merged into the session first) and commit."""
        items = as_record_list(records)
        if not items:
            return 0
        async with self._session_factory() as session:
            async with session.begin():
                for record in items:
                    await session.delete(await session.merge(record))
                await session.flush()
        logger.debug("Deleted %s record(s)", len(items))
        return len(items)
