"""Persistence: SQLAlchemy engine, record store and record-backed callbacks."""

from pathconfig.infrastructure.persistence.record_store import (
    RecordStore,
    SqlRecordStore,
    as_record_list,
    field_updater,
)

__all__ = ["RecordStore", "SqlRecordStore", "as_record_list", "field_updater"]
