"""ORM models for values persisted by the built-in record-backed paths."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from pathconfig.infrastructure.persistence.database import Base
from pathconfig.shared.utils.datetime import utc_now


class ConfigEntry(Base):
    """One stored value, addressed as /Settings/<key>. Table: config_entry."""

    __tablename__ = "config_entry"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    key: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now
    )
