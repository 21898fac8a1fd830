"""
Key-value table backing the persistent store.

One row per persisted key ("documents", "users", "config", ...); the value is
the JSON document for that key.
"""
from typing import Any
from sqlalchemy import String, JSON
from sqlalchemy.orm import Mapped, mapped_column

from docuflow.core.database.base import Base, TimestampMixin


class StoreEntry(Base, TimestampMixin):
    __tablename__ = "store_entries"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=True)

    def __repr__(self) -> str:
        return f"<StoreEntry(key={self.key!r})>"
