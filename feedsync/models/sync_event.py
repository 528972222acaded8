"""Sync event model."""

from typing import Optional

from sqlalchemy import JSON, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from feedsync.models._base import Base, TimestampMixin


class SyncEventRecord(Base, TimestampMixin):
    """A persisted event log entry."""

    __tablename__ = "sync_event"

    type: Mapped[str] = mapped_column(String(50), nullable=False)
    context: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    error: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    event_metadata: Mapped[Optional[dict]] = mapped_column("metadata", JSON, nullable=True)

    __table_args__ = (Index("idx_sync_event_type_created_at", "type", "created_at"),)
