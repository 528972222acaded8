"""Feed entry model."""

from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from feedsync.models._base import Base


class FeedEntry(Base):
    """A normalized record ingested from a feed page."""

    __tablename__ = "feed_entry"

    entry_type: Mapped[str] = mapped_column(String(20), nullable=False)
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    owner_identity: Mapped[str] = mapped_column(String, nullable=False)
    app: Mapped[str] = mapped_column(String, nullable=False)
    feed_label: Mapped[str] = mapped_column(String(50), nullable=False)
    data_domain: Mapped[str] = mapped_column(String, nullable=False)
    content_ref: Mapped[str] = mapped_column(String, nullable=False)
    identifier: Mapped[str] = mapped_column(String, nullable=False)
    # "metadata" is reserved on declarative classes
    entry_metadata: Mapped[Optional[dict]] = mapped_column("metadata", JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    ingested_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_feed_entry_owner_app", "owner_identity", "app"),
        Index("idx_feed_entry_category_created_at", "category", "created_at"),
    )
