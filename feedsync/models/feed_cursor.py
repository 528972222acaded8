"""Feed cursor model."""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from feedsync.models._base import Base


class FeedCursor(Base):
    """Ingestion progress of one (owner, app, feed) entity."""

    __tablename__ = "feed_cursor"

    owner_identity: Mapped[str] = mapped_column(String, nullable=False)
    app: Mapped[str] = mapped_column(String, nullable=False)
    feed_label: Mapped[str] = mapped_column(String(50), nullable=False)

    last_page_number: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_offset: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    consecutive_empty_runs: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    index_fingerprint: Mapped[str] = mapped_column(String, nullable=False, default="")
    page_fingerprint: Mapped[str] = mapped_column(String, nullable=False, default="")

    __table_args__ = (
        UniqueConstraint(
            "owner_identity", "app", "feed_label", name="uq_feed_cursor_owner_app_feed"
        ),
    )
