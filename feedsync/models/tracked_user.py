"""Tracked user model."""

from typing import List

from sqlalchemy import JSON, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from feedsync.models._base import Base, TimestampMixin


class TrackedUser(Base, TimestampMixin):
    """A user whose feeds are synchronized, with the apps they publish under."""

    __tablename__ = "tracked_user"

    user_pk: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    apps: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (Index("idx_tracked_user_user_pk", "user_pk"),)
