"""Models for the application."""

from ._base import Base
from .feed_cursor import FeedCursor
from .feed_entry import FeedEntry
from .sync_event import SyncEventRecord
from .tracked_user import TrackedUser

__all__ = [
    "Base",
    "FeedCursor",
    "FeedEntry",
    "SyncEventRecord",
    "TrackedUser",
]
