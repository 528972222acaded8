"""Events recorded in the sync event log."""

from feedsync.core.events.base import SyncEvent
from feedsync.core.events.enums import EventType

__all__ = [
    "EventType",
    "SyncEvent",
]
