"""Fake event log for testing."""

from typing import List, Optional

from feedsync.core.events.base import SyncEvent
from feedsync.core.events.enums import EventType


class FakeSyncEventRepository:
    """In-memory fake for EventLogProtocol.

    Usage:
        events = FakeSyncEventRepository()
        await coordinator.run(FeedType.INTERACTIONS)

        assert events.of_type(EventType.FETCH_INTERACTIONS_ERROR)
    """

    def __init__(self) -> None:
        """Initialize with empty log."""
        self.events: List[SyncEvent] = []
        self.append_error: Optional[BaseException] = None

    async def append(self, event: SyncEvent) -> None:
        """Record the event, or raise the configured error."""
        if self.append_error is not None:
            raise self.append_error
        self.events.append(event)

    # Test helpers

    def of_type(self, event_type: EventType) -> List[SyncEvent]:
        """Events of the given type."""
        return [e for e in self.events if e.type == event_type]
