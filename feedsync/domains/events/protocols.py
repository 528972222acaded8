"""Protocols for the events domain."""

from typing import Protocol

from feedsync.core.events.base import SyncEvent


class EventLogProtocol(Protocol):
    """Append-only log of sync events."""

    async def append(self, event: SyncEvent) -> None:
        """Append an event."""
        ...
