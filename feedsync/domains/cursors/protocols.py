"""Protocols for the cursors domain."""

from typing import Protocol

from feedsync.schemas.cursor import CursorState
from feedsync.schemas.feed import FeedEntity


class CursorStoreProtocol(Protocol):
    """Durable per-entity ingestion cursors."""

    async def get(self, entity: FeedEntity) -> CursorState:
        """Get the cursor for an entity (a zero cursor if none was stored)."""
        ...

    async def set(self, entity: FeedEntity, cursor: CursorState) -> None:
        """Replace the stored cursor for an entity.

        Raises:
            WriteError: On any persistence fault.
        """
        ...
