"""Fake feed cursor repository for testing."""

from typing import Dict, List, Optional, Tuple

from feedsync.schemas.cursor import CursorState
from feedsync.schemas.feed import FeedEntity


class FakeFeedCursorRepository:
    """In-memory fake for CursorStoreProtocol."""

    def __init__(self) -> None:
        """Initialize with empty store."""
        self._store: Dict[FeedEntity, CursorState] = {}
        self._calls: List[tuple] = []
        self.set_error: Optional[BaseException] = None

    def seed(self, entity: FeedEntity, cursor: CursorState) -> None:
        """Seed a cursor for an entity."""
        self._store[entity] = cursor

    def stored(self, entity: FeedEntity) -> Optional[CursorState]:
        """Return the stored cursor, or None if never set."""
        return self._store.get(entity)

    async def get(self, entity: FeedEntity) -> CursorState:
        """Return seeded cursor or a zero cursor."""
        self._calls.append(("get", entity))
        return self._store.get(entity, CursorState())

    async def set(self, entity: FeedEntity, cursor: CursorState) -> None:
        """Store the cursor, or raise the configured error."""
        self._calls.append(("set", entity, cursor))
        if self.set_error is not None:
            raise self.set_error
        self._store[entity] = cursor

    def set_calls(self) -> List[Tuple[FeedEntity, CursorState]]:
        """All ``set`` calls, in order."""
        return [(call[1], call[2]) for call in self._calls if call[0] == "set"]
