"""Fake feed entry repository for testing."""

from typing import List, Optional, Sequence

from feedsync.schemas.record import NormalizedRecord


class FakeFeedEntryRepository:
    """In-memory fake for RecordStoreProtocol."""

    def __init__(self) -> None:
        """Initialize with empty store."""
        self.records: List[NormalizedRecord] = []
        self.batches: List[List[NormalizedRecord]] = []
        self.insert_error: Optional[BaseException] = None

    async def insert_many(self, records: Sequence[NormalizedRecord]) -> None:
        """Append the batch, or raise the configured error."""
        if self.insert_error is not None:
            raise self.insert_error
        self.batches.append(list(records))
        self.records.extend(records)

    def for_owner(self, owner_identity: str) -> List[NormalizedRecord]:
        """Records stored for an owner, in insertion order."""
        return [r for r in self.records if r.owner_identity == owner_identity]
