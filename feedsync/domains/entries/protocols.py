"""Protocols for the entries domain."""

from typing import Protocol, Sequence

from feedsync.schemas.record import NormalizedRecord


class RecordStoreProtocol(Protocol):
    """Append-only store of normalized records."""

    async def insert_many(self, records: Sequence[NormalizedRecord]) -> None:
        """Insert a batch of records.

        Not atomic across the batch: a failure may leave some records written.

        Raises:
            WriteError: On any persistence fault.
        """
        ...
