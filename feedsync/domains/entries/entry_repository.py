"""Feed entry repository backed by SQLAlchemy."""

from typing import List, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from feedsync.core.exceptions import WriteError
from feedsync.domains.entries.protocols import RecordStoreProtocol
from feedsync.models.feed_entry import FeedEntry
from feedsync.schemas.record import NormalizedRecord


class FeedEntryRepository(RecordStoreProtocol):
    """Writes normalized records to the ``feed_entry`` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize with a session factory."""
        self._session_factory = session_factory

    async def insert_many(self, records: Sequence[NormalizedRecord]) -> None:
        """Insert all records in one flush."""
        if not records:
            return
        try:
            async with self._session_factory() as db:
                db.add_all([_to_model(record) for record in records])
                await db.commit()
        except SQLAlchemyError as e:
            raise WriteError(f"Failed to insert {len(records)} entries: {e}") from e

    async def count_for_owner(self, owner_identity: str, app: str) -> int:
        """Count the entries stored for an owner within an app."""
        async with self._session_factory() as db:
            result = await db.execute(
                select(func.count())
                .select_from(FeedEntry)
                .where(FeedEntry.owner_identity == owner_identity, FeedEntry.app == app)
            )
            return result.scalar_one()

    async def list_for_owner(self, owner_identity: str) -> List[FeedEntry]:
        """List an owner's entries ordered by creation time."""
        async with self._session_factory() as db:
            result = await db.execute(
                select(FeedEntry)
                .where(FeedEntry.owner_identity == owner_identity)
                .order_by(FeedEntry.created_at)
            )
            return list(result.scalars().all())


def _to_model(record: NormalizedRecord) -> FeedEntry:
    return FeedEntry(
        id=record.id,
        entry_type=record.entry_type.value,
        category=record.category,
        owner_identity=record.owner_identity,
        app=record.app,
        feed_label=record.feed_label,
        data_domain=record.data_domain,
        content_ref=record.content_ref,
        identifier=record.identifier,
        entry_metadata=record.metadata,
        created_at=record.created_at,
        ingested_at=record.ingested_at,
    )
