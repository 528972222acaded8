"""Sync event repository backed by SQLAlchemy."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from feedsync.core.events.base import SyncEvent
from feedsync.core.events.enums import EventType
from feedsync.core.exceptions import WriteError
from feedsync.domains.events.protocols import EventLogProtocol
from feedsync.models.sync_event import SyncEventRecord


class SyncEventRepository(EventLogProtocol):
    """Writes events to the ``sync_event`` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize with a session factory."""
        self._session_factory = session_factory

    async def append(self, event: SyncEvent) -> None:
        """Insert the event as a new row."""
        try:
            async with self._session_factory() as db:
                db.add(
                    SyncEventRecord(
                        type=event.type.value,
                        context=event.context,
                        description=event.description,
                        error=event.error,
                        event_metadata=event.metadata,
                        created_at=event.created_at,
                    )
                )
                await db.commit()
        except SQLAlchemyError as e:
            raise WriteError(f"Failed to append {event.type.value} event: {e}") from e

    async def list_events(self, event_type: Optional[EventType] = None) -> List[SyncEvent]:
        """List events, oldest first, optionally filtered by type."""
        stmt = select(SyncEventRecord).order_by(SyncEventRecord.created_at)
        if event_type is not None:
            stmt = stmt.where(SyncEventRecord.type == event_type.value)
        async with self._session_factory() as db:
            rows = (await db.execute(stmt)).scalars().all()
        return [
            SyncEvent(
                type=EventType(row.type),
                context=row.context,
                description=row.description,
                error=row.error,
                metadata=row.event_metadata or {},
                created_at=row.created_at,
            )
            for row in rows
        ]
