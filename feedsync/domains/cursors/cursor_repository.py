"""Feed cursor repository backed by SQLAlchemy."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from feedsync.core.exceptions import WriteError
from feedsync.domains.cursors.protocols import CursorStoreProtocol
from feedsync.models.feed_cursor import FeedCursor
from feedsync.schemas.cursor import CursorState
from feedsync.schemas.feed import FeedEntity

_CURSOR_FIELDS = tuple(CursorState.model_fields)


class FeedCursorRepository(CursorStoreProtocol):
    """Stores one ``feed_cursor`` row per (owner, app, feed)."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize with a session factory."""
        self._session_factory = session_factory

    @staticmethod
    async def _find(db: AsyncSession, entity: FeedEntity) -> Optional[FeedCursor]:
        result = await db.execute(
            select(FeedCursor).where(
                FeedCursor.owner_identity == entity.owner_identity,
                FeedCursor.app == entity.app,
                FeedCursor.feed_label == entity.feed_label,
            )
        )
        return result.scalar_one_or_none()

    async def get(self, entity: FeedEntity) -> CursorState:
        """Get the cursor for an entity (a zero cursor if none was stored)."""
        async with self._session_factory() as db:
            row = await self._find(db, entity)
        if row is None:
            return CursorState()
        return CursorState(**{field: getattr(row, field) for field in _CURSOR_FIELDS})

    async def set(self, entity: FeedEntity, cursor: CursorState) -> None:
        """Upsert the cursor fields for an entity."""
        try:
            async with self._session_factory() as db:
                row = await self._find(db, entity)
                if row is None:
                    row = FeedCursor(
                        owner_identity=entity.owner_identity,
                        app=entity.app,
                        feed_label=entity.feed_label,
                    )
                    db.add(row)
                for field, value in cursor.model_dump().items():
                    setattr(row, field, value)
                await db.commit()
        except SQLAlchemyError as e:
            raise WriteError(f"Failed to update cursor for {entity.describe()}: {e}") from e
