"""Tracked user repository backed by SQLAlchemy."""

from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from feedsync.core.exceptions import WriteError
from feedsync.domains.users.protocols import UserRepositoryProtocol
from feedsync.models.tracked_user import TrackedUser
from feedsync.schemas.feed import FeedEntity, FeedType


class TrackedUserRepository(UserRepositoryProtocol):
    """Reads and upserts rows of the ``tracked_user`` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize with a session factory."""
        self._session_factory = session_factory

    async def list_entities(self, feed_type: FeedType) -> List[FeedEntity]:
        """Expand every tracked user into one entity per app."""
        async with self._session_factory() as db:
            users = (await db.execute(select(TrackedUser).order_by(TrackedUser.user_pk))).scalars()
            return [
                FeedEntity(owner_identity=user.user_pk, app=app, feed_type=feed_type)
                for user in users
                for app in user.apps or []
            ]

    async def list_user_pks(self) -> List[str]:
        """List the public keys of all tracked users."""
        async with self._session_factory() as db:
            result = await db.execute(select(TrackedUser.user_pk).order_by(TrackedUser.user_pk))
            return list(result.scalars().all())

    async def upsert_user(self, user_pk: str, apps: Optional[Sequence[str]] = None) -> bool:
        """Insert the user if unknown, otherwise merge any new apps."""
        try:
            async with self._session_factory() as db:
                result = await db.execute(select(TrackedUser).where(TrackedUser.user_pk == user_pk))
                user = result.scalar_one_or_none()
                if user is None:
                    db.add(TrackedUser(user_pk=user_pk, apps=sorted(set(apps or []))))
                    await db.commit()
                    return True

                merged = sorted(set(user.apps or []) | set(apps or []))
                if merged != list(user.apps or []):
                    user.apps = merged
                    await db.commit()
                return False
        except IntegrityError:
            # Inserted concurrently by another task
            return False
        except SQLAlchemyError as e:
            raise WriteError(f"Failed to upsert user '{user_pk}': {e}") from e
