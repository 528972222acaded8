"""Fake tracked user repository for testing."""

from typing import Dict, List, Optional, Sequence

from feedsync.schemas.feed import FeedEntity, FeedType


class FakeTrackedUserRepository:
    """In-memory fake for UserRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize with no users."""
        self.users: Dict[str, List[str]] = {}
        self.list_error: Optional[BaseException] = None

    def seed(self, user_pk: str, apps: Sequence[str] = ()) -> None:
        """Seed a user with apps."""
        self.users[user_pk] = sorted(set(apps))

    async def list_entities(self, feed_type: FeedType) -> List[FeedEntity]:
        """Expand every seeded user into one entity per app."""
        if self.list_error is not None:
            raise self.list_error
        return [
            FeedEntity(owner_identity=user_pk, app=app, feed_type=feed_type)
            for user_pk in sorted(self.users)
            for app in self.users[user_pk]
        ]

    async def list_user_pks(self) -> List[str]:
        """List seeded user keys."""
        if self.list_error is not None:
            raise self.list_error
        return sorted(self.users)

    async def upsert_user(self, user_pk: str, apps: Optional[Sequence[str]] = None) -> bool:
        """Insert or merge apps; True if newly inserted."""
        if user_pk not in self.users:
            self.users[user_pk] = sorted(set(apps or []))
            return True
        self.users[user_pk] = sorted(set(self.users[user_pk]) | set(apps or []))
        return False
