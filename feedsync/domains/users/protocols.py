"""Protocols for the users domain."""

from typing import List, Optional, Protocol, Sequence

from feedsync.schemas.feed import FeedEntity, FeedType


class EntityCatalogProtocol(Protocol):
    """Supplies the entities a run scans."""

    async def list_entities(self, feed_type: FeedType) -> List[FeedEntity]:
        """List every (owner, app) entity tracked for ``feed_type``. May be empty."""
        ...


class UserRepositoryProtocol(EntityCatalogProtocol, Protocol):
    """Data access for tracked users."""

    async def list_user_pks(self) -> List[str]:
        """List the public keys of all tracked users."""
        ...

    async def upsert_user(self, user_pk: str, apps: Optional[Sequence[str]] = None) -> bool:
        """Ensure a user is tracked, merging ``apps`` into their app list.

        Returns:
            True if the user was newly inserted.
        """
        ...
