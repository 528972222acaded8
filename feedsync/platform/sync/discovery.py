"""Social-graph discovery of new users to track.

For every known user, the user's social profile is fetched to learn which
apps they publish under and the public key they use in the social app. The
social app's following and followers maps are then fetched, and every user
that appears in them but is not tracked yet is added to the catalog.

Discovery runs through the same worker pool as feed syncs and records
failures the same way: as events, never as a failed run.
"""

import asyncio
import time
from typing import List, Optional, Sequence, Set, Tuple
from uuid import uuid4

from pydantic import ValidationError

from feedsync.core.events.base import SyncEvent
from feedsync.core.events.enums import EventType
from feedsync.core.exceptions import MalformedDocumentError, NotFoundException
from feedsync.core.logging import ContextualLogger
from feedsync.core.logging import logger as default_logger
from feedsync.core.protocols.remote_source import RemoteSource
from feedsync.domains.events.protocols import EventLogProtocol
from feedsync.domains.users.protocols import UserRepositoryProtocol
from feedsync.platform.sync.worker_pool import AsyncWorkerPool
from feedsync.schemas.run import EntityOutcome, RunResult
from feedsync.schemas.user import UserProfile

PROFILE_PATH = "profile"
CONTEXT = "discover_users"


def following_path(app: str) -> str:
    """Path of the map of users followed in ``app``."""
    return f"{app}-following"


def followers_path(app: str) -> str:
    """Path of the map of followers in ``app``."""
    return f"{app}-followers"


class UserDiscovery:
    """Discovers new users through the social graph of known users."""

    def __init__(
        self,
        remote_source: RemoteSource,
        users: UserRepositoryProtocol,
        event_log: EventLogProtocol,
        worker_pool: AsyncWorkerPool,
        social_app: str = "skyfeed",
        seed_users: Sequence[str] = (),
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize discovery with its collaborators."""
        self.remote_source = remote_source
        self.users = users
        self.event_log = event_log
        self.worker_pool = worker_pool
        self.social_app = social_app
        self.seed_users = list(seed_users)
        self.logger = (logger or default_logger).with_context(component="discovery")

    async def run(self) -> RunResult:
        """Scan every known user's relations; ``new_records`` counts new users."""
        log = self.logger.with_context(run_id=uuid4().hex[:8])
        started = time.monotonic()

        for seed in self.seed_users:
            if await self.users.upsert_user(seed):
                log.info(f"Seed user '{seed}' inserted")

        known: Set[str] = set(await self.users.list_user_pks())
        result = RunResult(context=CONTEXT)
        handles: List[Tuple[str, "asyncio.Task[int]"]] = []

        try:
            for user_pk in sorted(known):
                result.attempted += 1
                task = await self.worker_pool.submit(self.discover_from, user_pk, known)
                handles.append((user_pk, task))

            for user_pk, task in handles:
                try:
                    discovered = await task
                except Exception as e:
                    await self._record_failure(user_pk, e, result, log)
                else:
                    result.record(EntityOutcome(entity=user_pk, new_records=discovered))
        finally:
            pending = [task for _, task in handles if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        log.info(
            f"Discovery finished in {time.monotonic() - started:.2f}s: "
            f"{result.new_records} new users, {result.failed} failed"
        )
        return result

    async def discover_from(self, user_pk: str, known: Set[str]) -> int:
        """Upsert ``user_pk``'s apps and any unknown related users.

        Returns:
            Number of users newly inserted.
        """
        profile = await self.fetch_profile(user_pk)
        await self.users.upsert_user(user_pk, apps=sorted(profile.dapps))

        dapp = profile.dapps.get(self.social_app)
        if dapp is None:
            raise MalformedDocumentError(
                PROFILE_PATH, f"{self.social_app} not in profile for user '{user_pk}'"
            )

        relations: Set[str] = set()
        for path in (following_path(self.social_app), followers_path(self.social_app)):
            document = await self.remote_source.fetch(dapp.public_key, path)
            if isinstance(document.data, dict):
                relations.update(str(key) for key in document.data)

        total = 0
        for related in sorted(relations - known):
            if await self.users.upsert_user(related):
                total += 1
        return total

    async def fetch_profile(self, user_pk: str) -> UserProfile:
        """Fetch and validate a user's social profile."""
        document = await self.remote_source.fetch(user_pk, PROFILE_PATH)
        if document.data is None:
            raise NotFoundException(f"Could not find profile for user '{user_pk}'")
        try:
            return UserProfile.model_validate(document.data)
        except ValidationError as e:
            raise MalformedDocumentError(PROFILE_PATH, f"invalid profile for '{user_pk}'") from e

    async def _record_failure(
        self, user_pk: str, error: BaseException, result: RunResult, log: ContextualLogger
    ) -> None:
        description = str(error) or type(error).__name__
        result.record(EntityOutcome(entity=user_pk, error=description))
        log.warning(f"Discovery failed for '{user_pk}': {description}")
        try:
            await self.event_log.append(
                SyncEvent.failure(
                    EventType.DISCOVER_USERS_ERROR,
                    context=CONTEXT,
                    error=error,
                    metadata={"owner_identity": user_pk},
                )
            )
        except Exception as log_error:
            log.error(f"Failed to record discovery failure for '{user_pk}': {log_error}")
