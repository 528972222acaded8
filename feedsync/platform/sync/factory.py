"""Factory wiring the sync engine from settings."""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from feedsync.adapters.remote_source.http import HttpRemoteSource
from feedsync.core.config import Settings, settings
from feedsync.core.logging import LoggerConfigurator
from feedsync.core.protocols.remote_source import RemoteSource
from feedsync.domains.cursors.cursor_repository import FeedCursorRepository
from feedsync.domains.cursors.protocols import CursorStoreProtocol
from feedsync.domains.entries.entry_repository import FeedEntryRepository
from feedsync.domains.entries.protocols import RecordStoreProtocol
from feedsync.domains.events.event_repository import SyncEventRepository
from feedsync.domains.events.protocols import EventLogProtocol
from feedsync.domains.users.protocols import UserRepositoryProtocol
from feedsync.domains.users.user_repository import TrackedUserRepository
from feedsync.platform.sync.coordinator import SyncRunCoordinator
from feedsync.platform.sync.discovery import UserDiscovery
from feedsync.platform.sync.entity_sync import EntitySyncTask
from feedsync.platform.sync.page_fetcher import PageFetcher
from feedsync.platform.sync.skip_policy import SkipPolicy
from feedsync.platform.sync.worker_pool import AsyncWorkerPool


@dataclass
class SyncEngine:
    """The wired components of one engine instance."""

    coordinator: SyncRunCoordinator
    discovery: UserDiscovery
    remote_source: RemoteSource
    event_log: EventLogProtocol
    worker_pool: AsyncWorkerPool

    async def close(self) -> None:
        """Release the remote source's connections."""
        await self.remote_source.close()


class SyncFactory:
    """Builds a SyncEngine from settings and collaborators."""

    @classmethod
    def create_engine(
        cls,
        *,
        remote_source: RemoteSource,
        users: UserRepositoryProtocol,
        cursor_store: CursorStoreProtocol,
        record_store: RecordStoreProtocol,
        event_log: EventLogProtocol,
        config: Optional[Settings] = None,
    ) -> SyncEngine:
        """Wire the engine around explicit collaborators."""
        config = config or settings
        logger = LoggerConfigurator.configure_logger(
            "feedsync.platform.sync", dimensions={"component": "sync"}
        )

        worker_pool = AsyncWorkerPool(max_workers=config.MAX_CONCURRENT_SYNCS)
        page_fetcher = PageFetcher(remote_source, data_domain=config.DATA_DOMAIN)
        entity_task = EntitySyncTask(
            page_fetcher=page_fetcher,
            cursor_store=cursor_store,
            record_store=record_store,
            logger=logger,
        )
        coordinator = SyncRunCoordinator(
            entity_task=entity_task,
            catalog=users,
            cursor_store=cursor_store,
            event_log=event_log,
            worker_pool=worker_pool,
            skip_policy=SkipPolicy(decay=config.SKIP_DECAY, floor=config.SKIP_FLOOR),
            task_timeout=config.TASK_TIMEOUT,
            logger=logger,
        )
        discovery = UserDiscovery(
            remote_source=remote_source,
            users=users,
            event_log=event_log,
            worker_pool=worker_pool,
            social_app=config.SOCIAL_APP,
            seed_users=config.SEED_USERS,
            logger=logger,
        )
        return SyncEngine(
            coordinator=coordinator,
            discovery=discovery,
            remote_source=remote_source,
            event_log=event_log,
            worker_pool=worker_pool,
        )

    @classmethod
    def create_from_database(
        cls,
        session_factory: async_sessionmaker[AsyncSession],
        config: Optional[Settings] = None,
    ) -> SyncEngine:
        """Wire the engine with SQLAlchemy repositories and the HTTP remote source."""
        config = config or settings
        return cls.create_engine(
            remote_source=HttpRemoteSource(
                config.REMOTE_SOURCE_URL,
                timeout=config.HTTP_TIMEOUT,
                max_retries=config.HTTP_MAX_RETRIES,
            ),
            users=TrackedUserRepository(session_factory),
            cursor_store=FeedCursorRepository(session_factory),
            record_store=FeedEntryRepository(session_factory),
            event_log=SyncEventRepository(session_factory),
            config=config,
        )
