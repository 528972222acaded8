"""Run coordinator: sync every tracked entity of a feed type.

Entities come from the catalog, dormant ones are thinned out by the skip
policy, and the rest are submitted to the worker pool. Every task handle is
awaited by the coordinator itself; a failed entity becomes a failure event in
the event log and a count in the result, never an exception of the run.
"""

import asyncio
import time
from typing import List, Optional, Tuple
from uuid import uuid4

from feedsync.core.events.base import SyncEvent
from feedsync.core.logging import ContextualLogger
from feedsync.core.logging import logger as default_logger
from feedsync.domains.cursors.protocols import CursorStoreProtocol
from feedsync.domains.events.protocols import EventLogProtocol
from feedsync.domains.users.protocols import EntityCatalogProtocol
from feedsync.platform.sync.entity_sync import EntitySyncResult, EntitySyncTask
from feedsync.platform.sync.skip_policy import SkipPolicy
from feedsync.platform.sync.worker_pool import AsyncWorkerPool
from feedsync.schemas.cursor import CursorState
from feedsync.schemas.feed import FeedEntity, FeedType
from feedsync.schemas.run import EntityOutcome, RunResult


class SyncRunCoordinator:
    """Coordinates one run over all entities of a feed type."""

    def __init__(
        self,
        entity_task: EntitySyncTask,
        catalog: EntityCatalogProtocol,
        cursor_store: CursorStoreProtocol,
        event_log: EventLogProtocol,
        worker_pool: AsyncWorkerPool,
        skip_policy: SkipPolicy,
        task_timeout: Optional[float] = None,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize the coordinator with ALL required components."""
        self.entity_task = entity_task
        self.catalog = catalog
        self.cursor_store = cursor_store
        self.event_log = event_log
        self.worker_pool = worker_pool
        self.skip_policy = skip_policy
        self.task_timeout = task_timeout
        self.logger = logger or default_logger

    async def run(self, feed_type: FeedType) -> RunResult:
        """Sync every tracked entity of ``feed_type``.

        Raises:
            Exception: Only if the catalog cannot be listed.
        """
        context = f"sync_{feed_type.value}"
        log = self.logger.with_context(feed=feed_type.value, run_id=uuid4().hex[:8])
        started = time.monotonic()

        entities = await self.catalog.list_entities(feed_type)
        result = RunResult(context=context)
        handles: List[Tuple[FeedEntity, "asyncio.Task[EntitySyncResult]"]] = []

        try:
            for entity in entities:
                try:
                    cursor = await self.cursor_store.get(entity)
                except Exception as e:
                    result.attempted += 1
                    await self._record_failure(entity, e, context, result, log)
                    continue

                if not self.skip_policy.should_run(cursor.consecutive_empty_runs):
                    result.skipped += 1
                    continue

                result.attempted += 1
                task = await self.worker_pool.submit(self._run_entity, entity, cursor)
                handles.append((entity, task))

            for entity, task in handles:
                try:
                    sync_result = await task
                except Exception as e:
                    await self._record_failure(entity, e, context, result, log)
                else:
                    result.record(
                        EntityOutcome(
                            entity=entity.describe(), new_records=sync_result.new_records
                        )
                    )
        finally:
            pending = [task for _, task in handles if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        log.info(
            f"{context} finished in {time.monotonic() - started:.2f}s: "
            f"{result.attempted} attempted, {result.skipped} skipped, "
            f"{result.failed} failed, {result.new_records} new entries"
        )
        return result

    async def run_failure_count(self, feed_type: FeedType) -> int:
        """Run and return only the number of failed entities."""
        result = await self.run(feed_type)
        return result.failed

    async def _run_entity(self, entity: FeedEntity, cursor: CursorState) -> EntitySyncResult:
        if self.task_timeout is None:
            return await self.entity_task.run(entity, cursor)
        return await asyncio.wait_for(self.entity_task.run(entity, cursor), self.task_timeout)

    async def _record_failure(
        self,
        entity: FeedEntity,
        error: BaseException,
        context: str,
        result: RunResult,
        log: ContextualLogger,
    ) -> None:
        description = str(error) or type(error).__name__
        result.record(EntityOutcome(entity=entity.describe(), error=description))
        log.warning(
            f"Failed to sync {entity.describe()}: {type(error).__name__}: {description}",
            extra={"owner_identity": entity.owner_identity, "app": entity.app},
        )

        event = SyncEvent.failure(
            entity.feed_type.error_event_type,
            context=context,
            error=error,
            metadata={
                "owner_identity": entity.owner_identity,
                "app": entity.app,
                "feed": entity.feed_label,
            },
        )
        try:
            await self.event_log.append(event)
        except Exception as log_error:
            log.error(f"Failed to record failure event for {entity.describe()}: {log_error}")
