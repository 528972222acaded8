"""Entity sync task: ingest the unconsumed tail of one entity's feed.

A run walks index -> pages -> entries:

1. Fetch the index conditionally on the cached index fingerprint. An
   unchanged index ends the run with nothing to do and no writes.
2. Backfill every page between the cursor page and the index's current page.
   The cursor page resumes at the cursor offset (or is skipped when the
   offset shows it full); later pages are read in full.
3. Read the index's current page, from the cursor offset when the cursor is
   already on that page (conditionally on the cached page fingerprint), or
   from the start when the index moved on to a new page.
4. Commit: insert the collected records, then replace the cursor.

Any error before the commit leaves the stored cursor untouched, so the next
run retries the same range. Inserting records and updating the cursor are two
separate writes; a failure between them re-ingests the same records on retry.
"""

import time
from dataclasses import dataclass
from typing import List, Optional

from feedsync.core.logging import ContextualLogger
from feedsync.core.logging import logger as default_logger
from feedsync.domains.cursors.protocols import CursorStoreProtocol
from feedsync.domains.entries.protocols import RecordStoreProtocol
from feedsync.platform.sync.page_fetcher import PageFetcher
from feedsync.schemas.cursor import CursorState
from feedsync.schemas.feed import FeedEntity
from feedsync.schemas.record import NormalizedRecord


@dataclass(frozen=True)
class EntitySyncResult:
    """Outcome of a successful entity sync."""

    new_records: int
    cursor: CursorState
    pages_fetched: int = 0
    index_unchanged: bool = False


class EntitySyncTask:
    """Runs the index -> pages -> commit walk for one entity at a time."""

    def __init__(
        self,
        page_fetcher: PageFetcher,
        cursor_store: CursorStoreProtocol,
        record_store: RecordStoreProtocol,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize the task with its collaborators."""
        self.page_fetcher = page_fetcher
        self.cursor_store = cursor_store
        self.record_store = record_store
        self.logger = logger or default_logger

    async def run(
        self, entity: FeedEntity, cursor: Optional[CursorState] = None
    ) -> EntitySyncResult:
        """Sync one entity and commit its new cursor.

        Args:
            entity: The entity to sync
            cursor: The entity's current cursor; loaded from the store if omitted

        Returns:
            EntitySyncResult with the number of records persisted and the
            committed cursor.
        """
        if cursor is None:
            cursor = await self.cursor_store.get(entity)

        log = self.logger.with_context(
            owner_identity=entity.owner_identity, app=entity.app, feed=entity.feed_label
        )
        started = time.monotonic()

        index_fetch = await self.page_fetcher.fetch_index(entity, cursor.index_fingerprint)
        if index_fetch.unchanged:
            log.debug("Index unchanged since last run")
            return EntitySyncResult(new_records=0, cursor=cursor, index_unchanged=True)

        index = index_fetch.index
        current_page = index.current_page_number
        if current_page < cursor.last_page_number:
            log.warning(
                f"Index current page {current_page} is behind cursor page "
                f"{cursor.last_page_number}; the remote index may have been recreated"
            )

        records: List[NormalizedRecord] = []
        pages_fetched = 0

        for page_number in range(cursor.last_page_number, current_page):
            start_offset = 0
            if page_number == cursor.last_page_number:
                if cursor.last_offset >= index.page_size:
                    continue
                start_offset = cursor.last_offset
            page = await self.page_fetcher.fetch_page(
                entity, page_number, start_offset=start_offset
            )
            records.extend(page.records)
            pages_fetched += 1

        if current_page == cursor.last_page_number:
            start_offset, cached_fingerprint = cursor.last_offset, cursor.page_fingerprint
        elif current_page > cursor.last_page_number:
            start_offset, cached_fingerprint = 0, ""
        else:
            start_offset, cached_fingerprint = cursor.last_offset, ""

        page = await self.page_fetcher.fetch_page(
            entity,
            current_page,
            cached_fingerprint=cached_fingerprint,
            start_offset=start_offset,
            end_offset=index.current_page_entry_count,
        )
        records.extend(page.records)
        pages_fetched += 1

        new_cursor = cursor.advance(
            page_number=current_page,
            offset=index.current_page_entry_count,
            found_records=bool(records),
            index_fingerprint=index_fetch.fingerprint,
            page_fingerprint=page.fingerprint,
        )

        if records:
            await self.record_store.insert_many(records)
        await self.cursor_store.set(entity, new_cursor)

        log.info(
            f"Synced {len(records)} new entries from {pages_fetched} page(s) "
            f"in {time.monotonic() - started:.2f}s"
        )
        return EntitySyncResult(
            new_records=len(records), cursor=new_cursor, pages_fetched=pages_fetched
        )
