"""Tests for FeedEntryRepository against in-memory SQLite."""

from datetime import datetime, timezone

import pytest

from feedsync.domains.entries.entry_repository import FeedEntryRepository
from feedsync.schemas.feed import EntryType
from feedsync.schemas.record import NormalizedRecord


def _record(owner: str, ref: str, ts: int, app: str = "app.hns") -> NormalizedRecord:
    return NormalizedRecord(
        entry_type=EntryType.INTERACTION,
        category="interaction",
        owner_identity=owner,
        app=app,
        feed_label="interactions",
        data_domain="contentrecord.hns",
        content_ref=ref,
        identifier=ref,
        metadata={"ref": ref},
        created_at=datetime.fromtimestamp(ts, tz=timezone.utc),
    )


@pytest.mark.asyncio
async def test_insert_many_and_list(session_factory):
    repo = FeedEntryRepository(session_factory)

    await repo.insert_many(
        [_record("alice", "sia://2", 20), _record("alice", "sia://1", 10), _record("bob", "x", 5)]
    )

    rows = await repo.list_for_owner("alice")
    assert [row.content_ref for row in rows] == ["sia://1", "sia://2"]
    assert rows[0].entry_metadata == {"ref": "sia://1"}
    assert rows[0].entry_type == "INTERACTION"
    assert await repo.count_for_owner("alice", "app.hns") == 2
    assert await repo.count_for_owner("alice", "other.hns") == 0


@pytest.mark.asyncio
async def test_empty_batch_is_a_noop(session_factory):
    repo = FeedEntryRepository(session_factory)

    await repo.insert_many([])

    assert await repo.count_for_owner("alice", "app.hns") == 0
