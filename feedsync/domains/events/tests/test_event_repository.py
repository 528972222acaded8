"""Tests for SyncEventRepository against in-memory SQLite."""

import pytest

from feedsync.core.events.base import SyncEvent
from feedsync.core.events.enums import EventType
from feedsync.core.exceptions import NotFoundException
from feedsync.domains.events.event_repository import SyncEventRepository


@pytest.mark.asyncio
async def test_append_and_filter(session_factory):
    repo = SyncEventRepository(session_factory)

    await repo.append(
        SyncEvent.failure(
            EventType.FETCH_POSTS_ERROR,
            context="sync_posts",
            error=NotFoundException("no index"),
            metadata={"owner_identity": "alice", "app": "app.hns", "feed": "posts"},
        )
    )
    await repo.append(SyncEvent(type=EventType.ITERATION_SUCCESS, context="cycle"))

    assert len(await repo.list_events()) == 2
    failures = await repo.list_events(EventType.FETCH_POSTS_ERROR)
    assert len(failures) == 1
    assert failures[0].error == "no index"
    assert failures[0].description == "NotFoundException"
    assert failures[0].metadata["owner_identity"] == "alice"
