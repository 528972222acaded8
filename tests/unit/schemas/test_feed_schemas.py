"""Unit tests for feed, cursor and run schemas."""

import pytest
from pydantic import ValidationError

from feedsync.core.events.enums import EventType
from feedsync.schemas.cursor import CursorState
from feedsync.schemas.feed import (
    EntryType,
    FeedEntity,
    FeedType,
    IndexDocument,
    PageDocument,
    RawEntry,
    entry_type_to_category,
)
from feedsync.schemas.run import EntityOutcome, RunResult
from feedsync.schemas.user import UserProfile


@pytest.mark.parametrize(
    "entry_type,category",
    [
        (EntryType.NEWCONTENT, "newcontent"),
        (EntryType.POST, "newcontent"),
        (EntryType.INTERACTION, "interaction"),
        (EntryType.COMMENT, "interaction"),
        (EntryType.REPOST, "interaction"),
    ],
)
def test_entry_type_to_category(entry_type, category):
    assert entry_type_to_category(entry_type) == category


def test_feed_type_mappings():
    assert FeedType.INTERACTIONS.entry_type == EntryType.INTERACTION
    assert FeedType.NEW_CONTENT.entry_type == EntryType.NEWCONTENT
    assert FeedType.NEW_CONTENT.error_event_type == EventType.FETCH_NEW_CONTENT_ERROR
    assert FeedType.COMMENTS.error_event_type == EventType.FETCH_COMMENTS_ERROR


def test_feed_entity_is_hashable_and_describable():
    entity = FeedEntity(owner_identity="alice", app="app.hns", feed_type=FeedType.POSTS)
    same = FeedEntity(owner_identity="alice", app="app.hns", feed_type=FeedType.POSTS)

    assert {entity: 1}[same] == 1
    assert entity.feed_label == "posts"
    assert entity.describe() == "alice/app.hns/posts"


def test_index_document_from_wire_format():
    index = IndexDocument.model_validate(
        {"version": 1, "currPageNumber": 3, "currPageNumEntries": 7, "pageSize": 10, "x": 1}
    )

    assert (index.current_page_number, index.current_page_entry_count) == (3, 7)
    assert index.page_size == 10


@pytest.mark.parametrize(
    "data",
    [
        {"currPageNumber": 0, "currPageNumEntries": 0, "pageSize": 0},
        {"currPageNumber": -1, "currPageNumEntries": 0, "pageSize": 10},
        {"currPageNumEntries": 0, "pageSize": 10},
    ],
    ids=["zero_page_size", "negative_page", "missing_page"],
)
def test_invalid_index_documents(data):
    with pytest.raises(ValidationError):
        IndexDocument.model_validate(data)


@pytest.mark.parametrize("key", ["skylink", "content", "content_ref"])
def test_raw_entry_accepts_content_aliases(key):
    entry = RawEntry.model_validate({key: "sia://x", "timestamp": 1})

    assert entry.content_ref == "sia://x"
    assert entry.metadata == {}


def test_page_document_defaults_to_no_entries():
    page = PageDocument.model_validate({"indexPath": "a/index.json"})

    assert page.entries == []
    assert page.index_path == "a/index.json"


def test_cursor_advance():
    cursor = CursorState(last_page_number=1, last_offset=2, consecutive_empty_runs=4)

    empty = cursor.advance(
        page_number=1, offset=2, found_records=False, index_fingerprint="i", page_fingerprint="p"
    )
    found = empty.advance(
        page_number=2, offset=1, found_records=True, index_fingerprint="j", page_fingerprint="q"
    )

    assert empty.consecutive_empty_runs == 5
    assert (found.last_page_number, found.last_offset, found.consecutive_empty_runs) == (2, 1, 0)
    assert cursor.consecutive_empty_runs == 4


def test_cursor_is_immutable():
    with pytest.raises(ValidationError):
        CursorState().last_offset = 3


def test_run_result_record():
    result = RunResult(context="sync_posts")

    result.record(EntityOutcome(entity="a", new_records=3))
    result.record(EntityOutcome(entity="b", error="boom"))

    assert (result.succeeded, result.failed, result.new_records) == (1, 1, 3)
    assert result.outcomes[1].failed


def test_user_profile_from_wire_format():
    profile = UserProfile.model_validate(
        {
            "username": "alice",
            "aboutMe": "hi",
            "dapps": {"skyfeed": {"url": "https://skyfeed.hns", "publicKey": "pk"}},
        }
    )

    assert profile.about_me == "hi"
    assert profile.dapps["skyfeed"].public_key == "pk"
    assert UserProfile.model_validate({}).dapps == {}
