"""Unit tests for PageFetcher."""

from datetime import datetime, timezone

import pytest

from feedsync.adapters.remote_source.fake import FakeRemoteSource
from feedsync.core.exceptions import MalformedDocumentError, NotFoundException
from feedsync.platform.sync.page_fetcher import (
    PageFetcher,
    index_path,
    normalize_entry,
    page_path,
)
from feedsync.schemas.feed import EntryType, FeedEntity, FeedType, RawEntry

DOMAIN = "contentrecord.hns"
ENTITY = FeedEntity(owner_identity="alice", app="skyfeed.hns", feed_type=FeedType.INTERACTIONS)


def _entries(count: int, start: int = 0) -> list[dict]:
    return [
        {"skylink": f"sia://{i}", "metadata": {"n": i}, "timestamp": 1_600_000_000 + i}
        for i in range(start, start + count)
    ]


@pytest.fixture
def source() -> FakeRemoteSource:
    fake = FakeRemoteSource()
    fake.publish_feed("alice", "skyfeed.hns", "interactions", [_entries(3), _entries(2, 3)], 3)
    return fake


def test_paths():
    assert index_path(DOMAIN, ENTITY) == "contentrecord.hns/skyfeed.hns/interactions/index.json"
    assert page_path(DOMAIN, ENTITY, 7) == "contentrecord.hns/skyfeed.hns/interactions/page_7.json"


def test_normalize_entry_maps_fields():
    raw = RawEntry.model_validate({"skylink": "sia://x", "metadata": {"a": 1}, "timestamp": 10})
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    record = normalize_entry(
        raw, entity=ENTITY, entry_type=EntryType.INTERACTION, data_domain=DOMAIN, ingested_at=now
    )

    assert record.entry_type == EntryType.INTERACTION
    assert record.category == "interaction"
    assert record.owner_identity == "alice"
    assert record.app == "skyfeed.hns"
    assert record.feed_label == "interactions"
    assert record.content_ref == "sia://x"
    assert record.identifier == "sia://x"
    assert record.metadata == {"a": 1}
    assert record.created_at == datetime.fromtimestamp(10, tz=timezone.utc)
    assert record.ingested_at == now


def test_normalize_entry_assigns_fresh_ids():
    raw = RawEntry(content_ref="sia://x", timestamp=1)
    first = normalize_entry(raw, entity=ENTITY, entry_type=EntryType.POST, data_domain=DOMAIN)
    second = normalize_entry(raw, entity=ENTITY, entry_type=EntryType.POST, data_domain=DOMAIN)
    assert first.id != second.id
    assert first.category == "newcontent"


@pytest.mark.asyncio
async def test_fetch_index(source):
    fetcher = PageFetcher(source, DOMAIN)

    result = await fetcher.fetch_index(ENTITY)

    assert not result.unchanged
    assert result.index.current_page_number == 1
    assert result.index.current_page_entry_count == 2
    assert result.index.page_size == 3
    assert result.fingerprint


@pytest.mark.asyncio
async def test_fetch_index_unchanged(source):
    fetcher = PageFetcher(source, DOMAIN)
    first = await fetcher.fetch_index(ENTITY)

    second = await fetcher.fetch_index(ENTITY, first.fingerprint)

    assert second.unchanged
    assert second.index is None
    assert second.fingerprint == first.fingerprint


@pytest.mark.asyncio
async def test_fetch_index_missing_raises_not_found():
    fetcher = PageFetcher(FakeRemoteSource(), DOMAIN)
    with pytest.raises(NotFoundException):
        await fetcher.fetch_index(ENTITY)


@pytest.mark.asyncio
async def test_fetch_index_malformed():
    source = FakeRemoteSource()
    source.put("alice", index_path(DOMAIN, ENTITY), {"version": 1, "pageSize": 3})
    fetcher = PageFetcher(source, DOMAIN)

    with pytest.raises(MalformedDocumentError):
        await fetcher.fetch_index(ENTITY)


@pytest.mark.asyncio
async def test_fetch_page_slices_offsets(source):
    fetcher = PageFetcher(source, DOMAIN)

    full = await fetcher.fetch_page(ENTITY, 0)
    tail = await fetcher.fetch_page(ENTITY, 0, start_offset=1)
    bounded = await fetcher.fetch_page(ENTITY, 0, start_offset=1, end_offset=2)

    assert [r.content_ref for r in full.records] == ["sia://0", "sia://1", "sia://2"]
    assert [r.content_ref for r in tail.records] == ["sia://1", "sia://2"]
    assert [r.content_ref for r in bounded.records] == ["sia://1"]


@pytest.mark.asyncio
async def test_fetch_page_unchanged_yields_no_records(source):
    fetcher = PageFetcher(source, DOMAIN)
    first = await fetcher.fetch_page(ENTITY, 1)

    second = await fetcher.fetch_page(ENTITY, 1, cached_fingerprint=first.fingerprint)

    assert second.unchanged
    assert second.records == []


@pytest.mark.asyncio
async def test_fetch_page_malformed_entry():
    source = FakeRemoteSource()
    source.put("alice", page_path(DOMAIN, ENTITY, 0), {"entries": [{"metadata": {}}]})
    fetcher = PageFetcher(source, DOMAIN)

    with pytest.raises(MalformedDocumentError):
        await fetcher.fetch_page(ENTITY, 0)
