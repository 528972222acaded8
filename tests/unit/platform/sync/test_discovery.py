"""Unit tests for UserDiscovery."""

import pytest

from feedsync.core.events.enums import EventType
from feedsync.platform.sync.discovery import (
    PROFILE_PATH,
    UserDiscovery,
    followers_path,
    following_path,
)
from feedsync.platform.sync.worker_pool import AsyncWorkerPool


def _profile(public_key: str, *apps: str) -> dict:
    dapps = {"skyfeed": {"url": "https://skyfeed.hns", "publicKey": public_key}}
    for app in apps:
        dapps[app] = {"publicKey": f"{public_key}-{app}"}
    return {"username": public_key, "dapps": dapps}


def _discovery(source, users, events, seed_users=()) -> UserDiscovery:
    return UserDiscovery(
        remote_source=source,
        users=users,
        event_log=events,
        worker_pool=AsyncWorkerPool(max_workers=2),
        social_app="skyfeed",
        seed_users=seed_users,
    )


def test_relation_paths():
    assert following_path("skyfeed") == "skyfeed-following"
    assert followers_path("skyfeed") == "skyfeed-followers"


@pytest.mark.asyncio
async def test_discovers_users_from_following_and_followers(
    fake_remote_source, fake_users, fake_event_log
):
    fake_users.seed("alice")
    fake_remote_source.put("alice", PROFILE_PATH, _profile("alice-pk", "blog.hns"))
    fake_remote_source.put("alice-pk", "skyfeed-following", {"bob": {}, "carol": {}})
    fake_remote_source.put("alice-pk", "skyfeed-followers", {"carol": {}, "dave": {}})

    result = await _discovery(fake_remote_source, fake_users, fake_event_log).run()

    assert result.context == "discover_users"
    assert result.new_records == 3
    assert result.failed == 0
    assert sorted(fake_users.users) == ["alice", "bob", "carol", "dave"]
    assert fake_users.users["alice"] == ["blog.hns", "skyfeed"]
    assert fake_users.users["bob"] == []


@pytest.mark.asyncio
async def test_known_users_are_not_reinserted(fake_remote_source, fake_users, fake_event_log):
    fake_users.seed("alice", ["skyfeed"])
    fake_users.seed("bob", ["skyfeed"])
    fake_remote_source.put("alice", PROFILE_PATH, _profile("alice-pk"))
    fake_remote_source.put("alice-pk", "skyfeed-following", {"bob": {}})
    fake_remote_source.put("alice-pk", "skyfeed-followers", {})
    fake_remote_source.put("bob", PROFILE_PATH, _profile("bob-pk"))
    fake_remote_source.put("bob-pk", "skyfeed-following", {"alice": {}})
    fake_remote_source.put("bob-pk", "skyfeed-followers", {"alice": {}})

    result = await _discovery(fake_remote_source, fake_users, fake_event_log).run()

    assert result.new_records == 0
    assert result.succeeded == 2
    assert fake_users.users["bob"] == ["skyfeed"]


@pytest.mark.asyncio
async def test_seed_users_are_inserted_and_scanned(
    fake_remote_source, fake_users, fake_event_log
):
    fake_remote_source.put("seed", PROFILE_PATH, _profile("seed-pk"))
    fake_remote_source.put("seed-pk", "skyfeed-following", {"eve": {}})
    fake_remote_source.put("seed-pk", "skyfeed-followers", {})

    result = await _discovery(
        fake_remote_source, fake_users, fake_event_log, seed_users=["seed"]
    ).run()

    assert result.attempted == 1
    assert result.new_records == 1
    assert sorted(fake_users.users) == ["eve", "seed"]


@pytest.mark.asyncio
async def test_failures_become_events(fake_remote_source, fake_users, fake_event_log):
    fake_users.seed("no-profile")
    fake_users.seed("no-social-app")
    fake_remote_source.put("no-social-app", PROFILE_PATH, {"dapps": {}})

    result = await _discovery(fake_remote_source, fake_users, fake_event_log).run()

    assert (result.attempted, result.failed) == (2, 2)
    events = fake_event_log.of_type(EventType.DISCOVER_USERS_ERROR)
    assert sorted(e.metadata["owner_identity"] for e in events) == [
        "no-profile",
        "no-social-app",
    ]
    assert all(e.context == "discover_users" for e in events)


@pytest.mark.asyncio
async def test_invalid_profile_is_malformed(fake_remote_source, fake_users, fake_event_log):
    fake_users.seed("alice")
    fake_remote_source.put("alice", PROFILE_PATH, {"dapps": {"skyfeed": {"url": "x"}}})

    result = await _discovery(fake_remote_source, fake_users, fake_event_log).run()

    assert result.failed == 1
    assert "invalid profile" in fake_event_log.events[0].error
