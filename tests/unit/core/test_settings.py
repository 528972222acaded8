"""Unit tests for Settings."""

import pytest
from pydantic import ValidationError

from feedsync.core.config.settings import Settings
from feedsync.schemas.feed import FeedType


def test_defaults(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    config = Settings(_env_file=None)

    assert config.MAX_CONCURRENT_SYNCS == 10
    assert config.TASK_TIMEOUT is None
    assert config.FEED_TYPES == [FeedType.INTERACTIONS, FeedType.NEW_CONTENT]
    assert (config.SKIP_DECAY, config.SKIP_FLOOR) == (0.75, 0.05)
    assert config.LOG_LEVEL == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MAX_CONCURRENT_SYNCS", "25")
    monkeypatch.setenv("TASK_TIMEOUT", "12.5")
    monkeypatch.setenv("FEED_TYPES", '["posts", "comments"]')
    monkeypatch.setenv("SEED_USERS", '["alice", "bob"]')
    monkeypatch.setenv("LOG_LEVEL", "warning")

    config = Settings(_env_file=None)

    assert config.MAX_CONCURRENT_SYNCS == 25
    assert config.TASK_TIMEOUT == 12.5
    assert config.FEED_TYPES == [FeedType.POSTS, FeedType.COMMENTS]
    assert config.SEED_USERS == ["alice", "bob"]
    assert config.LOG_LEVEL == "WARNING"


@pytest.mark.parametrize(
    "env",
    [
        {"LOG_LEVEL": "verbose"},
        {"MAX_CONCURRENT_SYNCS": "0"},
        {"SKIP_DECAY": "0.5", "SKIP_FLOOR": "0.6"},
        {"FEED_TYPES": '["likes"]'},
    ],
    ids=["log_level", "concurrency", "skip_curve", "feed_type"],
)
def test_invalid_values_are_rejected(monkeypatch, env):
    for key, value in env.items():
        monkeypatch.setenv(key, value)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
