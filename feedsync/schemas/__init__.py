"""Pydantic schemas for feedsync."""

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
from feedsync.schemas.record import NormalizedRecord
from feedsync.schemas.run import EntityOutcome, RunResult
from feedsync.schemas.user import DappEntry, UserProfile

__all__ = [
    "CursorState",
    "DappEntry",
    "EntityOutcome",
    "EntryType",
    "FeedEntity",
    "FeedType",
    "IndexDocument",
    "NormalizedRecord",
    "PageDocument",
    "RawEntry",
    "RunResult",
    "UserProfile",
    "entry_type_to_category",
]
