"""Normalized record schema."""

from datetime import datetime, timezone
from typing import Any, Dict
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from feedsync.schemas.feed import EntryType


class NormalizedRecord(BaseModel):
    """The persisted ingestion unit. Written once, never mutated."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    entry_type: EntryType
    category: str
    owner_identity: str
    app: str
    feed_label: str
    data_domain: str
    content_ref: str
    identifier: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    ingested_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
