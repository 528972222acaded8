"""Feed schemas: tracked entities and the remote index/page documents."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from feedsync.core.events.enums import EventType


class EntryType(str, Enum):
    """Kind of entry a normalized record was produced from."""

    NEWCONTENT = "NEWCONTENT"
    INTERACTION = "INTERACTION"
    COMMENT = "COMMENT"
    REPOST = "REPOST"
    POST = "POST"


def entry_type_to_category(entry_type: EntryType) -> str:
    """Squash an entry type onto ``newcontent`` or ``interaction``.

    Consumers aggregate on the category so that new entry types can be added
    without touching them.
    """
    if entry_type in (EntryType.NEWCONTENT, EntryType.POST):
        return "newcontent"
    if entry_type in (EntryType.INTERACTION, EntryType.REPOST, EntryType.COMMENT):
        return "interaction"
    raise ValueError(f"Unknown entry type {entry_type}")


class FeedType(str, Enum):
    """Feeds that can be tracked per owner and app.

    The value is the path label the feed is published under.
    """

    INTERACTIONS = "interactions"
    NEW_CONTENT = "newcontent"
    POSTS = "posts"
    COMMENTS = "comments"

    @property
    def entry_type(self) -> EntryType:
        """Entry type assigned to records ingested from this feed."""
        return {
            FeedType.INTERACTIONS: EntryType.INTERACTION,
            FeedType.NEW_CONTENT: EntryType.NEWCONTENT,
            FeedType.POSTS: EntryType.POST,
            FeedType.COMMENTS: EntryType.COMMENT,
        }[self]

    @property
    def error_event_type(self) -> EventType:
        """Event type recorded when syncing this feed fails for an entity."""
        return {
            FeedType.INTERACTIONS: EventType.FETCH_INTERACTIONS_ERROR,
            FeedType.NEW_CONTENT: EventType.FETCH_NEW_CONTENT_ERROR,
            FeedType.POSTS: EventType.FETCH_POSTS_ERROR,
            FeedType.COMMENTS: EventType.FETCH_COMMENTS_ERROR,
        }[self]


class FeedEntity(BaseModel):
    """An owner's feed of one type, published under one app."""

    model_config = ConfigDict(frozen=True)

    owner_identity: str
    app: str
    feed_type: FeedType

    @property
    def feed_label(self) -> str:
        """Path label of the feed."""
        return self.feed_type.value

    def describe(self) -> str:
        """Human readable identifier used in logs and events."""
        return f"{self.owner_identity}/{self.app}/{self.feed_label}"


class IndexDocument(BaseModel):
    """Remote descriptor of how many pages and entries a feed currently has."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    version: int = 1
    current_page_number: int = Field(..., ge=0, alias="currPageNumber")
    current_page_entry_count: int = Field(..., ge=0, alias="currPageNumEntries")
    page_size: int = Field(..., gt=0, alias="pageSize")
    page_paths: List[str] = Field(default_factory=list, alias="pagePaths")


class RawEntry(BaseModel):
    """A single entry as published on a remote page."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    content_ref: str = Field(
        ..., validation_alias=AliasChoices("skylink", "content", "content_ref")
    )
    metadata: Dict[str, Any] = Field(default_factory=dict)
    timestamp: float = Field(..., ge=0, description="Unix timestamp in seconds")


class PageDocument(BaseModel):
    """Remote ordered batch of raw entries for one page number."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    version: int = 1
    index_path: Optional[str] = Field(None, alias="indexPath")
    page_path: Optional[str] = Field(None, alias="pagePath")
    entries: List[RawEntry] = Field(default_factory=list)
