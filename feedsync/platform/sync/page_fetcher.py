"""Page fetcher: index/page retrieval and raw entry normalization."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from feedsync.core.exceptions import MalformedDocumentError, NotFoundException
from feedsync.core.protocols.remote_source import RemoteSource
from feedsync.schemas.feed import EntryType, FeedEntity, IndexDocument, PageDocument, RawEntry
from feedsync.schemas.feed import entry_type_to_category
from feedsync.schemas.record import NormalizedRecord

DocumentT = TypeVar("DocumentT", bound=BaseModel)


@dataclass(frozen=True)
class IndexFetch:
    """Result of fetching a feed index.

    ``index`` is None exactly when ``unchanged`` is True.
    """

    unchanged: bool
    fingerprint: str
    index: Optional[IndexDocument] = None


@dataclass(frozen=True)
class PageFetch:
    """Result of fetching (part of) a feed page."""

    fingerprint: str
    records: List[NormalizedRecord] = field(default_factory=list)
    unchanged: bool = False


def index_path(data_domain: str, entity: FeedEntity) -> str:
    """Path of an entity's feed index."""
    return f"{data_domain}/{entity.app}/{entity.feed_label}/index.json"


def page_path(data_domain: str, entity: FeedEntity, page_number: int) -> str:
    """Path of one numbered page of an entity's feed."""
    return f"{data_domain}/{entity.app}/{entity.feed_label}/page_{page_number}.json"


def normalize_entry(
    raw: RawEntry,
    *,
    entity: FeedEntity,
    entry_type: EntryType,
    data_domain: str,
    ingested_at: Optional[datetime] = None,
) -> NormalizedRecord:
    """Map a raw page entry onto a fresh normalized record."""
    return NormalizedRecord(
        entry_type=entry_type,
        category=entry_type_to_category(entry_type),
        owner_identity=entity.owner_identity,
        app=entity.app,
        feed_label=entity.feed_label,
        data_domain=data_domain,
        content_ref=raw.content_ref,
        identifier=raw.content_ref,
        metadata=raw.metadata,
        created_at=datetime.fromtimestamp(raw.timestamp, tz=timezone.utc),
        ingested_at=ingested_at or datetime.now(timezone.utc),
    )


def _parse(model: Type[DocumentT], data: object, path: str) -> DocumentT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise MalformedDocumentError(path, f"{e.error_count()} validation error(s)") from e


class PageFetcher:
    """Builds feed paths, fetches them from the remote source, and normalizes entries."""

    def __init__(self, remote_source: RemoteSource, data_domain: str) -> None:
        """Initialize the fetcher.

        Args:
            remote_source: Remote source documents are fetched from
            data_domain: Data domain all feeds are published under
        """
        self.remote_source = remote_source
        self.data_domain = data_domain

    async def fetch_index(self, entity: FeedEntity, cached_fingerprint: str = "") -> IndexFetch:
        """Fetch an entity's index, conditionally on ``cached_fingerprint``.

        Raises:
            NotFoundException: If the feed has no index.
            MalformedDocumentError: If the index fails validation.
        """
        path = index_path(self.data_domain, entity)
        document = await self.remote_source.fetch(entity.owner_identity, path, cached_fingerprint)
        if document.unchanged:
            return IndexFetch(unchanged=True, fingerprint=document.fingerprint)
        if document.data is None:
            raise NotFoundException(
                f"No {entity.feed_label} index file found for user {entity.owner_identity}"
            )
        index = _parse(IndexDocument, document.data, path)
        return IndexFetch(unchanged=False, fingerprint=document.fingerprint, index=index)

    async def fetch_page(
        self,
        entity: FeedEntity,
        page_number: int,
        cached_fingerprint: str = "",
        start_offset: int = 0,
        end_offset: Optional[int] = None,
    ) -> PageFetch:
        """Fetch a page and normalize entries ``[start_offset, end_offset)``.

        A cached fingerprint makes the fetch conditional; an unchanged page
        yields no records.

        Raises:
            NotFoundException: If the page does not exist.
            MalformedDocumentError: If the page fails validation.
        """
        path = page_path(self.data_domain, entity, page_number)
        document = await self.remote_source.fetch(entity.owner_identity, path, cached_fingerprint)
        if document.unchanged:
            return PageFetch(fingerprint=document.fingerprint, unchanged=True)
        if document.data is None:
            raise NotFoundException(
                f"Could not find page {page_number} for user '{entity.owner_identity}'"
            )

        page = _parse(PageDocument, document.data, path)
        ingested_at = datetime.now(timezone.utc)
        entry_type = entity.feed_type.entry_type
        records = [
            normalize_entry(
                raw,
                entity=entity,
                entry_type=entry_type,
                data_domain=self.data_domain,
                ingested_at=ingested_at,
            )
            for raw in page.entries[start_offset:end_offset]
        ]
        return PageFetch(fingerprint=document.fingerprint, records=records)
