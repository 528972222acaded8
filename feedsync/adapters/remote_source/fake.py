"""Fake remote source for testing.

Serves documents from an in-memory map and records every fetch for
assertions. Fingerprints are derived from the document content, so
conditional fetches behave like the real portal.
"""

import asyncio
import hashlib
import json
from typing import Any, Dict, List, Tuple

from feedsync.core.exceptions import NotFoundException
from feedsync.core.protocols.remote_source import RemoteDocument


class FakeRemoteSource:
    """Test implementation of RemoteSource.

    Usage:
        fake = FakeRemoteSource()
        fake.put("alice", "contentrecord.hns/app/interactions/index.json", {...})
        fake.fail("bob", "contentrecord.hns/app/interactions/index.json", NotFoundException())

        # Assert on the paths fetched
        assert fake.fetched_paths("alice") == [...]
    """

    def __init__(self, delay: float = 0.0) -> None:
        """Initialize the fake.

        Args:
            delay: Seconds each fetch suspends for, to make concurrency observable.
        """
        self.documents: Dict[Tuple[str, str], Any] = {}
        self.errors: Dict[Tuple[str, str], BaseException] = {}
        self.calls: List[Tuple[str, str, str]] = []
        self.delay = delay
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    def put(self, owner_identity: str, path: str, data: Any) -> None:
        """Publish (or replace) a document."""
        self.documents[(owner_identity, path)] = data

    def fail(self, owner_identity: str, path: str, error: BaseException) -> None:
        """Make fetches of ``path`` raise ``error``."""
        self.errors[(owner_identity, path)] = error

    @staticmethod
    def fingerprint_of(data: Any) -> str:
        """Content fingerprint the fake assigns to a document."""
        encoded = json.dumps(data, sort_keys=True, default=str).encode()
        return hashlib.sha256(encoded).hexdigest()

    async def fetch(
        self, owner_identity: str, path: str, cached_fingerprint: str = ""
    ) -> RemoteDocument:
        """Return the seeded document for ``path``."""
        self.calls.append((owner_identity, path, cached_fingerprint))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            key = (owner_identity, path)
            if key in self.errors:
                raise self.errors[key]
            if key not in self.documents:
                raise NotFoundException(
                    f"Could not find file for user '{owner_identity}' at path '{path}'"
                )
            data = self.documents[key]
            fingerprint = self.fingerprint_of(data)
            if cached_fingerprint and cached_fingerprint == fingerprint:
                return RemoteDocument(data=None, fingerprint=fingerprint, unchanged=True)
            return RemoteDocument(data=data, fingerprint=fingerprint)
        finally:
            self.in_flight -= 1

    async def close(self) -> None:
        """Mark the fake as closed."""
        self.closed = True

    # Test helpers

    def publish_feed(
        self,
        owner_identity: str,
        app: str,
        feed_label: str,
        pages: List[List[dict]],
        page_size: int,
        data_domain: str = "contentrecord.hns",
    ) -> None:
        """Publish an index and its numbered pages; the last page is the current one."""
        base = f"{data_domain}/{app}/{feed_label}"
        for number, entries in enumerate(pages):
            self.put(owner_identity, f"{base}/page_{number}.json", {"version": 1, "entries": entries})
        self.put(
            owner_identity,
            f"{base}/index.json",
            {
                "version": 1,
                "currPageNumber": len(pages) - 1,
                "currPageNumEntries": len(pages[-1]),
                "pageSize": page_size,
            },
        )

    def fetched_paths(self, owner_identity: str) -> List[str]:
        """Paths fetched for an owner, in call order."""
        return [path for owner, path, _ in self.calls if owner == owner_identity]
