"""RemoteSource protocol for content-addressed document retrieval.

A remote source resolves an owner identity and a logical path to a JSON
document plus a content fingerprint (the document's data link). Passing the
fingerprint of a previous fetch turns the call into a conditional fetch: when
the content did not change, nothing is transferred and ``unchanged`` is set.
"""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class RemoteDocument:
    """Result of a remote fetch.

    ``data`` is None when ``unchanged`` is True.
    """

    data: Any
    fingerprint: str
    unchanged: bool = False


@runtime_checkable
class RemoteSource(Protocol):
    """Protocol for fetching JSON documents owned by an identity."""

    async def fetch(
        self, owner_identity: str, path: str, cached_fingerprint: str = ""
    ) -> RemoteDocument:
        """Fetch the document at ``path`` for ``owner_identity``.

        Args:
            owner_identity: Public key of the document owner.
            path: Logical path of the document.
            cached_fingerprint: Fingerprint of the last fetch; empty disables
                the conditional check.

        Returns:
            The fetched document, or an ``unchanged`` marker.

        Raises:
            NotFoundException: When no document exists at ``path``.
        """
        ...

    async def close(self) -> None:
        """Release any underlying connections."""
        ...
