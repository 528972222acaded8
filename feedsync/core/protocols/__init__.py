"""Core protocols for dependency injection.

Repository protocols live in their respective domains/ directories. This
module keeps cross-cutting infrastructure protocols only.
"""

from feedsync.core.protocols.remote_source import RemoteDocument, RemoteSource

__all__ = [
    "RemoteDocument",
    "RemoteSource",
]
