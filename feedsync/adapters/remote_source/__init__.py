"""Remote source adapters."""

from feedsync.adapters.remote_source.fake import FakeRemoteSource
from feedsync.adapters.remote_source.http import HttpRemoteSource

__all__ = [
    "FakeRemoteSource",
    "HttpRemoteSource",
]
