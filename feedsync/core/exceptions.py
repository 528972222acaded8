"""Shared exceptions module."""

from typing import Optional


class FeedSyncException(Exception):
    """Base exception for feedsync services."""

    pass


class NotFoundException(FeedSyncException):
    """Exception raised when a remote document or stored object is not found."""

    def __init__(self, message: Optional[str] = "Object not found"):
        """Create a new NotFoundException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class MalformedDocumentError(FeedSyncException):
    """Raised when a fetched document fails structural validation."""

    def __init__(self, path: str, reason: str):
        """Create a new MalformedDocumentError instance.

        Args:
        ----
            path (str): Remote path of the offending document.
            reason (str): Validation failure description.

        """
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed document at '{path}': {reason}")


class RemoteSourceError(FeedSyncException):
    """Raised when the remote source fails for reasons other than a missing document."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        """Create a new RemoteSourceError instance.

        Args:
        ----
            message (str): The error message.
            status_code (int, optional): HTTP status returned by the portal, if any.

        """
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class WriteError(FeedSyncException):
    """Raised when persisting records or cursor state fails."""

    def __init__(self, message: Optional[str] = "Persistence write failed"):
        """Create a new WriteError instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)
