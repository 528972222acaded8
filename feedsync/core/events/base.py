"""Event log entries.

Every event is a frozen Pydantic model. Failure events carry the entity they
refer to in ``metadata`` so the log can be filtered per owner, app or feed.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from feedsync.core.events.enums import EventType


class SyncEvent(BaseModel):
    """A single event log entry."""

    model_config = ConfigDict(frozen=True)

    type: EventType
    context: Optional[str] = None
    description: Optional[str] = None
    error: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def failure(
        cls,
        event_type: EventType,
        *,
        context: str,
        error: BaseException,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "SyncEvent":
        """Build a failure event from an exception."""
        return cls(
            type=event_type,
            context=context,
            description=type(error).__name__,
            error=str(error) or repr(error),
            metadata=metadata or {},
        )
