"""Cursor schema for resumable feed ingestion."""

from pydantic import BaseModel, ConfigDict, Field


class CursorState(BaseModel):
    """Durable bookmark of ingestion progress for one feed entity.

    The cursor is an immutable value: a sync task receives one and returns a
    new one through ``advance``/``model_copy`` rather than mutating it.
    """

    model_config = ConfigDict(frozen=True)

    last_page_number: int = Field(0, ge=0, description="Page the cursor points into")
    last_offset: int = Field(0, ge=0, description="Entries consumed from last_page_number")
    consecutive_empty_runs: int = Field(0, ge=0, description="Successive scans with no records")
    index_fingerprint: str = Field("", description="Data link of the last index seen")
    page_fingerprint: str = Field("", description="Data link of the last current page seen")

    def advance(
        self,
        *,
        page_number: int,
        offset: int,
        found_records: bool,
        index_fingerprint: str,
        page_fingerprint: str,
    ) -> "CursorState":
        """Return the checkpoint to commit after a successful scan."""
        return CursorState(
            last_page_number=page_number,
            last_offset=offset,
            consecutive_empty_runs=0 if found_records else self.consecutive_empty_runs + 1,
            index_fingerprint=index_fingerprint,
            page_fingerprint=page_fingerprint,
        )
