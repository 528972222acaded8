"""Application settings loaded from the environment.

Uses Pydantic Settings so every field can be overridden with an env var of the
same name (e.g. ``MAX_CONCURRENT_SYNCS=25``).
"""

from typing import List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from feedsync.schemas.feed import FeedType


class Settings(BaseSettings):
    """Settings for the feed synchronization engine."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Persistence
    DATABASE_URL: str = Field(
        "sqlite+aiosqlite:///./feedsync.db",
        description="SQLAlchemy async URL (postgresql+asyncpg://... in production)",
    )
    DB_POOL_SIZE: int = Field(20, ge=1)
    DB_POOL_MAX_OVERFLOW: int = Field(40, ge=0)

    # Remote content portal
    REMOTE_SOURCE_URL: str = Field("https://siasky.net", description="Content portal base URL")
    DATA_DOMAIN: str = Field("contentrecord.hns", description="Data domain feeds live under")
    HTTP_TIMEOUT: float = Field(30.0, gt=0)
    HTTP_MAX_RETRIES: int = Field(5, ge=1)

    # Engine
    MAX_CONCURRENT_SYNCS: int = Field(10, ge=1, description="Max in-flight entity syncs")
    TASK_TIMEOUT: Optional[float] = Field(
        None, gt=0, description="Per-entity timeout in seconds (unset means no timeout)"
    )
    FEED_TYPES: List[FeedType] = Field(
        default_factory=lambda: [FeedType.INTERACTIONS, FeedType.NEW_CONTENT]
    )

    # Skip policy for dormant entities
    SKIP_DECAY: float = Field(0.75, gt=0, le=1)
    SKIP_FLOOR: float = Field(0.05, gt=0, le=1)

    # Social-graph discovery
    SOCIAL_APP: str = Field("skyfeed")
    SEED_USERS: List[str] = Field(default_factory=list)

    # Logging
    LOG_LEVEL: str = Field("INFO")
    LOCAL_DEVELOPMENT: bool = Field(False)

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize and validate the log level name."""
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid LOG_LEVEL: {value}")
        return level

    @model_validator(mode="after")
    def validate_skip_curve(self) -> "Settings":
        """A floor above the decay would make the curve flat from the first skip."""
        if self.SKIP_FLOOR > self.SKIP_DECAY:
            raise ValueError("SKIP_FLOOR must not exceed SKIP_DECAY")
        return self
