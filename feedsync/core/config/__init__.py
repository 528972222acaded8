"""Configuration module for feedsync.

Usage:
    from feedsync.core.config import settings

    if settings.MAX_CONCURRENT_SYNCS > 1:
        ...
"""

from feedsync.core.config.settings import Settings

__all__ = [
    "Settings",
    "settings",
]

# Singleton settings instance
settings = Settings()
