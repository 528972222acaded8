"""Contextual logging for feedsync.

Wraps the standard library logger in an adapter that carries a dictionary of
dimensions (owner, app, feed, run id...) and merges them into every record's
``extra``. Deployed environments get one JSON object per line; local
development gets a readable single-line format.

Usage:
    from feedsync.core.logging import logger

    task_logger = logger.with_context(owner_identity=owner, feed="interactions")
    task_logger.info("Fetched 3 pages")
"""

import logging
import sys
from typing import Any, Dict, List, MutableMapping, Optional, Tuple

import structlog

from feedsync.core.config import settings


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter that carries contextual dimensions.

    Dimensions are merged into ``extra`` on every call, so both the JSON
    formatter and log aggregation see them as top-level fields.
    """

    def __init__(
        self,
        logger: logging.Logger,
        prefix: str = "",
        dimensions: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            logger: Underlying standard library logger
            prefix: Text prepended to every message
            dimensions: Key-value context attached to every record
        """
        self.prefix = prefix
        self.dimensions: Dict[str, Any] = dict(dimensions or {})
        super().__init__(logger, self.dimensions)

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        """Prefix the message and merge dimensions into ``extra``."""
        extra = dict(self.dimensions)
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        return f"{self.prefix}{msg}", kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a new logger with additional dimensions."""
        merged = {**self.dimensions, **dimensions}
        return ContextualLogger(self.logger, prefix=self.prefix, dimensions=merged)

    def with_prefix(self, prefix: str) -> "ContextualLogger":
        """Return a new logger whose messages are prefixed with ``prefix``."""
        return ContextualLogger(self.logger, prefix=prefix, dimensions=self.dimensions)


class LoggerConfigurator:
    """Builds configured contextual loggers."""

    _configured = False

    @staticmethod
    def build_formatter(json_logs: bool) -> logging.Formatter:
        """Build the structlog formatter for stdlib records.

        Dimensions passed through ``extra`` become top-level keys. JSON logs
        render one object per line; otherwise the console renderer is used.
        """
        processors: List[Any] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
        if json_logs:
            processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
        else:
            processors.append(structlog.dev.ConsoleRenderer(colors=False))
        return structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.ExtraAdder(),
                structlog.processors.TimeStamper(fmt="iso", utc=True),
            ],
            processors=processors,
        )

    @classmethod
    def configure_root(cls) -> None:
        """Attach a single stdout handler to the ``feedsync`` logger tree."""
        if cls._configured:
            return

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(cls.build_formatter(json_logs=not settings.LOCAL_DEVELOPMENT))

        root = logging.getLogger("feedsync")
        root.handlers = [handler]
        root.setLevel(settings.LOG_LEVEL)
        root.propagate = False
        cls._configured = True

    @classmethod
    def configure_logger(
        cls,
        name: str,
        prefix: str = "",
        dimensions: Optional[Dict[str, Any]] = None,
    ) -> ContextualLogger:
        """Return a contextual logger under the ``feedsync`` tree.

        Args:
            name: Logger name (usually ``__name__``)
            prefix: Text prepended to every message
            dimensions: Key-value context attached to every record

        Returns:
            ContextualLogger
        """
        cls.configure_root()
        if not name.startswith("feedsync"):
            name = f"feedsync.{name}"
        return ContextualLogger(logging.getLogger(name), prefix=prefix, dimensions=dimensions)


logger = LoggerConfigurator.configure_logger("feedsync")
