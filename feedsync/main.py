"""Periodic runner for the feed sync engine.

Usage:
    python -m feedsync --once
    python -m feedsync --interval 300 --feeds interactions newcontent
"""

import argparse
import asyncio
import time
from typing import Dict, List, Optional, Sequence

from feedsync.core.config import settings
from feedsync.core.events.base import SyncEvent
from feedsync.core.events.enums import EventType
from feedsync.core.logging import logger
from feedsync.db.session import AsyncSessionLocal, init_db
from feedsync.platform.sync.factory import SyncEngine, SyncFactory
from feedsync.schemas.feed import FeedType

cycle_logger = logger.with_prefix("Cycle: ").with_context(component="runner")


async def run_cycle(
    engine: SyncEngine, feed_types: Sequence[FeedType], discover: bool = True
) -> Dict[str, int]:
    """Run discovery and every feed sync once.

    Returns:
        Failure count per run context.
    """
    started = time.monotonic()
    failures: Dict[str, int] = {}

    if discover:
        result = await engine.discovery.run()
        failures[result.context] = result.failed

    for feed_type in feed_types:
        result = await engine.coordinator.run(feed_type)
        failures[result.context] = result.failed

    total = sum(failures.values())
    event = SyncEvent(
        type=EventType.ITERATION_FAILURE if total else EventType.ITERATION_SUCCESS,
        context="cycle",
        description=f"{total} failure(s) in {time.monotonic() - started:.2f}s",
        metadata={"failures": failures},
    )
    try:
        await engine.event_log.append(event)
    except Exception as e:
        cycle_logger.error(f"Failed to record iteration event: {e}")

    cycle_logger.info(f"Finished with {total} failure(s)", extra={"failures": failures})
    return failures


async def run(
    feed_types: Sequence[FeedType], once: bool, interval: float, discover: bool
) -> None:
    """Run cycles until cancelled (or a single cycle with ``once``)."""
    await init_db()
    engine = SyncFactory.create_from_database(AsyncSessionLocal)
    try:
        while True:
            await run_cycle(engine, feed_types, discover=discover)
            if once:
                return
            await asyncio.sleep(interval)
    finally:
        await engine.close()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Synchronize remote content feeds")
    parser.add_argument("--once", action="store_true", help="Run a single cycle and exit")
    parser.add_argument("--interval", type=float, default=300.0, help="Seconds between cycles")
    parser.add_argument(
        "--feeds",
        nargs="+",
        type=FeedType,
        choices=list(FeedType),
        default=None,
        help="Feed types to sync (defaults to FEED_TYPES)",
    )
    parser.add_argument(
        "--skip-discovery", action="store_true", help="Do not discover new users"
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point."""
    args = parse_args(argv)
    feed_types = args.feeds or settings.FEED_TYPES
    try:
        asyncio.run(
            run(
                feed_types,
                once=args.once,
                interval=args.interval,
                discover=not args.skip_discovery,
            )
        )
    except KeyboardInterrupt:
        cycle_logger.info("Interrupted, shutting down")
