"""Bounded async worker pool."""

import asyncio
from typing import Any, Awaitable, Callable, TypeVar

T = TypeVar("T")


class AsyncWorkerPool:
    """Runs submitted coroutines with at most ``max_workers`` executing at once.

    ``submit`` never blocks and never rejects: every submission becomes a task
    immediately, and the task waits on the pool's semaphore before running its
    body. The backlog is therefore unbounded, and each caller keeps the task
    handle to await its result or exception.
    """

    def __init__(self, max_workers: int = 10) -> None:
        """Initialize the pool.

        Args:
            max_workers: Maximum number of bodies executing concurrently
        """
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.max_workers = max_workers
        self._semaphore = asyncio.Semaphore(max_workers)
        self.active_count = 0
        self.peak_active = 0

    async def submit(
        self, coro_fn: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any
    ) -> "asyncio.Task[T]":
        """Schedule ``coro_fn(*args, **kwargs)`` and return its task handle."""
        return asyncio.create_task(self._run(coro_fn, *args, **kwargs))

    async def _run(self, coro_fn: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        async with self._semaphore:
            self.active_count += 1
            self.peak_active = max(self.peak_active, self.active_count)
            try:
                return await coro_fn(*args, **kwargs)
            finally:
                self.active_count -= 1
