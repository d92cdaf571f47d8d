"""Bounded number of tests allowed to run at the same time."""

import asyncio
import logging
from types import TracebackType

log = logging.getLogger(__name__)


class WorkerBudget:
    """Counting semaphore that tracks how many slots are held.

    Use as an async context manager; the slot is released on every exit
    path, including when the body raises.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self._capacity = capacity
        self._semaphore = asyncio.BoundedSemaphore(capacity)
        self._in_use = 0
        self._peak = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def in_use(self) -> int:
        """Number of slots currently held."""
        return self._in_use

    @property
    def peak(self) -> int:
        """Highest number of slots held at once so far."""
        return self._peak

    async def acquire(self) -> None:
        await self._semaphore.acquire()
        self._in_use += 1
        self._peak = max(self._peak, self._in_use)
        log.debug("Worker slot acquired (%d/%d)", self._in_use, self._capacity)

    def release(self) -> None:
        """Return a slot.

        Raises:
            ValueError: If no slot is held.

        """
        self._semaphore.release()
        self._in_use -= 1

    async def __aenter__(self) -> None:
        await self.acquire()

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()
