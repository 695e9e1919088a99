# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request spacing for the AniDB UDP client.

The API allows one packet every few seconds per client. The throttle hands
out sequential send slots: each acquisition waits for the current slot and
immediately books the next one ``min_interval`` seconds later, before the
request goes out. Slots are therefore spaced from when each send was
allowed, not from when its reply arrived.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class Throttle:
    """
    Minimum-interval gate for outgoing requests.

    The first slot opens at construction time, so the very first request
    goes out immediately.

    Not safe for overlapping callers; the client issues one request at a
    time.

    Args:
        min_interval: Seconds between consecutive slots.
        clock: Monotonic clock in seconds.
        sleep: Coroutine function used to wait.

    Example:
        >>> throttle = Throttle(2.0)
        >>> await throttle.acquire()  # immediate
        0.0
        >>> await throttle.acquire()  # roughly two seconds later
        2.0
    """

    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if min_interval < 0:
            raise ValueError("min_interval must not be negative")
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._next_slot = clock()

    @property
    def next_slot(self) -> float:
        """Clock time at which the next request may be sent."""
        return self._next_slot

    def time_until_next_slot(self) -> float:
        return max(0.0, self._next_slot - self._clock())

    async def acquire(self) -> float:
        """
        Wait for the next send slot and book the one after it.

        Returns:
            Seconds spent waiting.
        """
        wait_time = self.time_until_next_slot()
        if wait_time > 0:
            logger.debug(f"Throttling: waiting {wait_time:.2f}s for next send slot")
            await self._sleep(wait_time)

        self._next_slot = self._clock() + self.min_interval
        return wait_time


__all__ = ["Throttle"]
