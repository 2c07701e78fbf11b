#!/usr/bin/env python3
"""Pacing between page requests."""
import asyncio
from typing import Protocol, runtime_checkable


@runtime_checkable
class Pacer(Protocol):
    """
    Protocol (interface) for request pacing.
    The crawler awaits wait() between two page fetches.
    """

    async def wait(self) -> None:
        """
        Suspend until the next request may start.
        """
        ...


class FixedDelayPacer:
    """
    Waits a constant number of seconds between requests.
    A delay of zero never suspends.
    """

    def __init__(self, delay: float = 0.0):
        """
        Initialize the pacer.

        Args:
            delay: Seconds to wait between requests
        """
        if delay < 0:
            raise ValueError("delay must be non-negative")
        self.delay = delay

    async def wait(self):
        if self.delay > 0:
            await asyncio.sleep(self.delay)
