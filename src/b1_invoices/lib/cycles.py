"""
Cycle tracking for superseding asynchronous work.

A CycleGuard hands out monotonically increasing cycle identifiers. Only the
most recent identifier is current; work started under an older identifier
checks the guard after every suspension point and stops once superseded.
Timed pauses go through the guard so a superseded timer never fires its
continuation.
"""

import asyncio
from typing import Awaitable, Callable

Sleep = Callable[[float], Awaitable[None]]


class CycleGuard:
    """
    Issues cycle identifiers and runs cancellable pauses on their behalf.

    Attributes:
        current: Identifier of the most recently started cycle (0 before
                 the first one).
    """

    def __init__(self, sleep: Sleep = asyncio.sleep) -> None:
        self.current = 0
        self._sleep = sleep

    def begin(self) -> int:
        """Start a new cycle, superseding any earlier one."""
        self.current += 1
        return self.current

    def invalidate(self) -> None:
        """Supersede the current cycle without starting a new one."""
        self.current += 1

    def is_current(self, cycle: int) -> bool:
        return cycle == self.current

    async def pause(self, cycle: int, delay_ms: int) -> bool:
        """
        Suspend for delay_ms on behalf of a cycle.

        Args:
            cycle: Identifier returned by begin().
            delay_ms: Pause length in milliseconds; zero or less skips the
                      sleep but still checks the cycle.

        Returns:
            True if the cycle is still current when the pause ends, False if
            it was superseded in the meantime.
        """
        if delay_ms > 0:
            await self._sleep(delay_ms / 1000)
        return self.is_current(cycle)
