"""Minimum-interval gate for outbound calls."""

import asyncio
import time


class MinIntervalGate:
    """Spaces successive acquisitions at least ``min_interval`` seconds apart.

    One instance per rate-limited upstream; share it between clients only
    when they should share the budget.
    """

    def __init__(self, min_interval: float):
        self.min_interval = min_interval
        self._last: float | None = None
        self._lock = asyncio.Lock()
        self.waits = 0

    async def acquire(self) -> None:
        """Wait until the interval since the previous call has elapsed."""
        async with self._lock:
            now = time.monotonic()
            if self._last is not None and self.min_interval > 0:
                remaining = self.min_interval - (now - self._last)
                if remaining > 0:
                    self.waits += 1
                    await asyncio.sleep(remaining)
            self._last = time.monotonic()
