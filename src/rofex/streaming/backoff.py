"""Exponential reconnect backoff"""

import asyncio


class Backoff:
    """Deterministic doubling delay with a ceiling and a retry budget

    The delay sequence is initial, 2x, 4x ... capped at ``maximum``
    (1, 2, 4, 8, 16, 30, 30 ... with the defaults). ``retries`` counts
    consecutive connect/subscribe failures and is cleared by ``reset``.
    """

    def __init__(
        self,
        initial: float = 1.0,
        maximum: float = 30.0,
        max_retries: int = 10,
    ) -> None:
        self.initial = initial
        self.maximum = maximum
        self.max_retries = max_retries
        self.delay = initial
        self.retries = 0

    def reset(self) -> None:
        self.delay = self.initial
        self.retries = 0

    def next_delay(self) -> float:
        """Return the current delay and double it for next time"""
        current = self.delay
        self.delay = min(self.delay * 2, self.maximum)
        return current

    async def wait(self) -> float:
        """Sleep the current delay, then double it"""
        delay = self.next_delay()
        await asyncio.sleep(delay)
        return delay

    @property
    def exhausted(self) -> bool:
        return self.retries >= self.max_retries

    async def failure(self) -> bool:
        """Record a failed attempt

        Returns:
            False when the retry budget is spent (no sleep happens), True
            after sleeping the backoff delay
        """
        self.retries += 1
        if self.exhausted:
            return False
        await self.wait()
        return True
