"""Subscription handles returned to callers"""

import asyncio
import contextlib
from typing import Generic

from rofex.domain.models.enums import Market, MDEntry
from rofex.domain.models.events import MarketDataEvent, OrderReportEvent

from .channel import EventChannel
from .manager import EventT, StreamManager, StreamState


class Subscription(Generic[EventT]):
    """A live stream: consume ``events``, watch ``errors``, then ``aclose``

    Both channels end when the stream stops. An error on ``errors``
    before it closes means the stream failed; a bare close means it was
    stopped by the caller.

    Usage:
        async with await client.subscribe_market_data(["DLR/DIC23"], [MDEntry.BIDS]) as sub:
            async for event in sub.events:
                ...
    """

    def __init__(self, manager: StreamManager[EventT]) -> None:
        self._manager = manager
        self.events: EventChannel[EventT] = manager.events
        self.errors: EventChannel[BaseException] = manager.errors
        self._task: asyncio.Task | None = None

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(
                self._manager.run(), name=f"rofex-{type(self).__name__}"
            )

    @property
    def state(self) -> StreamState:
        return self._manager.state

    @property
    def dropped(self) -> int:
        """Events discarded because the channel was full"""
        return self.events.dropped

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()

    async def wait(self) -> None:
        """Wait until the stream stops on its own"""
        if self._task is not None:
            await asyncio.wait({self._task})

    async def aclose(self) -> None:
        """Stop the stream and close its connection and channels

        Safe to call more than once.
        """
        self._manager.request_stop()
        if self._task is not None and not self._task.done():
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
        await self._manager.disconnect()
        self.events.close()
        self.errors.close()

    async def __aenter__(self) -> "Subscription[EventT]":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


class MarketDataSubscription(Subscription[MarketDataEvent]):
    def __init__(
        self,
        manager: StreamManager[MarketDataEvent],
        symbols: list[str],
        entries: list[MDEntry | str],
        depth: int,
        market: Market | str,
    ) -> None:
        super().__init__(manager)
        self.symbols = symbols
        self.entries = entries
        self.depth = depth
        self.market = market


class OrderReportSubscription(Subscription[OrderReportEvent]):
    def __init__(
        self,
        manager: StreamManager[OrderReportEvent],
        account: str,
        snapshot_only_active: bool,
    ) -> None:
        super().__init__(manager)
        self.account = account
        self.snapshot_only_active = snapshot_only_active
