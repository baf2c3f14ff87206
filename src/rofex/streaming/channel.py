"""Bounded event channel with an explicit overflow policy"""

import asyncio
from typing import Generic, TypeVar

from rofex.shared.exceptions import StreamClosedError

T = TypeVar("T")

_CLOSED = object()


class EventChannel(Generic[T]):
    """Single-producer single-consumer bounded queue that can be closed

    With ``drop_on_full`` a put on a full channel discards the new item and
    bumps ``dropped``; queued items are never evicted or reordered. Without
    it, ``put`` waits for room.

    Closing is idempotent. Items queued before close are still delivered;
    anything put afterwards is ignored. Iteration ends once the channel is
    closed and drained.
    """

    def __init__(self, maxsize: int, drop_on_full: bool = False) -> None:
        if maxsize <= 0:
            raise ValueError("maxsize must be > 0")
        self._queue: asyncio.Queue = asyncio.Queue(maxsize)
        self._drop_on_full = drop_on_full
        self._closed = False
        self._close_pending = False
        self._drained = False
        self.dropped = 0

    @property
    def maxsize(self) -> int:
        return self._queue.maxsize

    @property
    def drop_on_full(self) -> bool:
        return self._drop_on_full

    @property
    def closed(self) -> bool:
        return self._closed

    def qsize(self) -> int:
        return self._queue.qsize() - (1 if self._sentinel_queued() else 0)

    def _sentinel_queued(self) -> bool:
        return self._closed and not self._close_pending and not self._drained

    def offer(self, item: T) -> bool:
        """Queue ``item`` without waiting; False if closed or full"""
        if self._closed:
            return False
        try:
            self._queue.put_nowait(item)
        except asyncio.QueueFull:
            self.dropped += 1
            return False
        return True

    async def put(self, item: T) -> bool:
        """Queue ``item`` according to the overflow policy

        Returns:
            True if queued, False if dropped or the channel is closed
        """
        if self._closed:
            return False
        if self._drop_on_full:
            return self.offer(item)
        await self._queue.put(item)
        return True

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._queue.put_nowait(_CLOSED)
        except asyncio.QueueFull:
            # Sentinel goes in as soon as the consumer frees a slot
            self._close_pending = True

    async def get(self) -> T:
        """Next item

        Raises:
            StreamClosedError: Once the channel is closed and drained
        """
        if self._drained:
            raise StreamClosedError("channel closed")
        item = await self._queue.get()
        if self._close_pending:
            self._close_pending = False
            self._queue.put_nowait(_CLOSED)
        if item is _CLOSED:
            self._drained = True
            raise StreamClosedError("channel closed")
        return item

    def __aiter__(self) -> "EventChannel[T]":
        return self

    async def __anext__(self) -> T:
        try:
            return await self.get()
        except StreamClosedError:
            raise StopAsyncIteration from None
