"""Tests for subscription handles"""

import asyncio

import pytest
from websockets.exceptions import ConnectionClosedOK
from websockets.frames import Close

from conftest import FakeConnector, FakeWebSocket, drain, md_message, wait_until
from rofex.streaming.manager import StreamState
from rofex.streaming.subscription import Subscription


@pytest.mark.unit
@pytest.mark.asyncio
async def test_aclose_stops_stream_and_closes_everything(make_manager):
    ws = FakeWebSocket(md_message())
    sub = Subscription(make_manager(FakeConnector(ws)))
    sub.start()

    await asyncio.wait_for(sub.events.get(), 2)
    await sub.aclose()

    assert sub.done
    assert sub.state == StreamState.CANCELLED
    assert ws.closed
    assert sub.events.closed
    assert sub.errors.closed
    assert await drain(sub.errors) == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_aclose_twice_is_safe(make_manager):
    sub = Subscription(make_manager(FakeConnector(FakeWebSocket())))
    sub.start()
    await wait_until(lambda: sub.state == StreamState.STREAMING)

    await sub.aclose()
    await sub.aclose()

    assert sub.done


@pytest.mark.unit
@pytest.mark.asyncio
async def test_context_manager_closes_on_exit(make_manager):
    ws = FakeWebSocket()
    async with Subscription(make_manager(FakeConnector(ws))) as sub:
        sub.start()
        await wait_until(lambda: sub.state == StreamState.STREAMING)

    assert ws.closed
    assert sub.events.closed


@pytest.mark.unit
@pytest.mark.asyncio
async def test_wait_returns_when_stream_ends(make_manager):
    """A server-side normal closure finishes the subscription on its own"""
    ws = FakeWebSocket(md_message(), ConnectionClosedOK(Close(1000, ""), None))
    sub = Subscription(make_manager(FakeConnector(ws), drop_on_full=True))
    sub.start()

    await asyncio.wait_for(sub.wait(), 2)

    assert sub.done
    assert sub.dropped == 0
    assert len(await drain(sub.errors)) == 1
    assert [e.symbol for e in await drain(sub.events)] == ["DLR/DIC23"]
