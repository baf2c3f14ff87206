"""Tests for StreamConnection"""

import asyncio

import pytest
from websockets.exceptions import ConnectionClosedError

from conftest import FakeConnector, FakeWebSocket
from rofex.shared.exceptions import StreamClosedError, StreamError
from rofex.streaming.connection import StreamConnection


@pytest.mark.unit
@pytest.mark.asyncio
async def test_connect_passes_url_and_headers():
    ws = FakeWebSocket()
    connector = FakeConnector(ws)
    conn = StreamConnection("wss://x/", {"X-Auth-Token": "tok"}, connector)

    await conn.connect()

    assert conn.is_connected
    assert connector.calls == [("wss://x/", {"X-Auth-Token": "tok"})]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_connect_failure_is_stream_error():
    """Dial errors surface as StreamError and leave it disconnected"""
    conn = StreamConnection(
        "wss://x/", {}, FakeConnector(OSError("no route to host"))
    )

    with pytest.raises(StreamError, match="websocket dial failed"):
        await conn.connect()
    assert not conn.is_connected


@pytest.mark.unit
@pytest.mark.asyncio
async def test_json_roundtrip_over_socket():
    ws = FakeWebSocket({"type": "md", "n": 1})
    conn = StreamConnection("wss://x/", {}, FakeConnector(ws))
    await conn.connect()

    await conn.write_json({"type": "smd"})
    message = await conn.read_json()

    assert ws.sent == [{"type": "smd"}]
    assert message == {"type": "md", "n": 1}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_invalid_json_raises_value_error():
    ws = FakeWebSocket("not json")
    conn = StreamConnection("wss://x/", {}, FakeConnector(ws))
    await conn.connect()

    with pytest.raises(ValueError):
        await conn.read_json()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_operations_require_open_connection():
    """Read, write and ping fail with StreamClosedError when not connected"""
    conn = StreamConnection("wss://x/", {}, FakeConnector())

    with pytest.raises(StreamClosedError):
        await conn.write_json({})
    with pytest.raises(StreamClosedError):
        await conn.read_json()
    with pytest.raises(StreamClosedError):
        await conn.ping(1)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_disconnect_sends_normal_closure_once():
    ws = FakeWebSocket()
    conn = StreamConnection("wss://x/", {}, FakeConnector(ws))
    await conn.connect()

    await conn.disconnect()
    ws.closed = False
    await conn.disconnect()

    assert ws.close_code == 1000
    assert ws.close_reason == "client disconnect"
    assert not ws.closed
    assert not conn.is_connected
    with pytest.raises(StreamClosedError):
        await conn.write_json({})


@pytest.mark.unit
@pytest.mark.asyncio
async def test_ping_waits_for_pong():
    ws = FakeWebSocket()
    conn = StreamConnection("wss://x/", {}, FakeConnector(ws))
    await conn.connect()

    await conn.ping(1)

    assert ws.pings == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_ping_times_out_without_pong():
    ws = FakeWebSocket()
    ws.hang_ping = True
    conn = StreamConnection("wss://x/", {}, FakeConnector(ws))
    await conn.connect()

    with pytest.raises(TimeoutError):
        await conn.ping(0.01)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_abort_fails_pending_read():
    """Abort closes with 1011 and wakes a reader blocked on the socket"""
    ws = FakeWebSocket()
    conn = StreamConnection("wss://x/", {}, FakeConnector(ws))
    await conn.connect()
    reader = asyncio.create_task(conn.read_json())
    await asyncio.sleep(0)

    await conn.abort()

    with pytest.raises(ConnectionClosedError):
        await asyncio.wait_for(reader, 1)
    assert ws.close_code == 1011
    assert ws.close_reason == "keepalive ping failed"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_abort_does_not_wait_for_lock():
    ws = FakeWebSocket()
    conn = StreamConnection("wss://x/", {}, FakeConnector(ws))
    await conn.connect()

    async with conn._lock:
        await asyncio.wait_for(conn.abort("pong timeout"), 1)

    assert ws.closed
    assert ws.close_reason == "pong timeout"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_abort_without_connection_is_noop():
    conn = StreamConnection("wss://x/", {}, FakeConnector())

    await conn.abort()

    assert not conn.is_connected
