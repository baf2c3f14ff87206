"""Pytest fixtures for rofex client tests"""

import asyncio
import json
from typing import Any

import httpx
import pytest
from websockets.exceptions import ConnectionClosedError
from websockets.frames import Close

from rofex.core.config import ClientConfig, Credentials, StreamSettings
from rofex.domain.models.events import MarketDataEvent
from rofex.domain.models.enums import WSMessageType
from rofex.streaming.channel import EventChannel
from rofex.streaming.manager import StreamManager
from rofex.streaming.messages import market_data_request

# =============================================================================
# WebSocket fakes
# =============================================================================


class FakeWebSocket:
    """Scripted socket: ``push`` frames (or exceptions) for ``recv`` to return"""

    def __init__(self, *frames: Any, fail_send: BaseException | None = None):
        self.incoming: asyncio.Queue = asyncio.Queue()
        self.sent: list[dict] = []
        self.closed = False
        self.close_code: int | None = None
        self.close_reason: str | None = None
        self.pings = 0
        self.fail_send = fail_send
        self.fail_ping: BaseException | None = None
        self.hang_ping = False
        for frame in frames:
            self.push(frame)

    def push(self, frame: Any) -> None:
        if isinstance(frame, dict):
            frame = json.dumps(frame)
        self.incoming.put_nowait(frame)

    async def send(self, message: str) -> None:
        if self.fail_send is not None:
            raise self.fail_send
        self.sent.append(json.loads(message))

    async def recv(self) -> str:
        frame = await self.incoming.get()
        if isinstance(frame, BaseException):
            raise frame
        return frame

    async def ping(self) -> asyncio.Future:
        self.pings += 1
        if self.fail_ping is not None:
            raise self.fail_ping
        waiter = asyncio.get_running_loop().create_future()
        if not self.hang_ping:
            waiter.set_result(None)
        return waiter

    async def close(self, code: int = 1000, reason: str = "") -> None:
        """Record the first close and fail any pending ``recv``"""
        if self.closed:
            return
        self.closed = True
        self.close_code = code
        self.close_reason = reason
        self.push(ConnectionClosedError(None, Close(code, reason)))


class FakeConnector:
    """Returns (or raises) the scripted outcomes in order, then refuses"""

    def __init__(self, *outcomes: Any) -> None:
        self.outcomes = list(outcomes)
        self.calls: list[tuple[str, dict]] = []

    async def connect(self, url: str, headers) -> FakeWebSocket:
        self.calls.append((url, dict(headers)))
        if not self.outcomes:
            raise ConnectionRefusedError("connection refused")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


def md_message(symbol: str = "DLR/DIC23", kind: str = "md", price: float = 100.5):
    return {
        "type": kind,
        "timestamp": 1700000000000,
        "instrumentId": {"marketId": "ROFX", "symbol": symbol},
        "marketData": {
            "LA": {"price": price, "size": 3, "date": 1700000000000},
            "BI": [{"price": price - 0.5, "size": 10}],
        },
    }


def or_message(cl_ord_id: str = "123", kind: str = "or"):
    return {
        "type": kind,
        "timestamp": 1700000000000,
        "orderReport": {
            "clOrdId": cl_ord_id,
            "proprietary": "PBCP",
            "accountId": {"id": "REM1234"},
            "instrumentId": {"marketId": "ROFX", "symbol": "DLR/DIC23"},
            "price": 180.5,
            "orderQty": 10,
            "ordType": "LIMIT",
            "side": "BUY",
            "status": "NEW",
        },
    }


async def wait_until(predicate, timeout: float = 2.0) -> None:
    """Poll ``predicate`` until true or fail the test"""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            pytest.fail("condition not reached in time")
        await asyncio.sleep(0.001)


async def drain(channel: EventChannel) -> list:
    return [item async for item in channel]


# =============================================================================
# Config fixtures
# =============================================================================


@pytest.fixture
def fast_settings() -> StreamSettings:
    """Millisecond backoff so reconnect tests run quickly"""
    return StreamSettings(
        initial_backoff=0.001,
        max_backoff=0.008,
        max_retries=10,
        ping_interval=60.0,
        ping_timeout=1.0,
    )


@pytest.fixture
def config(fast_settings) -> ClientConfig:
    return ClientConfig(stream=fast_settings)


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(username="user", password="secret")


@pytest.fixture
def make_manager(fast_settings):
    """Factory for market data managers wired to a fake connector"""

    def _make(
        connector: FakeConnector,
        token_source=None,
        buffer: int = 8,
        drop_on_full: bool = False,
        settings: StreamSettings | None = None,
    ) -> StreamManager[MarketDataEvent]:
        async def _token() -> str:
            return "tok"

        return StreamManager(
            name="market data",
            url="wss://example.test/",
            kind=WSMessageType.MARKET_DATA,
            request=market_data_request(["DLR/DIC23"], ["LA", "BI"]),
            event_model=MarketDataEvent,
            token_source=token_source or _token,
            events=EventChannel(buffer, drop_on_full=drop_on_full),
            errors=EventChannel(5, drop_on_full=True),
            settings=settings or fast_settings,
            connector=connector,
        )

    return _make


# =============================================================================
# HTTP fixtures
# =============================================================================


class RecordingHandler:
    """httpx.MockTransport handler recording requests

    ``routes`` maps a path to a response or to a list of responses served
    in order (the last one repeats).
    """

    def __init__(self, routes: dict[str, Any] | None = None) -> None:
        self.routes = routes or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, text="not found")
        if isinstance(route, list):
            route = route.pop(0) if len(route) > 1 else route[0]
        if isinstance(route, BaseException):
            raise route
        if callable(route):
            return route(request)
        # Fresh copy so the same canned response can be served repeatedly
        return httpx.Response(
            route.status_code, headers=route.headers, content=route.content
        )

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


def login_ok(token: str = "tok-1") -> httpx.Response:
    return httpx.Response(200, headers={"X-Auth-Token": token})


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler({"/auth/getToken": login_ok()})
