"""StreamConnection - one WebSocket connection and its connected flag"""

import asyncio
import json
from collections.abc import Mapping
from typing import Any

from loguru import logger
from websockets.asyncio.client import connect as ws_connect

from rofex.infrastructure.protocols import WebSocketConnection, WebSocketConnector
from rofex.shared.exceptions import StreamClosedError, StreamError
from rofex.shared.logging import LoggingBridge


class WebsocketsConnector:
    """Opens connections with the ``websockets`` library

    The library's own keepalive is disabled; streams ping on their own
    schedule.
    """

    def __init__(
        self, open_timeout: float | None = 10.0, close_timeout: float | None = 5.0
    ) -> None:
        self._open_timeout = open_timeout
        self._close_timeout = close_timeout

    async def connect(
        self, url: str, headers: Mapping[str, str]
    ) -> WebSocketConnection:
        LoggingBridge.install()
        return await ws_connect(
            url,
            additional_headers=dict(headers),
            ping_interval=None,
            open_timeout=self._open_timeout,
            close_timeout=self._close_timeout,
        )


class StreamConnection:
    """Owns exactly one socket for the lifetime of one connect attempt

    Connect/disconnect transitions are serialized by a lock; reads, writes
    and pings only check the flag. A connection is never reopened after
    disconnect: managers build a fresh one per attempt.
    """

    def __init__(
        self,
        url: str,
        headers: Mapping[str, str],
        connector: WebSocketConnector | None = None,
    ) -> None:
        self._url = url
        self._headers = dict(headers)
        self._connector = connector or WebsocketsConnector()
        self._ws: WebSocketConnection | None = None
        self._connected = False
        self._lock = asyncio.Lock()

    @property
    def url(self) -> str:
        return self._url

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def connect(self) -> None:
        """Open the socket

        Raises:
            StreamError: If the handshake fails
        """
        async with self._lock:
            if self._connected:
                return
            try:
                self._ws = await self._connector.connect(self._url, self._headers)
            except Exception as e:
                # OSError, TimeoutError or websockets' InvalidHandshake family
                raise StreamError(f"websocket dial failed: {e}") from e
            self._connected = True
        logger.debug(f"WebSocket connected: {self._url}")

    async def disconnect(self) -> None:
        """Close the socket with a normal closure; no-op if not connected"""
        async with self._lock:
            if not self._connected or self._ws is None:
                return
            self._connected = False
            ws = self._ws
            await ws.close(1000, "client disconnect")
        logger.debug("WebSocket disconnected")

    async def abort(self, reason: str = "keepalive ping failed") -> None:
        """Close a dead socket so a pending read fails

        Does not take the lock: a ``disconnect()`` may already be waiting
        on it. The connected flag stays set so the next read reports the
        library's abnormal closure.
        """
        ws = self._ws
        if not self._connected or ws is None:
            return
        try:
            await ws.close(1011, reason)
        except Exception as e:
            logger.debug(f"WebSocket close after failed ping raised: {e}")
        logger.debug(f"WebSocket aborted: {reason}")

    def _require(self) -> WebSocketConnection:
        if not self._connected or self._ws is None:
            raise StreamClosedError()
        return self._ws

    async def write_json(self, payload: Any) -> None:
        ws = self._require()
        await ws.send(json.dumps(payload))

    async def read_json(self) -> Any:
        """Read and decode one message

        Raises:
            StreamClosedError: If the connection is not open
            ValueError: If the frame is not valid JSON
        """
        ws = self._require()
        raw = await ws.recv()
        return json.loads(raw)

    async def ping(self, timeout: float) -> None:
        """Send a ping and wait for the pong

        Raises:
            TimeoutError: If no pong arrives within ``timeout``
        """
        ws = self._require()

        async def _roundtrip() -> None:
            pong_waiter = await ws.ping()
            await pong_waiter

        await asyncio.wait_for(_roundtrip(), timeout)
