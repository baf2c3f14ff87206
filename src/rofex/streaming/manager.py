"""StreamManager - keeps one subscription's WebSocket alive"""

import asyncio
import contextlib
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, Generic, TypeVar

import pydantic
from loguru import logger

from rofex.core.config import StreamSettings
from rofex.domain.models.enums import WSMessageType
from rofex.domain.models.events import StreamEvent
from rofex.infrastructure.protocols import WebSocketConnector
from rofex.shared.constants import AUTH_HEADER
from rofex.shared.exceptions import (
    AuthTokenError,
    MaxRetriesExceededError,
    StreamError,
)

from .backoff import Backoff
from .channel import EventChannel
from .classifier import is_recoverable_error, matches_kind
from .connection import StreamConnection

EventT = TypeVar("EventT", bound=StreamEvent)

TokenSource = Callable[[], Awaitable[str]]


class StreamState(str, Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    SUBSCRIBE_SENT = "subscribe_sent"
    STREAMING = "streaming"
    DISCONNECTED = "disconnected"
    CANCELLED = "cancelled"
    FAILED = "failed"


class StreamManager(Generic[EventT]):
    """Connection manager for a single subscription

    Loop:
    1. Stop if cancellation was requested
    2. Get an auth token (failure is fatal)
    3. Connect, send the subscription request (failures back off and retry)
    4. Read events with a keepalive running alongside
    5. On a read failure disconnect, then stop or back off and reconnect
       depending on whether the failure is recoverable

    At most one error is put on ``errors`` and both channels are closed
    exactly once when ``run`` returns, whatever the reason.
    """

    def __init__(
        self,
        *,
        name: str,
        url: str,
        kind: WSMessageType,
        request: dict[str, Any],
        event_model: type[EventT],
        token_source: TokenSource,
        events: EventChannel[EventT],
        errors: EventChannel[BaseException],
        settings: StreamSettings | None = None,
        connector: WebSocketConnector | None = None,
    ) -> None:
        self._name = name
        self._url = url
        self._kind = kind
        self._request = request
        self._event_model = event_model
        self._token_source = token_source
        self._events = events
        self._errors = errors
        self._settings = settings or StreamSettings()
        self._connector = connector
        self._backoff = Backoff(
            self._settings.initial_backoff,
            self._settings.max_backoff,
            self._settings.max_retries,
        )
        self._connection: StreamConnection | None = None
        self._state = StreamState.IDLE
        self._stop_requested = False

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def events(self) -> EventChannel[EventT]:
        return self._events

    @property
    def errors(self) -> EventChannel[BaseException]:
        return self._errors

    @property
    def backoff(self) -> Backoff:
        return self._backoff

    @property
    def connection(self) -> StreamConnection | None:
        return self._connection

    def request_stop(self) -> None:
        self._stop_requested = True

    async def run(self) -> None:
        try:
            await self._run()
        except asyncio.CancelledError:
            self._state = StreamState.CANCELLED
            logger.debug(f"{self._name} subscription cancelled")
            raise
        finally:
            await self.disconnect()
            self._events.close()
            self._errors.close()

    async def disconnect(self) -> None:
        """Close the current connection, if any"""
        conn = self._connection
        if conn is None:
            return
        try:
            await conn.disconnect()
        except Exception as e:
            logger.debug(f"{self._name} disconnect failed: {e}")

    async def _run(self) -> None:
        while True:
            if self._stop_requested:
                self._state = StreamState.CANCELLED
                logger.debug(f"{self._name} subscription stopped")
                return

            self._state = StreamState.CONNECTING
            try:
                token = await self._token_source()
            except Exception as e:
                self._fail(AuthTokenError(f"auth token error: {e}"))
                return

            conn = StreamConnection(
                self._url, {AUTH_HEADER: token}, self._connector
            )
            self._connection = conn

            try:
                await conn.connect()
            except Exception as e:
                if not await self._retry(e):
                    return
                continue

            self._state = StreamState.SUBSCRIBE_SENT
            try:
                await conn.write_json(self._request)
            except Exception as e:
                await self.disconnect()
                if not await self._retry(
                    StreamError(f"subscription send failed: {e}")
                ):
                    return
                continue

            self._backoff.reset()
            self._state = StreamState.STREAMING
            logger.info(f"{self._name} subscription established")

            err = await self._process(conn)
            self._state = StreamState.DISCONNECTED
            await self.disconnect()

            if not is_recoverable_error(err):
                logger.debug(f"{self._name} stream ended: {err!r}")
                self._fail(err)
                return

            logger.warning(
                f"{self._name} connection lost, reconnecting in "
                f"{self._backoff.delay}s: {err}"
            )
            await self._backoff.wait()

    async def _retry(self, err: BaseException) -> bool:
        """Back off after a connect/subscribe failure; False when exhausted"""
        logger.warning(
            f"{self._name} connection error "
            f"({self._backoff.retries + 1}/{self._backoff.max_retries}): {err}"
        )
        if not await self._backoff.failure():
            self._fail(MaxRetriesExceededError(err))
            return False
        return True

    def _fail(self, err: BaseException) -> None:
        self._state = StreamState.FAILED
        self._send_error(err)

    def _send_error(self, err: BaseException) -> None:
        if not self._errors.offer(err):
            logger.warning(f"{self._name} error dropped - channel full: {err}")

    async def _process(self, conn: StreamConnection) -> BaseException:
        """Read loop; returns the error that ended it"""
        keepalive = asyncio.create_task(self._keepalive(conn))
        try:
            while True:
                try:
                    message = await conn.read_json()
                except Exception as e:
                    return e

                if not matches_kind(message, self._kind):
                    continue

                try:
                    event = self._event_model.model_validate(message)
                except pydantic.ValidationError as e:
                    return e

                if not await self._events.put(event):
                    logger.warning(
                        f"{self._name} event dropped - channel full "
                        f"({self._events.dropped} dropped)"
                    )
        finally:
            keepalive.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await keepalive

    async def _keepalive(self, conn: StreamConnection) -> None:
        while True:
            await asyncio.sleep(self._settings.ping_interval)
            try:
                await conn.ping(self._settings.ping_timeout)
            except Exception as e:
                logger.warning(
                    f"{self._name} ping failed, dropping connection: {e!r}"
                )
                await conn.abort()
                return
