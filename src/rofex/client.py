"""RofexClient - facade over the REST services and WebSocket streams"""

from collections.abc import Iterable

import httpx
from loguru import logger

from rofex.core.config import ClientConfig, Credentials
from rofex.domain.models.enums import Market, MDEntry, WSMessageType
from rofex.domain.models.events import MarketDataEvent, OrderReportEvent
from rofex.infrastructure.auth import PasswordAuth, StaticTokenAuth
from rofex.infrastructure.protocols import (
    AuthProvider,
    RateLimiter,
    WebSocketConnector,
)
from rofex.infrastructure.requests import RofexRequestClient
from rofex.services.account import AccountService
from rofex.services.candles import CandlesService
from rofex.services.market_data import MarketDataService
from rofex.services.orders import OrdersService
from rofex.services.reference import ReferenceDataService
from rofex.shared.exceptions import ValidationError
from rofex.streaming.channel import EventChannel
from rofex.streaming.manager import StreamManager
from rofex.streaming.messages import market_data_request, order_report_request
from rofex.streaming.subscription import (
    MarketDataSubscription,
    OrderReportSubscription,
)


class RofexClient:
    """Primary API client (facade pattern)

    Composes the request client with the REST services (``reference``,
    ``market_data``, ``orders``, ``accounts``, ``candles``) and starts
    WebSocket subscriptions.

    Usage:
        async with RofexClient(ClientConfig(), credentials=creds) as client:
            segments = await client.reference.segments()
            sub = await client.subscribe_market_data(["DLR/DIC23"], [MDEntry.LAST])
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        credentials: Credentials | None = None,
        token: str | None = None,
        auth: AuthProvider | None = None,
        rate_limiter: RateLimiter | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        connector: WebSocketConnector | None = None,
    ) -> None:
        """Initialize client

        Args:
            config: Client configuration (sandbox defaults if None)
            credentials: Username/password; logs in lazily on first use
            token: Pre-obtained token, used when no credentials are given
            auth: Explicit auth provider, overrides credentials and token
            rate_limiter: Limiter awaited before each REST request
            transport: httpx transport (tests use MockTransport)
            connector: WebSocket connector (tests inject fakes)
        """
        self.config = config or ClientConfig()
        if auth is None:
            if credentials is not None:
                auth = PasswordAuth(credentials)
            elif token:
                auth = StaticTokenAuth(token)

        self._connector = connector
        self._request_client = RofexRequestClient(
            self.config, auth=auth, rate_limiter=rate_limiter, transport=transport
        )

        self.reference = ReferenceDataService(self._request_client)
        self.market_data = MarketDataService(self._request_client)
        self.orders = OrdersService(self._request_client, connector)
        self.accounts = AccountService(self._request_client)
        self.candles = CandlesService(self.market_data)

    @property
    def request_client(self) -> RofexRequestClient:
        return self._request_client

    @property
    def auth(self) -> AuthProvider | None:
        return self._request_client.auth

    async def login(self, credentials: Credentials) -> None:
        """Log in now, switching to password auth if another provider was set"""
        auth = self._request_client.auth
        if not isinstance(auth, PasswordAuth):
            auth = PasswordAuth(credentials)
            self._request_client.auth = auth
        await auth.refresh(self._request_client)

    async def aclose(self) -> None:
        await self._request_client.aclose()

    async def __aenter__(self) -> "RofexClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _channels(self):
        events: EventChannel = EventChannel(
            self.config.ws_buffer, drop_on_full=self.config.ws_drop_on_full
        )
        errors: EventChannel[BaseException] = EventChannel(
            self.config.stream.error_buffer, drop_on_full=True
        )
        return events, errors

    async def subscribe_market_data(
        self,
        symbols: Iterable[str],
        entries: Iterable[MDEntry | str],
        depth: int = 1,
        market: Market | str = Market.ROFEX,
    ) -> MarketDataSubscription:
        """Stream market data for ``symbols``

        The stream reconnects on its own; consume ``sub.events`` and close
        with ``sub.aclose()``.

        Args:
            symbols: Instrument symbols, all of ``market``
            entries: Entry codes to receive
            depth: Book levels per side; values below 1 mean 1
            market: Market id (defaults to ROFX)

        Raises:
            ValidationError: If no symbol is given
        """
        symbols = list(symbols)
        entries = list(entries)
        if not symbols:
            raise ValidationError("symbols", "required")
        market = market or Market.ROFEX
        depth = max(depth, 1)

        events, errors = self._channels()
        manager: StreamManager[MarketDataEvent] = StreamManager(
            name="market data",
            url=self.config.ws_url,
            kind=WSMessageType.MARKET_DATA,
            request=market_data_request(symbols, entries, depth, market),
            event_model=MarketDataEvent,
            token_source=self._request_client.ws_auth_token,
            events=events,
            errors=errors,
            settings=self.config.stream,
            connector=self._connector,
        )
        subscription = MarketDataSubscription(
            manager, symbols, entries, depth, market
        )
        subscription.start()
        logger.debug(f"Market data subscription started for {symbols}")
        return subscription

    async def subscribe_order_report(
        self, account: str, snapshot_only_active: bool = False
    ) -> OrderReportSubscription:
        """Stream execution reports of ``account``

        Raises:
            ValidationError: If account is empty
        """
        if not account:
            raise ValidationError("account", "required")

        events, errors = self._channels()
        manager: StreamManager[OrderReportEvent] = StreamManager(
            name="order report",
            url=self.config.ws_url,
            kind=WSMessageType.ORDER_REPORT,
            request=order_report_request(account, snapshot_only_active),
            event_model=OrderReportEvent,
            token_source=self._request_client.ws_auth_token,
            events=events,
            errors=errors,
            settings=self.config.stream,
            connector=self._connector,
        )
        subscription = OrderReportSubscription(
            manager, account, snapshot_only_active
        )
        subscription.start()
        logger.debug(f"Order report subscription started for {account}")
        return subscription
