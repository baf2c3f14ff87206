"""Python client for the Primary (Matba Rofex) trading API"""

from rofex.client import RofexClient
from rofex.core.config import ClientConfig, Credentials, StreamSettings
from rofex.domain.models import (
    CandleResolution,
    CFICode,
    Environment,
    Market,
    MarketSegment,
    MDEntry,
    NewOrder,
    OrderType,
    Side,
    TimeInForce,
)
from rofex.infrastructure.auth import PasswordAuth, StaticTokenAuth
from rofex.shared.exceptions import (
    AuthError,
    AuthTokenError,
    ConfigurationError,
    HTTPError,
    MaxRetriesExceededError,
    RofexClientError,
    RofexError,
    StreamClosedError,
    StreamError,
    TemporaryError,
    ValidationError,
)
from rofex.streaming import (
    MarketDataSubscription,
    OrderReportSubscription,
    StreamState,
)

__version__ = "0.1.0"

__all__ = [
    "AuthError",
    "AuthTokenError",
    "CFICode",
    "CandleResolution",
    "ClientConfig",
    "ConfigurationError",
    "Credentials",
    "Environment",
    "HTTPError",
    "MDEntry",
    "Market",
    "MarketDataSubscription",
    "MarketSegment",
    "MaxRetriesExceededError",
    "NewOrder",
    "OrderReportSubscription",
    "OrderType",
    "PasswordAuth",
    "RofexClient",
    "RofexClientError",
    "RofexError",
    "Side",
    "StaticTokenAuth",
    "StreamClosedError",
    "StreamError",
    "StreamSettings",
    "StreamState",
    "TemporaryError",
    "TimeInForce",
    "ValidationError",
]
