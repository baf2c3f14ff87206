"""WebSocket streaming

StreamConnection - one socket plus its connected flag
Backoff - reconnect delay and retry budget
StreamManager - connect/subscribe/read/reconnect loop per subscription
Subscription - caller handle with event and error channels
"""

from .backoff import Backoff
from .channel import EventChannel
from .classifier import is_recoverable_error, matches_kind, normalize_type
from .connection import StreamConnection, WebsocketsConnector
from .manager import StreamManager, StreamState
from .messages import (
    cancel_order_message,
    market_data_request,
    new_order_message,
    order_report_request,
)
from .subscription import (
    MarketDataSubscription,
    OrderReportSubscription,
    Subscription,
)

__all__ = [
    "Backoff",
    "EventChannel",
    "MarketDataSubscription",
    "OrderReportSubscription",
    "StreamConnection",
    "StreamManager",
    "StreamState",
    "Subscription",
    "WebsocketsConnector",
    "cancel_order_message",
    "is_recoverable_error",
    "market_data_request",
    "matches_kind",
    "new_order_message",
    "normalize_type",
    "order_report_request",
]
