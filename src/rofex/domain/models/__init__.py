"""Domain models for the Primary API"""

from .candles import OHLCV
from .enums import (
    CandleResolution,
    CFICode,
    Environment,
    Market,
    MarketSegment,
    MDEntry,
    OrderType,
    Side,
    TimeInForce,
    WSMessageType,
)
from .events import MarketDataEvent, OrderDetails, OrderReportEvent, StreamEvent
from .instrument import Instrument, InstrumentId, Segment, TickRange
from .market_data import BookLevel, Entry, MarketData, Trade
from .orders import AccountReference, NewOrder, Order, OrderAck
from .responses import (
    AccountPositionResponse,
    AccountReportResponse,
    AccountsResponse,
    AllOrdersStatusResponse,
    APIResponse,
    DetailedPositionResponse,
    InstrumentDetailResponse,
    InstrumentsResponse,
    MarketDataSnapshotResponse,
    OrderResponse,
    OrderStatusResponse,
    SegmentsResponse,
    TradesResponse,
)
from .risk import (
    Account,
    AccountData,
    DetailedAccountReport,
    DetailedInstrument,
    DetailedPosition,
    DetailedPositionItem,
    Position,
)

__all__ = [
    "APIResponse",
    "Account",
    "AccountData",
    "AccountPositionResponse",
    "AccountReference",
    "AccountReportResponse",
    "AccountsResponse",
    "AllOrdersStatusResponse",
    "BookLevel",
    "CFICode",
    "CandleResolution",
    "DetailedAccountReport",
    "DetailedInstrument",
    "DetailedPosition",
    "DetailedPositionItem",
    "DetailedPositionResponse",
    "Entry",
    "Environment",
    "Instrument",
    "InstrumentDetailResponse",
    "InstrumentId",
    "InstrumentsResponse",
    "MDEntry",
    "Market",
    "MarketData",
    "MarketDataEvent",
    "MarketDataSnapshotResponse",
    "MarketSegment",
    "NewOrder",
    "OHLCV",
    "Order",
    "OrderAck",
    "OrderDetails",
    "OrderReportEvent",
    "OrderResponse",
    "OrderStatusResponse",
    "OrderType",
    "Position",
    "Segment",
    "SegmentsResponse",
    "Side",
    "StreamEvent",
    "TickRange",
    "TimeInForce",
    "Trade",
    "TradesResponse",
    "WSMessageType",
]
