"""REST response envelopes

Every Primary endpoint answers with a ``status`` field next to the payload.
"""

from pydantic import BaseModel, ConfigDict, Field

from .instrument import Instrument, Segment
from .market_data import MarketData, Trade
from .orders import Order, OrderAck
from .risk import Account, AccountData, DetailedPosition, Position


class APIResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str = ""

    @property
    def ok(self) -> bool:
        return self.status.upper() == "OK"


class SegmentsResponse(APIResponse):
    segments: list[Segment] = Field(default_factory=list)


class InstrumentsResponse(APIResponse):
    instruments: list[Instrument] = Field(default_factory=list)


class InstrumentDetailResponse(APIResponse):
    instrument: Instrument


class MarketDataSnapshotResponse(APIResponse):
    market_data: MarketData = Field(
        default_factory=MarketData, alias="marketData"
    )
    depth: int = 0
    aggregated: bool = False


class TradesResponse(APIResponse):
    symbol: str | None = None
    market: str | None = None
    description: str | None = None
    message: str | None = None
    trades: list[Trade] = Field(default_factory=list)


class OrderResponse(APIResponse):
    """Acknowledge of newSingleOrder, cancelById and replaceById"""

    order: OrderAck


class OrderStatusResponse(APIResponse):
    order: Order


class AllOrdersStatusResponse(APIResponse):
    orders: list[Order] = Field(default_factory=list)


class AccountsResponse(APIResponse):
    accounts: list[Account] = Field(default_factory=list)


class AccountPositionResponse(APIResponse):
    positions: list[Position] = Field(default_factory=list)


class DetailedPositionResponse(APIResponse):
    detailed_position: DetailedPosition = Field(
        default_factory=DetailedPosition, alias="detailedPosition"
    )


class AccountReportResponse(APIResponse):
    account_data: AccountData = Field(
        default_factory=AccountData, alias="accountData"
    )
