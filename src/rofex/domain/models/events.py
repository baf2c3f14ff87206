"""Inbound WebSocket events"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import WSMessageType
from .instrument import InstrumentId
from .market_data import MarketData
from .orders import AccountReference


class StreamEvent(BaseModel):
    """Common envelope of every pushed message

    ``type`` is lower-cased on validation so ``MD``, ``Md`` and ``md`` are
    the same event kind.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: str
    timestamp: int | None = None

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: object) -> str:
        return str(v or "").strip().lower()

    @property
    def human_time(self) -> datetime | None:
        """Server timestamp (milliseconds) as an aware UTC datetime"""
        if self.timestamp is None:
            return None
        return datetime.fromtimestamp(self.timestamp / 1000, tz=timezone.utc)


class MarketDataEvent(StreamEvent):
    type: str = WSMessageType.MARKET_DATA.value
    instrument_id: InstrumentId = Field(
        default_factory=InstrumentId, alias="instrumentId"
    )
    market_data: MarketData = Field(
        default_factory=MarketData, alias="marketData"
    )

    @property
    def symbol(self) -> str:
        return self.instrument_id.symbol


class OrderDetails(BaseModel):
    """Execution report carried by an ``or`` event"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    order_id: str | None = Field(None, alias="orderId")
    cl_ord_id: str = Field("", alias="clOrdId")
    proprietary: str = ""
    exec_id: str | None = Field(None, alias="execId")
    account_id: AccountReference | None = Field(None, alias="accountId")
    instrument_id: InstrumentId = Field(
        default_factory=InstrumentId, alias="instrumentId"
    )
    price: float | None = None
    order_qty: float | None = Field(None, alias="orderQty")
    ord_type: str | None = Field(None, alias="ordType")
    side: str | None = None
    time_in_force: str | None = Field(None, alias="timeInForce")
    transact_time: str | None = Field(None, alias="transactTime")
    avg_px: float | None = Field(None, alias="avgPx")
    last_px: float | None = Field(None, alias="lastPx")
    last_qty: float | None = Field(None, alias="lastQty")
    cum_qty: float | None = Field(None, alias="cumQty")
    leaves_qty: float | None = Field(None, alias="leavesQty")
    status: str | None = None
    text: str | None = None
    ws_cl_ord_id: str | None = Field(None, alias="wsClOrdId")


class OrderReportEvent(StreamEvent):
    type: str = WSMessageType.ORDER_REPORT.value
    order_report: OrderDetails = Field(
        default_factory=OrderDetails, alias="orderReport"
    )
