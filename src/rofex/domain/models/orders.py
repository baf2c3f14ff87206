"""Order models"""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from rofex.shared.exceptions import ValidationError

from .enums import Market, OrderType, Side, TimeInForce
from .instrument import InstrumentId


class AccountReference(BaseModel):
    id: str


class OrderAck(BaseModel):
    """Client order id and proprietary returned by order entry endpoints"""

    model_config = ConfigDict(populate_by_name=True)

    client_id: str = Field(..., alias="clientId")
    proprietary: str = ""


class Order(BaseModel):
    """Order state as returned by the order query endpoints

    Unknown fields are ignored.
    """

    model_config = ConfigDict(populate_by_name=True)

    order_id: str | None = Field(None, alias="orderId")
    instrument_id: InstrumentId = Field(
        default_factory=InstrumentId, alias="instrumentId"
    )
    cl_ord_id: str = Field("", alias="clOrdId")
    proprietary: str = ""
    exec_id: str | None = Field(None, alias="execId")
    account_id: AccountReference | None = Field(None, alias="accountId")
    status: str | None = None
    text: str | None = None
    side: str | None = None
    ord_type: str | None = Field(None, alias="ordType")
    time_in_force: str | None = Field(None, alias="timeInForce")
    price: float | None = None
    order_qty: float | None = Field(None, alias="orderQty")
    leaves_qty: float | None = Field(None, alias="leavesQty")
    cum_qty: float | None = Field(None, alias="cumQty")
    avg_px: float | None = Field(None, alias="avgPx")
    last_px: float | None = Field(None, alias="lastPx")
    last_qty: float | None = Field(None, alias="lastQty")
    transact_time: str | None = Field(None, alias="transactTime")
    ws_cl_ord_id: str | None = Field(None, alias="wsClOrdId")


@dataclass
class NewOrder:
    """Order entry request shared by the REST and WebSocket paths

    ``all_or_none`` and ``ws_cl_ord_id`` are only sent over WebSocket.
    """

    symbol: str
    side: Side | str
    qty: int
    type: OrderType | str = OrderType.LIMIT
    price: float | None = None
    time_in_force: TimeInForce | str = TimeInForce.DAY
    account: str = ""
    market: Market | str = Market.ROFEX
    cancel_previous: bool = False
    iceberg: bool = False
    expire_date: str | None = None  # yyyy-MM-dd, GTD only
    display_qty: int | None = None
    all_or_none: bool = False
    ws_cl_ord_id: str | None = None

    def validate(self) -> None:
        """Raise ValidationError for the first invalid field"""
        if not self.symbol:
            raise ValidationError("symbol", "required")
        if self.qty <= 0:
            raise ValidationError("qty", "must be > 0")
        if not self.side:
            raise ValidationError("side", "required")
        if self.type == OrderType.LIMIT and self.price is None:
            raise ValidationError("price", "required for limit")
        if self.time_in_force == TimeInForce.GTD and not self.expire_date:
            raise ValidationError("expireDate", "required for GTD")
