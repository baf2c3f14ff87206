"""Market data models shared by REST snapshots and WebSocket events"""

from pydantic import BaseModel, ConfigDict, Field


class BookLevel(BaseModel):
    """One price level of the order book"""

    price: float
    size: float


class Entry(BaseModel):
    """Price record with optional size and date (LA, CL, SE, OI)"""

    price: float | None = None
    size: float | None = None
    date: int | None = None


class MarketData(BaseModel):
    """Entries requested for a symbol

    Only the entries asked for are populated; codes this model does not
    know are ignored. With depth > 1 bids are sorted best to worst
    (descending) and offers best to worst (ascending).
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    bids: list[BookLevel] = Field(default_factory=list, alias="BI")
    offers: list[BookLevel] = Field(default_factory=list, alias="OF")
    last: Entry | None = Field(None, alias="LA")
    opening_price: float | None = Field(None, alias="OP")
    closing_price: Entry | None = Field(None, alias="CL")
    settlement_price: Entry | None = Field(None, alias="SE")
    high_price: float | None = Field(None, alias="HI")
    low_price: float | None = Field(None, alias="LO")
    trade_volume: float | None = Field(None, alias="TV")
    open_interest: Entry | None = Field(None, alias="OI")
    index_value: float | None = Field(None, alias="IV")
    effective_volume: float | None = Field(None, alias="EV")
    nominal_volume: float | None = Field(None, alias="NV")
    auction_price: float | None = Field(None, alias="ACP")
    trade_count: int | None = Field(None, alias="TC")

    @property
    def best_bid(self) -> BookLevel | None:
        return self.bids[0] if self.bids else None

    @property
    def best_offer(self) -> BookLevel | None:
        return self.offers[0] if self.offers else None


class Trade(BaseModel):
    """Historic trade row"""

    model_config = ConfigDict(populate_by_name=True)

    price: float
    size: float
    datetime: str | None = None
    server_time: int = Field(..., alias="servertime")
    symbol: str | None = None
