"""Instrument reference data models"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class InstrumentId(BaseModel):
    """Identifies an instrument in a specific market"""

    model_config = ConfigDict(populate_by_name=True)

    symbol: str = ""
    market_id: str = Field("", alias="marketId")


class Segment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    market_segment_id: str = Field(..., alias="marketSegmentId")
    market_id: str = Field(..., alias="marketId")


class TickRange(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    lower_limit: float | None = Field(None, alias="lowerLimit")
    upper_limit: float | None = Field(None, alias="upperLimit")
    tick: float


class Instrument(BaseModel):
    """Tradeable instrument

    Listings by CFI code or segment return marketId/symbol at the top level
    instead of a nested instrumentId; both shapes are accepted.
    """

    model_config = ConfigDict(populate_by_name=True)

    instrument_id: InstrumentId = Field(
        default_factory=InstrumentId, alias="instrumentId"
    )
    cfi_code: str | None = Field(None, alias="cficode")
    segment: Segment | None = None
    low_limit_price: float | None = Field(None, alias="lowLimitPrice")
    high_limit_price: float | None = Field(None, alias="highLimitPrice")
    min_price_increment: float | None = Field(None, alias="minPriceIncrement")
    min_trade_vol: float | None = Field(None, alias="minTradeVol")
    max_trade_vol: float | None = Field(None, alias="maxTradeVol")
    tick_size: float | None = Field(None, alias="tickSize")
    contract_multiplier: float | None = Field(None, alias="contractMultiplier")
    round_lot: float | None = Field(None, alias="roundLot")
    price_convertion_factor: float | None = Field(
        None, alias="priceConvertionFactor"
    )
    maturity_date: str | None = Field(None, alias="maturityDate")
    currency: str | None = None
    order_types: list[str] = Field(default_factory=list, alias="orderTypes")
    times_in_force: list[str] = Field(
        default_factory=list, alias="timesInForce"
    )
    security_type: str | None = Field(None, alias="securityType")
    settl_type: str | None = Field(None, alias="settlType")
    instrument_price_precision: int | None = Field(
        None, alias="instrumentPricePrecision"
    )
    instrument_size_precision: int | None = Field(
        None, alias="instrumentSizePrecision"
    )
    security_id: str | None = Field(None, alias="securityId")
    security_id_source: str | None = Field(None, alias="securityIdSource")
    security_description: str | None = Field(None, alias="securityDescription")
    tick_price_ranges: dict[str, TickRange] = Field(
        default_factory=dict, alias="tickPriceRanges"
    )

    @model_validator(mode="before")
    @classmethod
    def lift_top_level_id(cls, data: Any) -> Any:
        """Build instrumentId from top-level marketId/symbol when absent"""
        if not isinstance(data, dict) or data.get("instrumentId"):
            return data
        if "marketId" in data or "symbol" in data:
            data = dict(data)
            data["instrumentId"] = {
                "marketId": data.get("marketId", ""),
                "symbol": data.get("symbol", ""),
            }
        return data

    @property
    def symbol(self) -> str:
        return self.instrument_id.symbol
