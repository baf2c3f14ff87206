"""Account and risk (RIMA) models"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Account(_Model):
    """User account as listed by /rest/accounts"""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str = ""


class PositionInstrument(_Model):
    symbol_reference: str = Field(..., alias="symbolReference")
    settl_type: int | None = Field(None, alias="settlType")


class Position(_Model):
    """Consolidated position for one instrument"""

    instrument: PositionInstrument
    symbol: str = ""
    buy_size: float = Field(0.0, alias="buySize")
    buy_price: float = Field(0.0, alias="buyPrice")
    sell_size: float = Field(0.0, alias="sellSize")
    sell_price: float = Field(0.0, alias="sellPrice")
    total_daily_diff: float = Field(0.0, alias="totalDailyDiff")
    total_diff: float = Field(0.0, alias="totalDiff")
    trading_symbol: str = Field("", alias="tradingSymbol")
    original_buy_price: float = Field(0.0, alias="originalBuyPrice")
    original_sell_price: float = Field(0.0, alias="originalSellPrice")

    @property
    def net_size(self) -> float:
        return self.buy_size - self.sell_size


class DetailedDailyDiff(_Model):
    buy_price_ppp_diff: float = Field(0.0, alias="buyPricePPPDiff")
    sell_price_ppp_diff: float = Field(0.0, alias="sellPricePPPDiff")
    total_daily_diff: float = Field(0.0, alias="totalDailyDiff")
    buy_daily_diff: float = Field(0.0, alias="buyDailyDiff")
    sell_daily_diff: float = Field(0.0, alias="sellDailyDiff")
    total_daily_diff_plain: float = Field(0.0, alias="totalDailyDiffPlain")
    buy_daily_diff_plain: float = Field(0.0, alias="buyDailyDiffPlain")
    sell_daily_diff_plain: float = Field(0.0, alias="sellDailyDiffPlain")


class DetailedPositionItem(_Model):
    symbol_reference: str = Field(..., alias="symbolReference")
    contract_type: str = Field("", alias="contractType")
    price_conversion_factor: float = Field(0.0, alias="priceConversionFactor")
    contract_size: float = Field(0.0, alias="contractSize")
    market_price: float = Field(0.0, alias="marketPrice")
    currency: str = ""
    exchange_rate: float = Field(0.0, alias="exchangeRate")
    contract_multiplier: float = Field(0.0, alias="contractMultiplier")

    total_initial_size: float = Field(0.0, alias="totalInitialSize")
    buy_initial_size: float = Field(0.0, alias="buyInitialSize")
    sell_initial_size: float = Field(0.0, alias="sellInitialSize")
    buy_initial_price: float = Field(0.0, alias="buyInitialPrice")
    sell_initial_price: float = Field(0.0, alias="sellInitialPrice")

    total_filled_size: float = Field(0.0, alias="totalFilledSize")
    buy_filled_size: float = Field(0.0, alias="buyFilledSize")
    sell_filled_size: float = Field(0.0, alias="sellFilledSize")
    buy_filled_price: float = Field(0.0, alias="buyFilledPrice")
    sell_filled_price: float = Field(0.0, alias="sellFilledPrice")

    total_current_size: float = Field(0.0, alias="totalCurrentSize")
    buy_current_size: float = Field(0.0, alias="buyCurrentSize")
    sell_current_size: float = Field(0.0, alias="sellCurrentSize")

    detailed_daily_diff: DetailedDailyDiff = Field(
        default_factory=DetailedDailyDiff, alias="detailedDailyDiff"
    )


class DetailedInstrument(_Model):
    detailed_positions: list[DetailedPositionItem] = Field(
        default_factory=list, alias="detailedPositions"
    )
    instrument_initial_size: float = Field(0.0, alias="instrumentInitialSize")
    instrument_filled_size: float = Field(0.0, alias="instrumentFilledSize")
    instrument_current_size: float = Field(0.0, alias="instrumentCurrentSize")


class DetailedPosition(_Model):
    """Positions grouped by contract type, then by symbol"""

    account: str = ""
    total_daily_diff_plain: float = Field(0.0, alias="totalDailyDiffPlain")
    total_market_value: float = Field(0.0, alias="totalMarketValue")
    report: dict[str, dict[str, DetailedInstrument]] = Field(
        default_factory=dict
    )
    last_calculation: int = Field(0, alias="lastCalculation")


class CurrencyAmount(_Model):
    consumed: float = 0.0
    available: float = 0.0


class CurrencyBalance(_Model):
    detailed_currency_balance: dict[str, CurrencyAmount] = Field(
        default_factory=dict, alias="detailedCurrencyBalance"
    )


class Cash(_Model):
    total_cash: float = Field(0.0, alias="totalCash")
    detailed_cash: dict[str, float] = Field(
        default_factory=dict, alias="detailedCash"
    )


class AvailableToOperate(_Model):
    cash: Cash = Field(default_factory=Cash)
    movements: float = 0.0
    credit: float | None = None
    total: float = 0.0
    pending_movements: float = Field(0.0, alias="pendingMovements")


class DetailedAccountReport(_Model):
    currency_balance: CurrencyBalance = Field(
        default_factory=CurrencyBalance, alias="currencyBalance"
    )
    available_to_operate: AvailableToOperate = Field(
        default_factory=AvailableToOperate, alias="availableToOperate"
    )
    settlement_date: int = Field(0, alias="settlementDate")


class AccountData(_Model):
    """Account report: balances, margins and availability by settlement date"""

    account_name: str = Field("", alias="accountName")
    market_member: str = Field("", alias="marketMember")
    market_member_identity: str = Field("", alias="marketMemberIdentity")
    collateral: float = 0.0
    margin: float = 0.0
    available_to_collateral: float = Field(0.0, alias="availableToCollateral")
    detailed_account_reports: dict[str, DetailedAccountReport] = Field(
        default_factory=dict, alias="detailedAccountReports"
    )
    has_error: bool = Field(False, alias="hasError")
    error_detail: Any = Field(None, alias="errorDetail")
    last_calculation: int = Field(0, alias="lastCalculation")
    portfolio: float = 0.0
    orders_margin: float = Field(0.0, alias="ordersMargin")
    current_cash: float = Field(0.0, alias="currentCash")
    daily_diff: float = Field(0.0, alias="dailyDiff")
    uncovered_margin: float = Field(0.0, alias="uncoveredMargin")
