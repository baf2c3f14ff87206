"""Market data snapshots and historic trades over REST"""

from collections.abc import Iterable
from datetime import date, datetime

from rofex.domain.models.enums import Environment, Market, MDEntry
from rofex.domain.models.responses import (
    MarketDataSnapshotResponse,
    TradesResponse,
)
from rofex.infrastructure.requests import RofexRequestClient
from rofex.shared.constants import PATH_MARKET_DATA, PATH_TRADES
from rofex.shared.exceptions import ValidationError
from rofex.shared.formatting import enum_value, escape, format_date

DEFAULT_SNAPSHOT_ENTRIES = (
    MDEntry.BIDS,
    MDEntry.OFFERS,
    MDEntry.LAST,
)


class MarketDataService:
    def __init__(self, client: RofexRequestClient) -> None:
        self.client = client

    async def market_data_snapshot(
        self,
        symbol: str,
        market: Market | str = Market.ROFEX,
        entries: Iterable[MDEntry | str] = DEFAULT_SNAPSHOT_ENTRIES,
        depth: int = 1,
    ) -> MarketDataSnapshotResponse:
        """Current values of the requested entries for one symbol

        Args:
            symbol: Instrument symbol, e.g. "DLR/DIC23"
            market: Market id (defaults to ROFX)
            entries: Entry codes to fetch
            depth: Book levels per side; values below 1 mean 1

        Raises:
            ValidationError: If symbol is empty
        """
        if not symbol:
            raise ValidationError("symbol", "required")
        path = PATH_MARKET_DATA.format(
            market=enum_value(market or Market.ROFEX),
            symbol=escape(symbol),
            entries=",".join(enum_value(e) for e in entries),
            depth=max(depth, 1),
        )
        return await self.client.get_typed(path, MarketDataSnapshotResponse)

    async def historic_trades(
        self,
        symbol: str,
        market: Market | str = Market.ROFEX,
        date_from: date | datetime | str | None = None,
        date_to: date | datetime | str | None = None,
    ) -> TradesResponse:
        """Trades of ``symbol`` between two dates (inclusive, yyyy-MM-dd)

        Instruments outside ROFX are fetched with ``external=true``; the
        sandbox additionally needs ``environment=REMARKETS``.

        Raises:
            ValidationError: If symbol or a date is missing
        """
        if not symbol:
            raise ValidationError("symbol", "required")
        if date_from is None:
            raise ValidationError("dateFrom", "required")
        if date_to is None:
            raise ValidationError("dateTo", "required")

        market_id = enum_value(market or Market.ROFEX)
        path = PATH_TRADES.format(
            market=market_id,
            symbol=escape(symbol),
            date_from=format_date(date_from),
            date_to=format_date(date_to),
        )
        if market_id != Market.ROFEX.value:
            path += "&external=true"
        if self.client.config.environment == Environment.REMARKET:
            path += "&environment=REMARKETS"
        return await self.client.get_typed(path, TradesResponse)
