"""OHLCV candles aggregated from historic trades"""

from datetime import datetime, timedelta, timezone

from loguru import logger

from rofex.domain.models.candles import OHLCV
from rofex.domain.models.enums import CandleResolution, Market
from rofex.domain.models.market_data import Trade
from rofex.shared.exceptions import ValidationError
from rofex.shared.formatting import enum_value

from .market_data import MarketDataService

_INTRADAY_SECONDS = {
    CandleResolution.M1: 60,
    CandleResolution.M5: 5 * 60,
    CandleResolution.M15: 15 * 60,
    CandleResolution.M30: 30 * 60,
    CandleResolution.H1: 60 * 60,
    CandleResolution.H4: 4 * 60 * 60,
}


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _resolution(value: CandleResolution | str) -> CandleResolution:
    try:
        return CandleResolution(enum_value(value))
    except ValueError:
        return CandleResolution.M1


def floor_time_by_resolution(
    ts: datetime, resolution: CandleResolution | str
) -> datetime:
    """Start of the bucket ``ts`` falls in, in UTC

    Weeks start on Monday, quarters on January, April, July and October.
    Unknown resolutions bucket by minute.
    """
    ts = _as_utc(ts)
    res = _resolution(resolution)

    if res in _INTRADAY_SECONDS:
        step = _INTRADAY_SECONDS[res]
        epoch = int(ts.timestamp())
        return datetime.fromtimestamp(epoch - epoch % step, tz=timezone.utc)

    day = ts.replace(hour=0, minute=0, second=0, microsecond=0)
    if res == CandleResolution.D1:
        return day
    if res == CandleResolution.W1:
        return day - timedelta(days=day.weekday())
    if res == CandleResolution.MN1:
        return day.replace(day=1)
    # CandleResolution.MN3
    quarter_month = ((day.month - 1) // 3) * 3 + 1
    return day.replace(month=quarter_month, day=1)


def aggregate_trades(
    trades: list[Trade],
    date_from: datetime,
    date_to: datetime,
    resolution: CandleResolution | str,
    security_id: str,
) -> list[OHLCV]:
    """Bucket trades into candles

    Trades are ordered by server time (ties keep their original order) and
    only those within [date_from, date_to] are used. Volume is the sum of
    trade sizes. Candles come out ordered by time; all-zero candles are
    skipped.
    """
    start = _as_utc(date_from)
    end = _as_utc(date_to)
    label = enum_value(resolution)

    buckets: dict[datetime, OHLCV] = {}
    for trade in sorted(trades, key=lambda t: t.server_time):
        ts = datetime.fromtimestamp(trade.server_time / 1000, tz=timezone.utc)
        if ts < start or ts > end:
            continue

        key = floor_time_by_resolution(ts, resolution)
        candle = buckets.get(key)
        if candle is None:
            buckets[key] = OHLCV(
                time=key,
                open=trade.price,
                high=trade.price,
                low=trade.price,
                close=trade.price,
                volume=trade.size,
                resolution=label,
                security_id=security_id,
            )
            continue

        candle.high = max(candle.high, trade.price)
        candle.low = min(candle.low, trade.price)
        candle.close = trade.price
        candle.volume += trade.size

    return [
        buckets[key]
        for key in sorted(buckets)
        if not buckets[key].is_empty()
    ]


class CandlesService:
    def __init__(self, market_data: MarketDataService) -> None:
        self.market_data = market_data

    async def historic_candles(
        self,
        symbol: str,
        market: Market | str = Market.ROFEX,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        resolution: CandleResolution | str = CandleResolution.M1,
    ) -> list[OHLCV]:
        """Candles for ``symbol`` built from the trades endpoint

        Args:
            symbol: Instrument symbol
            market: Market id (defaults to ROFX)
            date_from: Range start (naive datetimes are taken as UTC)
            date_to: Range end, inclusive
            resolution: Bucket size

        Raises:
            ValidationError: If symbol or a range bound is missing
        """
        if not symbol:
            raise ValidationError("symbol", "required")
        if date_from is None or date_to is None:
            raise ValidationError("dateRange", "required")

        response = await self.market_data.historic_trades(
            symbol, market or Market.ROFEX, date_from, date_to
        )
        candles = aggregate_trades(
            response.trades, date_from, date_to, resolution, symbol
        )
        logger.debug(
            f"Built {len(candles)} {enum_value(resolution)} candles for {symbol} "
            f"from {len(response.trades)} trades"
        )
        return candles
