"""REST services built on RofexRequestClient"""

from .account import AccountService
from .candles import CandlesService, aggregate_trades, floor_time_by_resolution
from .market_data import MarketDataService
from .orders import OrdersService
from .reference import ReferenceDataService

__all__ = [
    "AccountService",
    "CandlesService",
    "MarketDataService",
    "OrdersService",
    "ReferenceDataService",
    "aggregate_trades",
    "floor_time_by_resolution",
]
