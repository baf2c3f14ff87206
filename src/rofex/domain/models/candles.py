"""OHLCV candle model"""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class OHLCV:
    """One aggregated candle, ``time`` is the bucket start in UTC"""

    time: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float
    resolution: str
    security_id: str

    def is_empty(self) -> bool:
        return (
            self.open == 0
            and self.high == 0
            and self.low == 0
            and self.close == 0
            and self.volume == 0
        )
