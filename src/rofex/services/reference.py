"""Reference data: segments and instruments"""

from collections.abc import Iterable

from loguru import logger

from rofex.domain.models.enums import CFICode, Market, MarketSegment
from rofex.domain.models.responses import (
    InstrumentDetailResponse,
    InstrumentsResponse,
    SegmentsResponse,
)
from rofex.infrastructure.requests import RofexRequestClient
from rofex.shared.constants import (
    PATH_INSTRUMENT_DETAIL,
    PATH_INSTRUMENTS_ALL,
    PATH_INSTRUMENTS_BY_CFI,
    PATH_INSTRUMENTS_BY_SEGMENT,
    PATH_INSTRUMENTS_DETAILS,
    PATH_SEGMENTS,
)
from rofex.shared.exceptions import ValidationError
from rofex.shared.formatting import enum_value, escape


class ReferenceDataService:
    """Segments and instrument listings"""

    def __init__(self, client: RofexRequestClient) -> None:
        self.client = client

    async def segments(self) -> SegmentsResponse:
        return await self.client.get_typed(PATH_SEGMENTS, SegmentsResponse)

    async def instruments_all(self) -> InstrumentsResponse:
        return await self.client.get_typed(
            PATH_INSTRUMENTS_ALL, InstrumentsResponse
        )

    async def instruments_details(self) -> InstrumentsResponse:
        return await self.client.get_typed(
            PATH_INSTRUMENTS_DETAILS, InstrumentsResponse
        )

    async def instrument_detail(
        self, symbol: str, market: Market | str = Market.ROFEX
    ) -> InstrumentDetailResponse:
        if not symbol:
            raise ValidationError("symbol", "required")
        path = PATH_INSTRUMENT_DETAIL.format(
            symbol=escape(symbol), market=enum_value(market)
        )
        return await self.client.get_typed(path, InstrumentDetailResponse)

    async def instruments_by_cfi_code(
        self, codes: Iterable[CFICode | str]
    ) -> InstrumentsResponse:
        """Instruments of every CFI code, concatenated in request order"""
        paths = [
            PATH_INSTRUMENTS_BY_CFI.format(code=enum_value(c)) for c in codes
        ]
        return await self._aggregate(paths)

    async def instruments_by_segment(
        self,
        market: Market | str,
        segments: Iterable[MarketSegment | str],
    ) -> InstrumentsResponse:
        """Instruments of every segment of ``market``, concatenated"""
        paths = [
            PATH_INSTRUMENTS_BY_SEGMENT.format(
                segment=enum_value(s), market=enum_value(market)
            )
            for s in segments
        ]
        return await self._aggregate(paths)

    async def _aggregate(self, paths: list[str]) -> InstrumentsResponse:
        result = InstrumentsResponse()
        for path in paths:
            response = await self.client.get_typed(path, InstrumentsResponse)
            result.instruments.extend(response.instruments)
            result.status = response.status
        logger.debug(
            f"Aggregated {len(result.instruments)} instruments "
            f"from {len(paths)} requests"
        )
        return result
