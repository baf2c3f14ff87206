"""CLI commands and their handlers"""

from dataclasses import dataclass, field

from loguru import logger
from rich.console import Console
from rich.table import Table

from rofex.client import RofexClient
from rofex.domain.models.enums import Market, MDEntry
from rofex.domain.models.events import MarketDataEvent, OrderReportEvent
from rofex.shared.exceptions import RofexError
from rofex.streaming.subscription import Subscription

console = Console()

STREAM_ENTRIES = [MDEntry.BIDS, MDEntry.OFFERS, MDEntry.LAST]


@dataclass
class Command:
    """Base command class"""

    name: str


@dataclass
class SegmentsCommand(Command):
    """List market segments"""


@dataclass
class SnapshotCommand(Command):
    """Fetch top of book and last price for one symbol"""

    symbol: str = ""
    market: str = Market.ROFEX.value


@dataclass
class StreamMarketDataCommand(Command):
    """Print market data events until interrupted"""

    symbols: list[str] = field(default_factory=list)


@dataclass
class StreamOrdersCommand(Command):
    """Print execution reports of an account until interrupted"""

    account: str = ""
    snapshot_only_active: bool = False


async def handle_segments(client: RofexClient, command: SegmentsCommand) -> int:
    try:
        response = await client.reference.segments()
    except RofexError as e:
        logger.error(f"Failed to fetch segments: {e}")
        return 1

    table = Table(title="Segments")
    table.add_column("Segment")
    table.add_column("Market")
    for segment in response.segments:
        table.add_row(segment.market_segment_id, segment.market_id)
    console.print(table)
    return 0


async def handle_snapshot(client: RofexClient, command: SnapshotCommand) -> int:
    try:
        response = await client.market_data.market_data_snapshot(
            command.symbol, command.market
        )
    except RofexError as e:
        logger.error(f"Failed to fetch snapshot for {command.symbol}: {e}")
        return 1

    md = response.market_data
    table = Table(title=f"{command.symbol} ({command.market})")
    table.add_column("Entry")
    table.add_column("Price", justify="right")
    table.add_column("Size", justify="right")
    if md.best_bid:
        table.add_row("Bid", str(md.best_bid.price), str(md.best_bid.size))
    if md.best_offer:
        table.add_row("Offer", str(md.best_offer.price), str(md.best_offer.size))
    if md.last:
        table.add_row("Last", str(md.last.price), str(md.last.size))
    console.print(table)
    return 0


def _print_market_data(event: MarketDataEvent) -> None:
    md = event.market_data
    bid = md.best_bid.price if md.best_bid else "-"
    offer = md.best_offer.price if md.best_offer else "-"
    last = md.last.price if md.last else "-"
    console.print(
        f"[dim]{event.human_time or ''}[/dim] [bold]{event.symbol}[/bold] "
        f"bid={bid} offer={offer} last={last}"
    )


def _print_order_report(event: OrderReportEvent) -> None:
    report = event.order_report
    console.print(
        f"[dim]{event.human_time or ''}[/dim] [bold]{report.cl_ord_id}[/bold] "
        f"{report.instrument_id.symbol} {report.side} {report.order_qty}"
        f"@{report.price} status={report.status}"
    )


async def _drain(subscription: Subscription, printer) -> int:
    """Print events until the stream ends; non-zero if it ended in error"""
    async with subscription:
        async for event in subscription.events:
            printer(event)
        async for err in subscription.errors:
            logger.error(f"Stream ended with error: {err}")
            return 1
    return 0


async def handle_stream_market_data(
    client: RofexClient, command: StreamMarketDataCommand
) -> int:
    try:
        subscription = await client.subscribe_market_data(
            command.symbols, STREAM_ENTRIES
        )
    except RofexError as e:
        logger.error(f"Cannot subscribe: {e}")
        return 1
    return await _drain(subscription, _print_market_data)


async def handle_stream_orders(
    client: RofexClient, command: StreamOrdersCommand
) -> int:
    try:
        subscription = await client.subscribe_order_report(
            command.account, command.snapshot_only_active
        )
    except RofexError as e:
        logger.error(f"Cannot subscribe: {e}")
        return 1
    return await _drain(subscription, _print_order_report)
