from loguru import logger

from rofex.client import RofexClient

from .commands import (
    SegmentsCommand,
    SnapshotCommand,
    StreamMarketDataCommand,
    StreamOrdersCommand,
    handle_segments,
    handle_snapshot,
    handle_stream_market_data,
    handle_stream_orders,
)


class CommandDispatcher:
    """Dispatches CLI commands to appropriate handlers"""

    def __init__(self, client: RofexClient) -> None:
        self.client = client
        self._handlers = {
            "segments": self._handle_segments,
            "snapshot": self._handle_snapshot,
            "stream-md": self._handle_stream_md,
            "stream-orders": self._handle_stream_orders,
        }

    async def dispatch(self, argv: list[str]) -> int:
        """Parse and execute command

        Args:
            argv: Command line arguments (sys.argv)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        if len(argv) < 2:
            self._print_usage()
            return 1

        method = argv[1]
        handler = self._handlers.get(method)

        if handler is None:
            logger.error(f"Unknown command: {method}")
            self._print_usage()
            return 1

        return await handler(argv)

    def _print_usage(self) -> None:
        logger.error(
            "Usage: rofex segments | snapshot <symbol> [market] | "
            "stream-md <symbol>... | stream-orders <account> [--active]"
        )

    async def _handle_segments(self, argv: list[str]) -> int:
        return await handle_segments(
            self.client, SegmentsCommand(name="segments")
        )

    async def _handle_snapshot(self, argv: list[str]) -> int:
        if len(argv) < 3:
            self._print_usage()
            return 1
        command = SnapshotCommand(name="snapshot", symbol=argv[2])
        if len(argv) > 3:
            command.market = argv[3]
        return await handle_snapshot(self.client, command)

    async def _handle_stream_md(self, argv: list[str]) -> int:
        command = StreamMarketDataCommand(name="stream-md", symbols=argv[2:])
        return await handle_stream_market_data(self.client, command)

    async def _handle_stream_orders(self, argv: list[str]) -> int:
        if len(argv) < 3:
            self._print_usage()
            return 1
        command = StreamOrdersCommand(
            name="stream-orders",
            account=argv[2],
            snapshot_only_active="--active" in argv[3:],
        )
        return await handle_stream_orders(self.client, command)
