import asyncio
import sys

from loguru import logger

from rofex.client import RofexClient
from rofex.core.config import ClientConfig, credentials_from_env
from rofex.shared.exceptions import ConfigurationError

from .dispatcher import CommandDispatcher


def main() -> int:
    """CLI entry point

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    logger.add(
        "logs/rofex_{time}.log",
        rotation="1 day",
        retention="30 days",
        compression="gz",
        level="INFO",
    )

    try:
        config = ClientConfig.from_env()
        credentials = credentials_from_env()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    async def run() -> int:
        async with RofexClient(config, credentials=credentials) as client:
            return await CommandDispatcher(client).dispatch(sys.argv)

    try:
        return asyncio.run(run())
    except KeyboardInterrupt:
        logger.warning("Stopped manually.")
        return 130
    except Exception as e:
        logger.opt(exception=e).critical(f"Unhandled exception: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
