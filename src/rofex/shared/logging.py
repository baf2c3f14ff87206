"""Bridge stdlib logging used by httpx/websockets into loguru"""

import logging

from loguru import logger


class _LoguruHandler(logging.Handler):
    """Bridge stdlib logging into loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(
            level, record.getMessage()
        )


class LoggingBridge:
    """Routes third-party stdlib loggers into loguru"""

    LOGGERS = ("httpx", "websockets")
    _installed = False

    @classmethod
    def install(cls) -> None:
        """Attach the loguru handler once per process."""
        if cls._installed:
            return

        handler = _LoguruHandler()
        for name in cls.LOGGERS:
            std_logger = logging.getLogger(name)
            std_logger.setLevel(logging.DEBUG)
            std_logger.addHandler(handler)
            std_logger.propagate = False

        cls._installed = True
