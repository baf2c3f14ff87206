"""Configuration management for the Rofex client"""

import os
from dataclasses import dataclass, field, replace

from loguru import logger

from rofex.domain.models.enums import Environment
from rofex.shared.constants import (
    DEFAULT_TIMEOUT,
    DEFAULT_WS_BUFFER,
    LIVE_PROPRIETARY,
    REMARKET_BASE_URL,
    REMARKET_PROPRIETARY,
    REMARKET_WS_URL,
    USER_AGENT,
)
from rofex.shared.exceptions import ConfigurationError


def _load_dotenv() -> None:
    """Load a local .env file when python-dotenv finds one"""
    from dotenv import load_dotenv

    load_dotenv()


@dataclass(frozen=True)
class Credentials:
    """Username/password pair for the Primary login endpoint"""

    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


@dataclass(frozen=True)
class StreamSettings:
    """Reconnect and keepalive tuning for WebSocket subscriptions"""

    # Seconds before the first reconnect; doubles on each failure
    initial_backoff: float = 1.0

    # Ceiling for the reconnect delay (seconds)
    max_backoff: float = 30.0

    # Consecutive connect/subscribe failures before giving up
    max_retries: int = 10

    # Shorter than the server's 30s idle timeout
    ping_interval: float = 25.0
    ping_timeout: float = 5.0

    error_buffer: int = 5


@dataclass(frozen=True)
class ClientConfig:
    """Immutable client configuration shared by every component"""

    environment: Environment = Environment.REMARKET
    base_url: str = REMARKET_BASE_URL
    ws_url: str = REMARKET_WS_URL
    proprietary: str = REMARKET_PROPRIETARY
    user_agent: str = USER_AGENT
    timeout: float = DEFAULT_TIMEOUT

    # Capacity of each subscription's event channel
    ws_buffer: int = DEFAULT_WS_BUFFER

    # Drop new events when the channel is full instead of blocking the reader
    ws_drop_on_full: bool = False

    stream: StreamSettings = field(default_factory=StreamSettings)

    def __post_init__(self) -> None:
        if self.environment == Environment.LIVE:
            if (
                not self.base_url
                or not self.ws_url
                or "remarkets" in self.base_url
                or "remarkets" in self.ws_url
            ):
                raise ConfigurationError(
                    "Live environment requires explicit base_url and ws_url "
                    "(e.g. https://api.primary.com.ar/)"
                )
        if self.ws_buffer <= 0:
            raise ConfigurationError("ws_buffer must be > 0")
        if not self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", self.base_url + "/")
        if not self.ws_url.endswith("/"):
            object.__setattr__(self, "ws_url", self.ws_url + "/")

    @classmethod
    def for_environment(
        cls,
        environment: Environment,
        base_url: str | None = None,
        ws_url: str | None = None,
        **kwargs,
    ) -> "ClientConfig":
        """Build a config with the defaults of the given environment

        Args:
            environment: Target environment
            base_url: REST base URL (mandatory for live)
            ws_url: WebSocket URL (mandatory for live)
            **kwargs: Any other ClientConfig field

        Raises:
            ConfigurationError: If live URLs are missing
        """
        if environment == Environment.LIVE:
            kwargs.setdefault("proprietary", LIVE_PROPRIETARY)
            return cls(
                environment=environment,
                base_url=base_url or "",
                ws_url=ws_url or "",
                **kwargs,
            )

        kwargs.setdefault("proprietary", REMARKET_PROPRIETARY)
        return cls(
            environment=environment,
            base_url=base_url or REMARKET_BASE_URL,
            ws_url=ws_url or REMARKET_WS_URL,
            **kwargs,
        )

    def with_overrides(self, **changes) -> "ClientConfig":
        """Return a copy with the given fields replaced"""
        return replace(self, **changes)

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Load configuration from environment variables

        Returns:
            ClientConfig instance with values from environment

        Raises:
            ConfigurationError: If values are missing or invalid
        """
        _load_dotenv()

        env_name = os.getenv("ROFEX_ENVIRONMENT", "remarket").lower()
        try:
            environment = Environment(env_name)
        except ValueError as e:
            raise ConfigurationError(
                f"Unknown ROFEX_ENVIRONMENT: {env_name}"
            ) from e

        kwargs: dict = {}
        if proprietary := os.getenv("ROFEX_PROPRIETARY"):
            kwargs["proprietary"] = proprietary
        try:
            if timeout := os.getenv("ROFEX_TIMEOUT"):
                kwargs["timeout"] = float(timeout)
            if ws_buffer := os.getenv("ROFEX_WS_BUFFER"):
                kwargs["ws_buffer"] = int(ws_buffer)
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric setting: {e}") from e
        kwargs["ws_drop_on_full"] = (
            os.getenv("ROFEX_WS_DROP_ON_FULL", "false").lower() == "true"
        )

        config = cls.for_environment(
            environment,
            base_url=os.getenv("ROFEX_BASE_URL"),
            ws_url=os.getenv("ROFEX_WS_URL"),
            **kwargs,
        )

        logger.info("Configuration loaded:")
        logger.info(f"  Environment: {config.environment.value}")
        logger.info(f"  REST URL: {config.base_url}")
        logger.info(f"  WebSocket URL: {config.ws_url}")
        logger.info(f"  Proprietary: {config.proprietary}")
        logger.info(f"  Timeout: {config.timeout}s")
        logger.info(
            f"  Stream buffer: {config.ws_buffer} "
            f"({'drop' if config.ws_drop_on_full else 'block'} on full)"
        )

        return config


def credentials_from_env() -> Credentials:
    """Read login credentials from ROFEX_USERNAME/ROFEX_PASSWORD

    Raises:
        ConfigurationError: If either variable is missing
    """
    _load_dotenv()

    username = os.getenv("ROFEX_USERNAME")
    password = os.getenv("ROFEX_PASSWORD")
    missing = [
        name
        for name, value in (
            ("ROFEX_USERNAME", username),
            ("ROFEX_PASSWORD", password),
        )
        if not value
    ]
    if missing:
        raise ConfigurationError(f"Missing credentials: {missing}")

    return Credentials(username=str(username), password=str(password))
