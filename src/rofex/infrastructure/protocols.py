"""Protocols for the pluggable collaborators of the client.

Concrete implementations live next to this module; tests substitute
their own objects that satisfy the same shape.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .requests import RofexRequestClient


@runtime_checkable
class AuthProvider(Protocol):
    """Applies authentication to outgoing requests and refreshes tokens."""

    @property
    def token(self) -> str | None:
        """Currently held token, if any."""
        ...

    def apply(self, headers: dict[str, str]) -> None:
        """Add the auth header; raise AuthError when no token is held."""
        ...

    async def refresh(self, client: "RofexRequestClient") -> None:
        """Obtain a fresh token."""
        ...


@runtime_checkable
class RateLimiter(Protocol):
    """Token bucket style limiter awaited before every request."""

    async def wait(self) -> None: ...


@runtime_checkable
class WebSocketConnection(Protocol):
    """Open socket as returned by a connector."""

    async def send(self, message: str) -> None: ...

    async def recv(self) -> str | bytes: ...

    async def ping(self) -> Any:
        """Send a ping; the returned awaitable resolves on the pong."""
        ...

    async def close(self, code: int = 1000, reason: str = "") -> None: ...


@runtime_checkable
class WebSocketConnector(Protocol):
    """Opens WebSocket connections."""

    async def connect(
        self, url: str, headers: Mapping[str, str]
    ) -> WebSocketConnection: ...
