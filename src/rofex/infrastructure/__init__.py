"""Primary API infrastructure

PasswordAuth / StaticTokenAuth - X-Auth-Token providers
RofexRequestClient - authenticated HTTP requests
"""

from .auth import PasswordAuth, StaticTokenAuth
from .protocols import (
    AuthProvider,
    RateLimiter,
    WebSocketConnection,
    WebSocketConnector,
)
from .requests import NoopRateLimiter, RofexRequestClient

__all__ = [
    "AuthProvider",
    "NoopRateLimiter",
    "PasswordAuth",
    "RateLimiter",
    "RofexRequestClient",
    "StaticTokenAuth",
    "WebSocketConnection",
    "WebSocketConnector",
]
