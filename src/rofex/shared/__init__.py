"""Shared constants, exceptions and logging helpers."""

from .exceptions import (
    AuthError,
    AuthTokenError,
    ConfigurationError,
    HTTPError,
    MaxRetriesExceededError,
    RofexClientError,
    RofexError,
    StreamClosedError,
    StreamError,
    TemporaryError,
    ValidationError,
)
from .logging import LoggingBridge

__all__ = [
    "AuthError",
    "AuthTokenError",
    "ConfigurationError",
    "HTTPError",
    "MaxRetriesExceededError",
    "RofexClientError",
    "RofexError",
    "StreamClosedError",
    "StreamError",
    "TemporaryError",
    "ValidationError",
    "LoggingBridge",
]
