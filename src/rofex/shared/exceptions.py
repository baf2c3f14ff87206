"""Consolidated exceptions for the Rofex client.

All custom exceptions are defined here to provide a single source of truth
for error handling across the library.
"""


class RofexError(Exception):
    """Base exception for Rofex client errors"""

    pass


class ConfigurationError(RofexError):
    """Raised when configuration is invalid or missing"""

    pass


class RofexClientError(RofexError):
    """Base exception for API client errors"""

    pass


class ValidationError(RofexClientError):
    """Raised when a request fails client-side validation"""

    def __init__(self, field: str, msg: str) -> None:
        self.field = field
        self.msg = msg
        super().__init__(f"validation error: {field}: {msg}")


class HTTPError(RofexClientError):
    """Raised when the API answers with a non-2xx status"""

    def __init__(self, status_code: int, body: bytes = b"") -> None:
        self.status_code = status_code
        self.body = body
        text = body.decode("utf-8", errors="replace")
        super().__init__(f"http error: status={status_code} body={text}")


class AuthError(RofexClientError):
    """Raised when credentials are missing, expired or rejected"""

    pass


class AuthTokenError(AuthError):
    """Raised when a stream cannot obtain a token to authenticate with"""

    pass


class TemporaryError(RofexClientError):
    """Wraps a transient failure the caller may retry"""

    def __init__(self, err: BaseException) -> None:
        self.err = err
        super().__init__(str(err))


class StreamError(RofexClientError):
    """Base exception for WebSocket stream errors"""

    pass


class StreamClosedError(StreamError):
    """Raised when operating on a connection that is not open"""

    def __init__(self, msg: str = "closed") -> None:
        super().__init__(msg)


class MaxRetriesExceededError(StreamError):
    """Raised when a stream exhausts its reconnect budget"""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"max retries exceeded: {cause}")


UNAUTHORIZED = "unauthorized"
