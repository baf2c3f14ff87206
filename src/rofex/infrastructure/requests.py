"""RofexRequestClient - authenticated HTTP requests against the Primary REST API"""

import time
from typing import TypeVar

import httpx
import pydantic
from loguru import logger

from rofex.core.config import ClientConfig, Credentials
from rofex.shared.constants import AUTH_HEADER, PATH_AUTH
from rofex.shared.exceptions import (
    UNAUTHORIZED,
    AuthError,
    HTTPError,
    RofexClientError,
    TemporaryError,
)
from rofex.shared.logging import LoggingBridge

from .protocols import AuthProvider, RateLimiter

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)

_MASKED_HEADERS = {AUTH_HEADER.lower(), "x-password"}


class NoopRateLimiter:
    """Rate limiter that never waits"""

    async def wait(self) -> None:
        return None


class RofexRequestClient:
    """Low-level HTTP request client

    Responsibilities:
    - Applying auth headers (logging in lazily when no token is held)
    - Rate limiting
    - One refresh-and-retry on 401
    - Decoding JSON bodies into pydantic models
    """

    def __init__(
        self,
        config: ClientConfig,
        auth: AuthProvider | None = None,
        rate_limiter: RateLimiter | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize request client

        Args:
            config: Client configuration (base URL, timeout, user agent)
            auth: Auth provider; requests are sent unauthenticated if None
            rate_limiter: Limiter awaited before each request
            transport: Optional httpx transport (tests use MockTransport)
        """
        self._config = config
        self._auth = auth
        self._limiter: RateLimiter = rate_limiter or NoopRateLimiter()
        self._http_client = self._build_http_client(config.timeout, transport)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def auth(self) -> AuthProvider | None:
        return self._auth

    @auth.setter
    def auth(self, value: AuthProvider | None) -> None:
        self._auth = value

    def _build_http_client(
        self,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> httpx.AsyncClient:
        """Create an AsyncClient with httpx request/response logging hooks."""
        LoggingBridge.install()
        return httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={"User-Agent": self._config.user_agent},
            event_hooks={
                "request": [self._log_httpx_request],
                "response": [self._log_httpx_response],
            },
        )

    async def _log_httpx_request(self, request: httpx.Request) -> None:
        """Log outbound httpx requests with headers (auth masked)."""
        headers = {
            k: ("***" if k.lower() in _MASKED_HEADERS else v)
            for k, v in request.headers.items()
        }
        logger.debug(f"HTTPX request: {request.method} {request.url} {headers}")

    async def _log_httpx_response(self, response: httpx.Response) -> None:
        """Log httpx responses with status."""
        logger.debug(
            f"HTTPX response: status={response.status_code} url={response.url}"
        )

    def set_http_client(self, client: httpx.AsyncClient) -> None:
        """Set the HTTP client (for testing or external management)"""
        self._http_client = client

    async def aclose(self) -> None:
        await self._http_client.aclose()

    def _url(self, path: str) -> str:
        return self._config.base_url + path.lstrip("/")

    async def login(self, credentials: Credentials) -> str:
        """Exchange username/password for an auth token

        Args:
            credentials: Username and password

        Returns:
            Token read from the X-Auth-Token response header

        Raises:
            HTTPError: If the login endpoint answers non-2xx
            AuthError: If the response carries no token
        """
        headers = {
            "X-Username": credentials.username,
            "X-Password": credentials.password,
        }
        await self._limiter.wait()
        start = time.monotonic()
        try:
            response = await self._http_client.post(
                self._url(PATH_AUTH), headers=headers
            )
        except httpx.RequestError as e:
            raise RofexClientError(f"login request failed: {e}") from e

        elapsed = time.monotonic() - start
        if not response.is_success:
            logger.error(
                f"Login failed: status={response.status_code} ({elapsed:.3f}s)"
            )
            raise HTTPError(response.status_code)

        token = response.headers.get(AUTH_HEADER)
        if not token:
            raise AuthError("missing X-Auth-Token header in response")

        logger.info(f"Login ok ({elapsed:.3f}s)")
        return token

    async def _authorize(self, headers: dict[str, str]) -> None:
        if self._auth is None:
            return
        try:
            self._auth.apply(headers)
        except AuthError:
            # No token yet: log in and apply again
            await self._auth.refresh(self)
            self._auth.apply(headers)

    async def get(self, path: str) -> httpx.Response:
        """Authenticated GET returning the raw response

        A 401 triggers one token refresh and a single retry.

        Raises:
            AuthError: If no token can be obtained
            RofexClientError: If the request cannot be sent
            TemporaryError: If the retry after a refresh fails to send
        """
        url = self._url(path)
        headers: dict[str, str] = {}
        await self._authorize(headers)
        await self._limiter.wait()

        start = time.monotonic()
        try:
            response = await self._http_client.get(url, headers=headers)
        except httpx.RequestError as e:
            raise RofexClientError(f"http request failed: {e}") from e

        if response.status_code == 401 and self._auth is not None:
            logger.warning(f"GET unauthorized, refreshing token: {path}")
            await self._auth.refresh(self)
            await self._limiter.wait()
            self._auth.apply(headers)
            try:
                response = await self._http_client.get(url, headers=headers)
            except httpx.RequestError as e:
                raise TemporaryError(
                    RofexClientError(f"http request retry failed: {e}")
                ) from e

        logger.debug(
            f"GET {path} status={response.status_code} "
            f"({time.monotonic() - start:.3f}s)"
        )
        return response

    async def get_typed(self, path: str, model: type[ModelT]) -> ModelT:
        """GET ``path`` and decode the JSON body into ``model``

        Raises:
            HTTPError: If the response status is not 2xx
            RofexClientError: If the body cannot be decoded
        """
        response = await self.get(path)
        if not response.is_success:
            raise HTTPError(response.status_code, response.content)

        try:
            result = model.model_validate_json(response.content)
        except pydantic.ValidationError as e:
            raise RofexClientError(f"decode json: {e}") from e

        logger.debug(f"Decoded {path} into {model.__name__}")
        return result

    async def ws_auth_token(self) -> str:
        """Token to authenticate a WebSocket handshake with

        A provider holding no token is asked to refresh once; password auth
        logs in, a static token has nothing to refresh.

        Raises:
            AuthError: If no token is available
        """
        auth = self._auth
        if auth is None:
            raise AuthError(UNAUTHORIZED)
        if not auth.token:
            await auth.refresh(self)
        token = auth.token
        if not token:
            raise AuthError(UNAUTHORIZED)
        return token
