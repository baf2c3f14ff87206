"""Auth providers for the Primary X-Auth-Token scheme"""

from typing import TYPE_CHECKING

from loguru import logger

from rofex.core.config import Credentials
from rofex.shared.constants import AUTH_HEADER
from rofex.shared.exceptions import UNAUTHORIZED, AuthError

if TYPE_CHECKING:
    from .requests import RofexRequestClient


class PasswordAuth:
    """Logs in with username/password and keeps the returned token

    The token is obtained lazily: the first request (or stream) that finds
    no token triggers a login, and a 401 triggers another one.
    """

    def __init__(self, credentials: Credentials) -> None:
        self._credentials = credentials
        self._token: str | None = None

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    def apply(self, headers: dict[str, str]) -> None:
        if not self._token:
            raise AuthError(UNAUTHORIZED)
        headers[AUTH_HEADER] = self._token

    async def refresh(self, client: "RofexRequestClient") -> None:
        logger.debug(f"Refreshing token for {self._credentials.username}")
        self._token = await client.login(self._credentials)


class StaticTokenAuth:
    """Uses a token obtained elsewhere; it cannot be refreshed"""

    def __init__(self, token: str) -> None:
        self._token = token

    @property
    def token(self) -> str | None:
        return self._token or None

    def apply(self, headers: dict[str, str]) -> None:
        if not self._token:
            raise AuthError(UNAUTHORIZED)
        headers[AUTH_HEADER] = self._token

    async def refresh(self, client: "RofexRequestClient") -> None:
        return None
