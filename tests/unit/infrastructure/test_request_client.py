"""Tests for RofexRequestClient auth, retry and decoding"""

from unittest.mock import AsyncMock

import httpx
import pytest

from conftest import RecordingHandler, login_ok
from rofex.domain.models.responses import SegmentsResponse
from rofex.infrastructure.auth import PasswordAuth, StaticTokenAuth
from rofex.infrastructure.requests import RofexRequestClient
from rofex.shared.exceptions import (
    AuthError,
    HTTPError,
    RofexClientError,
    TemporaryError,
)

SEGMENTS_OK = {
    "status": "OK",
    "segments": [{"marketSegmentId": "DDF", "marketId": "ROFX"}],
}


def _client(config, handler, auth=None, rate_limiter=None):
    return RofexRequestClient(
        config,
        auth=auth,
        rate_limiter=rate_limiter,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.unit
@pytest.mark.asyncio
async def test_login_returns_header_token(config, credentials, handler):
    client = _client(config, handler)

    token = await client.login(credentials)

    assert token == "tok-1"
    request = handler.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/auth/getToken"
    assert request.headers["X-Username"] == "user"
    assert request.headers["X-Password"] == "secret"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_login_rejected_raises_http_error(config, credentials):
    handler = RecordingHandler({"/auth/getToken": httpx.Response(401)})
    client = _client(config, handler)

    with pytest.raises(HTTPError) as exc_info:
        await client.login(credentials)

    assert exc_info.value.status_code == 401


@pytest.mark.unit
@pytest.mark.asyncio
async def test_login_without_token_header(config, credentials):
    handler = RecordingHandler({"/auth/getToken": httpx.Response(200)})
    client = _client(config, handler)

    with pytest.raises(AuthError, match="missing X-Auth-Token"):
        await client.login(credentials)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_first_request_logs_in_lazily(config, credentials, handler):
    """Password auth fetches a token before the first GET"""
    handler.routes["/rest/segment/all"] = httpx.Response(200, json=SEGMENTS_OK)
    client = _client(config, handler, auth=PasswordAuth(credentials))

    result = await client.get_typed("rest/segment/all", SegmentsResponse)

    assert result.ok
    assert result.segments[0].market_segment_id == "DDF"
    assert handler.paths() == ["/auth/getToken", "/rest/segment/all"]
    assert handler.requests[1].headers["X-Auth-Token"] == "tok-1"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_unauthorized_refreshes_and_retries_once(config, credentials):
    handler = RecordingHandler(
        {
            "/auth/getToken": [login_ok("old"), login_ok("new")],
            "/rest/segment/all": [
                httpx.Response(401),
                httpx.Response(200, json=SEGMENTS_OK),
            ],
        }
    )
    auth = PasswordAuth(credentials)
    client = _client(config, handler, auth=auth)

    result = await client.get_typed("rest/segment/all", SegmentsResponse)

    assert result.ok
    assert handler.paths() == [
        "/auth/getToken",
        "/rest/segment/all",
        "/auth/getToken",
        "/rest/segment/all",
    ]
    assert handler.requests[3].headers["X-Auth-Token"] == "new"
    assert auth.token == "new"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_second_unauthorized_is_returned(config, credentials, handler):
    """Only one retry: a second 401 surfaces as HTTPError"""
    handler.routes["/rest/segment/all"] = httpx.Response(401, text="denied")
    client = _client(config, handler, auth=PasswordAuth(credentials))

    with pytest.raises(HTTPError) as exc_info:
        await client.get_typed("rest/segment/all", SegmentsResponse)

    assert exc_info.value.status_code == 401
    assert exc_info.value.body == b"denied"
    assert handler.paths().count("/rest/segment/all") == 2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_retry_transport_failure_is_temporary(config, credentials, handler):
    handler.routes["/rest/segment/all"] = [
        httpx.Response(401),
        httpx.ConnectError("connection reset"),
    ]
    client = _client(config, handler, auth=PasswordAuth(credentials))

    with pytest.raises(TemporaryError):
        await client.get("rest/segment/all")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_transport_failure_is_client_error(config):
    handler = RecordingHandler(
        {"/rest/segment/all": httpx.ConnectError("refused")}
    )
    client = _client(config, handler, auth=StaticTokenAuth("tok"))

    with pytest.raises(RofexClientError, match="http request failed"):
        await client.get("rest/segment/all")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_non_json_body_is_decode_error(config):
    handler = RecordingHandler(
        {"/rest/segment/all": httpx.Response(200, text="<html>")}
    )
    client = _client(config, handler, auth=StaticTokenAuth("tok"))

    with pytest.raises(RofexClientError, match="decode json"):
        await client.get_typed("rest/segment/all", SegmentsResponse)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_rate_limiter_awaited_per_request(config):
    handler = RecordingHandler(
        {"/rest/segment/all": httpx.Response(200, json=SEGMENTS_OK)}
    )
    limiter = AsyncMock()
    client = _client(
        config, handler, auth=StaticTokenAuth("tok"), rate_limiter=limiter
    )

    await client.get("rest/segment/all")
    await client.get("rest/segment/all")

    assert limiter.wait.await_count == 2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_static_token_is_sent_as_is(config):
    handler = RecordingHandler(
        {"/rest/segment/all": httpx.Response(200, json=SEGMENTS_OK)}
    )
    client = _client(config, handler, auth=StaticTokenAuth("static"))

    await client.get("rest/segment/all")

    assert handler.requests[0].headers["X-Auth-Token"] == "static"
    assert handler.requests[0].headers["User-Agent"].startswith("rofex-client")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_ws_auth_token(config, credentials, handler):
    """Password auth logs in on demand; an empty static token is rejected"""
    client = _client(config, handler, auth=PasswordAuth(credentials))
    assert await client.ws_auth_token() == "tok-1"

    client = _client(config, handler, auth=StaticTokenAuth(""))
    with pytest.raises(AuthError):
        await client.ws_auth_token()

    client = _client(config, handler)
    with pytest.raises(AuthError):
        await client.ws_auth_token()


class _VaultAuth:
    """Provider outside the package that fetches its token on refresh"""

    def __init__(self, token: str | None = None, issued: str | None = "vault-tok"):
        self._token = token
        self._issued = issued
        self.refreshes = 0

    @property
    def token(self) -> str | None:
        return self._token

    def apply(self, headers: dict[str, str]) -> None:
        if not self._token:
            raise AuthError()
        headers["X-Auth-Token"] = self._token

    async def refresh(self, client) -> None:
        self.refreshes += 1
        self._token = self._issued


@pytest.mark.unit
@pytest.mark.asyncio
async def test_ws_auth_token_with_custom_provider(config, handler):
    """Any provider with a token and refresh can authenticate a stream"""
    held = _VaultAuth(token="held")
    assert await _client(config, handler, auth=held).ws_auth_token() == "held"
    assert held.refreshes == 0

    lazy = _VaultAuth()
    assert await _client(config, handler, auth=lazy).ws_auth_token() == "vault-tok"
    assert lazy.refreshes == 1

    empty = _VaultAuth(issued=None)
    with pytest.raises(AuthError):
        await _client(config, handler, auth=empty).ws_auth_token()
    assert empty.refreshes == 1
    assert handler.requests == []
