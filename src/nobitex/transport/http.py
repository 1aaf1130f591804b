"""
REST request pipeline — URL building, header injection, dispatch, decoding.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from nobitex.errors import (
    AuthenticationError,
    ConfigurationError,
    DecodingError,
    TransportError,
    parse_error_response,
)
from nobitex.transport.params import encode_body, encode_query

if TYPE_CHECKING:
    from nobitex.auth import SessionManager

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://apiv2.nobitex.ir"
DEFAULT_TIMEOUT = 30.0
USER_AGENT_PREFIX = "TraderBot/"


@dataclass(frozen=True)
class RequestDescriptor:
    """One API call. `body` is a params model or mapping; `result` is the type to decode into."""

    method: str
    endpoint: str
    version: str = ""
    auth: bool = False
    otp_required: bool = False
    body: Any = None
    result: Any = None
    timeout: Optional[float] = None


@lru_cache(maxsize=None)
def _adapter(tp: Any) -> TypeAdapter:
    return TypeAdapter(tp)


class HttpClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
        auto_refresh: bool = False,
    ):
        self._base_url = base_url.rstrip("/")
        self._user_agent = user_agent
        self._timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=DEFAULT_TIMEOUT if timeout is None else timeout)
        self._session: Optional[SessionManager] = None
        self.auto_refresh = auto_refresh

    @property
    def base_url(self) -> str:
        return self._base_url

    def attach_session(self, session: SessionManager) -> None:
        self._session = session

    def api_url(self, endpoint: str, version: str = "") -> str:
        """`("/options", "v2")` -> `{base_url}/v2/options`; no version -> `{base_url}{endpoint}`"""
        if not version:
            return f"{self._base_url}{endpoint}"
        return f"{self._base_url}/{version}{endpoint}"

    def _caller_id(self) -> str:
        if not self._user_agent:
            raise ConfigurationError("user agent is empty, please set user_agent")
        return USER_AGENT_PREFIX + self._user_agent

    async def _headers(self, req: RequestDescriptor) -> dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if req.auth:
            if self._session is None:
                raise AuthenticationError("access token is empty")
            # an anonymous client has no key to refresh
            if self.auto_refresh and self._session.key:
                await self._session.ensure_fresh()
            self._session.assert_authenticated()
            headers["User-Agent"] = self._caller_id()
            headers["Authorization"] = f"Token {self._session.key}"
        if req.otp_required:
            headers["User-Agent"] = self._caller_id()
            headers["X-TOTP"] = self._session.otp_code if self._session else ""
        return headers

    def _target(self, req: RequestDescriptor) -> tuple[str, Optional[bytes]]:
        url = self.api_url(req.endpoint, req.version)
        if req.method.upper() == "GET":
            if req.body is None:
                return url, None
            try:
                query = encode_query(req.body)
            except (TypeError, ValueError) as e:
                raise TransportError("preparing request parameters", e) from e
            return (f"{url}?{query}" if query else url), None
        if req.body is None:
            return url, None
        try:
            return url, encode_body(req.body)
        except (TypeError, ValueError) as e:
            raise TransportError("preparing request body", e) from e

    async def execute(self, req: RequestDescriptor) -> Any:
        """Run one call. Returns the decoded result, or None when `req.result` is None.

        Raises ConfigurationError/AuthenticationError before any I/O, TransportError
        on network failure, APIError on non-2xx, DecodingError on a bad 2xx body.
        """
        url, content = self._target(req)

        # None defers to the httpx client's own timeout
        timeout = self._timeout if req.timeout is None else req.timeout
        if timeout is not None and timeout <= 0:
            raise TransportError("sending request", httpx.TimeoutException("deadline already expired"))

        headers = await self._headers(req)

        try:
            request = self._client.build_request(
                req.method, url, content=content, headers=headers,
                timeout=httpx.USE_CLIENT_DEFAULT if timeout is None else timeout,
            )
        except (httpx.HTTPError, httpx.InvalidURL, ValueError, TypeError) as e:
            raise TransportError("creating request", e) from e

        logger.debug("%s %s", req.method, url)
        try:
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise TransportError("sending request", e) from e
        try:
            body = await response.aread()
        except httpx.HTTPError as e:
            raise TransportError("reading response body", e) from e
        finally:
            await response.aclose()

        logger.debug("%s %s -> %d", req.method, url, response.status_code)
        if not 200 <= response.status_code < 300:
            raise parse_error_response(response.status_code, body)

        if req.result is None:
            return None
        try:
            return _adapter(req.result).validate_json(body)
        except ValidationError as e:
            raise DecodingError(f"failed to decode response from {req.endpoint}", e) from e

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
