"""
AsyncNobitex / Nobitex — main SDK clients.
"""

import asyncio
import inspect
import threading
import time
from typing import Any, Callable, Optional, Union

import httpx

from nobitex.auth import Credentials, RememberMode, Session, SessionManager
from nobitex.errors import ConfigurationError
from nobitex.market import MarketAPI
from nobitex.models.auth import AuthenticationResponse
from nobitex.orders import OrdersAPI
from nobitex.otp import OtpProvider
from nobitex.transport.http import DEFAULT_BASE_URL, HttpClient
from nobitex.wallets import WalletsAPI


class AsyncNobitex:
    """Async Nobitex client (primary).

    Construction does no I/O. `open()` (or `async with`) logs in when `auto_auth`
    is set, credentials were given and no `api_key` was; it also checks
    freshness when `auto_refresh` is set. Without credentials the client is
    anonymous and only public market calls work.
    """

    def __init__(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        otp_secret: Optional[str] = None,
        otp_code: Optional[str] = None,
        api_key: Optional[str] = None,
        remember: Union[str, RememberMode] = RememberMode.UNSPECIFIED,
        user_agent: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        auto_auth: bool = True,
        auto_refresh: bool = False,
        otp_provider: Optional[OtpProvider] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._api_key = api_key
        self._auto_auth = auto_auth
        self._auto_refresh = auto_refresh

        self.http = HttpClient(
            base_url=base_url,
            user_agent=user_agent,
            timeout=timeout,
            client=http_client,
            auto_refresh=auto_refresh,
        )
        self.auth = SessionManager(
            self.http,
            Credentials(username=username or "", password=password or "", otp_secret=otp_secret, otp_code=otp_code),
            remember=remember,
            api_key=api_key,
            otp_provider=otp_provider,
            clock=clock,
        )
        self.market = MarketAPI(self.http)
        self.wallets = WalletsAPI(self.http)
        self.orders = OrdersAPI(self.http)

    @property
    def session(self) -> Session:
        return self.auth.session

    @property
    def authenticated(self) -> bool:
        return self.auth.session.authenticated

    async def open(self) -> None:
        creds = self.auth.credentials
        if self._auto_auth and not self._api_key and (creds.username or creds.password):
            if not (creds.otp_secret or creds.otp_code):
                raise ConfigurationError("otp_secret or otp_code required to log in")
            await self.auth.authenticate()
        if self._auto_refresh:
            await self.auth.ensure_fresh()

    async def authenticate(
        self, username: Optional[str] = None, password: Optional[str] = None,
    ) -> AuthenticationResponse:
        return await self.auth.authenticate(username, password)

    async def close(self) -> None:
        await self.http.close()

    async def __aenter__(self) -> "AsyncNobitex":
        try:
            await self.open()
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


class _SyncProxy:
    """Runs an async API object's coroutine methods on the owning client's loop."""

    def __init__(self, target: Any, run: Callable[[Any], Any]):
        self._target = target
        self._run = run

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._target, name)
        if not inspect.iscoroutinefunction(attr):
            return attr

        def call(*args: Any, **kwargs: Any) -> Any:
            return self._run(attr(*args, **kwargs))
        call.__name__ = name
        call.__doc__ = attr.__doc__
        return call


class Nobitex:
    """Sync wrapper around AsyncNobitex. Runs the event loop internally.

    Unlike the async client, construction logs in right away when
    `auto_auth` applies. Safe to share between threads; calls run one at a
    time on the private loop.
    """

    def __init__(self, **kwargs: Any):
        self._async = AsyncNobitex(**kwargs)
        self._loop = asyncio.new_event_loop()
        self._lock = threading.Lock()
        try:
            self._run(self._async.open())
        except BaseException:
            self.close()
            raise
        self.market = _SyncProxy(self._async.market, self._run)
        self.wallets = _SyncProxy(self._async.wallets, self._run)
        self.orders = _SyncProxy(self._async.orders, self._run)

    def _run(self, coro: Any) -> Any:
        with self._lock:
            return self._loop.run_until_complete(coro)

    @property
    def session(self) -> Session:
        return self._async.session

    @property
    def authenticated(self) -> bool:
        return self._async.authenticated

    def authenticate(self, username: Optional[str] = None, password: Optional[str] = None) -> AuthenticationResponse:
        return self._run(self._async.authenticate(username, password))

    def ensure_fresh(self) -> Session:
        return self._run(self._async.auth.ensure_fresh())

    def close(self) -> None:
        with self._lock:
            if self._loop.is_closed():
                return
            self._loop.run_until_complete(self._async.close())
            self._loop.close()

    def __enter__(self) -> "Nobitex":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
