"""
Session lifecycle — login, staleness, refresh.

Nobitex keys are opaque tokens with no expiry field, so freshness is inferred
from the `remember` value sent at login: "no" (or unset) keys live about four
hours, "yes" keys about thirty days. A stale key is replaced by logging in
again with a freshly generated one-time code.
"""

import asyncio
import enum
import logging
import time
from typing import Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from nobitex.errors import AuthenticationError, ConfigurationError, CredentialsError
from nobitex.models.auth import AuthenticationParams, AuthenticationResponse
from nobitex.otp import OtpProvider, TotpProvider
from nobitex.transport.http import HttpClient, RequestDescriptor

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login/"

SHORT_LIVED_TTL = 4 * 60 * 60
LONG_LIVED_TTL = 30 * 24 * 60 * 60


class RememberMode(str, enum.Enum):
    YES = "yes"          # long-lived key
    NO = "no"            # short-lived key
    UNSPECIFIED = ""


TTL_POLICY: dict[RememberMode, float] = {
    RememberMode.NO: SHORT_LIVED_TTL,
    RememberMode.YES: LONG_LIVED_TTL,
    RememberMode.UNSPECIFIED: SHORT_LIVED_TTL,
}


def remember_mode(value: Union[str, RememberMode, None]) -> RememberMode:
    try:
        return RememberMode(value)
    except ValueError:
        raise ConfigurationError(f"unknown remember value: {value!r}") from None


def ttl_for(value: Union[str, RememberMode, None]) -> float:
    return TTL_POLICY[remember_mode(value)]


class Credentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str = ""
    password: str = Field("", repr=False)
    otp_secret: Optional[str] = Field(None, repr=False)
    otp_code: Optional[str] = None


class Session(BaseModel):
    """Snapshot of the authenticated state. Replaced as a whole, never edited."""

    model_config = ConfigDict(frozen=True)

    key: str = Field("", repr=False)
    authenticated_at: float = 0.0
    remember: str = ""

    @property
    def authenticated(self) -> bool:
        return bool(self.key)


class SessionManager:
    def __init__(
        self,
        http: HttpClient,
        credentials: Optional[Credentials] = None,
        remember: Union[str, RememberMode] = RememberMode.UNSPECIFIED,
        api_key: Optional[str] = None,
        otp_provider: Optional[OtpProvider] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._http = http
        self.credentials = credentials or Credentials()
        self._otp = otp_provider or TotpProvider()
        self._clock = clock
        remember_value = remember.value if isinstance(remember, RememberMode) else remember
        self._session = Session(key=api_key or "", authenticated_at=clock(), remember=remember_value)
        self._otp_code = self.credentials.otp_code or ""
        # a caller-supplied code is used for the first login only
        self._pinned_code = bool(self.credentials.otp_code)
        self._refresh_task: Optional[asyncio.Task] = None
        http.attach_session(self)

    @property
    def session(self) -> Session:
        return self._session

    @property
    def key(self) -> str:
        return self._session.key

    @property
    def otp_code(self) -> str:
        return self._otp_code

    def regenerate_otp(self) -> str:
        secret = self.credentials.otp_secret
        if not secret:
            raise ConfigurationError("OTP secret is empty, can't generate a one-time code")
        self._otp_code = self._otp.generate(secret, self._clock())
        self._pinned_code = False
        return self._otp_code

    def ttl(self) -> float:
        return ttl_for(self._session.remember)

    def is_stale(self) -> bool:
        return self._clock() - self._session.authenticated_at > self.ttl()

    def assert_authenticated(self) -> None:
        if not self._session.key:
            raise AuthenticationError("access token is empty")

    async def authenticate(
        self, username: Optional[str] = None, password: Optional[str] = None,
    ) -> AuthenticationResponse:
        """Log in and store the returned key. API errors propagate unchanged."""
        username = self.credentials.username if username is None else username
        password = self.credentials.password if password is None else password
        if not username or not password:
            raise CredentialsError()
        mode = remember_mode(self._session.remember)

        if self.credentials.otp_secret and not self._pinned_code:
            self.regenerate_otp()

        result = await self._http.execute(RequestDescriptor(
            method="POST",
            endpoint=LOGIN_PATH,
            otp_required=True,
            body=AuthenticationParams(username=username, password=password, remember=mode.value),
            result=AuthenticationResponse,
        ))
        self._session = Session(key=result.key, authenticated_at=self._clock(), remember=mode.value)
        self._pinned_code = False
        logger.info("Authenticated as %s (device=%s, remember=%r)", username, result.device, mode.value)
        return result

    async def ensure_fresh(self) -> Session:
        """Return a fresh session. May authenticate over the network when stale."""
        if not self.is_stale():
            return self._session
        return await self.refresh()

    async def refresh(self) -> Session:
        """Re-authenticate. Concurrent callers share one login call and its outcome."""
        if self._refresh_task is None:
            self.ttl()
            if not self.credentials.otp_secret:
                raise ConfigurationError("OTP secret is empty, can't refresh API key")
            self._refresh_task = asyncio.ensure_future(self._refresh())
            self._refresh_task.add_done_callback(self._refresh_done)
        return await asyncio.shield(self._refresh_task)

    async def _refresh(self) -> Session:
        logger.info("API key is stale (remember=%r), re-authenticating", self._session.remember)
        self._pinned_code = False
        try:
            await self.authenticate()
        except Exception as e:
            logger.error("Failed to refresh API key: %s", e)
            raise
        return self._session

    def _refresh_done(self, task: asyncio.Task) -> None:
        if self._refresh_task is task:
            self._refresh_task = None
        # marks the error retrieved even if every waiter was cancelled
        if not task.cancelled():
            task.exception()
