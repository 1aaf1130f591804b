"""Shared fixtures: mock transport clients, a controllable clock, a stub OTP provider."""

from typing import Any, Callable, Optional

import httpx
import pytest

from nobitex import AsyncNobitex

BASE_URL = "https://api.test"


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubOtp:
    """Returns numbered codes so tests can tell regenerations apart."""

    def __init__(self):
        self.calls: list[tuple[str, Optional[float]]] = []

    def generate(self, secret: str, for_time: Optional[float] = None) -> str:
        self.calls.append((secret, for_time))
        return f"{len(self.calls):06d}"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def otp() -> StubOtp:
    return StubOtp()


@pytest.fixture
def make_client(clock, otp) -> Callable[..., AsyncNobitex]:
    def _make(handler: Callable[[httpx.Request], Any], **kwargs: Any) -> AsyncNobitex:
        kwargs.setdefault("user_agent", "TestBot/1.0")
        kwargs.setdefault("otp_provider", otp)
        kwargs.setdefault("clock", clock)
        kwargs.setdefault("base_url", BASE_URL)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return AsyncNobitex(http_client=http_client, **kwargs)
    return _make
