"""
One-time codes for the X-TOTP header.

The provider is pluggable; the default wraps pyotp's RFC 6238 implementation
(6 digits, 30 second step, SHA-1), which is what the exchange expects.
"""

import binascii
from typing import Optional, Protocol

import pyotp

from nobitex.errors import ConfigurationError


class OtpProvider(Protocol):
    def generate(self, secret: str, for_time: Optional[float] = None) -> str:
        """Return the code for `secret` at `for_time` (now when None)."""
        ...


class TotpProvider:
    def __init__(self, digits: int = 6, interval: int = 30):
        self._digits = digits
        self._interval = interval

    def generate(self, secret: str, for_time: Optional[float] = None) -> str:
        if not secret:
            raise ConfigurationError("OTP secret is empty")
        totp = pyotp.TOTP(secret, digits=self._digits, interval=self._interval)
        try:
            if for_time is None:
                return totp.now()
            return totp.at(int(for_time))
        except (binascii.Error, ValueError) as e:
            raise ConfigurationError(f"could not generate OTP code: {e}") from e
