"""
nobitex — Nobitex exchange SDK for Python.

Async REST client with managed API-key sessions (TOTP login, remember-based
expiry, transparent refresh) and a blocking wrapper.
"""

from nobitex.client import Nobitex, AsyncNobitex
from nobitex.auth import Credentials, RememberMode, Session, SessionManager
from nobitex.errors import (
    NobitexError,
    ConfigurationError,
    AuthenticationError,
    CredentialsError,
    TransportError,
    DecodingError,
    APIError,
)
from nobitex.transport.http import RequestDescriptor

__version__ = "0.1.0"
__all__ = [
    "Nobitex",
    "AsyncNobitex",
    "Credentials",
    "RememberMode",
    "Session",
    "SessionManager",
    "RequestDescriptor",
    "NobitexError",
    "ConfigurationError",
    "AuthenticationError",
    "CredentialsError",
    "TransportError",
    "DecodingError",
    "APIError",
]
