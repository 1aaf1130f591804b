"""
Nobitex error types and the error-body normalizer.

Every failure surfaces as a subclass of NobitexError; callers branch on the
type, never on the message text.
"""

import json
from typing import Any, Optional

from nobitex.models.error import ErrorResponse

DOCUMENTED_FIELDS = ("status", "code", "message", "detail")


class NobitexError(Exception):
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details
        self.cause = cause


class ConfigurationError(NobitexError):
    """Local misconfiguration, raised before any network call."""

    def __init__(self, message: str, code: str = "configuration_error"):
        super().__init__(code, message)


class AuthenticationError(NobitexError):
    def __init__(self, message: str, code: str = "auth_error", cause: Optional[BaseException] = None):
        super().__init__(code, message, cause=cause)


class CredentialsError(ConfigurationError, AuthenticationError):
    """Username and/or password missing."""

    def __init__(self, message: str = "username and/or password are empty"):
        NobitexError.__init__(self, "credentials_error", message)


class TransportError(NobitexError):
    """Request could not be built, sent, or its body read."""

    def __init__(self, operation: str, cause: BaseException):
        super().__init__("transport_error", f"{operation}: {cause}", {"operation": operation}, cause)
        self.operation = operation


class DecodingError(NobitexError):
    def __init__(self, message: str, cause: BaseException):
        super().__init__("decoding_error", message, cause=cause)


class APIError(NobitexError):
    """Normalized non-2xx response from the exchange."""

    def __init__(
        self,
        status_code: int,
        message: str,
        status: str = "",
        code: str = "",
        detail: str = "",
        fields: Optional[dict[str, list[str]]] = None,
    ):
        super().__init__(code or "api_error", message, {"status_code": status_code})
        self.status_code = status_code
        self.status = status
        # the exchange's own code, may be empty
        self.api_code = code
        self.detail = detail
        self.fields: dict[str, list[str]] = fields if fields is not None else {}

    def __repr__(self) -> str:
        return f"APIError(status_code={self.status_code}, code={self.api_code!r}, message={self.message!r})"


def _to_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _stringify(value: Any) -> list[str]:
    if isinstance(value, list):
        return [_to_text(v) for v in value]
    return [_to_text(value)]


def parse_error_response(status_code: int, body: bytes) -> APIError:
    """Build an APIError from any error body. Never raises.

    Only string values of the documented keys are taken as status/code/
    message/detail; every top-level key, documented or not, also lands in
    `fields` as a list of strings. Non-string scalars and objects use their
    compact JSON text (``5`` -> ``"5"``, ``{"a": 1}`` -> ``'{"a":1}'``).
    """
    try:
        raw = json.loads(body)
    except (ValueError, TypeError, RecursionError):
        raw = None
    if not isinstance(raw, dict):
        raw = {}

    parsed = ErrorResponse.model_validate(
        {k: raw[k] for k in DOCUMENTED_FIELDS if isinstance(raw.get(k), str)}
    )
    fields = {str(k): _stringify(v) for k, v in raw.items()}

    message = parsed.message
    if not message and parsed.detail:
        message = parsed.detail
    if not message:
        message = f"API error ({status_code})"

    return APIError(
        status_code=status_code,
        message=message,
        status=parsed.status,
        code=parsed.code,
        detail=parsed.detail,
        fields=fields,
    )
