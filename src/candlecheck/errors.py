"""Candle check error types."""

from __future__ import annotations

from enum import Enum


class CandleCheckErrorCode(Enum):
    """Error classification codes."""

    INVALID_INTERVAL = "invalid_interval"
    INVALID_REQUEST = "invalid_request"
    RATE_LIMITED = "rate_limited"
    TIMEOUT = "timeout"
    PROVIDER_ERROR = "provider_error"
    INCONSISTENT_RESPONSE = "inconsistent_response"


class CandleCheckError(Exception):
    """Candle check exception with error code and retryable flag.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
        retryable: Whether the caller may retry the same request later.
    """

    def __init__(
        self,
        message: str,
        code: CandleCheckErrorCode = CandleCheckErrorCode.PROVIDER_ERROR,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.retryable = retryable


class InvalidIntervalError(CandleCheckError, ValueError):
    """Interval code is missing or not one of the supported codes."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=CandleCheckErrorCode.INVALID_INTERVAL)


class FetchError(CandleCheckError):
    """Exchange request failed (network, HTTP status or payload decoding)."""
