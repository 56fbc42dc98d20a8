"""Exception types shared across the tracker packages."""

from __future__ import annotations

from typing import Any, Optional


class TrackerError(Exception):
    """Base class for all errors raised by ffxiv_tracker."""


class ConfigurationError(TrackerError, ValueError):
    """Raised when a limiter or API configuration is invalid."""


class HttpClientError(TrackerError):
    """Transport-level failure from the HTTP retry wrapper."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        status_text: Optional[str] = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.status_text = status_text
        self.response_body = response_body


class FF14ApiClientError(TrackerError):
    """Failure surfaced by the FF14 API client."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.endpoint = endpoint
        self.original_error = original_error


class RateLimitExceededError(FF14ApiClientError):
    """
    The client's rate limiter denied an outbound call.

    ``retry_after`` is milliseconds until one token is available and
    ``reset_time`` the epoch-millisecond time the bucket is full again.
    Either is None when the quota never refills.
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        retry_after: Optional[float] = None,
        reset_time: Optional[float] = None,
    ) -> None:
        super().__init__(
            "Rate limit exceeded. Please try again later.",
            status_code=429,
            endpoint=endpoint,
        )
        self.retry_after = retry_after
        self.reset_time = reset_time
