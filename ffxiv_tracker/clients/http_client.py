"""HTTP client with timeout and fixed-delay retry for JSON APIs."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

import requests

from ffxiv_tracker.config.settings import HttpSettings, get_settings
from ffxiv_tracker.errors import HttpClientError

logger = logging.getLogger(__name__)


class HttpClient:
    """
    Thin wrapper over ``requests.Session`` used by the API clients.

    Network errors and 5xx responses are retried up to ``max_retries``
    extra times with a fixed pause; 4xx responses fail immediately.
    """

    _DEFAULT_HEADERS = {
        "Accept": "application/json",
        "Content-Type": "application/json",
    }

    def __init__(
        self,
        timeout_ms: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_delay_ms: Optional[float] = None,
        base_url: str = "",
        settings: Optional[HttpSettings] = None,
        session: Optional[requests.Session] = None,
        sleep_func: Callable[[float], None] = time.sleep,
    ) -> None:
        self._settings = settings or get_settings().http
        self._timeout_ms = timeout_ms if timeout_ms is not None else self._settings.timeout_ms
        self._max_retries = max_retries if max_retries is not None else self._settings.max_retries
        self._retry_delay_ms = (
            retry_delay_ms if retry_delay_ms is not None else self._settings.retry_delay_ms
        )
        self._base_url = base_url
        self._sleep = sleep_func
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": self._settings.user_agent})

    @property
    def timeout_ms(self) -> float:
        return self._timeout_ms

    @property
    def max_retries(self) -> int:
        return self._max_retries

    @property
    def retry_delay_ms(self) -> float:
        return self._retry_delay_ms

    def get(self, url: str) -> Any:
        """GET ``url`` and return the parsed JSON body (or text for non-JSON responses)."""
        return self._request("GET", url)

    def close(self) -> None:
        self._session.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _request(self, method: str, url: str) -> Any:
        full_url = self._build_url(url)

        for attempt in range(self._max_retries + 1):
            try:
                response = self._send(method, full_url)
            except HttpClientError as exc:
                if exc.status is not None and 400 <= exc.status < 500:
                    raise
                if attempt >= self._max_retries:
                    raise
                logger.warning(
                    "%s %s failed (%s), retry %d/%d",
                    method, full_url, exc, attempt + 1, self._max_retries,
                )
                self._sleep(self._retry_delay_ms / 1000.0)
                continue

            return self._parse_response(response)

        # range() always runs at least once, so this is only hit with max_retries < 0
        raise HttpClientError("Request failed after all retries")

    def _build_url(self, url: str) -> str:
        if url.startswith(("http://", "https://")):
            return url
        if self._base_url:
            return self._base_url + url
        return url

    def _send(self, method: str, url: str) -> requests.Response:
        try:
            response = self._session.request(
                method,
                url,
                headers=self._DEFAULT_HEADERS,
                timeout=self._timeout_ms / 1000.0,
            )
        except requests.Timeout as exc:
            raise HttpClientError("Request timeout") from exc
        except requests.RequestException as exc:
            raise HttpClientError(f"Network error: {exc}") from exc

        if not response.ok:
            raise HttpClientError(
                f"HTTP {response.status_code}: {response.reason}",
                status=response.status_code,
                status_text=response.reason,
                response_body=self._safe_body(response),
            )
        return response

    @staticmethod
    def _parse_response(response: requests.Response) -> Any:
        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            try:
                return response.json()
            except ValueError:
                # Malformed JSON: hand back the raw text
                return response.text or ""
        return response.text or ""

    @staticmethod
    def _safe_body(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text
