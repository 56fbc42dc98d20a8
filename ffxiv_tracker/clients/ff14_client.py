"""
Rate-limited client for the FF14 game data API.

Every outbound call first takes a token from the client's own limiter;
a denied token fails the call immediately with RateLimitExceededError,
before any network traffic. Responses are checked against the game
data models and returned as model instances.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional, TypeVar, Union
from urllib.parse import urlencode

from pydantic import ValidationError

from ffxiv_tracker.clients.http_client import HttpClient
from ffxiv_tracker.config.api import get_api_settings
from ffxiv_tracker.config.settings import Settings, get_settings
from ffxiv_tracker.errors import FF14ApiClientError, HttpClientError, RateLimitExceededError
from ffxiv_tracker.gamedata.models import (
    Achievement,
    AchievementSearchParams,
    GameDataModel,
    Item,
    ItemSearchParams,
    Job,
    Quest,
    QuestSearchParams,
    SearchParams,
)
from ffxiv_tracker.ratelimit.bucket import RateLimitConfig
from ffxiv_tracker.ratelimit.limiter import Clock, RateLimiter

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=GameDataModel)


def build_query_string(params: dict[str, Any]) -> str:
    """
    Encode query parameters, skipping empty values.

    Lists repeat the key (``a=1&a=2``) and booleans are lower-cased.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None or value == "":
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        for v in values:
            pairs.append((key, str(v).lower() if isinstance(v, bool) else str(v)))
    return urlencode(pairs)


class FF14ApiClient:
    """Client for jobs, items, achievements and quests from XIVAPI."""

    # All traffic from one client shares a single quota
    RATE_LIMIT_KEY = "ff14-api-client"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_ms: Optional[float] = None,
        retry_attempts: Optional[int] = None,
        retry_delay_ms: Optional[float] = None,
        rate_limit: Optional[RateLimitConfig] = None,
        http_client: Optional[HttpClient] = None,
        settings: Optional[Settings] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        s = settings or get_settings()
        self._api = get_api_settings(s.api, base_url=base_url, timeout_ms=timeout_ms)
        self._http = http_client or HttpClient(
            timeout_ms=self._api.timeout_ms,
            max_retries=retry_attempts,
            retry_delay_ms=retry_delay_ms,
            settings=s.http,
        )

        if rate_limit is None:
            rl = s.client_rate_limit
            rate_limit = RateLimitConfig(
                max_tokens=rl.max_tokens,
                refill_rate=rl.refill_rate,
                refill_interval_ms=rl.refill_interval_ms,
            )
        self._rate_limiter = RateLimiter(rate_limit, clock=clock)

    @property
    def base_url(self) -> str:
        return self._api.base_url

    @property
    def rate_limiter(self) -> RateLimiter:
        return self._rate_limiter

    # ----- Jobs -----

    def get_jobs(self) -> list[Job]:
        return self._fetch_many(Job, "jobs")

    def get_job(self, job_id: int) -> Job:
        return self._fetch_one(Job, "jobs", job_id)

    # ----- Items -----

    def search_items(self, params: Optional[ItemSearchParams] = None) -> list[Item]:
        return self._fetch_many(Item, "items", params)

    def get_item(self, item_id: int) -> Item:
        return self._fetch_one(Item, "items", item_id)

    # ----- Achievements -----

    def search_achievements(
        self, params: Optional[AchievementSearchParams] = None
    ) -> list[Achievement]:
        return self._fetch_many(Achievement, "achievements", params)

    def get_achievement(self, achievement_id: int) -> Achievement:
        return self._fetch_one(Achievement, "achievements", achievement_id)

    # ----- Quests -----

    def search_quests(self, params: Optional[QuestSearchParams] = None) -> list[Quest]:
        return self._fetch_many(Quest, "quests", params)

    def get_quest(self, quest_id: int) -> Quest:
        return self._fetch_one(Quest, "quests", quest_id)

    # ----- Status -----

    def health_check(self) -> dict[str, str]:
        """
        Probe the API's /health endpoint.

        Never raises: rate limiting and transport failures report "error".
        """
        now = datetime.now(timezone.utc).isoformat()

        if not self._rate_limiter.try_consume(self.RATE_LIMIT_KEY).allowed:
            logger.warning("Health check skipped: rate limit exceeded")
            return {"status": "error", "timestamp": now}

        try:
            response = self._http.get(f"{self._api.base_url}/health")
        except HttpClientError as exc:
            logger.warning("Health check failed: %s", exc)
            return {"status": "error", "timestamp": now}

        if not isinstance(response, dict):
            return {"status": "error", "timestamp": now}

        return {
            "status": "ok" if response.get("status") == "ok" else "error",
            "timestamp": response.get("timestamp") or now,
        }

    def get_rate_limit_status(self) -> dict[str, Optional[float]]:
        """Remaining quota and full-reset time, without consuming a token."""
        result = self._rate_limiter.get_status(self.RATE_LIMIT_KEY)
        return {"remaining": result.tokens_remaining, "reset_time": result.reset_time}

    def close(self) -> None:
        """Stop the limiter's sweeper and release the HTTP session."""
        self._rate_limiter.destroy()
        self._http.close()

    def __enter__(self) -> "FF14ApiClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Request plumbing
    # ------------------------------------------------------------------

    def _fetch_many(
        self,
        model: type[ModelT],
        endpoint: str,
        params: Optional[SearchParams] = None,
    ) -> list[ModelT]:
        query = build_query_string(params.to_query()) if params is not None else ""
        label = f"{endpoint}?{query}" if query else endpoint

        try:
            data = self._get(endpoint, label, query=query)
        except FF14ApiClientError as exc:
            # Listing endpoints treat "nothing here" as an empty result
            if exc.status_code == 404:
                return []
            raise

        if not isinstance(data, list):
            raise FF14ApiClientError(
                f"Invalid data structure received from {label}", 200, label
            )
        return [self._parse(model, item, label) for item in data]

    def _fetch_one(self, model: type[ModelT], endpoint: str, resource_id: int) -> ModelT:
        label = f"{endpoint}/{resource_id}"
        data = self._get(endpoint, label, resource_id=resource_id)
        return self._parse(model, data, label)

    def _get(
        self,
        endpoint: str,
        label: str,
        resource_id: Optional[Union[int, str]] = None,
        query: str = "",
    ) -> Any:
        result = self._rate_limiter.try_consume(self.RATE_LIMIT_KEY)
        if not result.allowed:
            logger.warning(
                "Rate limit exceeded for %s (retry_after=%s ms)", label, result.retry_after
            )
            raise RateLimitExceededError(
                endpoint=label,
                retry_after=result.retry_after,
                reset_time=result.reset_time,
            )

        url = self._resource_url(endpoint, resource_id)
        if query:
            url = f"{url}?{query}"

        try:
            return self._http.get(url)
        except HttpClientError as exc:
            if exc.status is None:
                raise FF14ApiClientError(
                    f"Network error when accessing {label}: {exc}",
                    endpoint=label,
                    original_error=exc,
                ) from exc
            raise FF14ApiClientError(
                f"API request failed: {exc}",
                status_code=exc.status,
                endpoint=label,
                original_error=exc,
            ) from exc

    def _resource_url(self, endpoint: str, resource_id: Optional[Union[int, str]] = None) -> str:
        """``<base_url>/<endpoint>`` with an optional ``/<id>`` suffix."""
        base = self._api.base_url.rstrip("/")
        url = f"{base}/{endpoint}"
        if resource_id is not None and resource_id != "":
            url = f"{url}/{resource_id}"
        return url

    @staticmethod
    def _parse(model: type[ModelT], data: Any, label: str) -> ModelT:
        if not isinstance(data, dict):
            raise FF14ApiClientError(f"Invalid data structure received from {label}", 200, label)
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise FF14ApiClientError(
                f"Invalid data structure received from {label}",
                200,
                label,
                original_error=exc,
            ) from exc


def create_ff14_api_client(**kwargs: Any) -> FF14ApiClient:
    """Factory mirroring the FF14ApiClient constructor."""
    return FF14ApiClient(**kwargs)
