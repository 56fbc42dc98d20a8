"""
API configuration helpers: validation, endpoint URL building and
query parameter builders for the common XIVAPI request shapes.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Optional, Union
from urllib.parse import urlencode, urlparse

from ffxiv_tracker.config.settings import ApiSettings, load_api_settings
from ffxiv_tracker.errors import ConfigurationError

QueryValue = Union[str, int, float, bool]


def _is_positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def validate_api_settings(settings: ApiSettings) -> None:
    """
    Check an ApiSettings instance.

    Raises:
        ConfigurationError: naming the first invalid field.
    """
    if not settings.base_url:
        raise ConfigurationError("base_url is required")

    parsed = urlparse(settings.base_url)
    if not parsed.scheme or not parsed.netloc:
        raise ConfigurationError("base_url must be a valid URL")

    if settings.timeout_ms is not None and not _is_positive_number(settings.timeout_ms):
        raise ConfigurationError("timeout must be a positive number")

    if not settings.endpoints:
        raise ConfigurationError("endpoints configuration is required")

    if not isinstance(settings.endpoints, dict):
        raise ConfigurationError("endpoints must be a mapping")

    rate_limit = settings.rate_limit
    if rate_limit is not None:
        if not _is_positive_number(rate_limit.requests_per_second):
            raise ConfigurationError("requests_per_second must be a positive number")
        if not _is_positive_number(rate_limit.burst_limit):
            raise ConfigurationError("burst_limit must be a positive number")


def get_api_settings(base: Optional[ApiSettings] = None, **overrides: Any) -> ApiSettings:
    """
    ApiSettings with ``overrides`` applied on top of ``base`` (or the
    environment-derived defaults), validated.

    Overrides whose value is None are ignored so callers can pass
    optional arguments straight through.
    """
    base = base or load_api_settings()
    changes = {k: v for k, v in overrides.items() if v is not None}
    settings = dataclasses.replace(base, **changes) if changes else base
    validate_api_settings(settings)
    return settings


def get_endpoint_url(
    settings: ApiSettings,
    endpoint: str,
    resource_id: Optional[Union[str, int]] = None,
    query_params: Optional[dict[str, QueryValue]] = None,
) -> str:
    """
    Build a full URL for a named endpoint.

    Example:
        get_endpoint_url(s, "character", "12345", {"extended": 1})
        -> "https://xivapi.com/character/12345?extended=1"
    """
    path = settings.endpoints.get(endpoint)
    if not path:
        raise ConfigurationError(f"Unknown endpoint: {endpoint}")

    url = settings.base_url + path
    if resource_id is not None and resource_id != "":
        url += f"/{resource_id}"

    if query_params:
        url += "?" + urlencode({k: str(v) for k, v in query_params.items()})

    return url


# ---------------------------------------------------------------------------
# Query builders
# ---------------------------------------------------------------------------


def character_query(data: Optional[list[str]] = None, extended: bool = False) -> dict[str, str]:
    """Query parameters for a character lookup."""
    params: dict[str, str] = {}
    if data:
        params["data"] = ",".join(data)
    if extended:
        params["extended"] = "1"
    return params


def search_query(
    indexes: Optional[list[str]] = None,
    columns: Optional[list[str]] = None,
    limit: Optional[int] = None,
    page: Optional[int] = None,
    sort_field: Optional[str] = None,
    sort_order: Optional[str] = None,
) -> dict[str, str]:
    """Query parameters for the /search endpoint."""
    if sort_order is not None and sort_order not in ("asc", "desc"):
        raise ConfigurationError("sort_order must be 'asc' or 'desc'")

    params: dict[str, str] = {}
    if indexes:
        params["indexes"] = ",".join(indexes)
    if columns:
        params["columns"] = ",".join(columns)
    if limit:
        params["limit"] = str(limit)
    if page:
        params["page"] = str(page)
    if sort_field:
        params["sort_field"] = sort_field
    if sort_order:
        params["sort_order"] = sort_order
    return params


def item_query(
    columns: Optional[list[str]] = None,
    limit: Optional[int] = None,
    ids: Optional[list[int]] = None,
) -> dict[str, str]:
    """Query parameters for item listing requests."""
    params: dict[str, str] = {}
    if columns:
        params["columns"] = ",".join(columns)
    if limit:
        params["limit"] = str(limit)
    if ids:
        params["ids"] = ",".join(str(i) for i in ids)
    return params
