from ffxiv_tracker.config.settings import (
    ApiSettings,
    ClientRateLimitSettings,
    HttpSettings,
    Settings,
    get_settings,
)
from ffxiv_tracker.config.api import get_api_settings, get_endpoint_url, validate_api_settings

__all__ = [
    "ApiSettings",
    "ClientRateLimitSettings",
    "HttpSettings",
    "Settings",
    "get_settings",
    "get_api_settings",
    "get_endpoint_url",
    "validate_api_settings",
]
