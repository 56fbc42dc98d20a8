"""
Central configuration for the FFXIV tracker.

All tunables live here. API settings can be overridden from the
environment (FF14_API_* variables); everything else is programmatic.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from ffxiv_tracker.errors import ConfigurationError


def _project_root() -> Path:
    """Walk up from this file to find the project root (where pyproject.toml lives)."""
    current = Path(__file__).resolve().parent
    while current != current.parent:
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent
    # Fallback: two levels up from config/settings.py
    return Path(__file__).resolve().parent.parent.parent


# XIVAPI resource paths, keyed by the logical name used in code
DEFAULT_ENDPOINTS: dict[str, str] = {
    "character": "/character",
    "free_company": "/freecompany",
    "linkshell": "/linkshell",
    "pvp_team": "/pvpteam",
    "search": "/search",
    "servers": "/servers",
    "jobs": "/classjob",
    "items": "/item",
    "achievements": "/achievement",
    "quests": "/quest",
    "actions": "/action",
    "mounts": "/mount",
    "minions": "/companion",
    "emotes": "/emote",
}


@dataclass(frozen=True)
class ApiRateLimitSettings:
    """Upstream limits advertised by XIVAPI."""

    requests_per_second: float = 20

    burst_limit: int = 100


@dataclass(frozen=True)
class ApiSettings:
    """Settings for the third-party game data API."""

    base_url: str = "https://xivapi.com"

    # Request timeout (milliseconds)
    timeout_ms: float = 10_000

    rate_limit: ApiRateLimitSettings = field(default_factory=ApiRateLimitSettings)

    endpoints: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ENDPOINTS))


@dataclass(frozen=True)
class HttpSettings:
    """Settings for the HTTP retry wrapper."""

    # Extra attempts after the first one fails
    max_retries: int = 3

    # Fixed pause between attempts (milliseconds)
    retry_delay_ms: float = 1000

    # Request timeout (milliseconds) when the caller does not supply one
    timeout_ms: float = 5000

    user_agent: str = "FFXIVTracker/0.1"


@dataclass(frozen=True)
class ClientRateLimitSettings:
    """Token bucket the API client applies to its own outbound calls."""

    max_tokens: int = 100

    # Tokens added per refill interval
    refill_rate: float = 100

    # 100 requests per minute
    refill_interval_ms: float = 60_000


@dataclass(frozen=True)
class StorageSettings:
    """Settings for SQLite storage."""

    db_name: str = "ffxiv_tracker.db"

    journal_mode: str = "WAL"

    # How long to wait for a locked DB (milliseconds)
    busy_timeout_ms: int = 5000


def _env_float(name: str, default: float, error: str) -> float:
    """Read a numeric environment variable; ``error`` is raised for junk values."""
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(error) from None
    if not math.isfinite(value):
        raise ConfigurationError(error)
    return value


def load_api_settings() -> ApiSettings:
    """Build ApiSettings from defaults plus FF14_API_* environment variables."""
    defaults = ApiSettings()
    return ApiSettings(
        base_url=os.environ.get("FF14_API_BASE_URL") or defaults.base_url,
        timeout_ms=_env_float(
            "FF14_API_TIMEOUT", defaults.timeout_ms, "timeout must be a positive number"
        ),
        rate_limit=ApiRateLimitSettings(
            requests_per_second=_env_float(
                "FF14_API_RATE_LIMIT_RPS",
                defaults.rate_limit.requests_per_second,
                "requests_per_second must be a positive number",
            ),
            burst_limit=int(
                _env_float(
                    "FF14_API_RATE_LIMIT_BURST",
                    defaults.rate_limit.burst_limit,
                    "burst_limit must be a positive number",
                )
            ),
        ),
    )


@dataclass
class Settings:
    """
    Top-level settings container. Aggregates all subsystem settings.

    Usage:
        settings = get_settings()
        print(settings.api.base_url)
        print(settings.client_rate_limit.max_tokens)
    """

    project_root: Path = field(default_factory=_project_root)
    api: ApiSettings = field(default_factory=load_api_settings)
    http: HttpSettings = field(default_factory=HttpSettings)
    client_rate_limit: ClientRateLimitSettings = field(default_factory=ClientRateLimitSettings)
    storage: StorageSettings = field(default_factory=StorageSettings)

    @property
    def data_dir(self) -> Path:
        """Root directory for all runtime data (DB, logs)."""
        return self.project_root / "data"

    @property
    def db_path(self) -> Path:
        """Full path to the SQLite database file."""
        return self.data_dir / "db" / self.storage.db_name

    @property
    def logs_dir(self) -> Path:
        return self.data_dir / "logs"

    def ensure_dirs(self) -> None:
        """Create all required data directories if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Returns the singleton Settings instance.

    Call this instead of constructing Settings() directly so the entire
    application shares one config object.
    """
    settings = Settings()
    settings.ensure_dirs()
    return settings
