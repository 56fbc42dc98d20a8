"""Ready-made limiter configurations for common traffic shapes."""

from __future__ import annotations

from typing import Optional

from ffxiv_tracker.ratelimit.bucket import RateLimitConfig
from ffxiv_tracker.ratelimit.limiter import Clock, RateLimiter

ONE_MINUTE_MS = 60 * 1000


def for_api(clock: Optional[Clock] = None) -> RateLimiter:
    """100 requests per minute."""
    return RateLimiter(
        RateLimitConfig(max_tokens=100, refill_rate=100, refill_interval_ms=ONE_MINUTE_MS),
        clock=clock,
    )


def for_scraping(clock: Optional[Clock] = None) -> RateLimiter:
    """10 requests per minute."""
    return RateLimiter(
        RateLimitConfig(max_tokens=10, refill_rate=10, refill_interval_ms=ONE_MINUTE_MS),
        clock=clock,
    )


def for_burst(clock: Optional[Clock] = None) -> RateLimiter:
    """Bursts of up to 50, refilling one token per second."""
    return RateLimiter(
        RateLimitConfig(max_tokens=50, refill_rate=1, refill_interval_ms=1000),
        clock=clock,
    )


def custom(config: RateLimitConfig, clock: Optional[Clock] = None) -> RateLimiter:
    return RateLimiter(config, clock=clock)
