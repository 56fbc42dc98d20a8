"""Per-key token bucket rate limiting."""

from ffxiv_tracker.ratelimit.bucket import RateLimitConfig, TokenBucket
from ffxiv_tracker.ratelimit.limiter import RateLimiter, RateLimitResult, wall_clock_ms
from ffxiv_tracker.ratelimit.sweeper import BucketSweeper

__all__ = [
    "RateLimitConfig",
    "TokenBucket",
    "RateLimiter",
    "RateLimitResult",
    "BucketSweeper",
    "wall_clock_ms",
]
