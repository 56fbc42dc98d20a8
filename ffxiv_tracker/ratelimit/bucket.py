"""Token bucket state and the refill arithmetic shared by every bucket."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RateLimitConfig:
    """
    Limiter configuration. All durations are milliseconds.

    Attributes:
        max_tokens: Bucket capacity.
        refill_rate: Tokens added per elapsed refill interval. Zero means
            the quota never replenishes (one-shot or manually reset).
        refill_interval_ms: Time between refill steps.
        cleanup_interval_ms: Period of the idle-eviction sweep.
        bucket_ttl_ms: Idle time after which a bucket is evicted.
    """

    max_tokens: float
    refill_rate: float
    refill_interval_ms: float
    cleanup_interval_ms: float = 5 * 60 * 1000
    bucket_ttl_ms: float = 10 * 60 * 1000

    @property
    def ms_per_token(self) -> Optional[float]:
        """Milliseconds to earn one token, or None when refill is disabled."""
        if self.refill_rate == 0:
            return None
        return self.refill_interval_ms / self.refill_rate


@dataclass
class TokenBucket:
    """A single token bucket for one key."""

    tokens: float
    last_refill: float
    last_accessed: float

    def refill(self, now: float, config: RateLimitConfig) -> None:
        """Credit whole elapsed intervals since ``last_refill``, capped at capacity."""
        if config.refill_rate == 0:
            return

        # Clock moved backwards: resync without crediting or penalizing
        if now < self.last_refill:
            self.last_refill = now
            return

        intervals = math.floor((now - self.last_refill) / config.refill_interval_ms)
        if intervals > 0:
            self.tokens = min(config.max_tokens, self.tokens + intervals * config.refill_rate)
            # Keep the partial interval so progress toward the next tick survives
            self.last_refill += intervals * config.refill_interval_ms

    def has_token(self) -> bool:
        return self.tokens >= 1

    def time_until_full(self, config: RateLimitConfig) -> Optional[float]:
        """Milliseconds until the bucket is at capacity; None if it never will be."""
        if self.tokens >= config.max_tokens:
            return 0.0
        per_token = config.ms_per_token
        if per_token is None:
            return None
        return (config.max_tokens - self.tokens) * per_token
