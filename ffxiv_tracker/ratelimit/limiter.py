"""
Per-key token bucket rate limiter with lazy refill and idle eviction.

Each key gets its own bucket, created full on first use. Tokens are
credited in whole refill intervals whenever a bucket is touched; there
is no timer per bucket. A background sweeper evicts buckets that have
not been touched for ``bucket_ttl_ms`` so memory stays bounded by the
set of recently active keys. Bursts of unique keys between sweeps can
grow the store temporarily.

All bucket access happens under one lock, so concurrent callers sharing
a key can neither over-consume nor double-credit a refill.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ffxiv_tracker.errors import ConfigurationError
from ffxiv_tracker.ratelimit.bucket import RateLimitConfig, TokenBucket
from ffxiv_tracker.ratelimit.sweeper import BucketSweeper

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def wall_clock_ms() -> float:
    """Current wall-clock time in epoch milliseconds."""
    return time.time() * 1000.0


@dataclass(frozen=True)
class RateLimitResult:
    """
    Outcome of a consume or status call.

    Attributes:
        allowed: Whether a token was (or would be) granted.
        tokens_remaining: Tokens left in the bucket after the call.
        reset_time: Epoch ms at which the bucket is full again, or None
            when it never refills.
        retry_after: Milliseconds until one token is available. Only set
            on a denied consume, and None when the quota never refills.
    """

    allowed: bool
    tokens_remaining: float
    reset_time: Optional[float]
    retry_after: Optional[float] = None


class RateLimiter:
    """
    Token bucket rate limiter keyed by arbitrary strings.

    Typical usage::

        limiter = RateLimiter(RateLimitConfig(max_tokens=10, refill_rate=1,
                                              refill_interval_ms=1000))
        result = limiter.try_consume("client-a")
        if not result.allowed:
            ...  # back off for result.retry_after ms
        limiter.destroy()
    """

    def __init__(
        self,
        config: RateLimitConfig,
        clock: Optional[Clock] = None,
        start_sweeper: bool = True,
    ) -> None:
        self._validate_config(config)
        self._config = config
        self._clock = clock or wall_clock_ms
        self._buckets: dict[str, TokenBucket] = {}
        self._lock = threading.Lock()
        self._sweeper: Optional[BucketSweeper] = None

        if start_sweeper:
            self._sweeper = BucketSweeper(self.cleanup, config.cleanup_interval_ms)
            self._sweeper.start()

    @staticmethod
    def _validate_config(config: RateLimitConfig) -> None:
        for name in (
            "max_tokens",
            "refill_rate",
            "refill_interval_ms",
            "cleanup_interval_ms",
            "bucket_ttl_ms",
        ):
            if not math.isfinite(getattr(config, name)):
                raise ConfigurationError(f"{name} must be a finite number")
        if config.max_tokens <= 0:
            raise ConfigurationError("max_tokens must be greater than 0")
        if config.refill_rate < 0:
            raise ConfigurationError("refill_rate must be non-negative")
        if config.refill_interval_ms <= 0:
            raise ConfigurationError("refill_interval_ms must be greater than 0")
        if config.cleanup_interval_ms <= 0:
            raise ConfigurationError("cleanup_interval_ms must be greater than 0")
        if config.bucket_ttl_ms <= 0:
            raise ConfigurationError("bucket_ttl_ms must be greater than 0")

    @property
    def config(self) -> RateLimitConfig:
        return self._config

    # ----- Bucket operations -----

    def try_consume(self, key: str) -> RateLimitResult:
        """Refill the bucket for ``key`` and take one token if available."""
        with self._lock:
            now = self._clock()
            bucket = self._touch(key, now)

            if bucket.has_token():
                bucket.tokens -= 1
                return RateLimitResult(
                    allowed=True,
                    tokens_remaining=bucket.tokens,
                    reset_time=self._reset_time(bucket, now),
                )

            return RateLimitResult(
                allowed=False,
                tokens_remaining=0,
                reset_time=self._reset_time(bucket, now),
                retry_after=self._config.ms_per_token,
            )

    def get_status(self, key: str) -> RateLimitResult:
        """Refill and report the bucket for ``key`` without consuming a token."""
        with self._lock:
            now = self._clock()
            bucket = self._touch(key, now)
            return RateLimitResult(
                allowed=bucket.has_token(),
                tokens_remaining=bucket.tokens,
                reset_time=self._reset_time(bucket, now),
            )

    def reset(self, key: str) -> None:
        """Forget the bucket for ``key``; the next call starts full."""
        with self._lock:
            self._buckets.pop(key, None)

    def reset_all(self) -> None:
        with self._lock:
            self._buckets.clear()

    @property
    def bucket_count(self) -> int:
        """Number of tracked keys (for monitoring)."""
        with self._lock:
            return len(self._buckets)

    def get_bucket_count(self) -> int:
        return self.bucket_count

    def cleanup(self) -> int:
        """Evict buckets idle for longer than ``bucket_ttl_ms``. Returns count evicted."""
        with self._lock:
            now = self._clock()
            ttl = self._config.bucket_ttl_ms
            stale_keys = [
                k for k, b in self._buckets.items()
                if now - b.last_accessed > ttl
            ]
            for k in stale_keys:
                del self._buckets[k]

        if stale_keys:
            logger.debug("Evicted %d idle rate limit buckets", len(stale_keys))
        return len(stale_keys)

    # ----- Lifecycle -----

    def destroy(self) -> None:
        """Stop the background sweeper and drop all buckets. Safe to call twice."""
        if self._sweeper is not None:
            self._sweeper.stop()
            self._sweeper = None
        self.reset_all()

    def __enter__(self) -> "RateLimiter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.destroy()

    # ----- Internals (caller holds the lock) -----

    def _touch(self, key: str, now: float) -> TokenBucket:
        bucket = self._buckets.get(key)
        if bucket is None:
            bucket = TokenBucket(
                tokens=self._config.max_tokens,
                last_refill=now,
                last_accessed=now,
            )
            self._buckets[key] = bucket

        bucket.last_accessed = now
        bucket.refill(now, self._config)
        return bucket

    def _reset_time(self, bucket: TokenBucket, now: float) -> Optional[float]:
        remaining = bucket.time_until_full(self._config)
        if remaining is None:
            return None
        return now + remaining
