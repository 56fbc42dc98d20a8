"""Tests for the preset limiter factories."""

import pytest

from ffxiv_tracker.ratelimit import presets
from tests.conftest import make_config


@pytest.mark.parametrize(
    "factory, max_tokens, refill_rate, interval",
    [
        (presets.for_api, 100, 100, 60_000),
        (presets.for_scraping, 10, 10, 60_000),
        (presets.for_burst, 50, 1, 1000),
    ],
)
def test_preset_configs(factory, max_tokens, refill_rate, interval, clock):
    limiter = factory(clock=clock)
    try:
        assert limiter.config.max_tokens == max_tokens
        assert limiter.config.refill_rate == refill_rate
        assert limiter.config.refill_interval_ms == interval
        assert limiter.try_consume("k").tokens_remaining == max_tokens - 1
    finally:
        limiter.destroy()


def test_custom_uses_given_config(clock):
    config = make_config(max_tokens=2, refill_rate=0)
    limiter = presets.custom(config, clock=clock)
    try:
        assert limiter.config is config
    finally:
        limiter.destroy()
