"""Tests for the moving-window rate limiter."""

import time

from otp_service.core.rate_limiter import SlidingWindowRateLimiter


def test_allows_up_to_limit_then_blocks():
    limiter = SlidingWindowRateLimiter(max_requests=5, window_seconds=900)

    results = [limiter.check("10.0.0.1") for _ in range(5)]
    assert all(r.allowed for r in results)
    assert [r.remaining for r in results] == [4, 3, 2, 1, 0]

    blocked = limiter.check("10.0.0.1")
    assert not blocked.allowed
    assert blocked.remaining == 0
    assert blocked.limit == 5
    assert 895 <= blocked.retry_after <= 900


def test_keys_are_independent():
    limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=900)
    assert limiter.check("10.0.0.1").allowed
    assert not limiter.check("10.0.0.1").allowed
    assert limiter.check("10.0.0.2").allowed


def test_window_slides():
    limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=1)
    assert limiter.check("ip").allowed
    assert not limiter.check("ip").allowed

    time.sleep(1.1)
    assert limiter.check("ip").allowed
    assert not limiter.check("ip").allowed


def test_rejections_are_not_counted():
    limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=1)
    limiter.check("ip")
    for _ in range(5):
        assert not limiter.check("ip").allowed
    time.sleep(1.1)
    assert limiter.check("ip").allowed


def test_reset():
    limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=900)
    limiter.check("a")
    limiter.check("b")

    limiter.reset("a")
    assert limiter.check("a").allowed
    assert not limiter.check("b").allowed
