"""Tests for the sliding-window rate limiter."""

import pytest

from small_tales.utils.rate_limiter import RateLimiter


class FakeClock:
    """Manually advanced clock whose sleep advances time."""

    def __init__(self):
        self.now = 100.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


def test_calls_under_limit_do_not_wait(clock):
    """Test calls within the limit proceed immediately."""
    limiter = RateLimiter(max_calls=3, time_window=1.0, clock=clock, sleep=clock.sleep)

    for _ in range(3):
        assert limiter.wait_if_needed() == 0.0

    assert clock.sleeps == []
    assert limiter.can_proceed() is False


def test_call_over_limit_waits_for_window(clock):
    """Test the call beyond the limit waits until the oldest call expires."""
    limiter = RateLimiter(max_calls=2, time_window=1.0, clock=clock, sleep=clock.sleep)

    limiter.wait_if_needed()
    clock.now += 0.25
    limiter.wait_if_needed()
    waited = limiter.wait_if_needed()

    assert waited == pytest.approx(0.75)
    assert clock.sleeps == [pytest.approx(0.75)]


def test_window_expiry_frees_budget(clock):
    """Test old calls fall out of the window."""
    limiter = RateLimiter(max_calls=1, time_window=1.0, clock=clock, sleep=clock.sleep)

    limiter.wait_if_needed()
    assert limiter.can_proceed() is False
    clock.now += 1.0
    assert limiter.can_proceed() is True


def test_endpoints_are_independent(clock):
    """Test each endpoint has its own budget."""
    limiter = RateLimiter(max_calls=1, time_window=1.0, clock=clock, sleep=clock.sleep)

    limiter.wait_if_needed("a")
    assert limiter.can_proceed("a") is False
    assert limiter.can_proceed("b") is True


def test_reset(clock):
    """Test reset clears one or all endpoints."""
    limiter = RateLimiter(max_calls=1, time_window=1.0, clock=clock, sleep=clock.sleep)
    limiter.wait_if_needed("a")
    limiter.wait_if_needed("b")

    limiter.reset("a")
    assert limiter.can_proceed("a") is True
    assert limiter.can_proceed("b") is False

    limiter.reset()
    assert limiter.can_proceed("b") is True


def test_invalid_max_calls():
    """Test a zero budget is rejected."""
    with pytest.raises(ValueError):
        RateLimiter(max_calls=0)
