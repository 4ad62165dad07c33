"""Unit tests for the fixed-window rate limiter.

A fake clock drives window expiry so no test sleeps.
"""

import asyncio

import pytest

from app.services.rate_limiter import (
    FixedWindowRateLimiter,
    InMemoryRateLimitStore,
    get_rate_limiter,
    run_periodic_cleanup,
)


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return FixedWindowRateLimiter(max_requests=3, window_seconds=60, clock=clock, name="test")


# ---------------------------------------------------------------------------
# hit()
# ---------------------------------------------------------------------------

class TestHit:
    def test_allows_up_to_max(self, limiter):
        decisions = [limiter.hit("1.2.3.4") for _ in range(3)]
        assert all(d.allowed for d in decisions)
        assert [d.count for d in decisions] == [1, 2, 3]
        assert decisions[-1].remaining == 0

    def test_rejects_after_max(self, limiter, clock):
        for _ in range(3):
            limiter.hit("1.2.3.4")
        clock.advance(15)

        decision = limiter.hit("1.2.3.4")

        assert not decision.allowed
        assert decision.retry_after == 45
        assert 0 < decision.retry_after <= 60

    def test_retry_after_at_least_one_second(self, limiter, clock):
        for _ in range(3):
            limiter.hit("k")
        clock.advance(59.9)

        assert limiter.hit("k").retry_after == 1

    def test_window_reset(self, limiter, clock):
        for _ in range(4):
            limiter.hit("k")
        clock.advance(60.01)

        decision = limiter.hit("k")
        assert decision.allowed
        assert decision.count == 1

    def test_keys_are_independent(self, limiter):
        for _ in range(3):
            limiter.hit("a")
        assert not limiter.hit("a").allowed
        assert limiter.hit("b").allowed

    def test_hundred_and_first_request_rejected(self, clock):
        limiter = FixedWindowRateLimiter(max_requests=100, window_seconds=60, clock=clock)
        for _ in range(100):
            assert limiter.hit("client").allowed
        decision = limiter.hit("client")
        assert not decision.allowed
        assert decision.retry_after > 0

    def test_stats(self, limiter):
        for _ in range(5):
            limiter.hit("k")
        assert limiter.stats.allowed == 3
        assert limiter.stats.rejected == 2
        assert limiter.stats.rejection_rate == pytest.approx(0.4)


# ---------------------------------------------------------------------------
# store / cleanup
# ---------------------------------------------------------------------------

class TestCleanup:
    def test_purges_only_expired(self, limiter, clock):
        limiter.hit("old")
        clock.advance(30)
        limiter.hit("new")
        clock.advance(31)

        assert limiter.cleanup_expired() == 1
        assert limiter.store.get("old") is None
        assert limiter.store.get("new") is not None

    def test_reset_clears_everything(self, limiter):
        limiter.hit("k")
        limiter.reset()
        assert len(limiter.store) == 0
        assert limiter.stats.allowed == 0

    def test_injected_store_is_used(self, clock):
        store = InMemoryRateLimitStore()
        limiter = FixedWindowRateLimiter(max_requests=1, store=store, clock=clock)
        limiter.hit("k")
        assert store.get("k").count == 1

    async def test_periodic_cleanup_runs(self, limiter, clock):
        limiter.hit("k")
        clock.advance(61)

        task = asyncio.create_task(run_periodic_cleanup([limiter], interval_seconds=0.01))
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert len(limiter.store) == 0


# ---------------------------------------------------------------------------
# registry
# ---------------------------------------------------------------------------

class TestRegistry:
    def test_named_limiters(self):
        api = get_rate_limiter("api")
        strict = get_rate_limiter("strict")

        assert api is get_rate_limiter("api")
        assert api.max_requests == 100
        assert strict.max_requests == 60
        assert api.window_seconds == 60
