"""Tests for the TTL cache and its single-flight refresh."""

import asyncio

import pytest

from leaderboard.errors import SourceUnavailable
from leaderboard.models import It1Metric
from leaderboard.services.cache import LeaderboardCache


class Counter:
    """Compute function that records how often it runs."""

    def __init__(self):
        self.calls = 0
        self.gate: asyncio.Event | None = None
        self.error: Exception | None = None

    async def __call__(self):
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return [It1Metric(validator=f"v{self.calls}", rank=1)]


def test_fresh_entry_is_reused(clock):
    async def run():
        cache = LeaderboardCache(ttl=60, clock=clock)
        compute = Counter()
        first = await cache.get("k", compute)
        clock.advance(59)
        second = await cache.get("k", compute)
        return compute, first, second

    compute, first, second = asyncio.run(run())
    assert compute.calls == 1
    assert second is first
    assert second.computed_at == first.computed_at


def test_expired_entry_is_replaced(clock):
    async def run():
        cache = LeaderboardCache(ttl=60, clock=clock)
        compute = Counter()
        first = await cache.get("k", compute)
        clock.advance(60)
        second = await cache.get("k", compute)
        return cache, compute, first, second

    cache, compute, first, second = asyncio.run(run())
    assert compute.calls == 2
    assert second.computed_at == first.computed_at + 60
    assert second.metrics[0].validator == "v2"
    assert cache.peek("k") is second


def test_concurrent_misses_share_one_refresh(clock):
    async def run():
        cache = LeaderboardCache(ttl=60, clock=clock)
        compute = Counter()
        compute.gate = asyncio.Event()
        waiters = [asyncio.ensure_future(cache.get("k", compute)) for _ in range(10)]
        await asyncio.sleep(0)
        compute.gate.set()
        return compute, await asyncio.gather(*waiters)

    compute, entries = asyncio.run(run())
    assert compute.calls == 1
    assert all(entry is entries[0] for entry in entries)


def test_concurrent_expiry_triggers_one_refresh_and_serves_previous(clock):
    async def run():
        cache = LeaderboardCache(ttl=60, clock=clock)
        compute = Counter()
        old = await cache.get("k", compute)
        clock.advance(61)

        compute.gate = asyncio.Event()
        trigger = asyncio.ensure_future(cache.get("k", compute))
        await asyncio.sleep(0)
        others = await asyncio.gather(*(cache.get("k", compute) for _ in range(5)))
        compute.gate.set()
        new = await trigger
        return compute, old, others, new

    compute, old, others, new = asyncio.run(run())
    assert compute.calls == 2
    assert all(entry is old for entry in others)
    assert new is not old
    assert new.metrics[0].validator == "v2"


def test_failed_refresh_keeps_previous_entry(clock):
    async def run():
        cache = LeaderboardCache(ttl=60, clock=clock)
        compute = Counter()
        old = await cache.get("k", compute)
        clock.advance(61)
        compute.error = SourceUnavailable("down")
        with pytest.raises(SourceUnavailable):
            await cache.get("k", compute)
        after_failure = cache.peek("k")

        compute.error = None
        recovered = await cache.get("k", compute)
        return compute, old, after_failure, recovered

    compute, old, after_failure, recovered = asyncio.run(run())
    assert after_failure is old
    assert compute.calls == 3
    assert recovered.metrics[0].validator == "v3"


def test_failure_reaches_every_waiter_without_cache(clock):
    async def run():
        cache = LeaderboardCache(ttl=60, clock=clock)
        compute = Counter()
        compute.gate = asyncio.Event()
        compute.error = SourceUnavailable("down")
        waiters = [asyncio.ensure_future(cache.get("k", compute)) for _ in range(3)]
        await asyncio.sleep(0)
        compute.gate.set()
        results = await asyncio.gather(*waiters, return_exceptions=True)
        return cache, compute, results

    cache, compute, results = asyncio.run(run())
    assert compute.calls == 1
    assert all(isinstance(r, SourceUnavailable) for r in results)
    assert cache.peek("k") is None


def test_keys_are_independent(clock):
    async def run():
        cache = LeaderboardCache(ttl=60, clock=clock)
        compute = Counter()
        await cache.get("a", compute)
        await cache.get("b", compute)
        return compute

    assert asyncio.run(run()).calls == 2


def test_invalidate(clock):
    async def run():
        cache = LeaderboardCache(ttl=60, clock=clock)
        compute = Counter()
        await cache.get("a", compute)
        await cache.get("b", compute)
        cache.invalidate("a")
        assert cache.peek("a") is None
        assert cache.peek("b") is not None
        cache.invalidate()
        assert cache.peek("b") is None

    asyncio.run(run())
