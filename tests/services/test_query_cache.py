"""Tests for the TTL query cache."""

import pytest

from payroll_kernel.domain.clock import DeterministicClock
from payroll_services.query_cache import (
    CacheKeys,
    QueryCache,
    invalidate_employee,
    invalidate_schedules,
)


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock()


@pytest.fixture
def cache(clock) -> QueryCache:
    return QueryCache(clock=clock, default_ttl_seconds=300)


class TestQueryCache:

    def test_set_and_get(self, cache):
        cache.set("k", [1, 2])
        assert cache.get("k") == [1, 2]

    def test_missing_key(self, cache):
        assert cache.get("nope") is None

    def test_expires_after_ttl(self, cache, clock):
        cache.set("k", "v", ttl_seconds=10)
        clock.advance(10)
        assert cache.get("k") == "v"
        clock.advance(1)
        assert cache.get("k") is None
        assert cache.stats().size == 0

    def test_invalidate_pattern(self, cache):
        cache.set("schedules:emp-1:2025-03", 1)
        cache.set("schedules:emp-1:2025-04", 2)
        cache.set("schedules:emp-2:2025-03", 3)
        removed = cache.invalidate_pattern(r"^schedules:emp-1:")
        assert removed == 2
        assert cache.stats().keys == ("schedules:emp-2:2025-03",)

    def test_clear(self, cache):
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        assert cache.stats().size == 0


class TestCachedQuery:

    def test_query_runs_once_on_hit(self, cache):
        calls = []

        def query():
            calls.append(1)
            return {"rows": 3}

        assert cache.cached_query("q", query) == {"rows": 3}
        assert cache.cached_query("q", query) == {"rows": 3}
        assert len(calls) == 1

    def test_query_reruns_after_expiry(self, cache, clock):
        calls = []
        cache.cached_query("q", lambda: calls.append(1) or "v", ttl_seconds=5)
        clock.advance(6)
        cache.cached_query("q", lambda: calls.append(1) or "v", ttl_seconds=5)
        assert len(calls) == 2


class TestInvalidationHelpers:

    def test_invalidate_employee_leaves_others(self, cache):
        cache.set(CacheKeys.employee("emp-1"), 1)
        cache.set(CacheKeys.employee("emp-10"), 2)
        cache.set(CacheKeys.contracts("emp-1"), 3)
        cache.set(CacheKeys.schedules("emp-1", "2025-03"), 4)
        cache.set(CacheKeys.employees(), 5)

        removed = invalidate_employee(cache, "emp-1")

        assert removed == 3
        assert cache.stats().keys == (CacheKeys.employee("emp-10"),)

    def test_invalidate_schedules(self, cache):
        cache.set(CacheKeys.schedules("emp-1", "2025-03"), 1)
        cache.set(CacheKeys.schedules("emp-1", "2025-04"), 2)
        invalidate_schedules(cache, "emp-1", "2025-03")
        assert cache.stats().keys == (CacheKeys.schedules("emp-1", "2025-04"),)
