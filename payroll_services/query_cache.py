"""
payroll_services.query_cache -- In-memory TTL cache for store queries.

Responsibility:
    Memoize document-store reads per key for a limited time so that
    screens listing many employees do not re-read the same collections.
    Provides key builders for the cached queries and helpers that drop
    every entry related to an employee when its data changes.

Architecture position:
    Services -- caller-side concern.  The payroll engines never see the
    cache; they receive already-loaded models.

Invariants enforced:
    - An entry older than its TTL is never returned; it is evicted on read.
    - Time comes from the injected ``Clock``, never from the system
      directly, so expiry is deterministic under test.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from payroll_kernel.domain.clock import Clock, SystemClock
from payroll_kernel.logging_config import get_logger

logger = get_logger("services.query_cache")

T = TypeVar("T")

DEFAULT_TTL_SECONDS = 300.0


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    stored_at: float
    ttl_seconds: float


@dataclass(frozen=True)
class CacheStats:
    size: int
    keys: tuple[str, ...]


class QueryCache:
    """Key -> value memo with a per-entry time to live."""

    def __init__(self, clock: Clock | None = None, default_ttl_seconds: float = DEFAULT_TTL_SECONDS):
        self._clock = clock or SystemClock()
        self._default_ttl = default_ttl_seconds
        self._entries: dict[str, CacheEntry] = {}

    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        ttl = self._default_ttl if ttl_seconds is None else ttl_seconds
        self._entries[key] = CacheEntry(value, self._clock.monotonic_seconds(), ttl)

    def get(self, key: str) -> Any | None:
        """Cached value, or None when absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock.monotonic_seconds() - entry.stored_at > entry.ttl_seconds:
            del self._entries[key]
            return None
        return entry.value

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def invalidate_pattern(self, pattern: str) -> int:
        """Drop every key matching the regular expression; return how many."""
        regex = re.compile(pattern)
        doomed = [key for key in self._entries if regex.search(key)]
        for key in doomed:
            del self._entries[key]
        return len(doomed)

    def clear(self) -> None:
        self._entries.clear()

    def stats(self) -> CacheStats:
        return CacheStats(size=len(self._entries), keys=tuple(self._entries))

    def cached_query(
        self,
        key: str,
        query: Callable[[], T],
        ttl_seconds: float | None = None,
    ) -> T:
        """Return the cached value for ``key``, running ``query`` on a miss."""
        cached = self.get(key)
        if cached is not None:
            logger.debug("cache_hit", extra={"key": key})
            return cached

        logger.debug("cache_miss", extra={"key": key})
        value = query()
        self.set(key, value, ttl_seconds)
        return value


# ---------------------------------------------------------------------------
# Keys
# ---------------------------------------------------------------------------


class CacheKeys:
    """Key builders for the cached store reads."""

    @staticmethod
    def employees() -> str:
        return "employees:all"

    @staticmethod
    def employee(employee_id: str) -> str:
        return f"employee:{employee_id}"

    @staticmethod
    def contracts(employee_id: str) -> str:
        return f"contracts:{employee_id}"

    @staticmethod
    def schedules(employee_id: str, month: str) -> str:
        return f"schedules:{employee_id}:{month}"


def invalidate_employee(cache: QueryCache, employee_id: str) -> int:
    """Drop every cached read that belongs to ``employee_id``."""
    ident = re.escape(employee_id)
    removed = 0
    for prefix in ("employee", "contracts", "schedules"):
        removed += cache.invalidate_pattern(f"^{prefix}:{ident}(:|$)")
    cache.invalidate(CacheKeys.employees())
    return removed


def invalidate_schedules(cache: QueryCache, employee_id: str, month: str) -> None:
    cache.invalidate(CacheKeys.schedules(employee_id, month))
