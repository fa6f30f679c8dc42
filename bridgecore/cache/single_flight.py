"""Time-bounded cache with single-flight fetch coalescing.

Per key the cache moves through Empty -> Fetching -> Fresh -> Stale ->
Fetching -> Fresh ... Staleness is judged lazily from the entry's age at
read time; there is no background timer. At most one fetch per key is in
flight: concurrent readers await the same task and receive the same value
or the same error.

Entries are replaced wholesale, never mutated. Cached values are treated
as immutable snapshots by every reader.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

import structlog

from bridgecore.errors import FetchFailure

logger = structlog.get_logger()

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class CacheState(str, Enum):
    """Lifecycle state of one cache key."""

    EMPTY = "empty"
    FETCHING = "fetching"
    FRESH = "fresh"
    STALE = "stale"


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    """A fetched value and the clock reading at which it was stored."""

    value: V
    fetched_at: float


class SingleFlightCache(Generic[K, V]):
    """Process-lifetime cache of fetched snapshots keyed by ``K``.

    Attributes:
        name: Label used in log events
        ttl_seconds: Maximum age of a fresh entry
    """

    def __init__(
        self,
        fetch: Callable[[K], Awaitable[V]],
        ttl_seconds: float,
        *,
        name: str = "cache",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize an empty cache.

        Args:
            fetch: Collaborator called on a miss; its errors reach every waiter
                as FetchFailure
            ttl_seconds: Maximum age of a fresh entry
            name: Label used in log events
            clock: Monotonic clock, injectable for tests
        """
        if ttl_seconds < 0:
            raise ValueError(f"ttl_seconds must be >= 0, got {ttl_seconds}")
        self.name = name
        self.ttl_seconds = ttl_seconds
        self._fetch = fetch
        self._clock = clock
        self._entries: dict[K, CacheEntry[V]] = {}
        self._in_flight: dict[K, asyncio.Task[V]] = {}
        # Keys invalidated by refresh(); cleared by a fetch started afterwards
        self._invalidated: set[K] = set()
        # Bumped on every refresh so a fetch started earlier cannot revalidate
        self._generations: dict[K, int] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def _is_fresh(self, key: K, entry: CacheEntry[V]) -> bool:
        if key in self._invalidated:
            return False
        return self._clock() - entry.fetched_at < self.ttl_seconds

    def state(self, key: K) -> CacheState:
        """Current lifecycle state of ``key``."""
        if key in self._in_flight:
            return CacheState.FETCHING
        entry = self._entries.get(key)
        if entry is None:
            return CacheState.EMPTY
        return CacheState.FRESH if self._is_fresh(key, entry) else CacheState.STALE

    def peek(self, key: K) -> V | None:
        """Last stored value for ``key`` regardless of age, without I/O."""
        entry = self._entries.get(key)
        return entry.value if entry is not None else None

    async def get(self, key: K) -> V:
        """Return a fresh value for ``key``, fetching at most once concurrently.

        Raises:
            FetchFailure: If the fetch collaborator failed
        """
        entry = self._entries.get(key)
        if entry is not None and self._is_fresh(key, entry):
            return entry.value

        task = self._in_flight.get(key)
        if task is None:
            generation = self._generations.get(key, 0)
            task = asyncio.ensure_future(self._run_fetch(key, generation))
            task.add_done_callback(_consume_exception)
            self._in_flight[key] = task
        else:
            logger.debug("cache_fetch_joined", cache=self.name, key=str(key))

        # A cancelled reader must not cancel the fetch other readers wait on
        return await asyncio.shield(task)

    async def _run_fetch(self, key: K, generation: int) -> V:
        logger.debug("cache_fetch_started", cache=self.name, key=str(key))
        try:
            value = await self._fetch(key)
        except FetchFailure:
            logger.warning("cache_fetch_failed", cache=self.name, key=str(key))
            raise
        except Exception as err:
            logger.warning(
                "cache_fetch_failed",
                cache=self.name,
                key=str(key),
                error=repr(err),
            )
            raise FetchFailure(f"{self.name}: fetch for {key} failed: {err}") from err
        else:
            self._entries[key] = CacheEntry(value=value, fetched_at=self._clock())
            if self._generations.get(key, 0) == generation:
                self._invalidated.discard(key)
            logger.debug("cache_fetch_succeeded", cache=self.name, key=str(key))
            return value
        finally:
            self._in_flight.pop(key, None)

    def refresh(self, key: K) -> None:
        """Mark ``key`` stale so the next get() re-fetches. Performs no I/O."""
        self._generations[key] = self._generations.get(key, 0) + 1
        if key in self._entries or key in self._in_flight:
            self._invalidated.add(key)
        logger.debug("cache_refresh", cache=self.name, key=str(key))

    def refresh_all(self) -> None:
        """Mark every known key stale. Performs no I/O."""
        keys = set(self._entries) | set(self._in_flight)
        for key in keys:
            self._generations[key] = self._generations.get(key, 0) + 1
        self._invalidated.update(keys)
        logger.debug("cache_refresh_all", cache=self.name, keys=len(keys))


def _consume_exception(task: asyncio.Task) -> None:
    # Readers may all have been cancelled; mark the error as retrieved
    if not task.cancelled():
        task.exception()
