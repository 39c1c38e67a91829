"""Short-lived leaderboard cache with single-flight refresh."""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Sequence

from leaderboard.models import MetricRecord

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60.0


@dataclass(frozen=True)
class CacheEntry:
    """A ranked snapshot and the wall-clock time it was computed."""
    metrics: tuple[MetricRecord, ...]
    computed_at: float


Compute = Callable[[], Awaitable[Sequence[MetricRecord]]]


class LeaderboardCache:
    """
    Fetch-or-compute cache holding one ranked snapshot per key.

    At most one refresh per key runs at a time. Callers that arrive while a
    refresh is in flight get the previous snapshot if there is one, otherwise
    they wait for the refresh. A failed refresh leaves the previous snapshot
    in place and the next call tries again.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the cache.

        Args:
            ttl: Maximum age in seconds before a snapshot is recomputed
            clock: Wall-clock source in seconds since epoch
        """
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._inflight: dict[str, asyncio.Task] = {}

    def is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.computed_at < self.ttl

    def peek(self, key: str) -> Optional[CacheEntry]:
        """Get the current entry for a key regardless of its age."""
        return self._entries.get(key)

    def invalidate(self, key: Optional[str] = None) -> None:
        """Drop one entry, or every entry if no key is given."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    async def get(self, key: str, compute: Compute) -> CacheEntry:
        """
        Get a fresh snapshot for a key, computing it if needed.

        Args:
            key: Cache key
            compute: Coroutine factory producing the ranked records

        Returns:
            The cached or newly computed entry

        Raises:
            Whatever ``compute`` raises, when no previous entry can be served
        """
        entry = self._entries.get(key)
        if entry is not None and self.is_fresh(entry):
            return entry

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._refresh(key, compute))
            self._inflight[key] = task
        elif entry is not None:
            logger.debug(f"Refresh of {key} in progress, serving previous snapshot")
            return entry

        # Shield so a cancelled caller does not cancel the refresh for everyone
        return await asyncio.shield(task)

    async def _refresh(self, key: str, compute: Compute) -> CacheEntry:
        started = time.perf_counter()
        try:
            metrics = await compute()
            entry = CacheEntry(metrics=tuple(metrics), computed_at=self._clock())
            self._entries[key] = entry
            logger.info(
                f"Refreshed {key}: {len(entry.metrics)} records "
                f"in {time.perf_counter() - started:.3f}s"
            )
            return entry
        except Exception as e:
            logger.error(f"Refresh of {key} failed: {e}")
            raise
        finally:
            self._inflight.pop(key, None)
