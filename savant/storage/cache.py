# savant/storage/cache.py
"""Process-wide, time-bounded memoization of upstream datasets.

Each source key is refreshed independently. A refresh replaces the cached
dataset wholesale; a failed refresh keeps serving the last good dataset.
Concurrent requests may both refresh a stale entry; refreshes are idempotent
so no lock is taken.
"""

import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

from loguru import logger

FetchFn = Callable[[], Awaitable[Any]]
ParseFn = Callable[[Any], Any]
Clock = Callable[[], float]


class SourceUnavailableError(Exception):
    """Raised when a source has failed and no previously fetched data exists."""

    def __init__(self, source: str, cause: Optional[BaseException] = None):
        self.source = source
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Source '{source}' unavailable{detail}")


@dataclass(frozen=True)
class CacheEntry:
    """A parsed dataset and the clock reading at which it was fetched."""

    data: Any
    fetched_at: float

    def age(self, now: float) -> float:
        return now - self.fetched_at


class SourceCache:
    """Holds the last successfully parsed dataset per source key."""

    def __init__(self, clock: Clock = time.monotonic):
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[CacheEntry]:
        return self._entries.get(key)

    async def get_or_refresh(
        self, key: str, fetch_fn: FetchFn, parse_fn: ParseFn, ttl: float
    ) -> Any:
        """Return cached data for ``key``, refreshing it first when stale.

        Args:
            key: Independent cache slot (e.g. a source name or source+date).
            fetch_fn: Coroutine function returning the raw upstream payload.
            parse_fn: Turns the raw payload into the dataset to cache.
            ttl: Seconds after which the entry is considered stale.

        Returns:
            The fresh dataset, or the last good one if the refresh failed.

        Raises:
            SourceUnavailableError: The refresh failed and nothing was ever cached.
        """
        entry = self._entries.get(key)
        if entry is not None and entry.age(self._clock()) <= ttl:
            logger.debug(f"Cache hit for {key} (age {entry.age(self._clock()):.0f}s)")
            return entry.data

        logger.debug(f"Refreshing {key} (cached: {entry is not None})")
        try:
            raw = await fetch_fn()
            data = parse_fn(raw)
        except Exception as e:
            if entry is not None:
                logger.warning(
                    f"Refresh of {key} failed, serving data {entry.age(self._clock()):.0f}s old: {e}"
                )
                return entry.data
            logger.error(f"Refresh of {key} failed and no cached data exists: {e}")
            raise SourceUnavailableError(key, e) from e

        # Data and timestamp are replaced together
        self._entries[key] = CacheEntry(data=data, fetched_at=self._clock())
        logger.info(f"Cached {key}")
        return data

    def invalidate(self, key: Optional[str] = None) -> None:
        """Drop one entry, or every entry when no key is given."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def prune(
        self,
        prefix: str,
        max_age: float,
        keep: Optional[str] = None,
        max_entries: Optional[int] = None,
    ) -> int:
        """Evict entries under ``prefix`` older than ``max_age`` seconds.

        When ``max_entries`` is given, the oldest remaining entries are also
        evicted until at most that many are left. ``keep`` is never evicted.
        Returns the number of entries removed.
        """
        now = self._clock()
        candidates = sorted(
            (
                (key, entry)
                for key, entry in self._entries.items()
                if key.startswith(prefix) and key != keep
            ),
            key=lambda item: item[1].fetched_at,
        )
        doomed = [key for key, entry in candidates if entry.age(now) > max_age]
        if max_entries is not None:
            survivors = [key for key, _ in candidates if key not in doomed]
            kept_slot = 0 if keep is None else 1
            overflow = len(survivors) + kept_slot - max_entries
            if overflow > 0:
                doomed.extend(survivors[:overflow])

        for key in doomed:
            del self._entries[key]
        if doomed:
            logger.debug(f"Evicted {len(doomed)} '{prefix}' entries")
        return len(doomed)

    def snapshot(self) -> Dict[str, float]:
        """Age in seconds of every cached entry, keyed by source key."""
        now = self._clock()
        return {key: round(entry.age(now), 1) for key, entry in self._entries.items()}
