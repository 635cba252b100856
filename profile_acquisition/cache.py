"""In-memory key/value store with per-entry time-to-live.

Entries expire lazily: an expired entry is removed the next time it is looked
up, there is no background sweep.  The store is unbounded; it is sized for
dozens to low hundreds of tracked profiles.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

PROFILE_KEY_PREFIX = "profile:"
DEFAULT_TTL = 2 * 60 * 60.0


def profile_key(identifier: str) -> str:
    """Return the cache key used for a profile identifier."""
    return f"{PROFILE_KEY_PREFIX}{identifier}"


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    value: T
    stored_at: float
    ttl: float

    def is_valid(self, now: float) -> bool:
        return now - self.stored_at <= self.ttl


class TTLCache:
    """Thread-safe TTL cache.

    ``clock`` must be monotonic; it defaults to :func:`time.monotonic` and can
    be replaced in tests.
    """

    def __init__(self, default_ttl: float = DEFAULT_TTL, clock: Callable[[], float] = time.monotonic) -> None:
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry[Any]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        logger.debug("Cache initialised with default TTL of %.0fs", default_ttl)

    def get(self, key: str) -> Optional[Any]:
        """Return the value for ``key`` if present and unexpired.

        An expired entry is evicted as a side effect of the lookup.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            if not entry.is_valid(self._clock()):
                del self._entries[key]
                self._misses += 1
                self._evictions += 1
                logger.debug("Evicted expired cache entry %s", key)
                return None
            self._hits += 1
            return entry.value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Store ``value`` under ``key``, replacing any existing entry."""
        if ttl is None:
            ttl = self.default_ttl
        with self._lock:
            self._entries[key] = CacheEntry(value=value, stored_at=self._clock(), ttl=ttl)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        # Membership does not count as a lookup and never evicts.
        with self._lock:
            entry = self._entries.get(key)  # type: ignore[arg-type]
            return entry is not None and entry.is_valid(self._clock())

    def get_stats(self) -> Dict[str, int]:
        """Return entry count and hit/miss/eviction counters."""
        with self._lock:
            return {
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }

    # Profile helpers

    def get_profile(self, identifier: str) -> Optional[Any]:
        return self.get(profile_key(identifier))

    def set_profile(self, identifier: str, profile: Any, ttl: Optional[float] = None) -> None:
        self.set(profile_key(identifier), profile, ttl)

    def delete_profile(self, identifier: str) -> None:
        self.delete(profile_key(identifier))
