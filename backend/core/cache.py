"""
In-process TTL cache.

Holds session state (short TTL) and progress documents (long TTL) per
(user, course). Expiry is checked lazily on read; a background sweeper
can additionally drop expired entries and trim the cache when it grows
past ``max_entries``.

The cache is constructed once per application (see backend.main) and
injected into the services that use it.
"""
import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 5 * 60
DEFAULT_MAX_ENTRIES = 100
DEFAULT_SWEEP_INTERVAL_SECONDS = 60
EVICTION_FRACTION = 0.2

_MISSING = object()


# =============================================================================
# Cache Keys
# =============================================================================


def session_state_key(user_id: str, course_id: str) -> str:
    return f"session_state:{user_id}:{course_id}"


def progress_key(user_id: str, course_id: str) -> str:
    return f"progress:{user_id}:{course_id}"


def library_entry_key(library_id: str, exercise_name: str) -> str:
    return f"library:{library_id}:{exercise_name}"


# =============================================================================
# Cache
# =============================================================================


@dataclass
class CacheEntry:
    """Cache entry with TTL support."""

    value: Any
    expiry: float
    created_at: float


class TTLCache:
    """
    Key/value cache with per-entry expiry.

    Args:
        default_ttl_seconds: TTL used when ``set`` is called without one
        max_entries: Size above which ``cleanup`` evicts the oldest entries
        clock: Monotonic time source, injectable for tests
    """

    def __init__(
        self,
        default_ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._entries: Dict[str, CacheEntry] = {}
        self._default_ttl = default_ttl_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._sweeper: Optional[asyncio.Task] = None

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the cached value, or ``default`` if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return default

        if self._clock() > entry.expiry:
            # Entry expired, remove it
            del self._entries[key]
            return default

        return entry.value

    def has(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        now = self._clock()
        ttl = self._default_ttl if ttl_seconds is None else ttl_seconds
        self._entries[key] = CacheEntry(value=value, expiry=now + ttl, created_at=now)

    def invalidate(self, key: str) -> bool:
        """Remove one key. Returns True if it was present."""
        return self._entries.pop(key, None) is not None

    def invalidate_prefix(self, prefix: str) -> int:
        """Remove every key starting with ``prefix``. Returns the count removed."""
        keys = [k for k in self._entries if k.startswith(prefix)]
        for key in keys:
            del self._entries[key]
        return len(keys)

    def clear(self) -> None:
        self._entries.clear()

    def cleanup(self) -> int:
        """
        Drop expired entries, then evict the oldest 20% if still too large.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        expired = [k for k, e in self._entries.items() if now > e.expiry]
        for key in expired:
            del self._entries[key]
        removed = len(expired)

        if len(self._entries) > self._max_entries:
            by_age = sorted(self._entries, key=lambda k: self._entries[k].created_at)
            to_remove = max(1, int(len(by_age) * EVICTION_FRACTION))
            for key in by_age[:to_remove]:
                del self._entries[key]
            removed += to_remove

        if removed:
            logger.debug("Cache cleanup removed %d entries (%d left)", removed, len(self._entries))
        return removed

    def stats(self) -> Dict[str, Any]:
        now = self._clock()
        expired = sum(1 for e in self._entries.values() if now > e.expiry)
        return {
            "size": len(self._entries),
            "expired": expired,
            "max_entries": self._max_entries,
            "default_ttl_seconds": self._default_ttl,
        }

    # -------------------------------------------------------------------------
    # Background sweeper
    # -------------------------------------------------------------------------

    def start_sweeper(self, interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS) -> None:
        """Start periodic cleanup on the running event loop."""
        if self._sweeper is not None and not self._sweeper.done():
            return
        self._sweeper = asyncio.get_running_loop().create_task(self._sweep(interval_seconds))

    async def stop_sweeper(self) -> None:
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        try:
            await self._sweeper
        except asyncio.CancelledError:
            pass
        self._sweeper = None

    async def _sweep(self, interval_seconds: float) -> None:
        while True:
            await asyncio.sleep(interval_seconds)
            self.cleanup()
