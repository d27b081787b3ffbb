"""Query Cache — tag-scoped read cache with staleness flags for listing queries.

Invariants:
    - An entry is written only after its compute succeeds (cancel/failure leaves no entry)
    - invalidate_tag() marks every entry under the tag stale; stale entries are
      recomputed on next access, never served
    - At most max_entries entries are held; least recently used are evicted first
    - Staleness writes and entry reads/writes are serialized by one asyncio.Lock
    - A compute that straddles an invalidation of one of its tags is stored stale

Design Decisions:
    - Compute runs outside the lock: concurrent renders for different keys never
      wait on each other's store latency
    - Per-tag generation counter instead of cancelling in-flight computes: a fetch
      already running when a mutation commits may return its result once, but that
      result is never cached as fresh
    - Tag -> keys index cleared wholesale per mutation; no per-parameter invalidation
    - Entries live in a bounded cachetools LRUCache: q is free text from the URL,
      so the key space is unbounded. Evicted keys leave the tag index with them
    - A raced (stale) result never replaces a fresh entry written meanwhile
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Hashable, Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from cachetools import LRUCache

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """Previously computed value for one cache key."""
    value: Any
    tags: frozenset[str]
    stale: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


DEFAULT_MAX_ENTRIES = 1024


class _EntryStore(LRUCache):
    """LRUCache that reports evictions so the tag index can follow."""

    def __init__(self, maxsize: int, on_evict: Callable[[Hashable, CacheEntry], None]):
        super().__init__(maxsize=maxsize)
        self._on_evict = on_evict

    def popitem(self):
        key, entry = super().popitem()
        self._on_evict(key, entry)
        return key, entry


class QueryCache:
    """In-process cache keyed by operation + resolved params, invalidated by tag."""

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        self._entries = _EntryStore(max_entries, self._forget)
        self._tag_index: dict[str, set[Hashable]] = {}
        self._generations: dict[str, int] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: Hashable) -> CacheEntry | None:
        async with self._lock:
            return self._entries.get(key)

    async def get_or_compute(
        self,
        key: Hashable,
        compute: Callable[[], Awaitable[Any]],
        tags: Iterable[str] = (),
    ) -> Any:
        """Return the fresh cached value for key, or compute and store it."""
        tag_set = frozenset(tags)
        async with self._lock:
            entry = self._entries.get(key)
            if entry is not None and not entry.stale:
                logger.debug("Cache hit", extra={"cache_key": str(key)})
                return entry.value
            seen = {tag: self._generations.get(tag, 0) for tag in tag_set}

        value = await compute()

        async with self._lock:
            raced = any(
                self._generations.get(tag, 0) != gen for tag, gen in seen.items()
            )
            current = self._entries.get(key)
            if raced and current is not None and not current.stale:
                logger.info(
                    "Cache entry refreshed while computing; keeping newer entry",
                    extra={"cache_key": str(key)},
                )
                return value
            self._entries[key] = CacheEntry(value=value, tags=tag_set, stale=raced)
            for tag in tag_set:
                self._tag_index.setdefault(tag, set()).add(key)
        if raced:
            logger.info(
                "Cache entry invalidated while computing; stored stale",
                extra={"cache_key": str(key)},
            )
        return value

    async def invalidate_tag(self, tag: str) -> int:
        """Mark all entries under tag stale. Returns how many fresh entries flipped."""
        async with self._lock:
            self._generations[tag] = self._generations.get(tag, 0) + 1
            flipped = 0
            for key in self._tag_index.get(tag, ()):
                entry = self._entries.get(key)
                if entry is not None and not entry.stale:
                    entry.stale = True
                    flipped += 1
        logger.info(
            "Invalidated cache tag", extra={"tag": tag, "record_count": flipped},
        )
        return flipped

    def __len__(self) -> int:
        return len(self._entries)

    def _forget(self, key: Hashable, entry: CacheEntry) -> None:
        # Runs under the lock: eviction only happens inside an entry write.
        for tag in entry.tags:
            keys = self._tag_index.get(tag)
            if keys is None:
                continue
            keys.discard(key)
            if not keys:
                del self._tag_index[tag]
        logger.debug("Cache entry evicted", extra={"cache_key": str(key)})
