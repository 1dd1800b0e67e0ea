"""
LRU Cache implementation for the Recency Cache
Copyright 2025 Jurden Bruce

A fixed size LRU (least recently used) cache. When the cache is full and a
new key arrives, the key that has least recently been written or read is
evicted.

The engine pairs a dict (key -> CacheEntry) with a doubly linked list that
orders entries by recency, most recently used at the head. Both are updated
together inside every operation so they always agree on membership.

LRUCache is not thread safe. Wrap it in LockedLRUCache when it is shared
between threads.
"""

import logging
import threading
from typing import Any, Dict, Hashable, Iterator, List, Optional, Tuple

from .models import CacheEntry, CacheStats

logger = logging.getLogger("recency-cache.cache")


class InvalidArgument(ValueError):
    """Raised when a cache is constructed with an unusable argument"""


class EvictionPolicy:
    """Chooses which entry to give up when a full cache receives a new key"""

    def pick_victim(self, most_recent: CacheEntry, least_recent: CacheEntry) -> CacheEntry:
        raise NotImplementedError


class LeastRecentlyUsedPolicy(EvictionPolicy):
    """Always evicts the tail of the recency ordering"""

    def pick_victim(self, most_recent: CacheEntry, least_recent: CacheEntry) -> CacheEntry:
        return least_recent


class LRUCache:
    """Fixed capacity cache with O(1) read, write and install"""

    def __init__(self, capacity: int, eviction_policy: Optional[EvictionPolicy] = None):
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise InvalidArgument(f"capacity must be an int, got {type(capacity).__name__}")
        if capacity <= 0:
            raise InvalidArgument(f"capacity must be positive, got {capacity}")

        self._capacity = capacity
        self._entries: Dict[Hashable, CacheEntry] = {}
        self._current_size = 0

        self._mru_head: Optional[CacheEntry] = None
        self._mru_tail: Optional[CacheEntry] = None

        self._hits = 0
        self._misses = 0

        self._eviction_policy = eviction_policy or LeastRecentlyUsedPolicy()

    @property
    def capacity(self) -> int:
        return self._capacity

    def read(self, key: Hashable, default: Any = None) -> Any:
        """Look up key, counting a hit or a miss.

        A hit promotes the entry to most recently used. A miss returns
        default and leaves the cache untouched.
        """
        entry = self._entries.get(key)

        if entry is None:
            self._misses += 1
            return default

        self._hits += 1
        self._update_lru(entry)
        return entry.value

    def write(self, key: Hashable, value: Any) -> None:
        """Install key/value and count a hit if it was already cached, else a miss"""
        if self.install(key, value):
            self._hits += 1
        else:
            self._misses += 1

    def install(self, key: Hashable, value: Any) -> bool:
        """Add key/value without touching the statistics.

        Use this after a read() miss so the miss is not counted twice.

        Returns:
            True if key was already cached (its value is replaced), else False
        """
        entry = self._entries.get(key)

        if entry is not None:
            entry.value = value
            self._update_lru(entry)
            return True

        if self._current_size < self._capacity:
            self._add_new_entry(key, value)
        else:
            victim = self._evict()
            victim.key = key
            victim.value = value
            self._entries[key] = victim
            self._update_lru(victim)

        return False

    def size(self) -> int:
        """Number of cached entries, in [0, capacity]"""
        return self._current_size

    def stats(self) -> CacheStats:
        """Return a copy of the hit/miss counters"""
        return CacheStats(hits=self._hits, misses=self._misses)

    def most_recent_key(self) -> Any:
        return self._mru_head.key if self._mru_head is not None else None

    def least_recent_key(self) -> Any:
        return self._mru_tail.key if self._mru_tail is not None else None

    def keys(self) -> Iterator[Any]:
        """Iterate keys from most to least recently used"""
        for key, _ in self.items():
            yield key

    def items(self) -> Iterator[Tuple[Any, Any]]:
        """Iterate (key, value) pairs from most to least recently used"""
        entry = self._mru_head
        while entry is not None:
            yield entry.key, entry.value
            entry = entry.next

    def log_stats(self, level: int = logging.INFO) -> None:
        """Log capacity, size, counters and the MRU list"""
        stats = self.stats()
        mru_list = " -> ".join(f"({k!r}, {v!r})" for k, v in self.items())
        logger.log(level, f"capacity: {self._capacity}, current size: {self._current_size}")
        logger.log(level, f"hits: {stats.hits}, misses: {stats.misses}, hit rate: {stats.hit_rate:.2%}")
        logger.log(level, f"MRU list: {mru_list or '(empty)'}")

    def __len__(self) -> int:
        return self._current_size

    def __contains__(self, key: Hashable) -> bool:
        # Membership only; does not count as an access
        return key in self._entries

    def __repr__(self) -> str:
        return f"LRUCache(capacity={self._capacity}, size={self._current_size}, stats={self.stats()!r})"

    def _update_lru(self, entry: CacheEntry) -> None:
        """Put entry at the head of the MRU list"""
        if self._current_size == 1 or entry is self._mru_head:
            return

        if entry is self._mru_tail:
            self._mru_tail = entry.prev
            self._mru_tail.next = None
        else:
            entry.prev.next = entry.next
            entry.next.prev = entry.prev

        entry.prev = None
        entry.next = self._mru_head
        self._mru_head.prev = entry
        self._mru_head = entry

    def _add_new_entry(self, key: Hashable, value: Any) -> None:
        # Only used while there is still room
        entry = CacheEntry(key=key, value=value, next=self._mru_head)

        if self._mru_head is None:
            self._mru_tail = entry
        else:
            self._mru_head.prev = entry
        self._mru_head = entry

        self._entries[key] = entry
        self._current_size += 1

    def _evict(self) -> CacheEntry:
        """Drop the victim's key from the mapping and hand back its entry for reuse"""
        victim = self._eviction_policy.pick_victim(self._mru_head, self._mru_tail)

        if victim is None or self._entries.get(victim.key) is not victim:
            raise RuntimeError(f"{type(self._eviction_policy).__name__} picked an entry that is not cached: {victim!r}")

        logger.debug(f"Evicting entry: key={victim.key!r}")
        del self._entries[victim.key]
        return victim


class LockedLRUCache:
    """LRUCache guarded by a re-entrant lock.

    Each call is atomic on its own. A read followed by an install is two
    calls, so two threads may both miss and both compute the same key.
    """

    def __init__(self, capacity: int, eviction_policy: Optional[EvictionPolicy] = None):
        self._cache = LRUCache(capacity, eviction_policy)
        self._lock = threading.RLock()

    @property
    def capacity(self) -> int:
        return self._cache.capacity

    def read(self, key: Hashable, default: Any = None) -> Any:
        with self._lock:
            return self._cache.read(key, default)

    def write(self, key: Hashable, value: Any) -> None:
        with self._lock:
            self._cache.write(key, value)

    def install(self, key: Hashable, value: Any) -> bool:
        with self._lock:
            return self._cache.install(key, value)

    def size(self) -> int:
        with self._lock:
            return self._cache.size()

    def stats(self) -> CacheStats:
        with self._lock:
            return self._cache.stats()

    def most_recent_key(self) -> Any:
        with self._lock:
            return self._cache.most_recent_key()

    def least_recent_key(self) -> Any:
        with self._lock:
            return self._cache.least_recent_key()

    def keys(self) -> List[Any]:
        with self._lock:
            return list(self._cache.keys())

    def items(self) -> List[Tuple[Any, Any]]:
        with self._lock:
            return list(self._cache.items())

    def log_stats(self, level: int = logging.INFO) -> None:
        with self._lock:
            self._cache.log_stats(level)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._cache

    def __repr__(self) -> str:
        with self._lock:
            return f"Locked{self._cache!r}"
