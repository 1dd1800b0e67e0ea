"""
Data models for the Recency Cache
Copyright 2025 Jurden Bruce
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(eq=False)
class CacheEntry:
    """One cached key/value pair and its links in the recency ordering.

    prev points towards the most recently used end, next towards the least
    recently used end. Links are identity references owned by the cache.
    """
    key: Any
    value: Any
    prev: Optional["CacheEntry"] = None
    next: Optional["CacheEntry"] = None

    def __repr__(self) -> str:
        # Neighbours by key only
        prev_key = self.prev.key if self.prev is not None else None
        next_key = self.next.key if self.next is not None else None
        return f"CacheEntry(key={self.key!r}, value={self.value!r}, prev={prev_key!r}, next={next_key!r})"


@dataclass(frozen=True)
class CacheStats:
    """Snapshot of hit/miss counters"""
    hits: int = 0
    misses: int = 0

    @property
    def lookups(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        if self.lookups == 0:
            return 0.0
        return self.hits / self.lookups

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["lookups"] = self.lookups
        data["hit_rate"] = round(self.hit_rate, 4)
        return data

    def __str__(self) -> str:
        return f"Cache stats: hits: {self.hits}, misses: {self.misses}"
