"""
Recency Cache - fixed capacity LRU cache with a memoised factorisation example
Copyright 2025 Jurden Bruce
"""

__version__ = "1.0.0"

from .models import CacheEntry, CacheStats
from .cache import (
    EvictionPolicy,
    InvalidArgument,
    LRUCache,
    LeastRecentlyUsedPolicy,
    LockedLRUCache,
)
from .factorisers import CachedFactoriser, PrimeFactoriser, SimpleFactoriser

__all__ = [
    'CacheEntry',
    'CacheStats',
    'EvictionPolicy',
    'InvalidArgument',
    'LRUCache',
    'LeastRecentlyUsedPolicy',
    'LockedLRUCache',
    'CachedFactoriser',
    'PrimeFactoriser',
    'SimpleFactoriser',
]
