"""
Prime factorisation backends for the Recency Cache
Copyright 2025 Jurden Bruce

SimpleFactoriser stands in for an expensive computation. CachedFactoriser
memoises it through an LRUCache using the read / compute / install pattern.
"""

import logging
import time
from typing import Optional, Tuple, Union

from .cache import LRUCache, LockedLRUCache
from .models import CacheStats

logger = logging.getLogger("recency-cache.factorisers")

DEFAULT_DELAY_MS = 50


class PrimeFactoriser:
    """Finds the prime factorisation of a positive integer"""

    def factorise(self, num: int) -> Tuple[int, ...]:
        """Return the prime factors of num in ascending order, with multiplicity"""
        raise NotImplementedError


def _check_number(num) -> None:
    if isinstance(num, bool) or not isinstance(num, int):
        raise ValueError(f"Can only factorise integers, got {type(num).__name__}")
    if num < 1:
        raise ValueError(f"Can only factorise positive integers, got {num}")


class SimpleFactoriser(PrimeFactoriser):
    """Trial division, with a sleep to simulate a slow backend"""

    def __init__(self, delay_ms: float = DEFAULT_DELAY_MS):
        if delay_ms < 0:
            raise ValueError(f"delay_ms must not be negative, got {delay_ms}")
        self.delay_ms = delay_ms

    def factorise(self, num: int) -> Tuple[int, ...]:
        _check_number(num)

        factors = []
        i = 2
        while i <= num // i:
            while num % i == 0:
                factors.append(i)
                num //= i
            i += 1

        if num > 1:
            factors.append(num)

        if self.delay_ms:
            time.sleep(self.delay_ms / 1000)

        return tuple(factors)


class CachedFactoriser(PrimeFactoriser):
    """Wraps another factoriser with an LRU cache"""

    def __init__(self, cache_capacity: int, factoriser: Optional[PrimeFactoriser] = None,
                 thread_safe: bool = False):
        self.factoriser = factoriser or SimpleFactoriser()
        self.cache: Union[LRUCache, LockedLRUCache] = (
            LockedLRUCache(cache_capacity) if thread_safe else LRUCache(cache_capacity)
        )

    def factorise(self, num: int) -> Tuple[int, ...]:
        factors, _ = self.factorise_with_status(num)
        return factors

    def factorise_with_status(self, num: int) -> Tuple[Tuple[int, ...], bool]:
        """Return (factors, served_from_cache) for num"""
        _check_number(num)

        factors = self.cache.read(num)
        if factors is not None:
            return factors, True

        # Not cached; read() already counted the miss, so install() must not count another
        logger.debug(f"Cache miss for {num}, computing")
        factors = self.factoriser.factorise(num)
        self.cache.install(num, factors)
        return factors, False

    def stats(self) -> CacheStats:
        return self.cache.stats()
