"""
Factorisation benchmark for the Recency Cache
Copyright 2025 Jurden Bruce

Times a batch of factorisation requests against the plain factoriser and
against the cached one, then reports the speedup and cache statistics.

Usage:
    python -m recency_cache.demo --requests 500 --capacity 100
    recency-cache-demo --requests 2000 --distinct 300 --delay-ms 5 --json
"""

import argparse
import json
import logging
import sys
import time
from typing import Any, Dict, List, Optional

import numpy as np
from pydantic import ValidationError

from .config import get_config
from .factorisers import CachedFactoriser, SimpleFactoriser

logger = logging.getLogger("recency-cache.demo")

ZIPF_EXPONENT = 1.3


def generate_requests(count: int, distinct: int, seed: Optional[int] = None) -> List[int]:
    """Draw count numbers from a pool of distinct random integers.

    Ranks follow a Zipf distribution so a few numbers are requested often,
    which is the access pattern an LRU cache pays off on.
    """
    if count < 0:
        raise ValueError(f"count must not be negative, got {count}")
    if distinct < 1:
        raise ValueError(f"distinct must be at least 1, got {distinct}")

    rng = np.random.default_rng(seed)
    pool = rng.integers(2, 10**9, size=distinct)
    ranks = (rng.zipf(ZIPF_EXPONENT, size=count) - 1) % distinct
    return [int(n) for n in pool[ranks]]


def run_benchmark(requests: List[int], cache_capacity: int, delay_ms: float) -> Dict[str, Any]:
    """Factorise every request with and without the cache"""
    simple = SimpleFactoriser(delay_ms=delay_ms)
    cached = CachedFactoriser(cache_capacity, factoriser=SimpleFactoriser(delay_ms=delay_ms))

    start = time.perf_counter()
    for num in requests:
        simple.factorise(num)
    simple_seconds = time.perf_counter() - start

    start = time.perf_counter()
    for num in requests:
        cached.factorise(num)
    cached_seconds = time.perf_counter() - start

    stats = cached.stats()
    logger.debug(f"Benchmark done: simple={simple_seconds:.3f}s cached={cached_seconds:.3f}s {stats}")
    cached.cache.log_stats(logging.DEBUG)

    return {
        "requests": len(requests),
        "distinct_requested": len(set(requests)),
        "cache_capacity": cache_capacity,
        "delay_ms": delay_ms,
        "simple_seconds": simple_seconds,
        "cached_seconds": cached_seconds,
        "speedup": simple_seconds / cached_seconds if cached_seconds > 0 else None,
        "cache_size": cached.cache.size(),
        "stats": stats,
    }


def format_report(result: Dict[str, Any]) -> str:
    stats = result["stats"]
    speedup = f"{result['speedup']:.1f}x" if result["speedup"] is not None else "n/a"
    lines = [
        f"Requests: {result['requests']} ({result['distinct_requested']} distinct)",
        f"Cache capacity: {result['cache_capacity']}, final size: {result['cache_size']}",
        f"Time with SimpleFactoriser: {result['simple_seconds'] * 1000:.0f}ms",
        f"Time with CachedFactoriser: {result['cached_seconds'] * 1000:.0f}ms",
        f"Speedup: {speedup}",
        f"{stats} (hit rate {stats.hit_rate:.1%})",
    ]
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Compare cached and uncached prime factorisation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  RC_CACHE_CAPACITY      default for --capacity (10000)
  RC_FACTORISE_DELAY_MS  default for --delay-ms (50)
  RC_LOG_LEVEL           logging level (INFO)
        """
    )
    parser.add_argument("--requests", type=int, default=200, help="Number of factorisation requests (default: 200)")
    parser.add_argument("--distinct", type=int, default=100, help="Size of the pool requests are drawn from (default: 100)")
    parser.add_argument("--capacity", type=int, help="Cache capacity (overrides RC_CACHE_CAPACITY)")
    parser.add_argument("--delay-ms", type=float, help="Simulated latency per computation (overrides RC_FACTORISE_DELAY_MS)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a repeatable workload")
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    try:
        config = get_config(overrides={
            "cache_capacity": args.capacity,
            "factorise_delay_ms": args.delay_ms,
            "log_level": "DEBUG" if args.verbose else None,
        })
    except ValidationError as e:
        print(f"Error: invalid configuration:\n{e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=config.log_level,
        stream=sys.stderr,
        format="%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
    )

    try:
        requests = generate_requests(args.requests, args.distinct, args.seed)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    result = run_benchmark(requests, config.cache_capacity, config.factorise_delay_ms)

    if args.json:
        output = dict(result, stats=result["stats"].to_dict())
        print(json.dumps(output, indent=2))
    else:
        print(format_report(result))

    return 0


if __name__ == "__main__":
    sys.exit(main())
