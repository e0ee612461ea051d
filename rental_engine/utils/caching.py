"""In-process memoization for derived analysis results.

Entries are grouped by prefix. Each prefix keeps its own LRU order, an optional
size bound and hit/miss counters so callers can see whether recomputation is
actually being avoided.
"""

from __future__ import annotations

import functools
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, Optional, Tuple, TypeVar

T = TypeVar("T")

_cache_lock = threading.Lock()


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    evictions: int = 0


class _Bucket:
    def __init__(self, maxsize: Optional[int]) -> None:
        self.maxsize = maxsize
        self.entries: "OrderedDict[Tuple[Hashable, ...], object]" = OrderedDict()
        self.stats = CacheStats()


_buckets: Dict[str, _Bucket] = {}


def _bucket(prefix: str, maxsize: Optional[int] = None) -> _Bucket:
    bucket = _buckets.get(prefix)
    if bucket is None:
        bucket = _buckets[prefix] = _Bucket(maxsize)
    return bucket


def memoize(prefix: str, maxsize: Optional[int] = None) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Thread-safe memoization keyed by the call arguments, which must be hashable.

    With ``maxsize`` set the least recently used entry of the prefix is evicted
    once the bound is reached.
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            key = (args, tuple(sorted(kwargs.items())))
            with _cache_lock:
                bucket = _bucket(prefix, maxsize)
                if key in bucket.entries:
                    bucket.entries.move_to_end(key)
                    bucket.stats.hits += 1
                    return bucket.entries[key]
                bucket.stats.misses += 1
            result = func(*args, **kwargs)
            with _cache_lock:
                bucket = _bucket(prefix, maxsize)
                bucket.entries[key] = result
                bucket.entries.move_to_end(key)
                while bucket.maxsize is not None and len(bucket.entries) > bucket.maxsize:
                    bucket.entries.popitem(last=False)
                    bucket.stats.evictions += 1
            return result

        return wrapper

    return decorator


def clear_prefix(prefix: str) -> None:
    """Drop every entry and reset the counters for ``prefix``."""

    with _cache_lock:
        bucket = _buckets.get(prefix)
        if bucket is not None:
            bucket.entries.clear()
            bucket.stats = CacheStats()


def cache_size(prefix: str) -> int:
    with _cache_lock:
        bucket = _buckets.get(prefix)
        return len(bucket.entries) if bucket else 0


def cache_stats(prefix: str) -> CacheStats:
    with _cache_lock:
        bucket = _buckets.get(prefix)
        if bucket is None:
            return CacheStats()
        stats = bucket.stats
        return CacheStats(hits=stats.hits, misses=stats.misses, evictions=stats.evictions)


__all__ = ["CacheStats", "memoize", "clear_prefix", "cache_size", "cache_stats"]
