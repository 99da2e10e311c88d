"""
Centralized cache for compiled automata.

Compiled automata are immutable, so one instance can be handed to every
caller that asks for the same pattern under the same state limit. The cache
uses an LRU eviction policy and keeps hit/miss statistics for monitoring.
"""

import hashlib
import threading
import time
from collections import OrderedDict
from typing import Any, Dict, Optional, Tuple

from thompson_regex.config import RegexConfig

try:
    config = RegexConfig.from_env()
    CACHE_SIZE_LIMIT = config.performance.cache_size_limit
    ENABLE_CACHING = config.performance.enable_caching
except ValueError:
    CACHE_SIZE_LIMIT = RegexConfig().performance.cache_size_limit
    ENABLE_CACHING = True


class LRUPatternCache:
    """
    Thread-safe LRU cache mapping pattern keys to compiled automata.
    """
    def __init__(self, max_size: int = CACHE_SIZE_LIMIT):
        if max_size < 1:
            raise ValueError(f"Cache size must be at least 1, got {max_size}")
        self.cache = OrderedDict()
        self.max_size = max_size
        self.lock = threading.RLock()
        self.stats = {
            'hits': 0,
            'misses': 0,
            'evictions': 0,
            'compilation_time_saved': 0.0,
            'cache_efficiency': 0.0,
            'last_reset': time.time()
        }

    def get(self, key: str) -> Optional[Tuple[Any, float]]:
        """Get an item from the cache, marking it most recently used."""
        with self.lock:
            if key in self.cache:
                automaton, comp_time = self.cache.pop(key)
                self.cache[key] = (automaton, comp_time)

                self.stats['hits'] += 1
                self.stats['compilation_time_saved'] += comp_time
                self._update_efficiency()
                return (automaton, comp_time)

            self.stats['misses'] += 1
            self._update_efficiency()
            return None

    def put(self, key: str, automaton: Any, compilation_time: float) -> None:
        """Add an item to the cache, evicting the least recently used entries."""
        with self.lock:
            if key in self.cache:
                self.cache.pop(key)
            while len(self.cache) >= self.max_size:
                self.cache.popitem(last=False)
                self.stats['evictions'] += 1
            self.cache[key] = (automaton, compilation_time)

    def _update_efficiency(self) -> None:
        total_lookups = self.stats['hits'] + self.stats['misses']
        if total_lookups > 0:
            self.stats['cache_efficiency'] = (self.stats['hits'] / total_lookups) * 100

    def clear(self) -> None:
        """Clear the cache and reset statistics."""
        with self.lock:
            self.cache.clear()
            self.stats.update({
                'hits': 0,
                'misses': 0,
                'evictions': 0,
                'compilation_time_saved': 0.0,
                'cache_efficiency': 0.0,
                'last_reset': time.time()
            })

    def resize(self, new_size: int) -> None:
        """Resize the cache, removing oldest entries if necessary."""
        if new_size < 1:
            raise ValueError(f"Cache size must be at least 1, got {new_size}")
        with self.lock:
            self.max_size = new_size
            while len(self.cache) > new_size:
                self.cache.popitem(last=False)
                self.stats['evictions'] += 1

    def __len__(self) -> int:
        with self.lock:
            return len(self.cache)

    def get_stats(self) -> Dict[str, Any]:
        """Get a copy of current cache statistics."""
        with self.lock:
            stats_copy = self.stats.copy()
            stats_copy['cache_age_seconds'] = time.time() - self.stats['last_reset']
            stats_copy['size'] = len(self.cache)
            stats_copy['max_size'] = self.max_size
            return stats_copy


# Global cache instance
_PATTERN_CACHE = LRUPatternCache(CACHE_SIZE_LIMIT)


def get_cache_key(pattern_text: str, max_states: int) -> str:
    """
    Generate a consistent cache key for pattern caching.

    Args:
        pattern_text: The pattern text
        max_states: State limit the pattern is compiled under

    Returns:
        A hash string to use as a cache key
    """
    return hashlib.md5(f"{max_states}:{pattern_text}".encode("utf-8")).hexdigest()


def get_cached_pattern(key: str) -> Optional[Tuple[Any, float]]:
    """
    Get a cached automaton by key.

    Returns:
        Tuple of (automaton, compilation_time) if found in cache, or None
    """
    return _PATTERN_CACHE.get(key)


def cache_pattern(key: str, automaton: Any, compilation_time: float) -> None:
    """Cache a compiled automaton."""
    _PATTERN_CACHE.put(key, automaton, compilation_time)


def get_cache_stats() -> Dict[str, Any]:
    """Get detailed cache statistics for monitoring."""
    return _PATTERN_CACHE.get_stats()


def clear_pattern_cache() -> None:
    """Clear the pattern cache and reset statistics."""
    _PATTERN_CACHE.clear()


def get_pattern_cache() -> LRUPatternCache:
    """Get the global pattern cache instance."""
    return _PATTERN_CACHE


def resize_cache(new_size: int) -> None:
    """Resize the pattern cache."""
    _PATTERN_CACHE.resize(new_size)


def is_caching_enabled() -> bool:
    """Check the default used by ``compile`` when no ``use_cache`` is given."""
    return ENABLE_CACHING


def set_caching_enabled(enabled: bool) -> None:
    """Enable or disable pattern caching."""
    global ENABLE_CACHING
    ENABLE_CACHING = enabled
