# thompson_regex/utils/__init__.py

from .logging_config import setup_logging, get_logger, get_performance_logger, PerformanceTimer
from .pattern_cache import (
    get_cache_key, get_cached_pattern, cache_pattern, get_cache_stats,
    clear_pattern_cache, resize_cache, is_caching_enabled, set_caching_enabled
)

__all__ = [
    'setup_logging',
    'get_logger',
    'get_performance_logger',
    'PerformanceTimer',
    'get_cache_key',
    'get_cached_pattern',
    'cache_pattern',
    'get_cache_stats',
    'clear_pattern_cache',
    'resize_cache',
    'is_caching_enabled',
    'set_caching_enabled'
]
