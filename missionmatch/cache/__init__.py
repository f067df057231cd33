"""Result caching for rankings (Redis, or disabled when not configured)."""

from missionmatch.cache.redis_client import RedisCacheStore, get_cache_store
from missionmatch.cache.results import Direction, ResultCache
from missionmatch.cache.stores import CacheStore, NullCacheStore

__all__ = [
    "CacheStore",
    "NullCacheStore",
    "RedisCacheStore",
    "get_cache_store",
    "Direction",
    "ResultCache",
]
