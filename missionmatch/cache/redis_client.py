"""Redis-backed cache store.

The client is created lazily on first use and shared for the process. Socket
timeouts are kept short: a slow or unreachable Redis should cost a fraction of
a second per request, never fail it.
"""

import logging

import redis

from missionmatch.cache.stores import CacheStore, NullCacheStore
from missionmatch.config import REDIS_SOCKET_TIMEOUT, REDIS_URL

logger = logging.getLogger(__name__)

_store: CacheStore | None = None


class RedisCacheStore:
    """CacheStore implementation on top of redis-py."""

    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str, socket_timeout: float = REDIS_SOCKET_TIMEOUT) -> "RedisCacheStore":
        client = redis.Redis.from_url(
            url,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
            decode_responses=True,
        )
        return cls(client)

    def get(self, key: str) -> str | None:
        return self.client.get(key)

    def set_with_ttl(self, key: str, value: str, seconds: int) -> None:
        self.client.set(key, value, ex=seconds)

    def incr(self, key: str) -> int:
        return self.client.incr(key)

    def delete_by_prefix(self, prefix: str) -> int:
        """Delete every key starting with ``prefix``.

        Walks the keyspace with SCAN, so this is an operator tool (full
        purge), not something to run on a request path.
        """
        deleted = 0
        batch: list[str] = []
        for key in self.client.scan_iter(match=f"{prefix}*", count=500):
            batch.append(key)
            if len(batch) >= 500:
                deleted += self.client.delete(*batch)
                batch = []
        if batch:
            deleted += self.client.delete(*batch)
        return deleted


def get_cache_store() -> CacheStore:
    """Get the process-wide cache store.

    Returns a RedisCacheStore when REDIS_URL is set, otherwise a
    NullCacheStore so ranking works without any cache backend.
    """
    global _store
    if _store is None:
        if REDIS_URL:
            _store = RedisCacheStore.from_url(REDIS_URL)
            logger.info("Using Redis result cache")
        else:
            _store = NullCacheStore()
            logger.info("REDIS_URL not set, result cache disabled")
    return _store
