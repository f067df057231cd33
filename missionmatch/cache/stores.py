"""Cache store interface and the no-backend implementation."""

from typing import Protocol


class CacheStore(Protocol):
    """Minimal key-value operations the result cache relies on.

    Implementations may raise on backend failure; callers are responsible
    for treating cache I/O as best-effort.
    """

    def get(self, key: str) -> str | None: ...

    def set_with_ttl(self, key: str, value: str, seconds: int) -> None: ...

    def incr(self, key: str) -> int: ...

    def delete_by_prefix(self, prefix: str) -> int: ...


class NullCacheStore:
    """Store used when no cache backend is configured. Every read misses."""

    def get(self, key: str) -> str | None:
        return None

    def set_with_ttl(self, key: str, value: str, seconds: int) -> None:
        return None

    def incr(self, key: str) -> int:
        return 0

    def delete_by_prefix(self, prefix: str) -> int:
        return 0
