"""
Record cache keyed by entity type and primary key.

Every broker operation stores the instances it loads here, and the by-id
broker answers from here before touching the database. Callers that go
through the cache share one in-memory instance per ``(type, key)``.

Manifesto:
    The cache is an explicit collaborator, injected into each record as the
    ``cache`` dependency, with two invalidation rules:

    - **create / write** refresh the entry with the written instance
    - **delete** evicts the entry

    Writes to one key never touch another key's entry.

Architecture:
    ::

        CacheBackend (Protocol)
        └── InMemoryCache   : single-process, bounded LRU, optional TTL

        RecordCache(backend)
            get(type_name, key)   → record | None
            put(type_name, key, record)
            evict(type_name, key)
            clear_type(type_name)
            clear()

Examples:
    >>> cache = RecordCache(InMemoryCache(max_size=100, default_ttl_seconds=None))
    >>> cache.put("Screen", 1, screen)
    >>> cache.get("Screen", 1) is screen
    True

Guardrails:
    ❌ DON'T: Share an InMemoryCache between processes
    ✅ DO: Treat the cache as request-scoped or single-worker state

    ❌ DON'T: Serialize cached records (they are live, mutable handles)
    ✅ DO: Store the instance itself; readers get reference semantics

Tags:
    cache, in-memory, lru, campfire
"""

from __future__ import annotations

import time
from typing import Any, Protocol

from campfire.core.logging import get_logger

logger = get_logger(__name__)


class CacheBackend(Protocol):
    """Protocol for cache backend implementations."""

    def get(self, key: str) -> Any | None:
        """Retrieve a value by key, or ``None`` if not found or expired."""
        ...

    def set(self, key: str, value: Any, *, ttl_seconds: int | None = None) -> None:
        """Store a value with optional TTL."""
        ...

    def delete(self, key: str) -> None:
        """Remove a key from the cache. No-op if key does not exist."""
        ...

    def exists(self, key: str) -> bool:
        """Check if a key exists and has not expired."""
        ...

    def clear(self) -> None:
        """Remove all keys from the cache."""
        ...


class InMemoryCache:
    """Bounded in-memory cache with optional TTL.

    Uses LRU eviction when ``max_size`` is reached. Values are stored as-is
    (no copy, no serialization).

    Example:
        cache = InMemoryCache(max_size=500, default_ttl_seconds=1800)
        cache.set("Screen:id:1", screen)
    """

    def __init__(
        self,
        *,
        max_size: int = 10_000,
        default_ttl_seconds: int | None = None,
    ):
        self._store: dict[str, tuple[Any, float | None]] = {}
        self._access_order: list[str] = []
        self._max_size = max_size
        self._default_ttl = default_ttl_seconds

    def get(self, key: str) -> Any | None:
        if key not in self._store:
            return None

        value, expires_at = self._store[key]

        if expires_at is not None and time.time() > expires_at:
            self.delete(key)
            return None

        self._touch(key)
        return value

    def set(self, key: str, value: Any, *, ttl_seconds: int | None = None) -> None:
        ttl = ttl_seconds if ttl_seconds is not None else self._default_ttl
        expires_at = (time.time() + ttl) if ttl else None

        if key not in self._store and len(self._store) >= self._max_size:
            if self._access_order:
                lru_key = self._access_order.pop(0)
                self._store.pop(lru_key, None)

        self._store[key] = (value, expires_at)
        self._touch(key)

    def delete(self, key: str) -> None:
        self._store.pop(key, None)
        if key in self._access_order:
            self._access_order.remove(key)

    def exists(self, key: str) -> bool:
        if key not in self._store:
            return False

        _, expires_at = self._store[key]
        if expires_at is not None and time.time() > expires_at:
            self.delete(key)
            return False

        return True

    def clear(self) -> None:
        self._store.clear()
        self._access_order.clear()

    def keys(self) -> list[str]:
        return list(self._store.keys())

    def size(self) -> int:
        """Return current number of cached keys."""
        return len(self._store)

    def _touch(self, key: str) -> None:
        if key in self._access_order:
            self._access_order.remove(key)
        self._access_order.append(key)


class RecordCache:
    """Entity-aware facade over a :class:`CacheBackend`.

    Keys have the form ``"<type name>:id:<primary key>"``; the key is
    stringified so ``1`` and ``"1"`` address the same entry.
    """

    def __init__(self, backend: CacheBackend | None = None):
        self._backend: CacheBackend = backend or InMemoryCache(default_ttl_seconds=None)

    @property
    def backend(self) -> CacheBackend:
        return self._backend

    @staticmethod
    def make_key(type_name: str, key: Any) -> str:
        return f"{type_name}:id:{key}"

    def get(self, type_name: str, key: Any) -> Any | None:
        return self._backend.get(self.make_key(type_name, key))

    def put(self, type_name: str, key: Any, record: Any) -> None:
        if key is None:
            return
        self._backend.set(self.make_key(type_name, key), record)

    def evict(self, type_name: str, key: Any) -> None:
        self._backend.delete(self.make_key(type_name, key))
        logger.debug("record_cache_evicted", entity=type_name, key=key)

    def contains(self, type_name: str, key: Any) -> bool:
        return self._backend.exists(self.make_key(type_name, key))

    def clear_type(self, type_name: str) -> None:
        """Drop every cached instance of one entity type."""
        keys = getattr(self._backend, "keys", None)
        if keys is None:
            # Backend cannot enumerate; fall back to a full clear
            self._backend.clear()
            return
        prefix = f"{type_name}:id:"
        for cache_key in keys():
            if cache_key.startswith(prefix):
                self._backend.delete(cache_key)

    def clear(self) -> None:
        self._backend.clear()


# ── Process default ──────────────────────────────────────────────────────

_record_cache: RecordCache | None = None


def get_record_cache() -> RecordCache:
    """Get the process-wide record cache, creating it from settings on first use."""
    global _record_cache
    if _record_cache is None:
        from campfire.core.settings import get_settings

        settings = get_settings()
        _record_cache = RecordCache(
            InMemoryCache(
                max_size=settings.cache_max_size,
                default_ttl_seconds=settings.cache_ttl_seconds,
            )
        )
    return _record_cache


def set_record_cache(cache: RecordCache | None) -> None:
    """Replace (or with ``None``, reset) the process-wide record cache."""
    global _record_cache
    _record_cache = cache


__all__ = [
    "CacheBackend",
    "InMemoryCache",
    "RecordCache",
    "get_record_cache",
    "set_record_cache",
]
