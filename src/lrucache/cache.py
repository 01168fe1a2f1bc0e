"""Thread-safe in-memory LRU cache with optional per-entry TTL.

Entries are evicted least-recently-used first once capacity is exceeded.
Expired entries are removed lazily when read and eagerly by an optional
background sweeper. A single lock serializes every operation, reads
included, because a hit reorders the recency list.
"""

from __future__ import annotations

import logging
import threading
import weakref
from types import TracebackType
from typing import Generic, Hashable, List, Optional, Type, TypeVar

from . import config
from .clock import Clock
from .errors import InvalidCapacityError
from .expiration import compute_expiry, validate_ttl
from .options import CacheOptions
from .store import CacheEntry, EntryStore
from .sweeper import Sweeper

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
D = TypeVar("D")


class LRUCache(Generic[K, V]):
    """Capacity-bounded LRU cache with TTL expiry.

    Example:
        with LRUCache[str, int](2, default_ttl=30.0) as cache:
            cache.set("a", 1)
            cache.set("b", 2, ttl=0)  # never expires
            cache.get("a")
    """

    def __init__(
        self,
        capacity: int,
        *,
        default_ttl: float = 0.0,
        cleanup_interval: Optional[float] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise InvalidCapacityError(f"capacity must be a positive integer, got {capacity!r}")

        options = CacheOptions(default_ttl=default_ttl, cleanup_interval=cleanup_interval, clock=clock)

        self._capacity = capacity
        self._default_ttl = float(options.default_ttl)
        self._clock = options.resolved_clock()
        self._store: EntryStore[K, V] = EntryStore()
        self._lock = threading.Lock()
        self._closed = False

        self._sweeper: Optional[Sweeper] = None
        interval = options.resolved_cleanup_interval()
        if interval > 0:
            self._sweeper = Sweeper(interval=interval, sweep=self.purge_expired)
            self._sweeper.start()
            # A dropped cache stops its sweeper without an explicit close()
            weakref.finalize(self, self._sweeper.signal_stop)

    @classmethod
    def from_options(cls, capacity: int, options: CacheOptions) -> "LRUCache[K, V]":
        return cls(
            capacity,
            default_ttl=options.default_ttl,
            cleanup_interval=options.cleanup_interval,
            clock=options.clock,
        )

    @classmethod
    def from_env(cls, *, clock: Optional[Clock] = None) -> "LRUCache[K, V]":
        return cls.from_options(config.default_capacity(), CacheOptions.from_env(clock=clock))

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def default_ttl(self) -> float:
        return self._default_ttl

    @property
    def closed(self) -> bool:
        return self._closed

    def set(self, key: K, value: V, ttl: Optional[float] = None) -> None:
        """Insert or overwrite key and mark it most-recently-used.

        ttl=None applies the default TTL; 0 stores the entry without expiry.
        A negative ttl raises InvalidTTLError and leaves the cache unchanged.
        Overwriting replaces both value and expiry.
        """
        effective_ttl = self._default_ttl if ttl is None else validate_ttl(ttl)
        now = self._clock()
        expires_at = compute_expiry(effective_ttl, now)

        with self._lock:
            entry = self._store.lookup(key)
            if entry is not None:
                entry.value = value
                entry.expires_at = expires_at
                self._store.promote(key)
                return

            self._store.insert(key, CacheEntry(value=value, expires_at=expires_at))
            if len(self._store) > self._capacity:
                self._enforce_capacity(now)

    def set_with_ttl(self, key: K, value: V, ttl: float) -> None:
        self.set(key, value, ttl=ttl)

    def get(self, key: K, default: Optional[D] = None) -> Optional[V | D]:
        # Returns default on a miss; pass a sentinel to tell a stored None apart
        now = self._clock()
        with self._lock:
            entry = self._store.lookup(key)
            if entry is None:
                return default
            if entry.expired(now):
                self._store.remove(key)
                return default
            self._store.promote(key)
            return entry.value

    def peek(self, key: K, default: Optional[D] = None) -> Optional[V | D]:
        # Same as get() but leaves the recency order untouched
        now = self._clock()
        with self._lock:
            entry = self._store.lookup(key)
            if entry is None:
                return default
            if entry.expired(now):
                self._store.remove(key)
                return default
            return entry.value

    def contains(self, key: K) -> bool:
        now = self._clock()
        with self._lock:
            entry = self._store.lookup(key)
            return entry is not None and not entry.expired(now)

    def __contains__(self, key: object) -> bool:
        return self.contains(key)  # type: ignore[arg-type]

    def delete(self, key: K) -> bool:
        with self._lock:
            return self._store.remove(key) is not None

    def len(self) -> int:
        """Number of live entries; expired ones are purged first."""
        now = self._clock()
        with self._lock:
            self._store.remove_expired(now)
            return len(self._store)

    def __len__(self) -> int:
        return self.len()

    def keys(self) -> List[K]:
        # Most- to least-recently-used, without promoting anything
        now = self._clock()
        with self._lock:
            return [key for key, entry in self._store.newest_first() if not entry.expired(now)]

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def purge_expired(self) -> int:
        """Remove every expired entry now; returns how many were removed."""
        now = self._clock()
        with self._lock:
            return len(self._store.remove_expired(now))

    def close(self) -> None:
        """Stop the background sweeper and wait for it to exit.

        Idempotent. The cache stays usable afterwards; only sweeping stops.
        """
        self._closed = True
        sweeper = self._sweeper
        if sweeper is not None:
            # Joined outside the lock: an in-flight sweep needs it to finish
            sweeper.stop()

    def __enter__(self) -> "LRUCache[K, V]":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def _enforce_capacity(self, now: float) -> None:
        # Stale entries at the LRU end go first; they are already logically absent
        dropped = self._store.drop_expired_tail(now)
        if dropped:
            logger.debug("Dropped %d expired entries to make room", dropped)

        while len(self._store) > self._capacity:
            evicted = self._store.pop_oldest()
            if evicted is None:
                return
            logger.debug("Evicted least-recently-used key %r", evicted[0])
