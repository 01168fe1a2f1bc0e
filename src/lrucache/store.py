"""Key index and recency order for cache entries.

An OrderedDict serves as both the key->entry map and the doubly-linked
recency list: the last position is the most-recently-used entry, the first
position is the least-recently-used one. Both views share one key set, so
they can never disagree on size or membership.

Callers hold the cache lock around every method here.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Generic, Hashable, Iterator, List, Optional, Tuple, TypeVar

from .expiration import is_expired

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass(slots=True)
class CacheEntry(Generic[V]):
    # Stores value + absolute expiry reading (None = never expires)
    value: V
    expires_at: Optional[float] = None

    def expired(self, now: float) -> bool:
        return is_expired(self.expires_at, now)


class EntryStore(Generic[K, V]):
    def __init__(self) -> None:
        self._entries: "OrderedDict[K, CacheEntry[V]]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def lookup(self, key: K) -> Optional[CacheEntry[V]]:
        return self._entries.get(key)

    def insert(self, key: K, entry: CacheEntry[V]) -> None:
        # New or replaced entries always land at the most-recent end
        self._entries[key] = entry
        self._entries.move_to_end(key, last=True)

    def promote(self, key: K) -> None:
        self._entries.move_to_end(key, last=True)

    def remove(self, key: K) -> Optional[CacheEntry[V]]:
        return self._entries.pop(key, None)

    def pop_oldest(self) -> Optional[Tuple[K, CacheEntry[V]]]:
        if not self._entries:
            return None
        return self._entries.popitem(last=False)

    def oldest_first(self) -> Iterator[Tuple[K, CacheEntry[V]]]:
        return iter(self._entries.items())

    def newest_first(self) -> Iterator[Tuple[K, CacheEntry[V]]]:
        return reversed(self._entries.items())

    def remove_expired(self, now: float) -> List[K]:
        """Remove every stale entry, scanning from the oldest end.

        The scan never stops at the first live entry: TTLs differ per entry,
        so a short-lived entry can sit behind a long-lived one.
        """
        stale = [key for key, entry in self._entries.items() if entry.expired(now)]
        for key in stale:
            del self._entries[key]
        return stale

    def drop_expired_tail(self, now: float) -> int:
        # Only the contiguous stale run at the least-recent end
        dropped = 0
        while self._entries:
            key, entry = next(iter(self._entries.items()))
            if not entry.expired(now):
                break
            del self._entries[key]
            dropped += 1
        return dropped

    def clear(self) -> None:
        self._entries.clear()
