"""In-memory LRU cache with optional TTL expiry and a background sweeper."""

from __future__ import annotations

from .cache import LRUCache
from .clock import Clock, monotonic_clock
from .errors import (
    CacheError,
    InvalidCapacityError,
    InvalidIntervalError,
    InvalidTTLError,
    ValidationError,
)
from .options import CacheOptions

__all__ = [
    "CacheError",
    "CacheOptions",
    "Clock",
    "InvalidCapacityError",
    "InvalidIntervalError",
    "InvalidTTLError",
    "LRUCache",
    "ValidationError",
    "monotonic_clock",
]
