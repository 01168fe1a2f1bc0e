"""Environment helpers and cache defaults.

Provides small helpers to read typed environment variables and exposes the
default capacity, TTL and cleanup interval used by CacheOptions.from_env().
"""

from __future__ import annotations

import os
from typing import Optional


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def _env_optional_float(name: str) -> Optional[float]:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw.strip())
    except ValueError:
        return None


def default_capacity() -> int:
    return _env_int("LRU_CACHE_CAPACITY", 1024)


def default_ttl() -> float:
    # Seconds; 0 disables expiry
    return _env_float("LRU_CACHE_DEFAULT_TTL", 0.0)


def cleanup_interval() -> Optional[float]:
    # Seconds; unset derives from the default TTL, 0 disables the sweeper
    return _env_optional_float("LRU_CACHE_CLEANUP_INTERVAL")
