"""Immutable options describing how a cache expires and sweeps entries.

Field groups:
- Expiry: default_ttl
- Sweeper: cleanup_interval
- Testing: clock
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from . import config
from .clock import Clock, monotonic_clock
from .errors import InvalidIntervalError
from .expiration import validate_ttl
from .sweeper import default_sweep_interval


@dataclass(frozen=True)
class CacheOptions:
    """Options accepted by LRUCache.

    default_ttl applies to set() calls without an explicit ttl; 0 disables
    expiry. cleanup_interval of 0 disables the sweeper; None derives it from
    default_ttl. clock overrides the time source.
    """

    default_ttl: float = 0.0
    cleanup_interval: Optional[float] = None
    clock: Optional[Clock] = None

    def __post_init__(self) -> None:
        validate_ttl(self.default_ttl, name="default_ttl")
        interval = self.cleanup_interval
        if interval is not None and not (math.isfinite(interval) and interval >= 0):
            raise InvalidIntervalError(
                f"cleanup_interval must be a finite non-negative number, got {interval!r}"
            )

    @classmethod
    def from_env(cls, *, clock: Optional[Clock] = None) -> "CacheOptions":
        return cls(
            default_ttl=config.default_ttl(),
            cleanup_interval=config.cleanup_interval(),
            clock=clock,
        )

    def resolved_clock(self) -> Clock:
        return self.clock if self.clock is not None else monotonic_clock

    def resolved_cleanup_interval(self) -> float:
        if self.cleanup_interval is None:
            return default_sweep_interval(self.default_ttl)
        return float(self.cleanup_interval)
