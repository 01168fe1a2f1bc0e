"""TTL validation and expiry classification.

An entry's expiry is an absolute clock reading, or None for "never expires".
An entry is stale once the clock reads at or after its expiry.
"""

from __future__ import annotations

import math
from typing import Optional

from .errors import InvalidTTLError


def validate_ttl(ttl: float, *, name: str = "ttl") -> float:
    value = float(ttl)
    if math.isnan(value) or value < 0:
        raise InvalidTTLError(f"{name} must be non-negative, got {ttl!r}")
    return value


def compute_expiry(ttl: float, now: float) -> Optional[float]:
    # Zero or infinite TTL means the entry never expires
    if ttl <= 0 or math.isinf(ttl):
        return None
    return now + ttl


def is_expired(expires_at: Optional[float], now: float) -> bool:
    return expires_at is not None and now >= expires_at
