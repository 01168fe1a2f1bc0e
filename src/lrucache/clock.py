"""Clock protocol and the default time source.

The cache reads time only through a Clock: a zero-argument callable returning
seconds as a float. Tests inject a fake to drive expiry deterministically.
"""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Contract for any time source used by the cache."""
    def __call__(self) -> float:
        ...


def monotonic_clock() -> float:
    # Looked up at call time so time.monotonic can be monkeypatched
    return time.monotonic()
