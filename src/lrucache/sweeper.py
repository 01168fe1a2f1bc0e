"""Background sweeper that periodically purges expired cache entries.

The sweeper is a daemon thread that waits on a stop event for one interval
per tick. Stopping sets the event and joins the thread, so no sweep starts
after stop() returns. A sweep already in progress is allowed to finish.

A bound-method sweep target is held weakly: once its owner is collected the
thread exits at its next tick instead of keeping the owner alive.
"""

from __future__ import annotations

import inspect
import logging
import math
import threading
import time
import weakref
from typing import Callable, Optional

logger = logging.getLogger(__name__)

MIN_SWEEP_INTERVAL = 0.01

# Longest single Event.wait(); longer intervals are waited out in chunks
MAX_WAIT_CHUNK = min(threading.TIMEOUT_MAX, 3600.0)


def default_sweep_interval(default_ttl: float) -> float:
    # Half the default TTL, kept within [MIN_SWEEP_INTERVAL, default_ttl]
    if default_ttl <= 0 or not math.isfinite(default_ttl):
        return 0.0
    interval = default_ttl / 2
    if interval < MIN_SWEEP_INTERVAL:
        interval = MIN_SWEEP_INTERVAL
    if interval > default_ttl:
        interval = default_ttl
    return interval


class Sweeper:
    def __init__(self, *, interval: float, sweep: Callable[[], int], name: str = "lru-cache-sweeper") -> None:
        if not (math.isfinite(interval) and interval > 0):
            raise ValueError(f"sweep interval must be a finite positive number, got {interval!r}")
        self._interval = float(interval)
        self._sweep_ref: Callable[[], Optional[Callable[[], int]]]
        if inspect.ismethod(sweep):
            self._sweep_ref = weakref.WeakMethod(sweep)
        else:
            self._sweep_ref = lambda: sweep
        self._name = name
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()
        logger.debug("Started %s with interval %.3fs", self._name, self._interval)

    def signal_stop(self) -> None:
        # Never blocks; safe from finalizers and the sweeper thread itself
        self._stop.set()

    def stop(self) -> None:
        """Signal the sweeper to exit and wait until it has.

        Safe to call more than once and from several threads.
        """
        self._stop.set()
        thread = self._thread
        if thread is None or thread is threading.current_thread() or not thread.is_alive():
            return
        thread.join()
        logger.debug("Stopped %s", self._name)

    def _wait_tick(self) -> bool:
        # True once stop is signalled
        deadline = time.monotonic() + self._interval
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return self._stop.is_set()
            if self._stop.wait(min(remaining, MAX_WAIT_CHUNK)):
                return True

    def _run(self) -> None:
        while not self._wait_tick():
            sweep = self._sweep_ref()
            if sweep is None:
                logger.debug("%s target was collected; exiting", self._name)
                return
            removed = sweep()
            # Drop the strong reference before sleeping again
            sweep = None
            if removed:
                logger.debug("%s removed %d expired entries", self._name, removed)
