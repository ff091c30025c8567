"""
clock.py — Wall-clock source for the store
==========================================
Every timestamp the store writes (submission times, comment times, topic
created/modified times) comes from one of these. Anything that is a
zero-argument callable returning integer nanoseconds will do, which is how
the tests pin time down.
"""

import time
from typing import Callable

Clock = Callable[[], int]


class WallClock:
    """Nanoseconds since the Unix epoch, never going backwards."""

    def __init__(self, source: Clock = time.time_ns) -> None:
        self._source = source
        self._last = 0

    def __call__(self) -> int:
        now = self._source()
        if now < self._last:
            now = self._last
        self._last = now
        return now
