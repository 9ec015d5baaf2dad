"""
Clock Sources
=============

Wall-clock sampling for frame delta timing. The game reads time only
through these objects so tests can drive it deterministically.
"""

from __future__ import annotations

import time
from typing import Optional


class MonotonicClock:
    """Seconds from time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()


class ManualClock:
    """
    Clock that only moves when told to.

    Used by tests and headless runs to feed exact frame deltas.
    """

    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> float:
        """Move time forward and return the new reading."""
        self._now += seconds
        return self._now


class FrameTimer:
    """
    Turns consecutive clock samples into frame deltas.

    The first sample after a reset yields 0.0.
    """

    def __init__(self, clock):
        self._clock = clock
        self._last: Optional[float] = None

    @property
    def clock(self):
        return self._clock

    def reset(self) -> None:
        """Anchor the next delta to the current time."""
        self._last = self._clock.now()

    def sample(self) -> float:
        """
        Take one clock sample.

        Returns:
            Seconds since the previous sample (or reset), never negative.
        """
        now = self._clock.now()
        if self._last is None:
            self._last = now
            return 0.0
        dt = now - self._last
        self._last = now
        return max(0.0, dt)
