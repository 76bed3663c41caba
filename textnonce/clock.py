"""
Monotonic clock guard.

Wall-clock readings are adjusted so every Instant handed out by one
MonotonicClock is strictly greater than the previous one, even when the
clock has coarse resolution or is stepped backward (NTP, manual changes).
"""

import threading
import time
from typing import NamedTuple

from internal.logging import get_logger

NANOS_PER_SECOND = 1_000_000_000


class Instant(NamedTuple):
    """Point in time as (seconds, nanoseconds) since the Unix epoch.

    Tuple ordering gives the lexicographic (seconds, nanoseconds) comparison.
    """

    seconds: int
    nanoseconds: int

    @classmethod
    def from_nanos(cls, nanos):
        seconds, nanoseconds = divmod(nanos, NANOS_PER_SECOND)
        return cls(seconds, nanoseconds)

    def to_nanos(self):
        return self.seconds * NANOS_PER_SECOND + self.nanoseconds

    def successor(self):
        """Instant one nanosecond later, carrying into seconds."""
        if self.nanoseconds == NANOS_PER_SECOND - 1:
            return Instant(self.seconds + 1, 0)
        return Instant(self.seconds, self.nanoseconds + 1)


class MonotonicClock:
    """Owns the last-issued Instant and serializes updates to it."""

    def __init__(self, time_source=time.time_ns, rollback_warn_ns=NANOS_PER_SECOND):
        self._time_source = time_source
        self._rollback_warn_ns = rollback_warn_ns
        self._lock = threading.Lock()
        self._last = None
        self._lagging = False
        self._log = get_logger()
        self.issued = 0

    @property
    def last(self):
        """Most recently issued Instant, or None before the first call."""
        return self._last

    def now(self):
        return Instant.from_nanos(self._time_source())

    def next_instant(self):
        """Return an Instant strictly greater than any returned before."""
        with self._lock:
            now = self.now()
            last = self._last
            if last is None or now > last:
                self._last = now
                if self._lagging:
                    self._lagging = False
                    self._log.info("wall clock caught up", last=last.to_nanos())
            else:
                self._last = last.successor()
                if not self._lagging and last.to_nanos() - now.to_nanos() > self._rollback_warn_ns:
                    self._lagging = True
                    self._log.warn("wall clock behind last issued instant",
                                   lag_ns=last.to_nanos() - now.to_nanos())
            self.issued += 1
            return self._last

    def lag_ns(self):
        """Nanoseconds the last-issued Instant is ahead of the wall clock."""
        last = self._last
        if last is None:
            return 0
        return max(0, last.to_nanos() - self.now().to_nanos())

    def reset(self):
        with self._lock:
            self._last = None
            self._lagging = False
            self.issued = 0
