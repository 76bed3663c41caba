"""Unit tests for the monotonic clock guard."""

import threading

import pytest
from textnonce.clock import Instant, MonotonicClock, NANOS_PER_SECOND


class TestInstant:
    """Tests for Instant ordering and arithmetic."""

    def test_from_nanos(self):
        """Nanosecond count splits into seconds and remainder."""
        assert Instant.from_nanos(1_000_000 * NANOS_PER_SECOND + 5) == Instant(1_000_000, 5)

    def test_to_nanos_inverse(self):
        """to_nanos undoes from_nanos."""
        assert Instant(3, 999_999_999).to_nanos() == 3_999_999_999

    def test_successor_increments_nanos(self):
        """successor adds one nanosecond."""
        assert Instant(10, 4).successor() == Instant(10, 5)

    def test_successor_carries(self):
        """Nanosecond overflow carries into seconds."""
        assert Instant(10, 999_999_999).successor() == Instant(11, 0)

    def test_lexicographic_order(self):
        """Seconds compare first, then nanoseconds."""
        assert Instant(1, 999_999_999) < Instant(2, 0)
        assert Instant(2, 0) < Instant(2, 1)


class TestMonotonicClock:
    """Tests for MonotonicClock.next_instant."""

    def test_first_call_uses_wall_clock(self, clock):
        """First instant is the wall clock reading."""
        assert clock.last is None
        assert clock.next_instant() == Instant(1_000_000, 0)
        assert clock.last == Instant(1_000_000, 0)

    def test_stalled_clock_increments(self, clock):
        """Repeated reads of the same wall time still increase."""
        instants = [clock.next_instant() for _ in range(5)]
        assert instants == [Instant(1_000_000, n) for n in range(5)]

    def test_advancing_clock_is_used(self, clock, time_source):
        """A wall clock ahead of last is taken as is."""
        clock.next_instant()
        time_source.advance(500)
        assert clock.next_instant() == Instant(1_000_000, 500)

    def test_backward_clock_stays_monotonic(self, clock, time_source):
        """Stepping the wall clock back never produces a smaller instant."""
        first = clock.next_instant()
        time_source.set(999_000)
        second = clock.next_instant()
        third = clock.next_instant()
        assert first < second < third
        assert second == Instant(1_000_000, 1)

    def test_carry_across_second(self, time_source):
        """Stalled clock at the end of a second carries over."""
        time_source.set(5, 999_999_999)
        clock = MonotonicClock(time_source=time_source)
        assert clock.next_instant() == Instant(5, 999_999_999)
        assert clock.next_instant() == Instant(6, 0)

    def test_strictly_increasing_mixed_sequence(self, clock, time_source):
        """Any mix of stalls, steps forward and back stays strictly increasing."""
        steps = [0, 0, 3, -10, 0, 1_000_000, -2_000_000_000, 0, 5, 2_500_000_000]
        instants = []
        for step in steps:
            time_source.advance(step)
            instants.append(clock.next_instant())
        assert all(a < b for a, b in zip(instants, instants[1:]))

    def test_issued_counter_and_reset(self, clock):
        """issued counts calls; reset clears state."""
        for _ in range(3):
            clock.next_instant()
        assert clock.issued == 3
        clock.reset()
        assert clock.issued == 0
        assert clock.last is None

    def test_lag_ns(self, clock, time_source):
        """lag_ns reports how far last-issued runs ahead of the wall clock."""
        assert clock.lag_ns() == 0
        clock.next_instant()
        time_source.set(999_998)
        assert clock.lag_ns() == 2 * NANOS_PER_SECOND
        time_source.set(1_000_001)
        assert clock.lag_ns() == 0

    def test_real_clock_burst(self):
        """System clock burst is strictly increasing."""
        clock = MonotonicClock()
        instants = [clock.next_instant() for _ in range(1000)]
        assert all(a < b for a, b in zip(instants, instants[1:]))

    def test_threads_get_distinct_instants(self):
        """Concurrent callers never receive the same instant."""
        clock = MonotonicClock(time_source=lambda: 42)
        results = []
        results_lock = threading.Lock()

        def worker():
            local = [clock.next_instant() for _ in range(500)]
            with results_lock:
                results.extend(local)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 4000
        assert len(set(results)) == 4000
        assert max(results) == Instant(0, 42 + 3999)


class TestRollbackLogging:
    """Clock rollback is logged once, not on every call."""

    def test_warns_once_and_recovers(self, time_source):
        """Warn on entering lag, info on catching up."""
        records = []

        class RecordingLogger:
            def info(self, message, **kwargs):
                records.append(("info", message))

            def warn(self, message, error=None, **kwargs):
                records.append(("warn", message))

        clock = MonotonicClock(time_source=time_source, rollback_warn_ns=NANOS_PER_SECOND)
        clock._log = RecordingLogger()
        clock.next_instant()
        time_source.set(999_990)
        clock.next_instant()
        clock.next_instant()
        assert [level for level, _ in records] == ["warn"]

        time_source.set(1_000_010)
        clock.next_instant()
        assert [level for level, _ in records] == ["warn", "info"]

    def test_small_regression_not_logged(self, time_source):
        """Regressions under the threshold stay quiet."""
        records = []

        class RecordingLogger:
            def info(self, message, **kwargs):
                records.append(message)

            def warn(self, message, error=None, **kwargs):
                records.append(message)

        clock = MonotonicClock(time_source=time_source)
        clock._log = RecordingLogger()
        clock.next_instant()
        time_source.advance(-1000)
        clock.next_instant()
        assert records == []
