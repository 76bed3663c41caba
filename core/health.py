"""Health checks for the nonce service: event loop, clock guard, entropy source."""

import asyncio
import os
import time
from enum import Enum

from utils.timestamp import format_timestamp


class Status(Enum):
    OK = "healthy"
    DEGRADED = "degraded"
    FAIL = "unhealthy"


class CheckResult:
    __slots__ = ("name", "status", "msg")

    def __init__(self, name, status, msg=""):
        self.name = name
        self.status = status
        self.msg = msg

    def to_dict(self):
        return {"name": self.name, "status": self.status.value, "msg": self.msg}


class HealthReport:
    __slots__ = ("status", "checks", "uptime", "timestamp")

    def __init__(self, status, checks, uptime=0):
        self.status = status
        self.checks = checks
        self.uptime = uptime
        self.timestamp = format_timestamp()

    def to_dict(self):
        return {"status": self.status.value,
                "timestamp": self.timestamp,
                "uptime": round(self.uptime, 1),
                "checks": [check.to_dict() for check in self.checks]}


class HealthChecker:
    """Runs registered async checks; result cached for `ttl` seconds."""

    def __init__(self, ttl=1.0, timeout=5.0):
        self._checks = {}
        self._cache = None
        self._cache_time = 0
        self._ttl = ttl
        self._timeout = timeout
        self._start_time = time.monotonic()

    def register(self, name, check_fn, critical=True):
        self._checks[name] = (check_fn, critical)

    async def check(self):
        now = time.monotonic()
        if self._cache and now - self._cache_time < self._ttl:
            return self._cache

        results = []
        for name, (check_fn, is_critical) in self._checks.items():
            try:
                result = await asyncio.wait_for(check_fn(), timeout=self._timeout)
            except asyncio.TimeoutError:
                result = CheckResult(name, Status.FAIL, "timeout")
            except Exception as exc:
                result = CheckResult(name, Status.FAIL, str(exc))
            results.append((result, is_critical))

        status = Status.OK
        for result, is_critical in results:
            if result.status == Status.FAIL and is_critical:
                status = Status.FAIL
            elif result.status != Status.OK and status == Status.OK:
                status = Status.DEGRADED

        self._cache = HealthReport(status, [result for result, _ in results], now - self._start_time)
        self._cache_time = now
        return self._cache


async def check_event_loop():
    await asyncio.sleep(0)
    return CheckResult("loop", Status.OK)


def create_clock_check(clock, threshold_s=1.0):
    """Degraded while the last issued instant runs ahead of the wall clock.

    That happens after the system clock is stepped backward; tokens are still
    unique, but their time segment no longer tracks real time.
    """
    async def check():
        lag_s = clock.lag_ns() / 1e9
        if lag_s > threshold_s:
            return CheckResult("clock", Status.DEGRADED, f"ahead {lag_s:.3f}s")
        return CheckResult("clock", Status.OK, f"issued {clock.issued}")
    return check


def create_entropy_check(random_bytes=os.urandom, size=16):
    async def check():
        try:
            sample = random_bytes(size)
        except Exception as exc:
            return CheckResult("entropy", Status.FAIL, str(exc))
        if len(sample) != size:
            return CheckResult("entropy", Status.FAIL, f"short read {len(sample)}/{size}")
        return CheckResult("entropy", Status.OK)
    return check
