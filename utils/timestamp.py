"""Timestamp formatting utilities."""

import time
from datetime import datetime, timezone


def format_timestamp(epoch_ns=None):
    """Format timestamp as ISO 8601 with microseconds."""
    if epoch_ns is None:
        epoch_ns = time.time_ns()

    seconds, nanos = divmod(epoch_ns, 1_000_000_000)
    dt = datetime.fromtimestamp(seconds, tz=timezone.utc).replace(microsecond=nanos // 1000)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.%f") + "Z"


def format_instant(instant):
    """ISO 8601 with all nine nanosecond digits, e.g. for a last-issued Instant."""
    dt = datetime.fromtimestamp(instant.seconds, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S") + f".{instant.nanoseconds:09d}Z"
