"""Crash capture for the nonce server.

Each record is one JSON line in the crash file, keyed by a tracking id and
carrying a snapshot of the token clock (issued count, last instant, lag), so
a crash after a clock rollback can be told apart from an unrelated failure.
"""

import json
import os
import sys
import traceback

from core.errors import new_tracking_id
from utils.timestamp import format_timestamp

_crash_log = "logs/crash.log"
_generator = None


def configure(crash_file, generator=None):
    """Set the crash file and the generator whose clock state is recorded."""
    global _crash_log, _generator
    _crash_log = crash_file
    if generator is not None:
        _generator = generator


def clock_snapshot():
    if _generator is None:
        return None
    clock = _generator.clock
    last = clock.last
    return {"issued": clock.issued, "last_instant": list(last) if last else None, "lag_ns": clock.lag_ns()}


def _append(record):
    """Never raises."""
    try:
        log_dir = os.path.dirname(_crash_log)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        with open(_crash_log, "a") as f:
            f.write(json.dumps(record, default=str) + "\n")
    except Exception:
        pass


def _record(exc_type, exc_value, exc_tb, source, context=None):
    record = {
        "id": new_tracking_id(),
        "timestamp": format_timestamp(),
        "source": source,
        "type": exc_type.__name__ if exc_type else "Unknown",
        "msg": str(exc_value) if exc_value else "",
        "traceback": "".join(traceback.format_exception(exc_type, exc_value, exc_tb)) if exc_type else None,
        "clock": clock_snapshot(),
    }
    if context:
        record["context"] = context
    _append(record)
    return record


def log_crash(exc_type, exc_value, exc_tb):
    """sys.excepthook replacement: banner to stderr plus crash record."""
    record = _record(exc_type, exc_value, exc_tb, "main")
    banner = "=" * 60
    sys.stderr.write(f"\n{banner}\nCRASH [{record['id']}] {record['timestamp']}\n{banner}\n")
    sys.stderr.write(f"{record['type']}: {record['msg']}\n{'-' * 60}\n{record['traceback']}{banner}\n\n")
    return record["id"]


def create_async_handler(logger=None):
    """Event loop exception handler writing crash records."""
    def handler(loop, context):
        exc = context.get("exception")
        if exc is None:
            record = _record(None, None, None, "loop", {"message": context.get("message", "Unknown")})
        else:
            record = _record(type(exc), exc, exc.__traceback__, "loop", {"task": str(context.get("future"))})
        if logger:
            logger.error("async exception", error=record["msg"] or record["context"], crash_id=record["id"])
    return handler


def install_crash_handler():
    sys.excepthook = log_crash
