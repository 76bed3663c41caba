"""Custom errors with tracking IDs."""

import threading

from utils.timestamp import format_timestamp

# Tracking ids come from their own generator so raising an error never
# advances or draws from the clock that issues tokens.
_id_generator = None
_id_generator_lock = threading.Lock()


def new_tracking_id():
    """Fresh nonce for error and crash records."""
    global _id_generator
    if _id_generator is None:
        with _id_generator_lock:
            if _id_generator is None:
                # late import, the generator module raises these errors
                from textnonce.generator import NonceGenerator
                _id_generator = NonceGenerator()
    return _id_generator.generate()


class BaseNonceError(Exception):
    """Base error with unique ID and timestamp for tracking."""

    def __init__(self, message, context=None, cause=None):
        super().__init__(message)
        self.error_id = new_tracking_id()
        self.timestamp = format_timestamp()
        self.context = context or {}
        self.cause = cause

    def __str__(self):
        return f"[{self.error_id}] {super().__str__()}"

    def to_dict(self):
        return {"error_id": self.error_id, "timestamp": self.timestamp,
                "detail": self.args[0] if self.args else "", "context": self.context}


class InvalidLength(BaseNonceError, ValueError):
    """Requested token length is below 16 or not a multiple of 4."""

    def __init__(self, message, length=None, **kwargs):
        context = kwargs.pop("context", {})
        context["length"] = length
        super().__init__(message, context=context, **kwargs)
        self.length = length


class ConfigError(BaseNonceError):
    """Invalid configuration values (unknown alphabet, bad default length)."""

    def __init__(self, message, field=None, **kwargs):
        context = kwargs.pop("context", {})
        if field:
            context["field"] = field
        super().__init__(message, context=context, **kwargs)
