"""Nonce generation: monotonic time prefix plus random suffix."""

import os
import threading

from internal.logging import get_logger
from textnonce.clock import MonotonicClock
from textnonce.encoding import DEFAULT_LENGTH, SORTABLE, encode, validate_length

_generator = None
_generator_lock = threading.Lock()


class NonceGenerator:
    """Issues tokens from one clock guard. Safe to share between threads."""

    def __init__(self, clock=None, random_bytes=os.urandom, alphabet=SORTABLE, default_length=DEFAULT_LENGTH):
        validate_length(default_length)
        self.clock = clock or MonotonicClock()
        self.random_bytes = random_bytes
        self.alphabet = alphabet
        self.default_length = default_length

    def generate(self, length=None):
        """Return a new token of exactly `length` characters.

        Raises InvalidLength if length is below 16 or not a multiple of 4.
        """
        if length is None:
            length = self.default_length
        validate_length(length)
        return encode(self.clock.next_instant(), length, self.random_bytes, self.alphabet)

    def generate_many(self, count, length=None):
        if count < 0:
            raise ValueError("count must be >= 0")
        return [self.generate(length) for _ in range(count)]

    def get_stats(self):
        last = self.clock.last
        return {
            "issued": self.clock.issued,
            "last_instant": list(last) if last else None,
            "lag_ns": self.clock.lag_ns(),
            "alphabet": self.alphabet.name,
            "default_length": self.default_length,
        }


def configure(clock=None, random_bytes=os.urandom, alphabet=SORTABLE, default_length=DEFAULT_LENGTH):
    """Replace the process-wide generator."""
    global _generator
    generator = NonceGenerator(clock, random_bytes, alphabet, default_length)
    with _generator_lock:
        _generator = generator
    get_logger().debug("nonce generator configured", alphabet=alphabet.name, default_length=default_length)
    return generator


def get_generator():
    global _generator
    if _generator is None:
        with _generator_lock:
            if _generator is None:
                _generator = NonceGenerator()
    return _generator


def generate(length=None):
    """Generate a token with the process-wide generator (32 characters by default)."""
    return get_generator().generate(length)


def generate_many(count, length=None):
    return get_generator().generate_many(count, length)
