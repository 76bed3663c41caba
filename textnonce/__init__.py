"""
textnonce - text-safe nonces for session ids and single-use credentials.

Format: 16 char time segment (monotonic within the process, sortable as
text) + random segment. Total length >= 16, multiple of 4. Default 32.
"""

from textnonce.clock import Instant, MonotonicClock
from textnonce.encoding import (
    ALPHABETS,
    DEFAULT_LENGTH,
    MIN_LENGTH,
    SORTABLE,
    URL_SAFE,
    Alphabet,
    encode,
    encode_bytes,
    encode_instant,
    get_alphabet,
)
from textnonce.generator import NonceGenerator, configure, generate, generate_many, get_generator
from core.errors import InvalidLength

__all__ = [
    "ALPHABETS",
    "DEFAULT_LENGTH",
    "MIN_LENGTH",
    "SORTABLE",
    "URL_SAFE",
    "Alphabet",
    "Instant",
    "InvalidLength",
    "MonotonicClock",
    "NonceGenerator",
    "configure",
    "encode",
    "encode_bytes",
    "encode_instant",
    "generate",
    "generate_many",
    "get_alphabet",
    "get_generator",
]
