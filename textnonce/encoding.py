"""
Token encoder.

Layout: 12 bytes of time (8 byte seconds + 4 byte nanoseconds, big-endian)
followed by random bytes, rendered 6 bits per character through a 64 symbol
alphabet. Lengths are multiples of 4 characters (3 bytes), so no padding.
"""

import base64
import os
import struct

from core.errors import InvalidLength, ConfigError

TIME_BYTES = 12
TIME_CHARS = 16
MIN_LENGTH = TIME_CHARS
DEFAULT_LENGTH = 32

_INSTANT = struct.Struct(">QI")
_URLSAFE_SYMBOLS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"


class Alphabet:
    """Fixed 64 symbol output alphabet, indexed by 6-bit value."""

    __slots__ = ("name", "symbols", "_table")

    def __init__(self, name, symbols):
        if len(symbols) != 64 or len(set(symbols)) != 64:
            raise ValueError(f"alphabet {name!r} must have 64 distinct symbols")
        self.name = name
        self.symbols = symbols
        self._table = str.maketrans(_URLSAFE_SYMBOLS, symbols)

    @property
    def sortable(self):
        """True when symbol order matches ASCII order."""
        return list(self.symbols) == sorted(self.symbols)

    def translate(self, urlsafe_text):
        return urlsafe_text.translate(self._table)

    def __contains__(self, char):
        return char in self.symbols

    def __repr__(self):
        return f"Alphabet({self.name!r})"


# Default. Ascending ASCII order keeps text comparison of the time segment chronological.
SORTABLE = Alphabet("sortable", "-0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ_abcdefghijklmnopqrstuvwxyz")
# RFC 4648 section 5. URL-safe but not sortable as text.
URL_SAFE = Alphabet("urlsafe", _URLSAFE_SYMBOLS)

ALPHABETS = {alphabet.name: alphabet for alphabet in (SORTABLE, URL_SAFE)}


def get_alphabet(name):
    try:
        return ALPHABETS[name]
    except KeyError:
        raise ConfigError(f"unknown alphabet {name!r}", context={"choices": sorted(ALPHABETS)}) from None


def validate_length(length):
    """Raise InvalidLength unless length is an int >= 16 and divisible by 4."""
    if not isinstance(length, int) or isinstance(length, bool):
        raise InvalidLength("length must be an integer", length=length)
    if length < MIN_LENGTH:
        raise InvalidLength(f"length must be >= {MIN_LENGTH}", length=length)
    if length % 4 != 0:
        raise InvalidLength("length must be divisible by 4", length=length)


def encode_bytes(raw, alphabet=SORTABLE):
    """Render raw bytes (a multiple of 3 long) as alphabet text."""
    if len(raw) % 3 != 0:
        raise ValueError(f"byte count must be a multiple of 3, got {len(raw)}")
    return alphabet.translate(base64.urlsafe_b64encode(raw).decode("ascii"))


def pack_instant(instant):
    return _INSTANT.pack(instant.seconds, instant.nanoseconds)


def encode_instant(instant, alphabet=SORTABLE):
    """Fixed 16 character time segment."""
    return encode_bytes(pack_instant(instant), alphabet)


def encode(instant, length=DEFAULT_LENGTH, random_bytes=os.urandom, alphabet=SORTABLE):
    """Time segment for instant followed by random characters up to length."""
    validate_length(length)
    raw = pack_instant(instant)
    extra_chars = length - TIME_CHARS
    if extra_chars:
        raw += random_bytes(extra_chars * 3 // 4)
    return encode_bytes(raw, alphabet)
