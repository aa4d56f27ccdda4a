"""Scalar text parsers backing the typed accessors.

Every parser returns ``None`` for text it cannot represent; callers turn that
into the type's zero value.
"""

import math
import re
import struct
from typing import Optional

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
UINT64_MAX = 2 ** 64 - 1

_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*(?:[eE][+-]?[0-9]+)?"
    r"|\.[0-9]+(?:[eE][+-]?[0-9]+)?"
    r"|(?i:inf|infinity|nan))"
)

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_int(text: str) -> Optional[int]:
    """Parse a signed 64-bit decimal integer."""
    if not _SIGNED_RE.fullmatch(text):
        return None
    value = int(text)
    if not (INT64_MIN <= value <= INT64_MAX):
        return None
    return value


def parse_uint(text: str) -> Optional[int]:
    """Parse an unsigned 64-bit decimal integer. Signs are rejected."""
    if not _UNSIGNED_RE.fullmatch(text):
        return None
    value = int(text)
    if value > UINT64_MAX:
        return None
    return value


def parse_float64(text: str) -> Optional[float]:
    """Parse a double precision float."""
    if not _FLOAT_RE.fullmatch(text):
        return None
    value = float(text)
    # Finite literals too large for a double overflow to inf
    if math.isinf(value) and "n" not in text.lower():
        return None
    return value


def parse_float32(text: str) -> Optional[float]:
    """Parse a float and round it to single precision."""
    value = parse_float64(text)
    if value is None:
        return None
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return None


def parse_bool(text: str) -> Optional[bool]:
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    return None
