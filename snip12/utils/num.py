from __future__ import annotations

import re
from typing import Any, Union

from ..constants import Range
from ..errors import ConversionError, RangeViolation
from .shortstring import encode_short_string

BigNumberish = Union[int, str, bool]

# Literal forms accepted by JavaScript's BigInt(): signed decimal and
# unsigned 0x / 0o / 0b prefixed literals.
_DEC_RE = re.compile(r"^[+-]?[0-9]+$")
_HEX_RE = re.compile(r"^0[xX][0-9a-fA-F]+$")
_OCT_RE = re.compile(r"^0[oO][0-7]+$")
_BIN_RE = re.compile(r"^0[bB][01]+$")

_IS_HEX_RE = re.compile(r"^0x[0-9a-f]*$", re.IGNORECASE)


def is_hex(s: Any) -> bool:
    """True for 0x-prefixed hex strings (an empty body is accepted)."""
    return isinstance(s, str) and _IS_HEX_RE.match(s) is not None


def to_int(value: Any) -> int:
    """
    Parse a numeric literal into an int.

    Accepts:
      - bool  -> 0 / 1
      - int
      - float with an integral value
      - str: decimal (optionally signed), 0x-hex, 0o-octal, 0b-binary;
        surrounding whitespace is ignored and "" is 0

    Raises:
      ConversionError for anything else.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ConversionError(f"Cannot convert non-integral number {value!r}", value=value)
    if isinstance(value, str):
        s = value.strip()
        if s == "":
            return 0
        if _DEC_RE.match(s):
            return int(s, 10)
        if _HEX_RE.match(s):
            return int(s[2:], 16)
        if _OCT_RE.match(s):
            return int(s[2:], 8)
        if _BIN_RE.match(s):
            return int(s[2:], 2)
        raise ConversionError(f"Cannot convert {value!r} to a number", value=value)
    raise ConversionError(f"Cannot convert {type(value).__name__} to a number", value=value)


def to_hex(value: Any) -> str:
    """Numeric literal -> lowercase 0x-prefixed hex string."""
    return hex(to_int(value))


def get_big_int(value: Any) -> int:
    """
    Integer value of a scalar field.

    Numeric literals are converted directly; any other string is packed as a
    short string first.
    """
    try:
        return to_int(value)
    except ConversionError:
        if isinstance(value, str):
            return int(encode_short_string(value), 16)
        raise ConversionError(f"Invalid BigNumberish: {value!r}", value=value) from None


def get_hex(value: Any) -> str:
    """Hex-encode a scalar field value (see `get_big_int`)."""
    return hex(get_big_int(value))


def assert_range(value: Any, type_name: str, bounds: Range) -> int:
    """Parse `value` and check it lies in the inclusive `bounds`; returns the int."""
    n = to_int(value)
    if not bounds.min <= n <= bounds.max:
        raise RangeViolation(
            f"{n} ({type_name}) is out of bounds [{bounds.min}, {bounds.max}]",
            value=n,
            type_name=type_name,
            min=bounds.min,
            max=bounds.max,
        )
    return n


__all__ = [
    "BigNumberish",
    "is_hex",
    "to_int",
    "to_hex",
    "get_big_int",
    "get_hex",
    "assert_range",
]
