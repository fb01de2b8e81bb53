"""
snip12.utils.shortstring
========================

Text packing into field elements:

- `encode_short_string("hello")`  → "0x68656c6c6f"  (ASCII, at most 31 chars)
- `decode_short_string("0x6869")` → "hi"
- `byte_array_from_string(text)`  → ByteArray (Cairo `ByteArray` layout)

Short strings are big-endian ASCII packed into a single felt. Long text uses
the ByteArray layout: UTF-8 bytes split into 31-byte words, with the last
incomplete word carried separately as `pending_word` with its byte length.
"""

from __future__ import annotations

from typing import List, Union

from ..constants import TEXT_TO_FELT_MAX_LEN
from ..errors import ConversionError
from ..types import ByteArray


def is_ascii(s: str) -> bool:
    return all(ord(ch) < 0x80 for ch in s)


def is_short_string(s: str) -> bool:
    return len(s) <= TEXT_TO_FELT_MAX_LEN


def encode_short_string(s: str) -> str:
    """
    Pack an ASCII string of at most 31 characters into a hex felt.

    Raises:
      ConversionError if the string is not ASCII or is too long.
    """
    if not is_ascii(s):
        raise ConversionError(f"{s!r} is not an ASCII string", value=s)
    if not is_short_string(s):
        raise ConversionError(
            f"{s!r} is too long to be a short string (max {TEXT_TO_FELT_MAX_LEN} chars)",
            value=s,
        )
    return hex(int.from_bytes(s.encode("ascii"), "big"))


def decode_short_string(value: Union[str, int]) -> str:
    """Inverse of `encode_short_string`; leading zero bytes are dropped."""
    n = int(value, 16) if isinstance(value, str) else int(value)
    if n < 0:
        raise ConversionError(f"Cannot decode negative value {value!r}", value=value)
    raw = n.to_bytes((n.bit_length() + 7) // 8, "big")
    try:
        return raw.decode("ascii")
    except UnicodeDecodeError as e:
        raise ConversionError(f"{value!r} does not decode to ASCII", value=value) from e


def split_long_string(s: str, size: int = TEXT_TO_FELT_MAX_LEN) -> List[str]:
    """Split text into consecutive chunks of at most `size` characters."""
    return [s[i : i + size] for i in range(0, len(s), size)]


def byte_array_from_string(s: str) -> ByteArray:
    """
    Pack text into the ByteArray layout.

    Example:
        "hello" -> ByteArray(data=[], pending_word="0x68656c6c6f", pending_word_len=5)
    """
    raw = s.encode("utf-8")
    words = [raw[i : i + TEXT_TO_FELT_MAX_LEN] for i in range(0, len(raw), TEXT_TO_FELT_MAX_LEN)]
    encoded = [hex(int.from_bytes(w, "big")) for w in words]

    if not words or len(words[-1]) == TEXT_TO_FELT_MAX_LEN:
        return ByteArray(data=encoded, pending_word="0x0", pending_word_len=0)
    return ByteArray(data=encoded[:-1], pending_word=encoded[-1], pending_word_len=len(words[-1]))


__all__ = [
    "is_ascii",
    "is_short_string",
    "encode_short_string",
    "decode_short_string",
    "split_long_string",
    "byte_array_from_string",
]
