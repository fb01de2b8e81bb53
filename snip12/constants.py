"""
Protocol constants for Starknet typed data.
"""

from __future__ import annotations

from typing import NamedTuple

# Stark field modulus: 2**251 + 17 * 2**192 + 1
PRIME = 2**251 + 17 * 2**192 + 1

# starknet_keccak keeps the low 250 bits of keccak256
MASK_250 = 2**250 - 1

# Max characters packed into a single felt
TEXT_TO_FELT_MAX_LEN = 31

MESSAGE_PREFIX = "StarkNet Message"


class Range(NamedTuple):
    min: int
    max: int


RANGE_FELT = Range(0, PRIME - 1)
RANGE_I128 = Range(-(2**127), 2**127 - 1)
RANGE_U128 = Range(0, 2**128 - 1)

__all__ = [
    "PRIME",
    "MASK_250",
    "TEXT_TO_FELT_MAX_LEN",
    "MESSAGE_PREFIX",
    "Range",
    "RANGE_FELT",
    "RANGE_I128",
    "RANGE_U128",
]
