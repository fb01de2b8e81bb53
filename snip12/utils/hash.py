from __future__ import annotations

"""
snip12 utils — hashing helpers
==============================

Wrappers around the hash primitives used by Starknet typed data:

- Keccak-256 / starknet_keccak   (`pycryptodome`)
- Pedersen pair hash              (`crypto-cpp-py`)
- Poseidon pair / many hash       (`poseidon-py`)

Two families are exposed:

* int-level primitives: `pedersen_hash`, `compute_hash_on_elements`,
  `poseidon_hash`, `poseidon_hash_many` (ints in, int out)
* hex-level collaborators used by the revision table:
  `compute_pedersen_hash[_on_elements]`, `compute_poseidon_hash[_on_elements]`
  (any BigNumberish in, 0x-hex out)
"""

import functools
from typing import Iterable, List, Sequence

from Crypto.Hash import keccak as _keccak
from crypto_cpp_py.cpp_bindings import cpp_hash
from poseidon_py.poseidon_hash import poseidon_hash as _poseidon_pair
from poseidon_py.poseidon_hash import poseidon_hash_many as _poseidon_many

from ..constants import MASK_250
from .num import BigNumberish, is_hex, to_int


# ---------------------------------------------------------------------------
# Keccak / selectors
# ---------------------------------------------------------------------------


def keccak_256(data: bytes | bytearray | memoryview) -> bytes:
    """Keccak-256 digest of `data` (original Keccak padding, not NIST SHA3)."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("keccak_256 expects bytes-like input")
    h = _keccak.new(digest_bits=256)
    h.update(bytes(data))
    return h.digest()


def starknet_keccak(data: bytes) -> int:
    """keccak256 truncated to its low 250 bits, so it always fits in a felt."""
    return int.from_bytes(keccak_256(data), "big") & MASK_250


def get_selector_from_name(name: str) -> str:
    """Selector (hex) of an entry point or type name."""
    return hex(starknet_keccak(name.encode("utf-8")))


def prepare_selector(selector: str) -> str:
    """Hex selectors pass through; anything else is treated as a name."""
    return selector if is_hex(selector) else get_selector_from_name(selector)


# ---------------------------------------------------------------------------
# Pedersen (legacy revision)
# ---------------------------------------------------------------------------


def pedersen_hash(left: int, right: int) -> int:
    return cpp_hash(left, right)


def compute_hash_on_elements(data: Sequence[int]) -> int:
    """
    Pedersen chain over `data` followed by its length:
    h(h(h(h(0, d0), d1), ...), len(data))
    """
    return functools.reduce(pedersen_hash, [*data, len(data)], 0)


# ---------------------------------------------------------------------------
# Poseidon (active revision)
# ---------------------------------------------------------------------------


def poseidon_hash(x: int, y: int) -> int:
    return _poseidon_pair(x, y)


def poseidon_hash_many(data: Sequence[int]) -> int:
    return _poseidon_many(list(data))


# ---------------------------------------------------------------------------
# Hex-level collaborators
# ---------------------------------------------------------------------------


def _ints(values: Iterable[BigNumberish]) -> List[int]:
    return [to_int(v) for v in values]


def compute_pedersen_hash(a: BigNumberish, b: BigNumberish) -> str:
    return hex(pedersen_hash(to_int(a), to_int(b)))


def compute_pedersen_hash_on_elements(data: Iterable[BigNumberish]) -> str:
    return hex(compute_hash_on_elements(_ints(data)))


def compute_poseidon_hash(a: BigNumberish, b: BigNumberish) -> str:
    return hex(poseidon_hash(to_int(a), to_int(b)))


def compute_poseidon_hash_on_elements(data: Iterable[BigNumberish]) -> str:
    return hex(poseidon_hash_many(_ints(data)))


__all__ = [
    "keccak_256",
    "starknet_keccak",
    "get_selector_from_name",
    "prepare_selector",
    "pedersen_hash",
    "compute_hash_on_elements",
    "poseidon_hash",
    "poseidon_hash_many",
    "compute_pedersen_hash",
    "compute_pedersen_hash_on_elements",
    "compute_poseidon_hash",
    "compute_poseidon_hash_on_elements",
]
