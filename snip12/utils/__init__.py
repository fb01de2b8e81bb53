"""
Utility helpers for snip12.

Re-exports:
- num: BigInt-style literal parsing, hex conversion and range checks
- shortstring: short-string and ByteArray text packing
- hash: keccak selectors, Pedersen and Poseidon wrappers
- merkle: MerkleTree with inclusion proofs
"""

from .hash import (compute_pedersen_hash, compute_pedersen_hash_on_elements,
                   compute_poseidon_hash, compute_poseidon_hash_on_elements,
                   get_selector_from_name, prepare_selector, starknet_keccak)
from .merkle import MerkleTree, verify_merkle_proof
from .num import assert_range, get_hex, is_hex, to_hex, to_int
from .shortstring import (byte_array_from_string, decode_short_string,
                          encode_short_string, split_long_string)

__all__ = [
    # num
    "to_int",
    "to_hex",
    "is_hex",
    "get_hex",
    "assert_range",
    # shortstring
    "encode_short_string",
    "decode_short_string",
    "split_long_string",
    "byte_array_from_string",
    # hash
    "starknet_keccak",
    "get_selector_from_name",
    "prepare_selector",
    "compute_pedersen_hash",
    "compute_pedersen_hash_on_elements",
    "compute_poseidon_hash",
    "compute_poseidon_hash_on_elements",
    # merkle
    "MerkleTree",
    "verify_merkle_proof",
]
