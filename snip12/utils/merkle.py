"""
snip12.utils.merkle
===================

Merkle helpers for `merkletree` typed-data fields:
- MerkleTree(leaves, hash_method).root       → root over leaf digests
- MerkleTree.get_proof(leaf)                  → sibling path for a leaf
- verify_merkle_proof(root, leaf, path, ...)  → check a sibling path

Design notes
------------
* Pair hashing is order-independent: the two children are sorted as integers
  (ascending) before hashing, so only the pairing of leaves matters.
* A level with an odd number of nodes pairs its last node with 0x0.
* A single leaf is its own root.
* An empty leaf list has no root and is rejected.
"""

from __future__ import annotations

from typing import Callable, List, Sequence

from ..errors import MerkleShapeError
from .hash import compute_pedersen_hash
from .num import BigNumberish, to_hex, to_int

PairHash = Callable[[BigNumberish, BigNumberish], str]

_ZERO = "0x0"


class MerkleTree:
    """Binary Merkle tree over hex leaf digests."""

    __slots__ = ("leaves", "branches", "root", "hash_method")

    def __init__(self, leaf_hashes: Sequence[BigNumberish], hash_method: PairHash = compute_pedersen_hash) -> None:
        if not leaf_hashes:
            raise MerkleShapeError("Cannot build a merkle tree without leaves")
        self.hash_method = hash_method
        self.leaves: List[str] = [to_hex(leaf) for leaf in leaf_hashes]
        # Intermediate levels, bottom-up; excludes the leaves and the root.
        self.branches: List[List[str]] = []
        self.root: str = self._build(self.leaves)

    @staticmethod
    def hash(a: BigNumberish, b: BigNumberish, hash_method: PairHash = compute_pedersen_hash) -> str:
        lo, hi = sorted((to_int(a), to_int(b)))
        return to_hex(hash_method(lo, hi))

    def _build(self, level: List[str]) -> str:
        while len(level) > 1:
            if level is not self.leaves:
                self.branches.append(level)
            nxt: List[str] = []
            for i in range(0, len(level), 2):
                right = level[i + 1] if i + 1 < len(level) else _ZERO
                nxt.append(self.hash(level[i], right, self.hash_method))
            level = nxt
        return level[0]

    def get_proof(self, leaf: BigNumberish) -> List[str]:
        """
        Return the sibling path from `leaf` up to the root.

        Raises:
          MerkleShapeError if `leaf` is not one of the tree's leaves.
        """
        node = to_hex(leaf)
        if node not in self.leaves:
            raise MerkleShapeError(f"Leaf {node} not found in merkle tree")

        path: List[str] = []
        for level in [self.leaves, *self.branches]:
            if len(level) == 1:
                break
            index = level.index(node)
            if index % 2 == 0:
                sibling = level[index + 1] if index + 1 < len(level) else _ZERO
            else:
                sibling = level[index - 1]
            path.append(sibling)
            node = self.hash(node, sibling, self.hash_method)
        return path


def verify_merkle_proof(
    root: BigNumberish,
    leaf: BigNumberish,
    path: Sequence[BigNumberish],
    hash_method: PairHash = compute_pedersen_hash,
) -> bool:
    """Fold `path` into `leaf` and compare with `root`."""
    node = to_hex(leaf)
    for sibling in path:
        node = MerkleTree.hash(node, sibling, hash_method)
    return to_int(node) == to_int(root)


__all__ = ["MerkleTree", "verify_merkle_proof"]
