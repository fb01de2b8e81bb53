from __future__ import annotations

"""
Document shapes used across snip12.

- `TypedDict` shapes mirroring the JSON typed-data document.
- Small frozen dataclasses used by the encoder (`Context`, `ByteArray`).

Nothing here performs hashing; these are just types.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, TypedDict


# --- JSON document shapes -----------------------------------------------------


class _FieldDeclBase(TypedDict):
    name: str
    type: str


class FieldDecl(_FieldDeclBase, total=False):
    # Only for `enum` (variant holder type) and `merkletree` (leaf type) fields
    contains: str


TypeUniverse = Mapping[str, Sequence[FieldDecl]]


class DomainDict(TypedDict, total=False):
    name: str
    version: str
    chainId: Any
    revision: Any


class TypedDataDict(TypedDict):
    types: Dict[str, List[FieldDecl]]
    primaryType: str
    domain: DomainDict
    message: Dict[str, Any]


# --- Encoder values -------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class Context:
    """
    Enclosing field of a value being encoded: the struct type that declares
    the field and the field's name. Only `enum` and `merkletree` values use it.
    """

    parent: Optional[str] = None
    key: Optional[str] = None


@dataclass(slots=True, frozen=True)
class ByteArray:
    """Cairo ByteArray layout: full 31-byte words plus a trailing partial word."""

    data: List[str]
    pending_word: str
    pending_word_len: int

    def to_elements(self) -> List[Any]:
        """Serialized form: [len(data), *data, pending_word, pending_word_len]."""
        return [len(self.data), *self.data, self.pending_word, self.pending_word_len]


__all__ = [
    "FieldDecl",
    "TypeUniverse",
    "DomainDict",
    "TypedDataDict",
    "Context",
    "ByteArray",
]
