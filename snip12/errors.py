"""
Typed error classes for snip12.

Every failure of the encoding pipeline is raised as a subclass of
`TypedDataError`, so callers can catch one specific failure mode or the whole
family. Errors abort the hashing operation; there are no partial results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

__all__ = [
    "TypedDataError",
    "SchemaMismatch",
    "UnresolvedRevision",
    "MissingField",
    "RangeViolation",
    "TypeMismatch",
    "UnsupportedType",
    "MerkleShapeError",
    "ConversionError",
    "MaxDepthExceeded",
]


@dataclass(slots=True, eq=False)
class TypedDataError(Exception):
    """Base class for all snip12 errors."""

    message: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


@dataclass(slots=True, eq=False)
class SchemaMismatch(TypedDataError):
    """
    Raised when a document fails shape validation.

    `path` is the JSON path of the offending node when the failure comes from
    the JSON schema (e.g. "types.Mail[0].name").
    """

    path: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        where = f" at {self.path}" if self.path else ""
        return f"{self.message}{where}"


@dataclass(slots=True, eq=False)
class UnresolvedRevision(SchemaMismatch):
    """Neither revision's domain type / revision field combination matches."""


@dataclass(slots=True, eq=False)
class MissingField(TypedDataError):
    type_name: Optional[str] = None
    field: Optional[str] = None


@dataclass(slots=True, eq=False)
class RangeViolation(TypedDataError):
    """
    Raised when a numeric value falls outside its declared bound.

    Fields:
      - value: the offending integer
      - type_name: declared tag (felt, u128, i128, ...)
      - min / max: inclusive bounds
    """

    value: Optional[int] = None
    type_name: Optional[str] = None
    min: Optional[int] = None
    max: Optional[int] = None


@dataclass(slots=True, eq=False)
class TypeMismatch(TypedDataError):
    type_name: Optional[str] = None
    value: Optional[Any] = None


@dataclass(slots=True, eq=False)
class UnsupportedType(TypedDataError):
    type_name: Optional[str] = None


@dataclass(slots=True, eq=False)
class MerkleShapeError(TypedDataError):
    """A merkletree field is used outside a merkle declaration, or its leaves are malformed."""


@dataclass(slots=True, eq=False)
class ConversionError(TypedDataError):
    value: Optional[Any] = None


@dataclass(slots=True, eq=False)
class MaxDepthExceeded(TypedDataError):
    depth: Optional[int] = None
