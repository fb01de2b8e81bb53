"""
snip12.typed_data
=================

Starknet typed-data (SNIP-12) encoding and hashing.

This module provides:
- `get_dependencies(types, type)`   → struct types referenced by `type`, itself first
- `encode_type(types, type)`        → canonical type string
- `get_type_hash(types, type)`      → selector of the canonical type string
- `encode_value(types, type, value)`→ (encoded type, hex scalar) for one field value
- `encode_data(types, type, data)`  → ([types], [values]) for a struct instance
- `get_struct_hash(types, type, data)`
- `get_message_hash(typed_data, account)` → final digest to sign

Design notes
------------
* Revision-specific behavior (hash functions, escaping, preset types, strict
  checks) comes from `revision.REVISION_CONFIGURATION`, resolved once per call.
* Every field type is classified once into a `FieldKind` and dispatched
  through a single handler table. Under the legacy revision, all tags that
  only the active revision interprets collapse into `FieldKind.SCALAR`
  (best-effort hex encoding).
* Field declaration order is the hashing order. Only dependency names are
  sorted when building type strings.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .config import DEFAULT, EncoderConfig
from .constants import MESSAGE_PREFIX, PRIME, RANGE_FELT, RANGE_I128, RANGE_U128
from .errors import (MaxDepthExceeded, MerkleShapeError, MissingField,
                     SchemaMismatch, TypeMismatch, UnsupportedType)
from .revision import (Revision, get_revision_config, identify_revision,
                       resolve_revision)
from .schema import is_valid_schema, validate_schema
from .types import Context, FieldDecl, TypeUniverse
from .utils.hash import get_selector_from_name, prepare_selector
from .utils.merkle import MerkleTree
from .utils.num import BigNumberish, assert_range, get_big_int, get_hex, to_hex
from .utils.shortstring import byte_array_from_string, encode_short_string

log = logging.getLogger(__name__)

_TUPLE_RE = re.compile(r"\(.*\)")


def _is_tuple(type_name: str) -> bool:
    return _TUPLE_RE.fullmatch(type_name) is not None


def is_merkle_tree_type(field: Mapping[str, Any]) -> bool:
    """True if a field declaration is a `merkletree` field."""
    return field.get("type") == "merkletree"


# -----------------------------------------------------------------------------
# Dependencies & type strings
# -----------------------------------------------------------------------------


def _dependency_name(type_name: str, contains: str, active: bool) -> str:
    # Arrays of T depend on T
    if type_name.endswith("*"):
        return type_name[:-1]
    if active:
        # enum base: the variant holder
        if type_name == "enum":
            return contains
        # enum variant tuple: "(A)" resolves to A, "(A,B)" resolves to nothing
        if _is_tuple(type_name):
            return type_name[1:-1]
    return type_name


def _collect(types: TypeUniverse, name: str, found: List[str], active: bool) -> None:
    for field in types[name]:
        dep = _dependency_name(field["type"], field.get("contains", ""), active)
        if dep in found or dep not in types:
            continue
        found.append(dep)
        _collect(types, dep, found, active)


def get_dependencies(
    types: TypeUniverse,
    type_name: str,
    dependencies: Sequence[str] = (),
    contains: str = "",
    revision: Revision = Revision.LEGACY,
) -> List[str]:
    """
    Get the struct types `type_name` depends on, `type_name` first.

    Each type appears once, in first-discovery order. Primitive types (names
    not in `types`) contribute nothing; if `type_name` itself is primitive or
    already in `dependencies`, `dependencies` is returned unchanged.
    """
    active = Revision(revision) is Revision.ACTIVE
    name = _dependency_name(type_name, contains, active)
    if name in dependencies or name not in types:
        return list(dependencies)
    found = [name]
    _collect(types, name, found, active)
    return found


def _field_type_string(field: FieldDecl, active: bool, esc: Callable[[str], str]) -> str:
    target = field["type"]
    if active and target == "enum":
        target = field.get("contains", "")
        if not target:
            raise SchemaMismatch(f"Enum field {field['name']!r} must declare its variant type in 'contains'")
    if _is_tuple(target):
        inner = ",".join(esc(e) if e else e for e in target[1:-1].split(","))
        return f"({inner})"
    return esc(target)


def encode_type(types: TypeUniverse, type_name: str, revision: Revision = Revision.LEGACY) -> str:
    """
    Encode a type and its dependencies to the canonical type string.

    The primary type comes first, followed by its dependencies sorted
    alphabetically, e.g. legacy:

        Mail(from:Person,to:Person,contents:felt)Person(name:felt,wallet:felt)

    Active-revision identifiers are quoted and preset types are available.
    """
    revision = Revision(revision)
    cfg = get_revision_config(revision)
    active = revision is Revision.ACTIVE
    all_types: TypeUniverse = {**types, **cfg.preset_types} if active else types

    deps = get_dependencies(all_types, type_name, revision=revision)
    if not deps:
        return ""
    primary, *rest = deps

    esc = cfg.escape_type_string
    blocks = []
    for name in [primary, *sorted(rest)]:
        fields = ",".join(
            f"{esc(f['name'])}:{_field_type_string(f, active, esc)}" for f in all_types[name]
        )
        blocks.append(f"{esc(name)}({fields})")
    return "".join(blocks)


def get_type_hash(types: TypeUniverse, type_name: str, revision: Revision = Revision.LEGACY) -> str:
    """Selector of the canonical type string."""
    return get_selector_from_name(encode_type(types, type_name, revision))


# -----------------------------------------------------------------------------
# Value classification
# -----------------------------------------------------------------------------


class FieldKind(str, Enum):
    STRUCT = "struct"
    PRESET = "preset"
    ARRAY = "array"
    ENUM = "enum"
    MERKLE_TREE = "merkletree"
    SELECTOR = "selector"
    STRING = "string"
    I128 = "i128"
    U128 = "u128"
    FELT = "felt"
    ADDRESS = "address"
    BOOL = "bool"
    SCALAR = "scalar"
    UNSUPPORTED = "unsupported"


_TAG_KINDS: Dict[str, FieldKind] = {
    "enum": FieldKind.ENUM,
    "merkletree": FieldKind.MERKLE_TREE,
    "selector": FieldKind.SELECTOR,
    "string": FieldKind.STRING,
    "i128": FieldKind.I128,
    "u128": FieldKind.U128,
    "timestamp": FieldKind.U128,
    "felt": FieldKind.FELT,
    "shortstring": FieldKind.FELT,
    "ClassHash": FieldKind.ADDRESS,
    "ContractAddress": FieldKind.ADDRESS,
    "bool": FieldKind.BOOL,
}

# Tags only the strict (active) revision interprets; legacy hex-encodes them.
_STRICT_ONLY = frozenset(
    {
        FieldKind.ENUM,
        FieldKind.STRING,
        FieldKind.I128,
        FieldKind.U128,
        FieldKind.FELT,
        FieldKind.ADDRESS,
        FieldKind.BOOL,
        FieldKind.UNSUPPORTED,
    }
)


def classify_type(types: TypeUniverse, type_name: str, revision: Revision = Revision.LEGACY) -> FieldKind:
    """Map a declared field type to the kind of encoding it gets."""
    cfg = get_revision_config(revision)
    if type_name in types:
        return FieldKind.STRUCT
    if type_name in cfg.preset_types:
        return FieldKind.PRESET
    if type_name.endswith("*"):
        return FieldKind.ARRAY
    kind = _TAG_KINDS.get(type_name, FieldKind.UNSUPPORTED)
    if not cfg.strict and kind in _STRICT_ONLY:
        return FieldKind.SCALAR
    return kind


# -----------------------------------------------------------------------------
# Encoder
# -----------------------------------------------------------------------------


class _Encoder:
    """
    Value/struct encoder bound to one type universe and one revision.

    `depth` counts value nesting; exceeding `max_depth` raises MaxDepthExceeded.
    """

    __slots__ = ("types", "revision", "cfg", "max_depth")

    def __init__(self, types: TypeUniverse, revision: Revision, max_depth: int) -> None:
        self.types = types
        self.revision = Revision(revision)
        self.cfg = get_revision_config(self.revision)
        self.max_depth = max_depth

    # --- structs ---------------------------------------------------------------

    def fields(self, type_name: str) -> Sequence[FieldDecl]:
        decl = self.types.get(type_name)
        if decl is None:
            decl = self.cfg.preset_types.get(type_name)
        if decl is None:
            raise SchemaMismatch(f"Type {type_name!r} is not declared")
        return decl

    def encode_data(self, type_name: str, data: Any, depth: int) -> Tuple[List[str], List[str]]:
        if not isinstance(data, Mapping):
            raise TypeMismatch(
                f"Cannot encode data: expected an object for {type_name}", type_name=type_name, value=data
            )
        out_types = ["felt"]
        values = [get_type_hash(self.types, type_name, self.revision)]
        for field in self.fields(type_name):
            name, ftype = field["name"], field["type"]
            if name not in data or (data[name] is None and ftype != "enum"):
                raise MissingField(
                    f"Cannot encode data: missing data for '{name}'", type_name=type_name, field=name
                )
            value = data[name]
            if value is None:
                # unset optional enum
                encoded: Tuple[str, str] = (ftype, "0x0")
            else:
                encoded = self.encode_value(ftype, value, Context(parent=type_name, key=name), depth + 1)
            out_types.append(encoded[0])
            values.append(encoded[1])
        return out_types, values

    def struct_hash(self, type_name: str, data: Any, depth: int) -> str:
        return self.cfg.hash_method(self.encode_data(type_name, data, depth)[1])

    # --- values ----------------------------------------------------------------

    def encode_value(self, type_name: str, value: Any, ctx: Context, depth: int) -> Tuple[str, str]:
        if depth > self.max_depth:
            raise MaxDepthExceeded(
                f"Value nesting exceeds max depth {self.max_depth} at {type_name}", depth=depth
            )
        kind = classify_type(self.types, type_name, self.revision)
        return self._HANDLERS[kind](self, type_name, value, ctx, depth)

    def _struct(self, type_name: str, value: Any, ctx: Context, depth: int) -> Tuple[str, str]:
        return type_name, self.struct_hash(type_name, value, depth)

    def _preset(self, type_name: str, value: Any, ctx: Context, depth: int) -> Tuple[str, str]:
        presets = _Encoder(self.cfg.preset_types, self.revision, self.max_depth)
        return type_name, presets.struct_hash(type_name, value, depth)

    def _array(self, type_name: str, value: Any, ctx: Context, depth: int) -> Tuple[str, str]:
        if not isinstance(value, (list, tuple)):
            raise TypeMismatch(f"Expected an array for {type_name}", type_name=type_name, value=value)
        base = type_name[:-1]
        hashes = [self.encode_value(base, item, Context(), depth + 1)[1] for item in value]
        return type_name, self.cfg.hash_method(hashes)

    def _enum(self, type_name: str, value: Any, ctx: Context, depth: int) -> Tuple[str, str]:
        if not isinstance(value, Mapping) or len(value) != 1:
            raise TypeMismatch(
                f"Enum value must be a single-key object {{variant: payload}}, got {value!r}",
                type_name=type_name,
                value=value,
            )
        if ctx.parent is None:
            raise TypeMismatch("Enum value must be the field of a struct", type_name=type_name, value=value)

        # The variant holder is named by the parent's first field.
        holder_name = self.fields(ctx.parent)[0].get("contains", "")
        variants = self.fields(holder_name)
        variant_key, payload = next(iter(value.items()))
        for index, variant in enumerate(variants):
            if variant["name"] == variant_key:
                break
        else:
            raise TypeMismatch(
                f"Unknown variant {variant_key!r} for enum {holder_name}", type_name=type_name, value=value
            )

        elements: List[Any] = [index]
        for i, subtype in enumerate(variant["type"][1:-1].split(",")):
            if not subtype:
                # empty slot of a unit variant
                elements.append(0)
                continue
            if not isinstance(payload, (list, tuple)) or i >= len(payload):
                raise TypeMismatch(
                    f"Variant {variant_key!r} payload is missing element {i} ({subtype})",
                    type_name=type_name,
                    value=payload,
                )
            elements.append(self.encode_value(subtype, payload[i], Context(), depth + 1)[1])
        return type_name, self.cfg.hash_method(elements)

    def _merkle_leaf_type(self, ctx: Context) -> str:
        if not (ctx.parent and ctx.key):
            return "raw"
        field = next((f for f in self.fields(ctx.parent) if f["name"] == ctx.key), None)
        if field is None or not is_merkle_tree_type(field):
            raise MerkleShapeError(f"{ctx.key} is not a merkle tree")
        contains = field.get("contains")
        if not contains:
            raise MerkleShapeError(f"Merkle tree {ctx.key} does not declare its leaf type")
        if contains.endswith("*"):
            raise MerkleShapeError(
                f"Merkle tree contain property must not be an array but was given {ctx.key}"
            )
        return contains

    def _merkle_tree(self, type_name: str, value: Any, ctx: Context, depth: int) -> Tuple[str, str]:
        leaf_type = self._merkle_leaf_type(ctx)
        if not isinstance(value, (list, tuple)):
            raise MerkleShapeError(f"Merkle tree {ctx.key} expects an array of leaves")
        leaves = [self.encode_value(leaf_type, leaf, Context(), depth + 1)[1] for leaf in value]
        return "felt", MerkleTree(leaves, self.cfg.hash_merkle_method).root

    def _selector(self, type_name: str, value: Any, ctx: Context, depth: int) -> Tuple[str, str]:
        if not isinstance(value, str):
            raise TypeMismatch(f"Selector must be a string, got {value!r}", type_name=type_name, value=value)
        return "felt", prepare_selector(value)

    def _string(self, type_name: str, value: Any, ctx: Context, depth: int) -> Tuple[str, str]:
        if not isinstance(value, str):
            raise TypeMismatch(f"Type mismatch for {type_name} {value!r}", type_name=type_name, value=value)
        return type_name, self.cfg.hash_method(byte_array_from_string(value).to_elements())

    def _i128(self, type_name: str, value: Any, ctx: Context, depth: int) -> Tuple[str, str]:
        n = assert_range(value, type_name, RANGE_I128)
        return type_name, to_hex(PRIME + n if n < 0 else n)

    def _u128(self, type_name: str, value: Any, ctx: Context, depth: int) -> Tuple[str, str]:
        assert_range(value, type_name, RANGE_U128)
        return type_name, get_hex(value)

    def _felt(self, type_name: str, value: Any, ctx: Context, depth: int) -> Tuple[str, str]:
        # short strings are accepted and range-checked after packing
        n = assert_range(get_big_int(value), type_name, RANGE_FELT)
        return type_name, to_hex(n)

    def _address(self, type_name: str, value: Any, ctx: Context, depth: int) -> Tuple[str, str]:
        assert_range(value, type_name, RANGE_FELT)
        return type_name, get_hex(value)

    def _bool(self, type_name: str, value: Any, ctx: Context, depth: int) -> Tuple[str, str]:
        if not isinstance(value, bool):
            raise TypeMismatch(f"Type mismatch for {type_name} {value!r}", type_name=type_name, value=value)
        return type_name, get_hex(value)

    def _scalar(self, type_name: str, value: Any, ctx: Context, depth: int) -> Tuple[str, str]:
        return type_name, get_hex(value)

    def _unsupported(self, type_name: str, value: Any, ctx: Context, depth: int) -> Tuple[str, str]:
        raise UnsupportedType(f"Unsupported type: {type_name}", type_name=type_name)

    _HANDLERS = {
        FieldKind.STRUCT: _struct,
        FieldKind.PRESET: _preset,
        FieldKind.ARRAY: _array,
        FieldKind.ENUM: _enum,
        FieldKind.MERKLE_TREE: _merkle_tree,
        FieldKind.SELECTOR: _selector,
        FieldKind.STRING: _string,
        FieldKind.I128: _i128,
        FieldKind.U128: _u128,
        FieldKind.FELT: _felt,
        FieldKind.ADDRESS: _address,
        FieldKind.BOOL: _bool,
        FieldKind.SCALAR: _scalar,
        FieldKind.UNSUPPORTED: _unsupported,
    }


def _max_depth(config: Optional[EncoderConfig]) -> int:
    return (config or DEFAULT).max_depth


# -----------------------------------------------------------------------------
# Public encoding API
# -----------------------------------------------------------------------------


def encode_value(
    types: TypeUniverse,
    type_name: str,
    data: Any,
    ctx: Optional[Context] = None,
    revision: Revision = Revision.LEGACY,
    *,
    config: Optional[EncoderConfig] = None,
) -> Tuple[str, str]:
    """
    Encode a single field value.

    Returns (encoded type, 0x-hex value). Struct, preset and array values are
    returned as their hash; merkle trees and selectors are tagged "felt".
    `ctx` names the enclosing struct field and is needed for enum and
    merkletree values.
    """
    enc = _Encoder(types, revision, _max_depth(config))
    return enc.encode_value(type_name, data, ctx or Context(), 0)


def encode_data(
    types: TypeUniverse,
    type_name: str,
    data: Mapping[str, Any],
    revision: Revision = Revision.LEGACY,
    *,
    config: Optional[EncoderConfig] = None,
) -> Tuple[List[str], List[str]]:
    """
    Encode a struct instance to ([types], [values]), type hash first.
    All dependent types are encoded recursively.
    """
    return _Encoder(types, revision, _max_depth(config)).encode_data(type_name, data, 0)


def get_struct_hash(
    types: TypeUniverse,
    type_name: str,
    data: Mapping[str, Any],
    revision: Revision = Revision.LEGACY,
    *,
    config: Optional[EncoderConfig] = None,
) -> str:
    """Hash of the encoded struct with the revision's element hash."""
    return _Encoder(types, revision, _max_depth(config)).struct_hash(type_name, data, 0)


def validate_typed_data(data: Any) -> bool:
    """True if `data` has the typed-data shape and a resolvable revision."""
    return is_valid_schema(data) and identify_revision(data) is not None


def get_message_hash(
    typed_data: Mapping[str, Any],
    account: BigNumberish,
    *,
    config: Optional[EncoderConfig] = None,
) -> str:
    """
    Get the SNIP-12 message hash to sign for `account`:

        h(short("StarkNet Message"), h(domain), account, h(message))

    Raises:
      SchemaMismatch (or UnresolvedRevision) when the document is malformed;
      any other TypedDataError raised while encoding its values.
    """
    validate_schema(typed_data)
    revision = resolve_revision(typed_data)
    cfg = get_revision_config(revision)
    enc = _Encoder(typed_data["types"], revision, _max_depth(config))

    domain_hash = enc.struct_hash(cfg.domain, typed_data["domain"], 0)
    message_hash = enc.struct_hash(typed_data["primaryType"], typed_data["message"], 0)
    log.debug(
        "struct hashes (%s): domain=%s %s=%s",
        revision.name,
        domain_hash,
        typed_data["primaryType"],
        message_hash,
    )

    result = cfg.hash_method([encode_short_string(MESSAGE_PREFIX), domain_hash, account, message_hash])
    log.debug("message hash for account %s: %s", account, result)
    return result


__all__ = [
    "FieldKind",
    "is_merkle_tree_type",
    "prepare_selector",
    "get_dependencies",
    "encode_type",
    "get_type_hash",
    "classify_type",
    "encode_value",
    "encode_data",
    "get_struct_hash",
    "validate_typed_data",
    "get_message_hash",
]
