"""
snip12 — Starknet typed data (SNIP-12) encoding and hashing.
Convenience exports for the most common APIs.
"""

from .version import __version__  # noqa: F401

# Config & errors
from .config import EncoderConfig  # noqa: F401
from .errors import (  # noqa: F401
    TypedDataError,
    SchemaMismatch,
    UnresolvedRevision,
    MissingField,
    RangeViolation,
    TypeMismatch,
    UnsupportedType,
    MerkleShapeError,
    ConversionError,
    MaxDepthExceeded,
)

# Revisions
from .revision import (  # noqa: F401
    Revision,
    RevisionConfig,
    REVISION_CONFIGURATION,
    identify_revision,
)

# Encoding & hashing
from .typed_data import (  # noqa: F401
    FieldKind,
    classify_type,
    encode_data,
    encode_type,
    encode_value,
    get_dependencies,
    get_message_hash,
    get_struct_hash,
    get_type_hash,
    is_merkle_tree_type,
    prepare_selector,
    validate_typed_data,
)
from .document import TypedData  # noqa: F401
from .types import Context  # noqa: F401

# Utilities
from .utils.merkle import MerkleTree  # noqa: F401
from .utils.shortstring import encode_short_string, decode_short_string  # noqa: F401

__all__ = [
    "__version__",
    # Core
    "EncoderConfig",
    "TypedDataError", "SchemaMismatch", "UnresolvedRevision", "MissingField",
    "RangeViolation", "TypeMismatch", "UnsupportedType", "MerkleShapeError",
    "ConversionError", "MaxDepthExceeded",
    # Revisions
    "Revision", "RevisionConfig", "REVISION_CONFIGURATION", "identify_revision",
    # Typed data
    "FieldKind", "classify_type",
    "get_dependencies", "encode_type", "get_type_hash",
    "encode_value", "encode_data", "get_struct_hash", "get_message_hash",
    "validate_typed_data", "is_merkle_tree_type", "prepare_selector",
    "TypedData", "Context",
    # Utils
    "MerkleTree", "encode_short_string", "decode_short_string",
]
