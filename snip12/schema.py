"""
snip12.schema

JSON Schema for typed-data documents and a validator that raises
`SchemaMismatch` with the path of the first offending node.

Only the document *shape* is checked here: top-level keys, the field
declaration layout, and non-empty `message` / `primaryType` / `types`.
Revision detection and per-type semantics live in `revision` and `typed_data`.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from .errors import SchemaMismatch

log = logging.getLogger(__name__)

FIELD_DECL_SCHEMA: Mapping[str, Any] = {
    "type": "object",
    "required": ["name", "type"],
    "properties": {
        "name": {"type": "string"},
        "type": {"type": "string"},
        "contains": {"type": "string"},
    },
}

TYPED_DATA_SCHEMA: Mapping[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "SNIP-12 typed data",
    "type": "object",
    "required": ["types", "primaryType", "domain", "message"],
    "properties": {
        "types": {
            "type": "object",
            "minProperties": 1,
            "additionalProperties": {"type": "array", "items": FIELD_DECL_SCHEMA},
        },
        "primaryType": {"type": "string", "minLength": 1},
        "domain": {"type": "object"},
        "message": {"type": "object", "minProperties": 1},
    },
}

_VALIDATOR = Draft202012Validator(TYPED_DATA_SCHEMA)


def _format_path(parts: Iterable[Any]) -> str:
    out = ""
    for p in parts:
        out += f"[{p}]" if isinstance(p, int) else (f".{p}" if out else str(p))
    return out or "$"


def iter_schema_errors(data: Any) -> Iterable[ValidationError]:
    return sorted(_VALIDATOR.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])


def validate_schema(data: Any) -> None:
    """
    Validate the document shape.

    Raises:
      SchemaMismatch carrying the JSON path of the first error.
    """
    for err in iter_schema_errors(data):
        path = _format_path(err.absolute_path)
        log.debug("typed data schema error at %s: %s", path, err.message)
        raise SchemaMismatch(f"Typed data does not match JSON schema: {err.message}", path=path)


def is_valid_schema(data: Any) -> bool:
    return _VALIDATOR.is_valid(data)


__all__ = [
    "FIELD_DECL_SCHEMA",
    "TYPED_DATA_SCHEMA",
    "iter_schema_errors",
    "validate_schema",
    "is_valid_schema",
]
