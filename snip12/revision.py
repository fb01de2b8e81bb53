"""
Protocol revisions and their capability table.

Each revision fixes the domain type name, the element / pair hash functions,
the type-string escaping rule, the preset type library and whether strict
range/type checks apply. The table is built once at import and never mutated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, Optional

from .errors import UnresolvedRevision
from .types import TypeUniverse
from .utils.hash import (compute_pedersen_hash,
                         compute_pedersen_hash_on_elements,
                         compute_poseidon_hash,
                         compute_poseidon_hash_on_elements)

log = logging.getLogger(__name__)


class Revision(str, Enum):
    LEGACY = "0"
    ACTIVE = "1"


@dataclass(frozen=True)
class RevisionConfig:
    domain: str
    hash_method: Callable[[Iterable[Any]], str]
    hash_merkle_method: Callable[[Any, Any], str]
    escape_type_string: Callable[[str], str]
    preset_types: TypeUniverse
    strict: bool


PRESET_TYPES: TypeUniverse = MappingProxyType(
    {
        "u256": (
            {"name": "low", "type": "u128"},
            {"name": "high", "type": "u128"},
        ),
        "TokenAmount": (
            {"name": "token_address", "type": "ContractAddress"},
            {"name": "amount", "type": "u256"},
        ),
        "NftId": (
            {"name": "collection_address", "type": "ContractAddress"},
            {"name": "token_id", "type": "u256"},
        ),
    }
)


def _quote(s: str) -> str:
    return f'"{s}"'


def _identity(s: str) -> str:
    return s


REVISION_CONFIGURATION: Mapping[Revision, RevisionConfig] = MappingProxyType(
    {
        Revision.ACTIVE: RevisionConfig(
            domain="StarknetDomain",
            hash_method=compute_poseidon_hash_on_elements,
            hash_merkle_method=compute_poseidon_hash,
            escape_type_string=_quote,
            preset_types=PRESET_TYPES,
            strict=True,
        ),
        Revision.LEGACY: RevisionConfig(
            domain="StarkNetDomain",
            hash_method=compute_pedersen_hash_on_elements,
            hash_merkle_method=compute_pedersen_hash,
            escape_type_string=_identity,
            preset_types=MappingProxyType({}),
            strict=False,
        ),
    }
)

# domain.revision literals as they appear in JSON documents
_REVISION_ALIASES = {
    "0": Revision.LEGACY,
    "1": Revision.ACTIVE,
}


def get_revision_config(revision: Revision) -> RevisionConfig:
    return REVISION_CONFIGURATION[Revision(revision)]


def _declared_revision(domain: Mapping[str, Any]) -> Optional[Revision]:
    """Revision declared in the domain object; absent means legacy."""
    raw = domain.get("revision")
    if raw is None:
        return Revision.LEGACY
    if isinstance(raw, bool) or not isinstance(raw, (int, str)):
        return None
    return _REVISION_ALIASES.get(str(raw).strip())


def identify_revision(typed_data: Mapping[str, Any]) -> Optional[Revision]:
    """
    Detect the revision of a typed-data document, or None if it matches neither.

    Active needs the "StarknetDomain" type and an explicit active revision;
    legacy needs the "StarkNetDomain" type and an absent or legacy revision.
    """
    types = typed_data.get("types")
    domain = typed_data.get("domain")
    if not isinstance(types, Mapping) or not isinstance(domain, Mapping):
        return None

    declared = _declared_revision(domain)
    if REVISION_CONFIGURATION[Revision.ACTIVE].domain in types and declared is Revision.ACTIVE:
        found: Optional[Revision] = Revision.ACTIVE
    elif REVISION_CONFIGURATION[Revision.LEGACY].domain in types and declared is Revision.LEGACY:
        found = Revision.LEGACY
    else:
        found = None
    log.debug("identified typed data revision: %s", found.name if found else None)
    return found


def resolve_revision(typed_data: Mapping[str, Any]) -> Revision:
    """Like `identify_revision`, but raises UnresolvedRevision instead of returning None."""
    revision = identify_revision(typed_data)
    if revision is None:
        raise UnresolvedRevision(
            "Typed data revision is unresolved: expected 'StarknetDomain' with revision 1 "
            "or 'StarkNetDomain' with revision 0/absent"
        )
    return revision


__all__ = [
    "Revision",
    "RevisionConfig",
    "PRESET_TYPES",
    "REVISION_CONFIGURATION",
    "get_revision_config",
    "identify_revision",
    "resolve_revision",
]
