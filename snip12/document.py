"""
Ergonomic wrapper around a typed-data document.

    td = TypedData.from_file("mail.json")
    td.revision                    # Revision.LEGACY
    td.message_hash("0x1234")      # 0x-hex digest

The functional API in `snip12.typed_data` does the work; this class only
keeps the document together with its detected revision.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from .config import EncoderConfig
from .errors import SchemaMismatch
from .revision import Revision, get_revision_config, resolve_revision
from .schema import validate_schema
from .typed_data import (encode_type, get_message_hash, get_struct_hash,
                         get_type_hash)
from .types import FieldDecl, TypedDataDict
from .utils.num import BigNumberish


@dataclass(frozen=True)
class TypedData:
    types: Dict[str, List[FieldDecl]]
    primary_type: str
    domain: Dict[str, Any]
    message: Dict[str, Any]
    config: Optional[EncoderConfig] = field(default=None, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, config: Optional[EncoderConfig] = None) -> "TypedData":
        """Validate the document shape and revision, then wrap it."""
        validate_schema(data)
        resolve_revision(data)
        return cls(
            types=dict(data["types"]),
            primary_type=data["primaryType"],
            domain=dict(data["domain"]),
            message=dict(data["message"]),
            config=config,
        )

    @classmethod
    def from_json(cls, text: Union[str, bytes], *, config: Optional[EncoderConfig] = None) -> "TypedData":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SchemaMismatch(f"Typed data is not valid JSON: {e}") from e
        return cls.from_dict(data, config=config)

    @classmethod
    def from_file(cls, path: Union[str, Path], *, config: Optional[EncoderConfig] = None) -> "TypedData":
        return cls.from_json(Path(path).read_text(encoding="utf-8"), config=config)

    def to_dict(self) -> TypedDataDict:
        return {
            "types": self.types,
            "primaryType": self.primary_type,
            "domain": self.domain,  # type: ignore[typeddict-item]
            "message": self.message,
        }

    @property
    def revision(self) -> Revision:
        return resolve_revision(self.to_dict())

    @property
    def domain_type(self) -> str:
        return get_revision_config(self.revision).domain

    @property
    def hash_method(self) -> Callable[[Iterable[Any]], str]:
        return get_revision_config(self.revision).hash_method

    def encode_type(self, type_name: Optional[str] = None) -> str:
        return encode_type(self.types, type_name or self.primary_type, self.revision)

    def type_hash(self, type_name: Optional[str] = None) -> str:
        return get_type_hash(self.types, type_name or self.primary_type, self.revision)

    def struct_hash(self, type_name: Optional[str] = None, data: Optional[Mapping[str, Any]] = None) -> str:
        """
        Hash a struct instance. Defaults: the primary type over `message`; the
        domain type over `domain`.
        """
        name = type_name or self.primary_type
        if data is None:
            data = self.domain if name == self.domain_type else self.message
        return get_struct_hash(self.types, name, data, self.revision, config=self.config)

    def message_hash(self, account: BigNumberish) -> str:
        return get_message_hash(self.to_dict(), account, config=self.config)


__all__ = ["TypedData"]
