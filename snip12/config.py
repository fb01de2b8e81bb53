"""
Encoder configuration: recursion guard and log level.

- Loads defaults and supports overrides via environment variables (SNIP12_*).
- Values are validated on construction; bad values raise ValueError.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

_DEFAULT_MAX_DEPTH = 128
_DEFAULT_LOG_LEVEL = "WARNING"

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


def _parse_max_depth(val: Any, default: int = _DEFAULT_MAX_DEPTH) -> int:
    if val is None or val == "":
        return int(default)
    depth = int(str(val).strip()) if not isinstance(val, int) else val
    if depth < 1:
        raise ValueError(f"max_depth must be a positive integer, got: {val!r}")
    return depth


def _parse_log_level(val: Optional[str], default: str = _DEFAULT_LOG_LEVEL) -> str:
    if not val:
        return default
    level = str(val).strip().upper()
    if level not in _LEVELS:
        raise ValueError(f"log_level must be one of {_LEVELS}, got: {val!r}")
    return level


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None else default


@dataclass(slots=True)
class EncoderConfig:
    # Maximum nesting of values (structs, arrays, enum payloads, merkle leaves)
    max_depth: int = _DEFAULT_MAX_DEPTH
    # Level applied by the CLI to the root logger
    log_level: str = _DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        self.max_depth = _parse_max_depth(self.max_depth)
        self.log_level = _parse_log_level(self.log_level)

    @classmethod
    def from_env(cls, prefix: str = "SNIP12_") -> "EncoderConfig":
        """
        Create config from environment variables:

        SNIP12_MAX_DEPTH    (positive int)
        SNIP12_LOG_LEVEL    (DEBUG, INFO, WARNING, ...)
        """
        return cls(
            max_depth=_parse_max_depth(_env(f"{prefix}MAX_DEPTH")),
            log_level=_parse_log_level(_env(f"{prefix}LOG_LEVEL")),
        )

    @classmethod
    def with_overrides(
        cls, base: Optional["EncoderConfig"] = None, **overrides: Any
    ) -> "EncoderConfig":
        """
        Build from an existing config plus keyword overrides.
        Unknown keys and None values are ignored.
        """
        base = base or cls.from_env()
        data = base.to_dict()
        data.update({k: v for k, v in overrides.items() if k in data and v is not None})
        return cls(**data)

    @property
    def log_level_int(self) -> int:
        return logging.getLevelName(self.log_level)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "max_depth": int(self.max_depth),
            "log_level": self.log_level,
        }


DEFAULT = EncoderConfig.from_env()

__all__ = ["EncoderConfig", "DEFAULT"]
