"""Version of the snip12 package."""

from __future__ import annotations

from importlib import metadata

# Bump this when publishing
__version__ = "0.3.0"


def version() -> str:
    """Installed distribution version; the source tree's `__version__` when not installed."""
    try:
        return metadata.version("snip12")
    except metadata.PackageNotFoundError:
        return __version__


__all__ = ["__version__", "version"]
