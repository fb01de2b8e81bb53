"""Command-line interface for snip12 (`snip12 --help`)."""

from .main import app, main, run

__all__ = ["app", "main", "run"]
