"""
snip12.cli.main
===============

`snip12` — inspect and hash Starknet typed-data documents from the shell.

Examples
--------
    $ snip12 hash mail.json --account 0xcd2a3d9f938e13cd947ec05abc7fe734df8dd826
    $ snip12 encode-type mail.json
    $ snip12 type-hash mail.json --type Person
    $ snip12 struct-hash mail.json --type StarkNetDomain
    $ snip12 revision mail.json

Configuration
-------------
- Log level : `--log-level` or env `SNIP12_LOG_LEVEL` (default: WARNING)
- Max depth : `--max-depth` or env `SNIP12_MAX_DEPTH` (default: 128)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from ..config import EncoderConfig
from ..document import TypedData
from ..errors import TypedDataError
from ..version import version as _version

app = typer.Typer(
    name="snip12",
    help="Encode and hash Starknet typed data (SNIP-12).",
    no_args_is_help=True,
    add_completion=False,
)

__all__ = ["app", "main", "run"]


@dataclass
class Ctx:
    config: EncoderConfig


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=logging.getLevelName(level),
        format="[%(levelname)s] %(name)s: %(message)s",
    )


@app.callback()
def _root(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...).", envvar="SNIP12_LOG_LEVEL"
    ),
    max_depth: Optional[int] = typer.Option(
        None, "--max-depth", help="Maximum value nesting depth.", envvar="SNIP12_MAX_DEPTH"
    ),
) -> None:
    """Resolve the effective configuration for this CLI process."""
    try:
        config = EncoderConfig.with_overrides(None, log_level=log_level, max_depth=max_depth)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    _configure_logging(config.log_level)
    ctx.obj = Ctx(config=config)


def _load(ctx: typer.Context, path: Path) -> TypedData:
    c: Ctx = ctx.obj
    try:
        return TypedData.from_file(path, config=c.config)
    except OSError as e:
        raise typer.BadParameter(f"cannot read {path}: {e}") from e


def _fail(e: TypedDataError) -> None:
    typer.echo(f"error: {e}", err=True)
    raise typer.Exit(code=1)


_FILE = typer.Argument(..., help="Typed data JSON document.")
_TYPE = typer.Option(None, "--type", "-t", help="Type name (default: primaryType).")


@app.command("version")
def version() -> None:
    """Print the snip12 version."""
    typer.echo(f"snip12 {_version()}")


@app.command("hash")
def message_hash(
    ctx: typer.Context,
    path: Path = _FILE,
    account: str = typer.Option(..., "--account", "-a", help="Signer account address."),
) -> None:
    """Print the message hash to sign."""
    try:
        typer.echo(_load(ctx, path).message_hash(account))
    except TypedDataError as e:
        _fail(e)


@app.command("encode-type")
def encode_type(ctx: typer.Context, path: Path = _FILE, type_name: Optional[str] = _TYPE) -> None:
    """Print the canonical type string."""
    try:
        typer.echo(_load(ctx, path).encode_type(type_name))
    except TypedDataError as e:
        _fail(e)


@app.command("type-hash")
def type_hash(ctx: typer.Context, path: Path = _FILE, type_name: Optional[str] = _TYPE) -> None:
    """Print the type hash."""
    try:
        typer.echo(_load(ctx, path).type_hash(type_name))
    except TypedDataError as e:
        _fail(e)


@app.command("struct-hash")
def struct_hash(ctx: typer.Context, path: Path = _FILE, type_name: Optional[str] = _TYPE) -> None:
    """
    Print a struct hash: the domain for the domain type, the message otherwise.
    """
    try:
        typer.echo(_load(ctx, path).struct_hash(type_name))
    except TypedDataError as e:
        _fail(e)


@app.command("revision")
def revision(ctx: typer.Context, path: Path = _FILE) -> None:
    """Print the detected revision (legacy / active)."""
    try:
        typer.echo(_load(ctx, path).revision.name.lower())
    except TypedDataError as e:
        _fail(e)


# --- Entrypoints --------------------------------------------------------------


def main(argv: Optional[list[str]] = None) -> int:
    """
    Run the CLI. Returns an integer exit code.
    """
    try:
        # Without standalone mode, click returns the exit code of typer.Exit
        rc = app(prog_name="snip12", standalone_mode=False, args=argv)
        return int(rc or 0)
    except typer.Exit as e:
        return int(e.exit_code)
    except Exception as e:
        typer.echo(f"error: {e}", err=True)
        return 1


def run() -> None:
    raise SystemExit(main())
