# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Typer CLI application root."""

from __future__ import annotations

from typing import Annotated

import typer

from cachekit import __version__
from cachekit.cli.commands import cache as cache_cmd

app = typer.Typer(
    name="cachekit",
    help="Pluggable cache with filesystem and shared-memory backends",
    no_args_is_help=True,
)

app.add_typer(cache_cmd.app, name="cache", help="List and clear caches")


@app.callback()
def main(
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Logging level (default from settings)")
    ] = None,
    log_format: Annotated[
        str | None, typer.Option("--log-format", help="Log format: text or json")
    ] = None,
) -> None:
    """Configure logging before running a command."""
    from cachekit.core.config import get_settings
    from cachekit.core.exceptions import ConfigurationError
    from cachekit.core.logging import setup_logging

    try:
        settings = get_settings()
    except ConfigurationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(2) from exc
    setup_logging(log_level or settings.log_level, log_format or settings.log_format)


@app.command()
def version() -> None:
    """Show the cachekit version."""
    typer.echo(f"cachekit {__version__}")
