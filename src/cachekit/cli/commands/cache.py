# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cache management CLI commands."""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated

import typer

from cachekit.cache.registry import CacheRegistry, build_registry
from cachekit.core.exceptions import CacheError, ConfigurationError, UnknownCacheError

app = typer.Typer(no_args_is_help=True)

# Exit status for invalid arguments, as used by click for usage errors.
EXIT_INVALID_ARGUMENT = 2


class ListFormat(StrEnum):
    TEXT = "text"
    JSON = "json"
    TABLE = "table"


def _load_registry() -> CacheRegistry:
    try:
        return build_registry()
    except ConfigurationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(EXIT_INVALID_ARGUMENT) from exc


@app.command(name="list")
def list_caches(
    cache: Annotated[
        str | None,
        typer.Option("--cache", "-c", help="List entries for this cache (fs, apc)"),
    ] = None,
    show_unknown: Annotated[
        bool,
        typer.Option("--show-unknown", help="Include entries created by other applications"),
    ] = False,
    fmt: Annotated[
        ListFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = ListFormat.TEXT,
) -> None:
    """List all available caches, or the entries of one cache."""
    registry = _load_registry()
    try:
        if fmt == ListFormat.TEXT:
            from cachekit.reports import cache_list_report

            typer.echo(cache_list_report(registry, cache, show_unknown=show_unknown))
        elif cache:
            _output_entries(registry, cache.lower(), show_unknown, fmt)
        else:
            _output_backends(registry, fmt)
    except UnknownCacheError as exc:
        supported = ", ".join(exc.supported)
        typer.echo(f"{exc} (supported: {supported})", err=True)
        raise typer.Exit(EXIT_INVALID_ARGUMENT) from exc
    except (CacheError, OSError) as exc:
        typer.echo(f"Unable to list caches: {exc}", err=True)
        raise typer.Exit(1) from exc


def _output_backends(registry: CacheRegistry, fmt: ListFormat) -> None:
    from cachekit.reports import collect_backend_summaries

    summaries = collect_backend_summaries(registry)
    if fmt == ListFormat.JSON:
        from cachekit.cli.formatters.json_fmt import format_backends_json

        typer.echo(format_backends_json(summaries))
    else:
        from cachekit.cli.formatters.console import format_backends_table

        format_backends_table(summaries)


def _output_entries(
    registry: CacheRegistry, identifier: str, show_unknown: bool, fmt: ListFormat
) -> None:
    from cachekit.reports import collect_entries

    entries = collect_entries(registry, identifier, show_unknown=show_unknown)
    if fmt == ListFormat.JSON:
        from cachekit.cli.formatters.json_fmt import format_entries_json

        typer.echo(format_entries_json(identifier, entries))
    else:
        from cachekit.cli.formatters.console import format_entries_table

        format_entries_table(identifier, entries)


@app.command()
def clear(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Report each cleared cache")
    ] = False,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Do not apply any change")
    ] = False,
) -> None:
    """Clear cache from all sources."""
    from cachekit.reports import cache_clear_report

    registry = _load_registry()
    try:
        report = cache_clear_report(registry, verbose=verbose, dry_run=dry_run)
    except (CacheError, OSError) as exc:
        typer.echo(f"Unable to clear caches: {exc}", err=True)
        raise typer.Exit(1) from exc
    typer.echo(report)
