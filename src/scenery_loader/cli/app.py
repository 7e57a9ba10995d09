# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..errors import UnknownGroupError
from ..view import SortColumn, build_rows, describe_toggle, render_capacities, render_groups
from .shared import CLIError, SessionOptions, start_command

app = typer.Typer(help="Load and unload scenery groups without breaking the map.", no_args_is_help=True)


@app.callback()
def main(
    ctx: typer.Context,
    snapshot: Annotated[
        Path,
        typer.Option("--snapshot", "-s", help="JSON snapshot describing the host catalog and map."),
    ],
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="TOML configuration file."),
    ] = None,
    emoji: Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji output.")] = True,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable ANSI colour output.")] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Show library debug logging.")] = False,
) -> None:
    """Record options shared by every subcommand."""

    ctx.obj = SessionOptions(snapshot=snapshot, config=config, emoji=emoji, no_color=no_color, debug=debug)


@app.command("groups")
def groups_command(
    ctx: typer.Context,
    search: Annotated[str, typer.Option("--search", "-q", help="Filter by name, identifier or author.")] = "",
    sort: Annotated[SortColumn | None, typer.Option("--sort", help="Column to sort by.")] = None,
    descending: Annotated[bool, typer.Option("--descending", help="Reverse the sort order.")] = False,
) -> None:
    """List installed scenery groups and their load status."""

    logger, session = start_command(ctx)
    rows = build_rows(session, search=search, sort=sort, descending=descending)
    if not rows:
        logger.warn(f"No scenery groups match '{search}'")
        raise typer.Exit(code=0)
    logger.render(render_groups(rows))


@app.command("toggle")
def toggle_command(
    ctx: typer.Context,
    groups: Annotated[list[str], typer.Argument(help="Scenery group identifiers to toggle, in order.")],
) -> None:
    """Toggle one or more scenery groups within a single session."""

    logger, session = start_command(ctx)
    for group in groups:
        try:
            result = session.toggle(group)
        except UnknownGroupError as exc:
            raise CLIError(exc).report(logger) from exc
        if result.failed or result.retained:
            logger.warn(describe_toggle(result))
        else:
            logger.ok(describe_toggle(result))
    logger.section("Scenery Groups")
    logger.render(render_groups(build_rows(session)))


@app.command("usage")
def usage_command(ctx: typer.Context) -> None:
    """Show loaded object counts against their limits and map usage."""

    logger, session = start_command(ctx)
    report = session.usage()
    logger.render(render_capacities(session, report))
    if report.unresolved:
        logger.info(f"{len(report.unresolved)} map reference(s) point at unknown objects")


__all__ = ["app"]
