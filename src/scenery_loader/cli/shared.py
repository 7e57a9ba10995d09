# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, session bootstrap)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer
from rich.console import Console, RenderableType

from ..config import load_config
from ..errors import SceneryLoaderError
from ..logging import configure_logging, get_console
from ..logging import fail as core_fail
from ..logging import info as core_info
from ..logging import ok as core_ok
from ..logging import section as core_section
from ..logging import warn as core_warn
from ..memory import load_snapshot
from ..session import LoaderSession


class CLIError(SceneryLoaderError):
    """Command failure wrapping the loader error that stopped it.

    Attributes:
        cause: Loader error reported to the user.
        exit_code: Process exit status for the failure.
    """

    def __init__(self, cause: SceneryLoaderError, *, exit_code: int = 1) -> None:
        super().__init__(str(cause))
        self.cause = cause
        self.exit_code = exit_code

    def report(self, logger: CLILogger) -> typer.Exit:
        """Print the failure through ``logger`` and return the exit to raise."""

        logger.fail(str(self))
        return typer.Exit(code=self.exit_code)


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI emoji settings."""

    console: Console
    use_emoji: bool
    use_color: bool

    def fail(self, message: str) -> None:
        """Log a failure message honouring emoji preferences."""

        core_fail(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def warn(self, message: str) -> None:
        """Log a warning message honouring emoji preferences."""

        core_warn(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def ok(self, message: str) -> None:
        """Log a success message honouring emoji preferences."""

        core_ok(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def info(self, message: str) -> None:
        """Log an informational message honouring emoji preferences."""

        core_info(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def section(self, title: str) -> None:
        """Print a section header."""

        core_section(title, use_color=self.use_color)

    def render(self, renderable: RenderableType) -> None:
        """Print a Rich renderable such as a table."""

        self.console.print(renderable)


def build_cli_logger(*, emoji: bool, no_color: bool = False, debug: bool = False) -> CLILogger:
    """Return a ``CLILogger`` and route library logging through Rich.

    Args:
        emoji: Whether log output may include emoji glyphs.
        no_color: Whether terminal colour output should be disabled.
        debug: Whether library debug records should be shown.

    Returns:
        CLILogger: Logger bound to a shared Rich console.
    """

    configure_logging(debug=debug, use_color=not no_color)
    console = get_console(color=not no_color, emoji=emoji)
    return CLILogger(console=console, use_emoji=emoji, use_color=not no_color)


@dataclass(frozen=True, slots=True)
class SessionOptions:
    """Options shared by every command that opens a loader session."""

    snapshot: Path
    config: Path | None
    emoji: bool
    no_color: bool
    debug: bool


def open_session(options: SessionOptions) -> LoaderSession:
    """Open a session over the snapshot named by ``options``.

    Raises:
        CLIError: If the configuration or snapshot is invalid, or the host is
            unavailable.
    """

    try:
        config = load_config(options.config)
        snapshot = load_snapshot(options.snapshot)
        host = snapshot.build_host(capacities=config.capacities)
        session = LoaderSession.open(host, snapshot.build_surface(), config=config)
        session.build_index()
    except SceneryLoaderError as exc:
        raise CLIError(exc) from exc
    return session


def start_command(ctx: typer.Context) -> tuple[CLILogger, LoaderSession]:
    """Return the logger and open session for the command bound to ``ctx``.

    Raises:
        typer.Exit: If the session cannot be opened.
    """

    options: SessionOptions = ctx.obj
    logger = build_cli_logger(emoji=options.emoji, no_color=options.no_color, debug=options.debug)
    try:
        session = open_session(options)
    except CLIError as exc:
        raise exc.report(logger) from exc
    return logger, session


__all__ = [
    "CLIError",
    "CLILogger",
    "SessionOptions",
    "build_cli_logger",
    "open_session",
    "start_command",
]
