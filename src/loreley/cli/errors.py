# topmark:header:start
#
#   project      : Loreley
#   file         : errors.py
#   file_relpath : src/loreley/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Exceptions for the Loreley CLI.

Usage:
    Raise these from commands to exit with a standardized message and exit
    code. Library errors are translated at the command boundary, e.g.
    `CompileError` becomes `LoreleyDataError`.

Styling:
    Exceptions prefer the project console if one is present in the Click
    context (see `show()`); otherwise Click's default display is used.
"""

from __future__ import annotations

from typing import IO, Any

import click

from loreley.cli_shared.exit_codes import ExitCode


class LoreleyCliError(click.ClickException):
    """Base class for all Loreley CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text, without Click's coloring."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        obj = getattr(ctx, "obj", None) if ctx is not None else None
        console = obj.get("console") if isinstance(obj, dict) else None
        if console is None:
            super().show(file)
            return
        console.error(f"Error: {self.format_message()}")


class LoreleyUsageError(LoreleyCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class LoreleyDataError(LoreleyCliError):
    """Error for styles that fail to compile or execute, and undecodable data."""

    exit_code = ExitCode.DATA_ERROR


class LoreleyConfigError(LoreleyCliError):
    """Error for configuration errors (invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR
