# topmark:header:start
#
#   project      : Loreley
#   file         : console.py
#   file_relpath : src/loreley/cli/console.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Console abstraction for user-facing program output.

Rendered styles, stripped text and listings go through an `OutputConsole`
(in practice a `ClickConsole`); diagnostics go through `logging`.

Note:
    ``click.echo`` removes ANSI escapes when ``color`` is False. Rendered styles
    are compiled with ``no_colors`` in that case, so nothing is lost, but it
    also means ``--color always`` is needed to keep escapes when piping.
"""

from __future__ import annotations

import sys
from typing import Any, Protocol, TextIO

import click


class OutputConsole(Protocol):
    """What commands and CLI errors write through, as stored in ``ctx.obj``."""

    enable_color: bool

    def print(self, text: str = "", *, nl: bool = True) -> None: ...

    def error(self, text: str, *, nl: bool = True) -> None: ...

    def styled(self, text: str, **style_kwargs: Any) -> str: ...


class ClickConsole:
    """Program-output console, independent from the logger.

    Args:
        enable_color (bool): If True, ANSI escapes reach the output streams.
        out (TextIO | None): Stream for standard output (defaults to sys.stdout).
        err (TextIO | None): Stream for error output (defaults to sys.stderr).
    """

    enable_color: bool
    out: TextIO | None
    err: TextIO | None

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out = out
        self.err = err

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write rendered output to stdout."""
        click.echo(text, nl=nl, file=self.out or sys.stdout, color=self.enable_color)

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error message to stderr, in red when color is on."""
        click.secho(
            text, nl=nl, file=self.err or sys.stderr, color=self.enable_color, fg="bright_red"
        )

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` styled with `click.style`, or unchanged if color is off."""
        if not self.enable_color:
            return text
        return click.style(text, **style_kwargs)
