# topmark:header:start
#
#   project      : Loreley
#   file         : strip.py
#   file_relpath : src/loreley/cli/commands/strip.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Loreley ``strip`` command.

Removes SGR escape sequences from text, e.g. to measure or log the plain
content of rendered styles.

Examples:
    $ loreley strip $'\\e[48;5;2mfinn'
    $ some-colored-tool | loreley strip
"""

from __future__ import annotations

import click

from loreley.cli.cmd_common import get_console
from loreley.cli.options import CONTEXT_SETTINGS
from loreley.trim import trim_styles


@click.command(
    name="strip",
    context_settings=CONTEXT_SETTINGS,
    help="Remove style escape sequences from TEXT (or STDIN when omitted or '-').",
)
@click.argument("text", required=False, default=None)
@click.pass_context
def strip_command(ctx: click.Context, text: str | None) -> None:
    """Print ``text`` without escape sequences.

    Text from STDIN is written back unchanged apart from the escapes, so its
    own line endings are kept; a TEXT argument is printed with a newline.
    """
    console = get_console(ctx)
    if text is None or text == "-":
        content = click.get_text_stream("stdin").read()
        console.print(trim_styles(content), nl=False)
        return
    console.print(trim_styles(text))
