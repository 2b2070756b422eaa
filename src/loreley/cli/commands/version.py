# topmark:header:start
#
#   project      : Loreley
#   file         : version.py
#   file_relpath : src/loreley/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Loreley ``version`` command.

Prints the Loreley version as installed in the active Python environment.
"""

from __future__ import annotations

import click

from loreley.cli.cmd_common import get_console, get_effective_verbosity
from loreley.cli.options import CONTEXT_SETTINGS
from loreley.constants import LORELEY_VERSION


@click.command(
    name="version",
    context_settings=CONTEXT_SETTINGS,
    help="Show the current version of Loreley.",
)
@click.pass_context
def version_command(ctx: click.Context) -> None:
    """Show the current version of Loreley."""
    console = get_console(ctx)
    if get_effective_verbosity(ctx) > 0:
        console.print(console.styled("Loreley version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(LORELEY_VERSION, bold=True)}")
    else:
        console.print(console.styled(LORELEY_VERSION, bold=True))
