# topmark:header:start
#
#   project      : Loreley
#   file         : directives.py
#   file_relpath : src/loreley/cli/commands/directives.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Loreley ``directives`` command.

Lists the style directives available in every compiled style, with their
parameters. ``--all`` adds the general template functions (``printf``,
``eq``, ``index``...). With ``-v`` each entry also shows its arity.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from loreley.cli.cmd_common import get_console, get_effective_verbosity
from loreley.cli.options import CONTEXT_SETTINGS
from loreley.renderer import DIRECTIVES, ColorState, bind_directives
from loreley.template.funcs import builtin_functions

if TYPE_CHECKING:
    from loreley.registry import DirectiveRegistry

_PARAM_NAMES: dict[type, str] = {int: "COLOR", str: "TEXT"}


def directive_usage(name: str) -> str:
    """Return a usage line such as ``from TEXT COLOR`` for a style directive."""
    _handler, param_types = DIRECTIVES[name]
    return " ".join([name, *(_PARAM_NAMES[t] for t in param_types)])


@click.command(
    name="directives",
    context_settings=CONTEXT_SETTINGS,
    help="List the builtin style directives.",
)
@click.option(
    "--all",
    "show_all",
    is_flag=True,
    help="Also list the general template functions.",
)
@click.pass_context
def directives_command(ctx: click.Context, show_all: bool) -> None:
    """List directive names, one per line."""
    console = get_console(ctx)
    verbose = get_effective_verbosity(ctx) > 0

    styles: DirectiveRegistry = bind_directives(ColorState())
    for name, directive in styles.items():
        line = directive_usage(name)
        if verbose:
            line = f"{line:<20} args: {directive.arity}"
        console.print(line)

    if not show_all:
        return

    console.print()
    for name, directive in builtin_functions().items():
        console.print(f"{name:<20} args: {directive.arity}" if verbose else name)
