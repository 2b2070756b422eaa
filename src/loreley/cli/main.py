# topmark:header:start
#
#   project      : Loreley
#   file         : main.py
#   file_relpath : src/loreley/cli/main.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Loreley command line entry point.

Key ideas:
- Group-level options (verbosity, color) are initialized once and placed into
  ``ctx.obj``; commands read them back through `loreley.cli.cmd_common`.
- Commands translate library errors into `loreley.cli.errors` exceptions,
  which carry sysexits-aligned exit codes.
"""

from __future__ import annotations

import click

from loreley.cli.commands.config import config_command
from loreley.cli.commands.directives import directives_command
from loreley.cli.commands.render import render_command
from loreley.cli.commands.strip import strip_command
from loreley.cli.commands.version import version_command
from loreley.cli.console import ClickConsole
from loreley.cli.options import (
    CONTEXT_SETTINGS,
    common_color_options,
    common_verbose_options,
    resolve_verbosity,
)
from loreley.cli_shared.color import ColorMode, resolve_color_mode
from loreley.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging, color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    # LORELEY_LOG_LEVEL wins over -v/-q for internal logging
    level_cli = resolve_verbosity(verbose, quiet)
    level_env = resolve_env_log_level()
    log_level = level_env if level_env is not None else level_cli
    ctx.obj["log_level"] = log_level
    ctx.obj["verbosity_level"] = verbose
    setup_logging(level=log_level)

    ctx.obj["color_mode"] = color_mode
    ctx.obj["no_color"] = no_color
    effective_color_mode = ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    enable_color = resolve_color_mode(color_mode_override=effective_color_mode)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    help="Loreley: compile style templates into ANSI-colored text.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the Loreley CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )

    if ctx.invoked_subcommand is None:
        console = ctx.obj["console"]
        console.print("Hint: use 'loreley render TEMPLATE' to render a style.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(render_command)

cli.add_command(strip_command)

cli.add_command(directives_command)

cli.add_command(config_command)

cli.add_command(version_command)

if __name__ == "__main__":
    cli()
