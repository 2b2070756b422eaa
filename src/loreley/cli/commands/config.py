# topmark:header:start
#
#   project      : Loreley
#   file         : config.py
#   file_relpath : src/loreley/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Loreley ``config`` command.

Prints the effective configuration (defaults overlaid with ``loreley.toml`` or
``[tool.loreley]``) as TOML. The output can seed a new configuration file:

    $ loreley config --no-config > loreley.toml
    $ loreley config --pyproject   # [tool.loreley] table for pyproject.toml
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from loreley.cli.cmd_common import build_config, get_console, get_effective_verbosity
from loreley.cli.options import CONTEXT_SETTINGS, common_config_options
from loreley.config.io import to_toml

if TYPE_CHECKING:
    from pathlib import Path


@click.command(
    name="config",
    context_settings=CONTEXT_SETTINGS,
    help="Show the effective configuration as TOML.",
)
@click.option(
    "--pyproject",
    "for_pyproject",
    is_flag=True,
    help="Nest the settings under [tool.loreley] for pyproject.toml.",
)
@common_config_options
@click.pass_context
def config_command(
    ctx: click.Context,
    *,
    for_pyproject: bool,
    config_path: Path | None,
    no_config: bool,
) -> None:
    """Print the effective configuration.

    Args:
        ctx (click.Context): Click context carrying the shared console.
        for_pyproject (bool): Emit a ``[tool.loreley]`` table.
        config_path (Path | None): Explicit configuration file.
        no_config (bool): Ignore configuration files and show defaults.
    """
    console = get_console(ctx)
    config = build_config(config_path=config_path, no_config=no_config)
    if get_effective_verbosity(ctx) > 0:
        source = str(config.config_file) if config.config_file else "built-in defaults"
        console.print(f"# source: {source}")
    console.print(to_toml(config, for_pyproject=for_pyproject), nl=False)
