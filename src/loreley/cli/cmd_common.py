# topmark:header:start
#
#   project      : Loreley
#   file         : cmd_common.py
#   file_relpath : src/loreley/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Helpers shared by Loreley commands.

These read the shared state `loreley.cli.main.init_common_state` stores on
``ctx.obj`` and translate library exceptions into CLI errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from loreley.cli.errors import LoreleyConfigError
from loreley.cli_shared.color import ColorMode, resolve_color_mode
from loreley.config.io import load_config
from loreley.config.logging import get_logger
from loreley.config.model import LoreleyConfig
from loreley.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    import click

    from loreley.cli.console import OutputConsole
    from loreley.config.logging import LoreleyLogger

logger: LoreleyLogger = get_logger(__name__)


def get_console(ctx: click.Context) -> OutputConsole:
    return ctx.obj["console"]


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity: the ``-v`` count, 0 when terse."""
    return int(ctx.obj.get("verbosity_level", 0))


def build_config(
    *,
    config_path: Path | None,
    no_config: bool,
    **overrides: Any,
) -> LoreleyConfig:
    """Load the configuration file (unless disabled) and apply CLI overrides.

    Args:
        config_path (Path | None): Explicit file from ``--config``.
        no_config (bool): Skip discovery and start from defaults.
        **overrides (Any): `LoreleyConfig` fields from CLI flags; ``None``
            values leave the file's value in place.

    Returns:
        LoreleyConfig: The effective configuration.

    Raises:
        LoreleyConfigError: If the configuration file is invalid.
    """
    if no_config and config_path is None:
        base = LoreleyConfig()
    else:
        try:
            base = load_config(config_path)
        except ConfigError as e:
            raise LoreleyConfigError(str(e)) from e
    return base.with_overrides(**overrides)


def resolve_output_color(ctx: click.Context, config: LoreleyConfig) -> bool:
    """Decide whether rendered styles keep their escapes.

    Precedence: ``--no-color``, then ``--color``, then the configuration
    file's ``color``, then the environment and TTY detection.
    """
    if ctx.obj.get("no_color"):
        return False
    mode: ColorMode | None = ctx.obj.get("color_mode") or config.color
    enabled = resolve_color_mode(color_mode_override=mode)
    logger.debug("Output color mode %s -> %s", mode, enabled)
    return enabled
