# topmark:header:start
#
#   project      : Loreley
#   file         : options.py
#   file_relpath : src/loreley/cli/options.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Common CLI option utilities for the Loreley CLI.

This module centralizes reusable options (verbosity, color, configuration
file, style compiler settings) and their resolution logic, so the group and
commands can stay thin. The helpers here are Click-aware.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, ParamSpec, TypeVar

import click

from loreley.cli.errors import LoreleyUsageError
from loreley.cli_shared.color import ColorMode
from loreley.config.logging import TRACE_LEVEL, get_logger
from loreley.template import MISSING_KEY_MODES

P = ParamSpec("P")
R = TypeVar("R")

logger = get_logger(__name__)

#: Click context settings shared by the group and its commands.
CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the logging level based on verbose and quiet counts.

    Args:
        verbose_count (int): Number of times ``-v`` is passed.
        quiet_count (int): Number of times ``-q`` is passed.

    Returns:
        int: The logging level.

    Raises:
        LoreleyUsageError: If both verbose and quiet flags are used.

    Behavior:
        Three or more -v flags set TRACE, two set DEBUG, one sets INFO.
        One or more -q flags set ERROR. Default is WARNING.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise LoreleyUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")

    if verbose_count >= 3:  # -vvv
        return TRACE_LEVEL
    if verbose_count == 2:  # -vv
        return logging.DEBUG
    if verbose_count == 1:  # -v
        return logging.INFO
    if quiet_count >= 1:  # -q
        return logging.ERROR
    return logging.WARNING


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add -v/--verbose and -q/--quiet counting options to a command."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Repeat for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Reduce output to errors only.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add --color and --no-color options to a command.

    Behavior:
        ``--color`` takes auto, always or never; ``--no-color`` is equivalent
        to ``--color=never`` and wins over it.
    """
    f = click.option(
        "--color",
        "color_mode",
        type=click.Choice(ColorMode.values()),
        default=None,
        callback=lambda _ctx, _param, value: ColorMode(value) if value else None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add --config and --no-config options to a command.

    Behavior:
        ``--config PATH`` loads an explicit file (``pyproject.toml`` files are
        read from their ``[tool.loreley]`` table). ``--no-config`` skips
        discovery and uses built-in defaults.
    """
    f = click.option(
        "--config",
        "config_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="Read settings from this file instead of discovering one.",
    )(f)
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore loreley.toml and [tool.loreley] in pyproject.toml.",
    )(f)
    return f


def common_style_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the style compiler options: delimiters and missing-key mode.

    Every option defaults to None so values from the configuration file are
    only overridden when the flag is given.
    """
    f = click.option(
        "--left-delim",
        "left_delim",
        default=None,
        metavar="DELIM",
        help="Opening action delimiter (default: '{').",
    )(f)
    f = click.option(
        "--right-delim",
        "right_delim",
        default=None,
        metavar="DELIM",
        help="Closing action delimiter (default: '}').",
    )(f)
    f = click.option(
        "--missing-key",
        "missing_key",
        type=click.Choice(MISSING_KEY_MODES),
        default=None,
        help="Missing map keys print '<no value>' (default) or fail (error).",
    )(f)
    return f
