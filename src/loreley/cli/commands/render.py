# topmark:header:start
#
#   project      : Loreley
#   file         : render.py
#   file_relpath : src/loreley/cli/commands/render.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Loreley ``render`` command.

Compiles a style template and prints the result of executing it.

Data for ``.field`` lookups comes from ``-d KEY=VALUE`` pairs (string values)
and/or ``--data-json`` (any JSON value; must be an object when combined with
``-d``, whose pairs then override its keys).

Examples:
  Render a two-segment prompt:

    $ loreley render '{fg 7}{bg 2} main {to 4 ""} ~/src '

  Use data and custom delimiters:

    $ loreley render --left-delim '<<' --right-delim '>>' '<<bold>><<.user>>' -d user=finn

  Read the template from STDIN:

    $ echo '{bg 1}error' | loreley render -
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from loreley.cli.cmd_common import build_config, get_console, resolve_output_color
from loreley.cli.errors import LoreleyDataError, LoreleyUsageError
from loreley.cli.options import CONTEXT_SETTINGS, common_config_options, common_style_options
from loreley.config.logging import get_logger
from loreley.errors import CompileError, ExecutionError

if TYPE_CHECKING:
    from pathlib import Path

    from loreley.compiler import Style
    from loreley.config.logging import LoreleyLogger
    from loreley.template import MissingKey

logger: LoreleyLogger = get_logger(__name__)


def parse_data_pairs(pairs: tuple[str, ...]) -> dict[str, str]:
    """Turn ``KEY=VALUE`` strings into a dict; later keys win.

    Raises:
        LoreleyUsageError: If a pair has no ``=`` or an empty key.
    """
    data: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise LoreleyUsageError(f"Invalid --data value {pair!r}: expected KEY=VALUE.")
        data[key] = value
    return data


def build_data(pairs: tuple[str, ...], data_json: str | None) -> Any:
    """Combine ``--data-json`` and ``-d`` pairs into the template's dot value.

    With neither given the dot is an empty mapping, so ``.field`` prints
    ``<no value>``.

    Raises:
        LoreleyDataError: If ``data_json`` is not valid JSON, or is not an
            object while ``-d`` pairs are also given.
        LoreleyUsageError: If a pair is malformed.
    """
    overrides = parse_data_pairs(pairs)
    if data_json is None:
        return overrides
    try:
        decoded: Any = json.loads(data_json)
    except json.JSONDecodeError as e:
        raise LoreleyDataError(f"Invalid --data-json: {e}") from e
    if not overrides:
        return decoded
    if not isinstance(decoded, dict):
        raise LoreleyDataError("--data-json must be an object when combined with --data.")
    decoded.update(overrides)
    return decoded


@click.command(
    name="render",
    context_settings=CONTEXT_SETTINGS,
    help="Compile a style TEMPLATE and print the rendered text ('-' reads STDIN).",
)
@click.argument("template", metavar="TEMPLATE")
@click.option(
    "-d",
    "--data",
    "data_pairs",
    multiple=True,
    metavar="KEY=VALUE",
    help="Set a string field visible as .KEY (repeatable).",
)
@click.option(
    "--data-json",
    "data_json",
    default=None,
    metavar="JSON",
    help="JSON value used as the template's data (dot).",
)
@click.option(
    "--reset/--no-reset",
    "reset",
    default=None,
    help="Append a reset directive so styles do not leak (default: on).",
)
@click.option(
    "-n",
    "--no-newline",
    "no_newline",
    is_flag=True,
    help="Do not print a trailing newline.",
)
@common_style_options
@common_config_options
@click.pass_context
def render_command(
    ctx: click.Context,
    *,
    template: str,
    data_pairs: tuple[str, ...],
    data_json: str | None,
    reset: bool | None,
    no_newline: bool,
    left_delim: str | None,
    right_delim: str | None,
    missing_key: MissingKey | None,
    config_path: Path | None,
    no_config: bool,
) -> None:
    """Compile and render a style template.

    Args:
        ctx (click.Context): Click context carrying the shared console and color state.
        template (str): Style text, or ``-`` to read it from STDIN.
        data_pairs (tuple[str, ...]): ``KEY=VALUE`` pairs.
        data_json (str | None): JSON data.
        reset (bool | None): Override for the configuration's ``reset``.
        no_newline (bool): Suppress the trailing newline.
        left_delim (str | None): Override for the opening delimiter.
        right_delim (str | None): Override for the closing delimiter.
        missing_key (MissingKey | None): Override for the missing-key mode.
        config_path (Path | None): Explicit configuration file.
        no_config (bool): Ignore configuration files.
    """
    console = get_console(ctx)
    config = build_config(
        config_path=config_path,
        no_config=no_config,
        left_delim=left_delim,
        right_delim=right_delim,
        missing_key=missing_key,
        reset=reset,
    )
    color = resolve_output_color(ctx, config)

    if template == "-":
        template = click.get_text_stream("stdin").read().rstrip("\n")

    data = build_data(data_pairs, data_json)

    try:
        compiler = config.compiler(no_colors=not color)
    except ValueError as e:
        raise LoreleyUsageError(str(e)) from e

    try:
        style: Style = (
            compiler.compile_with_reset(template) if config.reset else compiler.compile(template)
        )
        rendered: str = style.execute_to_string(data)
    except (CompileError, ExecutionError) as e:
        raise LoreleyDataError(str(e)) from e

    logger.debug(
        "Rendered %d characters (fg=%d, bg=%d)", len(rendered), style.foreground, style.background
    )
    console.enable_color = color
    console.print(rendered, nl=not no_newline)
