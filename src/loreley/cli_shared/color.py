# topmark:header:start
#
#   project      : Loreley
#   file         : color.py
#   file_relpath : src/loreley/cli_shared/color.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Click-independent color helpers for Loreley.

This module provides:

- the `ColorMode` enum, shared by the ``--color`` option and the ``color`` key
  of the configuration file;
- `resolve_color_mode`, which decides whether rendered styles keep their
  escape sequences.

When color is disabled the CLI does not strip anything after the fact: it
compiles styles with ``no_colors`` set, so directives still track state but
emit no escape text.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import TYPE_CHECKING

from loreley.config.logging import get_logger

if TYPE_CHECKING:
    from loreley.config.logging import LoreleyLogger


logger: LoreleyLogger = get_logger(__name__)


class ColorMode(str, Enum):
    """User intent for colorized terminal output.

    Attributes:
        AUTO: Enable color only when stdout is a TTY (after env overrides).
        ALWAYS: Force-enable color regardless of TTY status.
        NEVER: Disable color entirely.
    """

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"

    @classmethod
    def values(cls) -> list[str]:
        return [m.value for m in cls]


def resolve_color_mode(
    *,
    color_mode_override: ColorMode | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Decision precedence:
        1. **Override**: ``ALWAYS`` → True; ``NEVER`` → False.
        2. **Environment**:
            - `FORCE_COLOR` (set and not equal to `"0"`) → True
            - `NO_COLOR` (set to any value) → False
        3. **Auto**: If none of the above decide, return `stdout.isatty()`.

    Args:
        color_mode_override (ColorMode | None): Mode from ``--color`` or the
            configuration file; `None` or ``AUTO`` defer to the environment.
        stdout_isatty (bool | None): Optional override for TTY detection. When
            `None`, the function calls `sys.stdout.isatty()` and falls back to
            `False` on error.

    Returns:
        bool: True if ANSI color should be enabled; False otherwise.
    """
    if color_mode_override == ColorMode.ALWAYS:
        return True
    if color_mode_override == ColorMode.NEVER:
        return False

    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        logger.debug("FORCE_COLOR=%s enables color", force_color)
        return True
    if os.getenv("NO_COLOR") is not None:
        logger.debug("NO_COLOR disables color")
        return False

    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (OSError, ValueError):
            stdout_isatty = False
    return bool(stdout_isatty)
