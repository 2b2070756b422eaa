# topmark:header:start
#
#   project      : Loreley
#   file         : model.py
#   file_relpath : src/loreley/config/model.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Immutable runtime configuration for the Loreley CLI.

`LoreleyConfig` holds the settings a configuration file may provide. Values
are layered: built-in defaults, then the configuration file, then CLI flags
(via `LoreleyConfig.with_overrides`, which ignores ``None`` so unset flags do
not mask file values).
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Any

from loreley.compiler import Compiler
from loreley.constants import DEFAULT_LEFT_DELIM, DEFAULT_RIGHT_DELIM
from loreley.config.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from loreley.cli_shared.color import ColorMode
    from loreley.config.logging import LoreleyLogger
    from loreley.template import MissingKey

logger: LoreleyLogger = get_logger(__name__)

TomlTable = dict[str, Any]


@dataclass(frozen=True)
class LoreleyConfig:
    """Effective configuration.

    Attributes:
        left_delim (str): Opening action delimiter.
        right_delim (str): Closing action delimiter.
        missing_key (MissingKey): ``"default"`` or ``"error"``.
        reset (bool): Append a reset directive to rendered styles.
        color (ColorMode | None): Color preference; ``None`` defers to the
            environment and TTY detection.
        config_file (Path | None): File the values were read from, if any.
    """

    left_delim: str = DEFAULT_LEFT_DELIM
    right_delim: str = DEFAULT_RIGHT_DELIM
    missing_key: MissingKey = "default"
    reset: bool = True
    color: ColorMode | None = None
    config_file: Path | None = None

    def with_overrides(self, **overrides: Any) -> LoreleyConfig:
        """Return a copy with every non-``None`` override applied.

        Args:
            **overrides (Any): Field values, typically straight from CLI options.

        Returns:
            LoreleyConfig: The updated configuration.

        Raises:
            TypeError: If an override names an unknown field.
        """
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"unknown configuration field(s): {', '.join(sorted(unknown))}")
        changes = {k: v for k, v in overrides.items() if v is not None}
        if changes:
            logger.debug("Applying overrides: %s", changes)
        return replace(self, **changes)

    def compiler(self, *, no_colors: bool = False) -> Compiler:
        """Build a `Compiler` from this configuration.

        Raises:
            ValueError: If a delimiter or the missing-key mode is invalid.
        """
        return Compiler(
            left_delim=self.left_delim,
            right_delim=self.right_delim,
            missing_key=self.missing_key,
            no_colors=no_colors,
        )

    def to_toml_dict(self) -> TomlTable:
        """Return the configuration as a TOML-compatible table.

        ``config_file`` is not a setting and is left out; ``color`` is left out
        while unset, since TOML has no null.
        """
        table: TomlTable = {
            "left_delim": self.left_delim,
            "right_delim": self.right_delim,
            "missing_key": self.missing_key,
            "reset": self.reset,
        }
        if self.color is not None:
            table["color"] = self.color.value
        return table
