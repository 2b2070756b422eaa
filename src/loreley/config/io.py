# topmark:header:start
#
#   project      : Loreley
#   file         : io.py
#   file_relpath : src/loreley/config/io.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Load and render Loreley configuration files.

Sources, in discovery order within the working directory:
    1. ``loreley.toml``, whose top-level table holds the settings;
    2. ``pyproject.toml``, when it contains a ``[tool.loreley]`` table.

Parsing is done with `tomlkit`. Unlike style errors, a configuration problem
is never silently ignored: unreadable files, malformed TOML, unknown keys and
values of the wrong type all raise `ConfigError`.

Example ``loreley.toml``:
    ```toml
    left_delim = "<<"
    right_delim = ">>"
    missing_key = "error"
    reset = true
    color = "auto"
    ```
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from loreley.cli_shared.color import ColorMode
from loreley.compiler import check_delimiter
from loreley.config.logging import get_logger
from loreley.config.model import LoreleyConfig
from loreley.constants import CONFIG_FILE_NAME, PYPROJECT_FILE_NAME
from loreley.errors import ConfigError
from loreley.template import MISSING_KEY_MODES

if TYPE_CHECKING:
    from loreley.config.logging import LoreleyLogger
    from loreley.config.model import TomlTable

logger: LoreleyLogger = get_logger(__name__)

TOOL_SECTION: str = "loreley"

# key -> expected Python type after tomlkit unwrapping
_KEY_TYPES: dict[str, type] = {
    "left_delim": str,
    "right_delim": str,
    "missing_key": str,
    "reset": bool,
    "color": str,
}


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document.

    Returns:
        TomlTable: The parsed TOML content as plain Python values.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e}") from e
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as e:
        raise ConfigError(f"invalid TOML in {path}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def extract_tool_table(data: TomlTable) -> TomlTable | None:
    """Return the ``[tool.loreley]`` table of a parsed ``pyproject.toml``."""
    tool: Any = data.get("tool")
    if not isinstance(tool, dict):
        return None
    table: Any = tool.get(TOOL_SECTION)
    return cast("TomlTable", table) if isinstance(table, dict) else None


def settings_table(path: Path, data: TomlTable) -> TomlTable | None:
    """Pick the settings table out of ``data`` based on the file name."""
    if path.name == PYPROJECT_FILE_NAME:
        return extract_tool_table(data)
    return data


def find_config_file(cwd: Path | None = None) -> Path | None:
    """Return the configuration file that applies in ``cwd``, if any.

    ``loreley.toml`` wins over ``pyproject.toml``. A ``pyproject.toml``
    without a ``[tool.loreley]`` table does not count.

    Raises:
        ConfigError: If a candidate ``pyproject.toml`` is unreadable or malformed.
    """
    base: Path = cwd or Path.cwd()
    candidate: Path = base / CONFIG_FILE_NAME
    if candidate.is_file():
        return candidate
    pyproject: Path = base / PYPROJECT_FILE_NAME
    if pyproject.is_file() and extract_tool_table(load_toml_dict(pyproject)) is not None:
        return pyproject
    return None


def config_from_mapping(table: TomlTable, *, config_file: Path | None = None) -> LoreleyConfig:
    """Validate a settings table and build a `LoreleyConfig` from it.

    Args:
        table (TomlTable): Settings, e.g. the body of ``[tool.loreley]``.
        config_file (Path | None): Source file, used in error messages.

    Returns:
        LoreleyConfig: Defaults overlaid with the table's values.

    Raises:
        ConfigError: On unknown keys, wrong value types, an invalid delimiter,
            an unknown ``missing_key`` mode or an unknown ``color`` mode.
    """
    where = str(config_file) if config_file else "configuration"

    unknown = sorted(set(table) - set(_KEY_TYPES))
    if unknown:
        raise ConfigError(f"{where}: unknown key(s): {', '.join(unknown)}")

    for key, value in table.items():
        expected = _KEY_TYPES[key]
        if not isinstance(value, expected):
            raise ConfigError(
                f"{where}: '{key}' must be a {expected.__name__}, got {type(value).__name__}"
            )

    values: dict[str, Any] = dict(table)
    for key in ("left_delim", "right_delim"):
        if key in values:
            try:
                check_delimiter(key, values[key])
            except ValueError as e:
                raise ConfigError(f"{where}: {e}") from e
    if "missing_key" in values and values["missing_key"] not in MISSING_KEY_MODES:
        raise ConfigError(
            f"{where}: 'missing_key' must be one of {', '.join(MISSING_KEY_MODES)}, "
            f"got {values['missing_key']!r}"
        )
    if "color" in values:
        try:
            values["color"] = ColorMode(values["color"])
        except ValueError as e:
            raise ConfigError(
                f"{where}: 'color' must be one of {', '.join(ColorMode.values())}, "
                f"got {values['color']!r}"
            ) from e

    return LoreleyConfig(config_file=config_file, **values)


def load_config(path: Path | None = None, *, cwd: Path | None = None) -> LoreleyConfig:
    """Load the effective configuration.

    Args:
        path (Path | None): Explicit configuration file. When omitted, the file
            is discovered in ``cwd`` with `find_config_file`.
        cwd (Path | None): Directory to search; defaults to the working directory.

    Returns:
        LoreleyConfig: The loaded configuration, or defaults if no file applies.

    Raises:
        ConfigError: If the file is unreadable, malformed or invalid, or if an
            explicit ``pyproject.toml`` has no ``[tool.loreley]`` table.
    """
    if path is None:
        path = find_config_file(cwd)
        if path is None:
            logger.debug("No configuration file found; using defaults")
            return LoreleyConfig()

    data: TomlTable = load_toml_dict(path)
    table: TomlTable | None = settings_table(path, data)
    if table is None:
        raise ConfigError(f"{path}: no [tool.{TOOL_SECTION}] table")
    logger.debug("Loaded configuration from %s", path)
    logger.trace("Configuration table: %s", table)
    return config_from_mapping(table, config_file=path)


def to_toml(config: LoreleyConfig, *, for_pyproject: bool = False) -> str:
    """Render ``config`` as a TOML document.

    Args:
        config (LoreleyConfig): Configuration to render.
        for_pyproject (bool): If True, nest the settings under ``[tool.loreley]``.

    Returns:
        str: The TOML document text.
    """
    doc: tomlkit.TOMLDocument = tomlkit.document()
    if for_pyproject:
        tool = tomlkit.table(is_super_table=True)
        tool.add(TOOL_SECTION, config.to_toml_dict())
        doc.add("tool", tool)
    else:
        for key, value in config.to_toml_dict().items():
            doc.add(key, value)
    return tomlkit.dumps(doc)
