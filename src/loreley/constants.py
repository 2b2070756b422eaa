# topmark:header:start
#
#   project      : Loreley
#   file         : constants.py
#   file_relpath : src/loreley/constants.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Loreley constants.

SGR attribute codes, the default color sentinel and the default template
delimiters.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Final

try:
    LORELEY_VERSION: str = get_version("loreley")
except PackageNotFoundError:  # running from a source checkout
    LORELEY_VERSION = "0.0.0"

# Escape sequence framing
CODE_START: Final[str] = "\x1b"
CODE_END: Final[str] = "m"

# SGR attribute parts
ATTR_FOREGROUND: Final[str] = "3"
ATTR_BACKGROUND: Final[str] = "4"
ATTR_DEFAULT: Final[str] = "9"
ATTR_RESET: Final[str] = "0"
ATTR_BOLD: Final[str] = "1"
ATTR_NO_BOLD: Final[str] = "22"
ATTR_REVERSE: Final[str] = "7"
ATTR_NO_REVERSE: Final[str] = "27"
ATTR_FOREGROUND_256: Final[str] = "38;5"
ATTR_BACKGROUND_256: Final[str] = "48;5"

# Default foreground and background; also a valid palette index.
DEFAULT_COLOR: Final[int] = 0

MIN_COLOR: Final[int] = 0
MAX_COLOR: Final[int] = 255

DEFAULT_LEFT_DELIM: Final[str] = "{"
DEFAULT_RIGHT_DELIM: Final[str] = "}"

DEFAULT_TEMPLATE_NAME: Final[str] = "style"

RESET_DIRECTIVE: Final[str] = "reset"

# Printed for map lookups that found nothing (missing_key="default").
NO_VALUE: Final[str] = "<no value>"
NIL_VALUE: Final[str] = "<nil>"

CONFIG_FILE_NAME: Final[str] = "loreley.toml"
PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"
