# topmark:header:start
#
#   project      : Loreley
#   file         : trim.py
#   file_relpath : src/loreley/trim.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Remove style escape codes from text."""

from __future__ import annotations

import re
from typing import Final

from loreley.constants import CODE_END, CODE_START

# ESC, then anything up to and including the next terminator. Malformed or
# unknown sequences are removed too.
STYLE_CODE_RE: Final[re.Pattern[str]] = re.compile(
    re.escape(CODE_START) + "[^" + CODE_END + "]*" + CODE_END
)


def trim_styles(text: str) -> str:
    """Return ``text`` with every ``ESC ... m`` run removed.

    Examples:
        >>> trim_styles("\\x1b[38;5;1m\\x1b[48;5;2mfinn")
        'finn'
    """
    return STYLE_CODE_RE.sub("", text)
