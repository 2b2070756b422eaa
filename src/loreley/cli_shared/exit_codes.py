# topmark:header:start
#
#   project      : Loreley
#   file         : exit_codes.py
#   file_relpath : src/loreley/cli_shared/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Exit codes for the Loreley CLI.

Loreley aligns with the BSD `sysexits` convention so other tooling can tell a
broken style apart from a broken invocation or a broken configuration file.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the Loreley CLI.

    Attributes:
        SUCCESS: Successful execution.
        FAILURE: Generic failure. Prefer a more specific code if available.
        USAGE_ERROR: Command-line invocation error (invalid flags/args). Mirrors
            BSD ``EX_USAGE (64)``.
        DATA_ERROR: The style failed to compile or execute, or the supplied
            data could not be decoded. Mirrors BSD ``EX_DATAERR (65)``.
        CONFIG_ERROR: Configuration error (invalid/malformed config). Mirrors
            BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last-resort).
    """

    SUCCESS = 0
    FAILURE = 1

    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
