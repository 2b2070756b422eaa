# topmark:header:start
#
#   project      : Loreley
#   file         : errors.py
#   file_relpath : src/loreley/errors.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Exceptions raised by Loreley.

Usage:
    Catch `CompileError` around `loreley.compile()` and `ExecutionError`
    around `Style.execute_to_string()`. Both derive from `LoreleyError`.

Hierarchy:
    - `LoreleyError`
        - `CompileError` (malformed style text)
            - `TemplateSyntaxError` (raised by the template parser)
        - `ExecutionError` (bad data or arguments at run time)
            - `TemplateExecError` (raised by the template executor)
        - `ConfigError` (invalid configuration file or values)
"""

from __future__ import annotations


class LoreleyError(Exception):
    """Base class for all Loreley errors."""


class CompileError(LoreleyError):
    """Style text is not valid under the template grammar.

    Attributes:
        name (str | None): Name of the template being parsed.
        line (int | None): 1-based line of the offending token.
        col (int | None): 1-based column of the offending token.
    """

    def __init__(
        self,
        message: str,
        *,
        name: str | None = None,
        line: int | None = None,
        col: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.name: str | None = name
        self.line: int | None = line
        self.col: int | None = col


class ExecutionError(LoreleyError):
    """A compiled style failed while executing against data.

    Attributes:
        name (str | None): Name of the template being executed.
        line (int | None): 1-based line of the failing node.
        col (int | None): 1-based column of the failing node.
        node (str | None): Source text of the failing node, if known.
    """

    def __init__(
        self,
        message: str,
        *,
        name: str | None = None,
        line: int | None = None,
        col: int | None = None,
        node: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.name: str | None = name
        self.line: int | None = line
        self.col: int | None = col
        self.node: str | None = node


class TemplateSyntaxError(CompileError):
    """Parse error reported by `loreley.template.parser`."""


class TemplateExecError(ExecutionError):
    """Run-time error reported by `loreley.template.executor`."""


class ArgumentError(ExecutionError):
    """A function or directive received the wrong number or type of arguments.

    Raised without position; the executor re-raises it as a `TemplateExecError`
    located at the calling node.
    """


class ConfigError(LoreleyError):
    """Configuration file or values are missing, malformed or of the wrong type."""
