# topmark:header:start
#
#   project      : Loreley
#   file         : compiler.py
#   file_relpath : src/loreley/compiler.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Style compiler.

Turns a style description such as ``"{fg 6}{bg 2}finn{from \\"\\" 4}jake"`` into a
`Style`: a parsed template whose style directives are bound to a color state
owned by that style alone.

Key types:
    - `Compiler`: immutable compiler configuration (delimiters, template name,
      missing-key mode, color suppression). Safe to share between threads.
    - `Style`: compiled style. Holds its own `ColorState`; executing it mutates
      that state, and the state carries over into the next execution.

Module-level `compile` and `compile_with_reset` build a `Compiler` from keyword
options and delegate to it.

Example:
    ```python
    import loreley

    style = loreley.compile("{bg 2}finn")
    style.execute_to_string()  # '\\x1b[48;5;2mfinn'
    ```
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import TYPE_CHECKING

from loreley.config.logging import get_logger
from loreley.constants import (
    DEFAULT_LEFT_DELIM,
    DEFAULT_RIGHT_DELIM,
    DEFAULT_TEMPLATE_NAME,
    RESET_DIRECTIVE,
)
from loreley.errors import CompileError, ExecutionError
from loreley.renderer import ColorState, bind_directives
from loreley.template import MISSING_KEY_MODES, Template

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from loreley.config.logging import LoreleyLogger
    from loreley.registry import Directive
    from loreley.template import MissingKey, Writer

    Extensions = Mapping[str, Directive | Callable[..., object]]

logger: LoreleyLogger = get_logger(__name__)


class Style:
    """A compiled style.

    Not safe for concurrent execution: directives read and write the style's
    color state, so two threads executing one `Style` can interleave. Compile a
    separate style per thread instead.

    Attributes:
        template (Template): The parsed template.
        state (ColorState): Color state the directives are bound to.
    """

    def __init__(self, template: Template, state: ColorState) -> None:
        self.template: Template = template
        self.state: ColorState = state

    @property
    def source(self) -> str:
        """The style text this style was compiled from."""
        return self.template.source

    @property
    def foreground(self) -> int:
        return self.state.foreground

    @property
    def background(self) -> int:
        return self.state.background

    @property
    def no_colors(self) -> bool:
        """Whether escape sequences are suppressed; text still renders."""
        return self.state.no_colors

    @no_colors.setter
    def no_colors(self, value: bool) -> None:
        self.state.no_colors = value

    def execute(self, out: Writer, data: object = None) -> None:
        """Render the style to ``out``.

        Args:
            out (Writer): Any object with a ``write(str)`` method.
            data (object): Value visible as dot (``.``) and ``$``; usually a mapping.
                ``None`` stands for an empty mapping, so ``.field`` prints
                ``<no value>`` and ``if .field`` takes the false branch.

        Raises:
            ExecutionError: On undefined data (with ``missing_key="error"``), or a
                function called with the wrong number or type of arguments.
        """
        logger.trace(
            "Executing %s (fg=%d, bg=%d)",
            self.template.name,
            self.state.foreground,
            self.state.background,
        )
        if data is None:
            data = {}
        self.template.execute(out, data)

    def execute_to_string(self, data: object = None) -> str:
        """Render the style and return the result as a string.

        Args:
            data (object): Value visible as dot (``.``) and ``$``; usually a mapping.

        Returns:
            str: Literal text and escape sequences in evaluation order.

        Raises:
            ExecutionError: See `execute`.
        """
        buffer = io.StringIO()
        self.execute(buffer, data)
        return buffer.getvalue()

    def __repr__(self) -> str:
        return f"Style({self.source!r}, fg={self.foreground}, bg={self.background})"


def check_delimiter(label: str, value: str) -> None:
    """Raise `ValueError` unless ``value`` is a usable action delimiter."""
    if not value:
        raise ValueError(f"{label} must not be empty")
    if any(ch.isspace() for ch in value):
        raise ValueError(f"{label} must not contain whitespace: {value!r}")


@dataclass(frozen=True)
class Compiler:
    """Compiler configuration.

    Attributes:
        left_delim (str): Opening action delimiter.
        right_delim (str): Closing action delimiter.
        name (str): Template name used in error messages.
        missing_key (MissingKey): ``"default"`` prints ``<no value>`` for a
            missing map key; ``"error"`` raises `ExecutionError`.
        no_colors (bool): Initial `Style.no_colors` of compiled styles.
    """

    left_delim: str = DEFAULT_LEFT_DELIM
    right_delim: str = DEFAULT_RIGHT_DELIM
    name: str = DEFAULT_TEMPLATE_NAME
    missing_key: MissingKey = "default"
    no_colors: bool = False

    def __post_init__(self) -> None:
        check_delimiter("left_delim", self.left_delim)
        check_delimiter("right_delim", self.right_delim)
        if self.missing_key not in MISSING_KEY_MODES:
            raise ValueError(
                f"missing_key must be one of {', '.join(MISSING_KEY_MODES)}: {self.missing_key!r}"
            )

    @property
    def reset_action(self) -> str:
        """The reset directive written with this compiler's delimiters."""
        return f"{self.left_delim}{RESET_DIRECTIVE}{self.right_delim}"

    def compile(self, text: str, extensions: Extensions | None = None) -> Style:
        """Compile ``text`` into a `Style`.

        Builtin directives are bound to a fresh `ColorState`, ``extensions`` are
        registered over them (a same-named extension replaces the builtin) and
        the text is parsed against the resulting table.

        Args:
            text (str): Style description.
            extensions (Extensions | None): Extra directives by name; plain
                callables are wrapped in `CallableDirective`.

        Returns:
            Style: The compiled style.

        Raises:
            CompileError: If ``text`` is not a valid template.
        """
        state = ColorState(no_colors=self.no_colors)
        functions = bind_directives(state)
        if extensions:
            functions.update(extensions)
        template = Template.parse(
            text,
            functions,
            name=self.name,
            left_delim=self.left_delim,
            right_delim=self.right_delim,
            missing_key=self.missing_key,
        )
        logger.trace("Compiled %r with %d functions", text, len(template.funcs))
        return Style(template, state)

    def compile_with_reset(self, text: str, extensions: Extensions | None = None) -> Style:
        """Like `compile`, but append a reset directive to ``text`` first.

        Every execution then ends with all attributes cleared, so styled output
        never leaks into whatever is printed next.
        """
        return self.compile(text + self.reset_action, extensions)


def compile(  # noqa: A001 - mirrors re.compile
    text: str,
    extensions: Extensions | None = None,
    *,
    left_delim: str = DEFAULT_LEFT_DELIM,
    right_delim: str = DEFAULT_RIGHT_DELIM,
    name: str = DEFAULT_TEMPLATE_NAME,
    missing_key: MissingKey = "default",
    no_colors: bool = False,
) -> Style:
    """Compile ``text`` into a `Style`.

    Args:
        text (str): Style description.
        extensions (Extensions | None): Extra directives by name.
        left_delim (str): Opening action delimiter.
        right_delim (str): Closing action delimiter.
        name (str): Template name used in error messages.
        missing_key (MissingKey): ``"default"`` or ``"error"``.
        no_colors (bool): Initial `Style.no_colors`.

    Returns:
        Style: The compiled style.

    Raises:
        CompileError: If ``text`` is not a valid template.
    """
    compiler = Compiler(
        left_delim=left_delim,
        right_delim=right_delim,
        name=name,
        missing_key=missing_key,
        no_colors=no_colors,
    )
    return compiler.compile(text, extensions)


def compile_with_reset(
    text: str,
    extensions: Extensions | None = None,
    *,
    left_delim: str = DEFAULT_LEFT_DELIM,
    right_delim: str = DEFAULT_RIGHT_DELIM,
    name: str = DEFAULT_TEMPLATE_NAME,
    missing_key: MissingKey = "default",
    no_colors: bool = False,
) -> Style:
    """Compile ``text`` followed by a reset directive. See `compile`."""
    compiler = Compiler(
        left_delim=left_delim,
        right_delim=right_delim,
        name=name,
        missing_key=missing_key,
        no_colors=no_colors,
    )
    return compiler.compile_with_reset(text, extensions)


__all__ = [
    "CompileError",
    "Compiler",
    "ExecutionError",
    "Style",
    "compile",
    "compile_with_reset",
]
