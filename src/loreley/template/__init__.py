# topmark:header:start
#
#   project      : Loreley
#   file         : __init__.py
#   file_relpath : src/loreley/template/__init__.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""General-purpose text templates with Go ``text/template`` syntax.

This package knows nothing about colors. It parses template text into a tree,
resolving function names against a `DirectiveRegistry`, and executes the tree
against arbitrary data. `loreley.compiler` registers the style directives into
it.

Example:
    ```python
    from loreley.template import Template

    tmpl = Template.parse("{if .sweet}bubblegum{end}")
    tmpl.execute_to_string({"sweet": True})  # 'bubblegum'
    ```
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

from loreley.constants import DEFAULT_LEFT_DELIM, DEFAULT_RIGHT_DELIM, DEFAULT_TEMPLATE_NAME
from loreley.template.executor import ExecState, MissingKey, Writer
from loreley.template.funcs import builtin_functions
from loreley.template.parser import parse

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from loreley.registry import Directive, DirectiveRegistry
    from loreley.template.nodes import ListNode

__all__ = ["MissingKey", "Template", "Writer"]

MISSING_KEY_MODES: tuple[str, ...] = ("default", "error")


class Template:
    """A parsed template bound to its function table.

    Use `Template.parse` to build one. Templates are immutable after parsing and
    keep no state between executions; any state lives in the functions they call.

    Attributes:
        name (str): Name used in error messages.
        source (str): The original template text.
        root (ListNode): Root of the parse tree.
        funcs (DirectiveRegistry): Builtins overlaid with caller functions.
        missing_key (MissingKey): Behavior for missing map keys.
    """

    def __init__(
        self,
        *,
        name: str,
        source: str,
        root: ListNode,
        funcs: DirectiveRegistry,
        missing_key: MissingKey,
    ) -> None:
        self.name: str = name
        self.source: str = source
        self.root: ListNode = root
        self.funcs: DirectiveRegistry = funcs
        self.missing_key: MissingKey = missing_key

    @classmethod
    def parse(
        cls,
        text: str,
        funcs: Mapping[str, Directive | Callable[..., object]] | None = None,
        *,
        name: str = DEFAULT_TEMPLATE_NAME,
        left_delim: str = DEFAULT_LEFT_DELIM,
        right_delim: str = DEFAULT_RIGHT_DELIM,
        missing_key: MissingKey = "default",
    ) -> Template:
        """Parse ``text`` against the builtins overlaid with ``funcs``.

        Args:
            text (str): Template source.
            funcs (Mapping[str, Directive | Callable[..., object]] | None): Extra
                functions; an entry replaces a builtin of the same name.
            name (str): Template name used in error messages.
            left_delim (str): Opening action delimiter.
            right_delim (str): Closing action delimiter.
            missing_key (MissingKey): ``"default"`` or ``"error"``.

        Returns:
            Template: The parsed template.

        Raises:
            TemplateSyntaxError: If ``text`` is not a valid template.
            ValueError: If ``missing_key`` is not a known mode.
        """
        if missing_key not in MISSING_KEY_MODES:
            raise ValueError(f"unknown missing_key mode: {missing_key!r}")
        table = builtin_functions()
        if funcs:
            table.update(funcs)
        root = parse(text, table, left_delim=left_delim, right_delim=right_delim, name=name)
        return cls(name=name, source=text, root=root, funcs=table, missing_key=missing_key)

    def execute(self, out: Writer, data: object = None) -> None:
        """Render the template to ``out`` with ``data`` as dot.

        Raises:
            TemplateExecError: If evaluation fails. Output written before the
                failure stays written.
        """
        state = ExecState(
            name=self.name,
            source=self.source,
            funcs=self.funcs,
            out=out,
            missing_key=self.missing_key,
        )
        state.run(self.root, data)

    def execute_to_string(self, data: object = None) -> str:
        """Render the template and return the result."""
        buffer = io.StringIO()
        self.execute(buffer, data)
        return buffer.getvalue()

    def __repr__(self) -> str:
        return f"Template(name={self.name!r})"
