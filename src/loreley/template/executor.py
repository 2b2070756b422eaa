# topmark:header:start
#
#   project      : Loreley
#   file         : executor.py
#   file_relpath : src/loreley/template/executor.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Tree-walking executor for parsed templates.

The executor walks the parse tree once, left to right, writing text and the
printed values of actions to an output stream. Functions are invoked through
the `Directive` protocol exactly once per evaluated call site, in document
order, so stateful functions observe a deterministic sequence of calls.

Errors are reported as `TemplateExecError` located at the node that failed.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Literal, Protocol

from loreley.errors import ArgumentError, TemplateExecError
from loreley.registry import CallableDirective, type_name
from loreley.template.funcs import MISSING, LazyDirective, _sorted_items, format_value, is_true
from loreley.template.nodes import (
    ActionNode,
    BoolNode,
    BranchNode,
    BreakNode,
    ChainNode,
    CommandNode,
    ContinueNode,
    DotNode,
    FieldNode,
    IdentifierNode,
    IfNode,
    ListNode,
    NilNode,
    Node,
    NumberNode,
    PipeNode,
    RangeNode,
    StringNode,
    TextNode,
    VariableNode,
    WithNode,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from loreley.registry import Directive, DirectiveRegistry

MissingKey = Literal["default", "error"]

# Marks "no piped value" for the first command of a pipeline.
_NO_FINAL = object()


class Writer(Protocol):
    """Anything with a ``write(str)`` method, e.g. ``io.StringIO`` or ``sys.stdout``."""

    def write(self, text: str, /) -> object: ...


class _Break(Exception):
    pass


class _Continue(Exception):
    pass


class ExecState:
    """Per-execution walker state.

    Args:
        name (str): Template name used in error messages.
        source (str): Template text, for computing error positions.
        funcs (DirectiveRegistry): Function table.
        out (Writer): Destination for rendered text.
        missing_key (MissingKey): ``"default"`` prints ``<no value>`` for missing
            map keys, ``"error"`` raises.
    """

    def __init__(
        self,
        *,
        name: str,
        source: str,
        funcs: DirectiveRegistry,
        out: Writer,
        missing_key: MissingKey = "default",
    ) -> None:
        self.name: str = name
        self.source: str = source
        self.funcs: DirectiveRegistry = funcs
        self.out: Writer = out
        self.missing_key: MissingKey = missing_key
        self.vars: list[tuple[str, object]] = []
        self.node: Node | None = None

    # --- errors ---

    def error(self, message: str, node: Node | None = None) -> TemplateExecError:
        at = node if node is not None else self.node
        if at is None:
            return TemplateExecError(f"template: {self.name}: {message}", name=self.name)
        line = self.source.count("\n", 0, at.pos) + 1
        col = at.pos - (self.source.rfind("\n", 0, at.pos) + 1) + 1
        context = str(at)
        return TemplateExecError(
            f'template: {self.name}:{line}:{col}: executing "{self.name}" at <{context}>: {message}',
            name=self.name,
            line=line,
            col=col,
            node=context,
        )

    # --- variables ---

    def push(self, name: str, value: object) -> None:
        self.vars.append((name, value))

    def mark(self) -> int:
        return len(self.vars)

    def pop(self, mark: int) -> None:
        del self.vars[mark:]

    def set_var(self, name: str, value: object) -> None:
        for i in range(len(self.vars) - 1, -1, -1):
            if self.vars[i][0] == name:
                self.vars[i] = (name, value)
                return
        raise self.error(f"undefined variable: {name}")

    def set_top_var(self, n: int, value: object) -> None:
        name = self.vars[-n][0]
        self.vars[-n] = (name, value)

    def var_value(self, name: str) -> object:
        for var_name, value in reversed(self.vars):
            if var_name == name:
                return value
        raise self.error(f"undefined variable: {name}")

    # --- walking ---

    def run(self, root: ListNode, data: object) -> None:
        self.push("$", data)
        try:
            self.walk(data, root)
        except (_Break, _Continue):  # from a range else branch
            raise self.error("break or continue outside range") from None

    def walk(self, dot: object, node: Node) -> None:
        self.node = node
        if isinstance(node, TextNode):
            self.out.write(node.text)
        elif isinstance(node, ActionNode):
            value = self.eval_pipeline(dot, node.pipe)
            if not node.pipe.decl:
                self.print_value(node, value)
        elif isinstance(node, ListNode):
            for child in node.nodes:
                self.walk(dot, child)
        elif isinstance(node, (IfNode, WithNode)):
            self.walk_if_or_with(node, dot)
        elif isinstance(node, RangeNode):
            self.walk_range(node, dot)
        elif isinstance(node, BreakNode):
            raise _Break
        elif isinstance(node, ContinueNode):
            raise _Continue
        else:
            raise self.error(f"unknown node: {node!r}", node)

    def walk_if_or_with(self, node: BranchNode, dot: object) -> None:
        mark = self.mark()
        try:
            value = self.eval_pipeline(dot, node.pipe)
            if is_true(value):
                self.walk(value if isinstance(node, WithNode) else dot, node.body)
            elif node.else_list is not None:
                self.walk(dot, node.else_list)
        finally:
            self.pop(mark)

    def walk_range(self, node: RangeNode, dot: object) -> None:
        mark = self.mark()
        try:
            value = self.eval_pipeline(dot, node.pipe)
            iterations = 0
            item_mark = self.mark()
            for index, element in self._range_items(node, value):
                iterations += 1
                if len(node.pipe.decl) > 0:
                    self.set_top_var(1, element)
                if len(node.pipe.decl) > 1:
                    self.set_top_var(2, index)
                try:
                    self.walk(element, node.body)
                except _Continue:
                    pass
                except _Break:
                    break
                finally:
                    self.pop(item_mark)
            if iterations == 0 and node.else_list is not None:
                self.walk(dot, node.else_list)
        finally:
            self.pop(mark)

    def _range_items(self, node: RangeNode, value: object) -> Iterator[tuple[object, object]]:
        if value is MISSING or value is None:
            return iter(())
        if isinstance(value, bool):
            raise self.error(f"range can't iterate over {format_value(value)}", node)
        if isinstance(value, int):
            if len(node.pipe.decl) > 1:
                raise self.error(f"can't use {value} to iterate over more than one variable", node)
            return ((i, i) for i in range(max(value, 0)))
        if isinstance(value, Mapping):
            return iter(_sorted_items(value))
        if isinstance(value, (str, bytes)):
            raise self.error(f"range can't iterate over {value}", node)
        if isinstance(value, Sequence):
            return enumerate(value)
        try:
            return enumerate(list(value))  # type: ignore[call-overload]
        except TypeError:
            raise self.error(f"range can't iterate over {format_value(value)}", node) from None

    def print_value(self, node: Node, value: object) -> None:
        self.node = node
        self.out.write(format_value(value))

    # --- evaluation ---

    def eval_pipeline(self, dot: object, pipe: PipeNode) -> object:
        self.node = pipe
        value: object = _NO_FINAL
        for cmd in pipe.cmds:
            value = self.eval_command(dot, cmd, value)
        for variable in pipe.decl:
            if pipe.is_assign:
                self.set_var(variable.ident[0], value)
            else:
                self.push(variable.ident[0], value)
        return value

    def _not_a_function(self, args: Sequence[Node], final: object) -> None:
        if len(args) > 1 or final is not _NO_FINAL:
            raise self.error(f"can't give argument to non-function {args[0]}", args[0])

    def eval_command(self, dot: object, cmd: CommandNode, final: object) -> object:
        first = cmd.args[0]
        if isinstance(first, FieldNode):
            return self.eval_field_chain(dot, dot, first, first.ident, cmd.args, final)
        if isinstance(first, ChainNode):
            return self.eval_chain(dot, first, cmd.args, final)
        if isinstance(first, IdentifierNode):
            return self.eval_function(dot, first, cmd.args, final)
        if isinstance(first, VariableNode):
            return self.eval_variable(dot, first, cmd.args, final)
        self.node = cmd
        self._not_a_function(cmd.args, final)
        if isinstance(first, PipeNode):
            return self.eval_pipeline(dot, first)
        if isinstance(first, NilNode):
            raise self.error("nil is not a command", first)
        return self.eval_literal(dot, first)

    def eval_literal(self, dot: object, node: Node) -> object:
        if isinstance(node, BoolNode):
            return node.value
        if isinstance(node, DotNode):
            return dot
        if isinstance(node, NumberNode):
            return node.value
        if isinstance(node, StringNode):
            return node.text
        if isinstance(node, NilNode):
            return None
        raise self.error(f"can't handle {node} as a value", node)

    def eval_arg(self, dot: object, node: Node) -> object:
        self.node = node
        if isinstance(node, FieldNode):
            return self.eval_field_chain(dot, dot, node, node.ident, [node], _NO_FINAL)
        if isinstance(node, VariableNode):
            return self.eval_variable(dot, node, [node], _NO_FINAL)
        if isinstance(node, PipeNode):
            return self.eval_pipeline(dot, node)
        if isinstance(node, IdentifierNode):
            return self.eval_function(dot, node, [node], _NO_FINAL)
        if isinstance(node, ChainNode):
            return self.eval_chain(dot, node, [node], _NO_FINAL)
        return self.eval_literal(dot, node)

    def eval_function(
        self,
        dot: object,
        node: IdentifierNode,
        args: Sequence[Node],
        final: object,
    ) -> object:
        self.node = node
        function = self.funcs.get(node.ident)
        if function is None:
            raise self.error(f"{node.ident!r} is not a defined function", node)
        return self.eval_call(dot, function, node, args, final)

    def eval_variable(
        self,
        dot: object,
        node: VariableNode,
        args: Sequence[Node],
        final: object,
    ) -> object:
        self.node = node
        value = self.var_value(node.ident[0])
        if len(node.ident) == 1:
            self._not_a_function(args, final)
            return value
        return self.eval_field_chain(dot, value, node, node.ident[1:], args, final)

    def eval_chain(self, dot: object, node: ChainNode, args: Sequence[Node], final: object) -> object:
        self.node = node
        if not node.fields:
            raise self.error("internal error: no fields in chain", node)
        if isinstance(node.node, NilNode):
            raise self.error(f"indirection through explicit nil in {node}", node)
        receiver = self.eval_arg(dot, node.node)
        return self.eval_field_chain(dot, receiver, node, node.fields, args, final)

    def eval_field_chain(
        self,
        dot: object,
        receiver: object,
        node: Node,
        ident: Sequence[str],
        args: Sequence[Node],
        final: object,
    ) -> object:
        for name in ident[:-1]:
            receiver = self.eval_field(dot, name, node, [node], _NO_FINAL, receiver)
        return self.eval_field(dot, ident[-1], node, args, final, receiver)

    def eval_field(
        self,
        dot: object,
        field_name: str,
        node: Node,
        args: Sequence[Node],
        final: object,
        receiver: object,
    ) -> object:
        has_args = len(args) > 1 or final is not _NO_FINAL
        if receiver is MISSING:
            if self.missing_key == "error":
                raise self.error(f"nil data; no entry for key {field_name!r}", node)
            return MISSING
        if receiver is None:
            raise self.error(f"nil pointer evaluating {type_name(receiver)}.{field_name}", node)
        if isinstance(receiver, Mapping):
            if has_args:
                raise self.error(f"{field_name} is not a method but has arguments", node)
            if field_name in receiver:
                return receiver[field_name]
            if self.missing_key == "error":
                raise self.error(f"map has no entry for key {field_name!r}", node)
            return MISSING
        if field_name.startswith("_"):
            raise self.error(
                f"{field_name} is an unexported field of type {type_name(receiver)}",
                node,
            )
        try:
            attr = getattr(receiver, field_name)
        except AttributeError:
            raise self.error(
                f"can't evaluate field {field_name} in type {type_name(receiver)}",
                node,
            ) from None
        if callable(attr) and not isinstance(attr, type):
            try:
                method = CallableDirective(field_name, attr)
            except TypeError as exc:
                raise self.error(
                    f"can't call method {field_name} of type {type_name(receiver)}: {exc}",
                    node,
                ) from exc
            return self.eval_call(dot, method, node, args, final)
        if has_args:
            raise self.error(f"{field_name} has arguments but cannot be invoked as function", node)
        return attr

    def eval_call(
        self,
        dot: object,
        function: Directive,
        node: Node,
        args: Sequence[Node],
        final: object,
    ) -> object:
        arg_nodes = args[1:]
        values: list[object]
        if isinstance(function, LazyDirective):
            values = [self._thunk(dot, n) for n in arg_nodes]
            if final is not _NO_FINAL:
                values.append(lambda: final)
        else:
            values = [self.eval_arg(dot, n) for n in arg_nodes]
            if final is not _NO_FINAL:
                values.append(final)
        self.node = node
        try:
            return function.invoke(values)
        except ArgumentError as exc:
            raise self.error(exc.message, node) from None
        except TemplateExecError:
            raise
        except Exception as exc:
            raise self.error(f"error calling {function.name}: {exc}", node) from exc

    def _thunk(self, dot: object, node: Node) -> Callable[[], object]:
        return lambda: self.eval_arg(dot, node)

