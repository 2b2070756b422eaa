# topmark:header:start
#
#   project      : Loreley
#   file         : nodes.py
#   file_relpath : src/loreley/template/nodes.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Parse tree node types.

Every node records ``pos``, the offset of its first token in the template
source, so the executor can report errors with a line and column. ``str()`` of
a node reproduces a normalized form of its source text for error messages.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Node:
    """Base class for all parse tree nodes."""

    pos: int


@dataclass
class TextNode(Node):
    text: str

    def __str__(self) -> str:
        return repr(self.text)


@dataclass
class ListNode(Node):
    nodes: list[Node] = field(default_factory=list)

    def append(self, node: Node) -> None:
        self.nodes.append(node)

    def __str__(self) -> str:
        return "".join(str(n) for n in self.nodes)


@dataclass
class DotNode(Node):
    def __str__(self) -> str:
        return "."


@dataclass
class NilNode(Node):
    def __str__(self) -> str:
        return "nil"


@dataclass
class BoolNode(Node):
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass
class NumberNode(Node):
    value: int | float
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass
class StringNode(Node):
    quoted: str
    text: str

    def __str__(self) -> str:
        return self.quoted


@dataclass
class IdentifierNode(Node):
    """A function name."""

    ident: str

    def __str__(self) -> str:
        return self.ident


@dataclass
class VariableNode(Node):
    """``$x`` optionally followed by fields: ``$x.a.b`` has ident ``["$x", "a", "b"]``."""

    ident: list[str]

    def __str__(self) -> str:
        return ".".join(self.ident)


@dataclass
class FieldNode(Node):
    """``.a.b`` has ident ``["a", "b"]``."""

    ident: list[str]

    def __str__(self) -> str:
        return "".join("." + name for name in self.ident)


@dataclass
class ChainNode(Node):
    """A term followed by fields, e.g. ``(index .x 1).name``."""

    node: Node
    fields: list[str] = field(default_factory=list)

    def add(self, name: str) -> None:
        self.fields.append(name.lstrip("."))

    def __str__(self) -> str:
        head = str(self.node)
        if isinstance(self.node, PipeNode):
            head = f"({head})"
        return head + "".join("." + name for name in self.fields)


@dataclass
class CommandNode(Node):
    args: list[Node] = field(default_factory=list)

    def __str__(self) -> str:
        parts = []
        for arg in self.args:
            if isinstance(arg, PipeNode):
                parts.append(f"({arg})")
            else:
                parts.append(str(arg))
        return " ".join(parts)


@dataclass
class PipeNode(Node):
    decl: list[VariableNode] = field(default_factory=list)
    is_assign: bool = False
    cmds: list[CommandNode] = field(default_factory=list)

    def __str__(self) -> str:
        out = ""
        if self.decl:
            out = ", ".join(str(v) for v in self.decl)
            out += " = " if self.is_assign else " := "
        return out + " | ".join(str(c) for c in self.cmds)


@dataclass
class ActionNode(Node):
    pipe: PipeNode

    def __str__(self) -> str:
        return "{" + str(self.pipe) + "}"


@dataclass
class BranchNode(Node):
    """Shared shape of ``if``, ``range`` and ``with``."""

    pipe: PipeNode
    body: ListNode
    else_list: ListNode | None = None

    keyword = ""

    def __str__(self) -> str:
        out = "{" + self.keyword + " " + str(self.pipe) + "}" + str(self.body)
        if self.else_list is not None:
            out += "{else}" + str(self.else_list)
        return out + "{end}"


@dataclass
class IfNode(BranchNode):
    keyword = "if"


@dataclass
class RangeNode(BranchNode):
    keyword = "range"


@dataclass
class WithNode(BranchNode):
    keyword = "with"


@dataclass
class BreakNode(Node):
    def __str__(self) -> str:
        return "{break}"


@dataclass
class ContinueNode(Node):
    def __str__(self) -> str:
        return "{continue}"
