# topmark:header:start
#
#   project      : Loreley
#   file         : parser.py
#   file_relpath : src/loreley/template/parser.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Recursive-descent parser for the style template language.

The grammar follows Go's ``text/template``: actions hold pipelines, pipelines
are ``|``-separated commands, commands are whitespace-separated operands, and
``if`` / ``range`` / ``with`` open blocks closed by ``end``.

Function names are resolved while parsing: an identifier that is not in the
function table is a syntax error. Variables must be declared before use and
are scoped to the enclosing block.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from loreley.errors import TemplateSyntaxError
from loreley.template.lexer import Lexer, Token, TokenType
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
    from collections.abc import Container


_ESCAPE_RE: re.Pattern[str] = re.compile(
    r"""\\(?:
        (?P<simple>[abfnrtv\\'"])
      | x(?P<hex>[0-9a-fA-F]{2})
      | u(?P<u4>[0-9a-fA-F]{4})
      | U(?P<u8>[0-9a-fA-F]{8})
      | (?P<oct>[0-7]{3})
      | (?P<bad>.?)
    )""",
    re.VERBOSE | re.DOTALL,
)

_SIMPLE_ESCAPES: dict[str, str] = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    "'": "'",
    '"': '"',
}


def unquote(quoted: str) -> str:
    """Decode a double-quoted, single-quoted or backquoted literal.

    Raises:
        ValueError: On an invalid escape sequence.
    """
    if quoted.startswith("`"):
        return quoted[1:-1]
    body = quoted[1:-1]

    def _replace(match: re.Match[str]) -> str:
        if match.group("simple") is not None:
            return _SIMPLE_ESCAPES[match.group("simple")]
        for group, base in (("hex", 16), ("u4", 16), ("u8", 16), ("oct", 8)):
            digits = match.group(group)
            if digits is not None:
                return chr(int(digits, base))
        raise ValueError(f"invalid escape sequence {match.group(0)!r}")

    return _ESCAPE_RE.sub(_replace, body)


def parse_number(text: str) -> int | float:
    """Convert a number token to ``int`` or ``float``.

    Raises:
        ValueError: If the text is not a valid number.
    """
    clean = text.replace("_", "")
    unsigned = clean.lstrip("+-")
    if unsigned[:2].lower() in ("0x", "0o", "0b"):
        return int(clean, 0)
    if any(ch in unsigned for ch in ".eE"):
        return float(clean)
    if len(unsigned) > 1 and unsigned.startswith("0"):
        # legacy octal, as in 0755
        return int(clean, 8)
    return int(clean)


class Parser:
    """Build a `ListNode` tree from template text.

    Args:
        text (str): Template source.
        funcs (Container[str]): Names of callable functions.
        left_delim (str): Opening action delimiter.
        right_delim (str): Closing action delimiter.
        name (str): Template name used in error messages.
    """

    def __init__(
        self,
        text: str,
        funcs: Container[str],
        *,
        left_delim: str,
        right_delim: str,
        name: str,
    ) -> None:
        self.text: str = text
        self.name: str = name
        self.funcs: Container[str] = funcs
        self._lexer = Lexer(text, left_delim=left_delim, right_delim=right_delim, name=name)
        self._tokens = self._lexer.tokens()
        self._lookahead: list[Token] = []
        self._vars: list[str] = ["$"]
        self._range_depth: int = 0

    # --- token stream ---

    def _next(self) -> Token:
        if self._lookahead:
            return self._lookahead.pop()
        return next(self._tokens)

    def _backup(self, *tokens: Token) -> None:
        """Push tokens back; the last argument is returned first."""
        self._lookahead.extend(tokens)

    def _peek(self) -> Token:
        token = self._next()
        self._backup(token)
        return token

    def _next_non_space(self) -> Token:
        token = self._next()
        while token.type is TokenType.SPACE:
            token = self._next()
        return token

    def _peek_non_space(self) -> Token:
        token = self._next_non_space()
        self._backup(token)
        return token

    def _expect(self, expected: TokenType, context: str) -> Token:
        token = self._next_non_space()
        if token.type is not expected:
            raise self._unexpected(token, context)
        return token

    # --- errors ---

    def error(self, message: str, pos: int) -> TemplateSyntaxError:
        return self._lexer.error(message, pos)

    def _unexpected(self, token: Token, context: str) -> TemplateSyntaxError:
        if token.type is TokenType.EOF:
            return self.error(f"unexpected EOF in {context}", token.pos)
        return self.error(f"unexpected {token} in {context}", token.pos)

    # --- grammar ---

    def parse(self) -> ListNode:
        """Parse the whole template.

        Raises:
            TemplateSyntaxError: If the text is not a valid template.
        """
        root = ListNode(0)
        while self._peek().type is not TokenType.EOF:
            node = self._text_or_action()
            if isinstance(node, _EndMarker):
                raise self.error(f"unexpected {{{node.keyword}}}", node.pos)
            root.append(node)
        return root

    def _item_list(self, context: str) -> tuple[ListNode, _EndMarker]:
        body = ListNode(self._peek_non_space().pos)
        while True:
            if self._peek().type is TokenType.EOF:
                raise self._unexpected(self._peek(), context)
            node = self._text_or_action()
            if isinstance(node, _EndMarker):
                return body, node
            body.append(node)

    def _text_or_action(self) -> Node:
        token = self._next()
        if token.type is TokenType.TEXT:
            return TextNode(token.pos, token.value)
        if token.type is TokenType.LEFT_DELIM:
            return self._action()
        raise self._unexpected(token, "input")

    def _action(self) -> Node:
        token = self._next_non_space()
        kind = token.type
        if kind is TokenType.IF:
            return self._branch(IfNode, token, "if")
        if kind is TokenType.RANGE:
            return self._range(token)
        if kind is TokenType.WITH:
            return self._branch(WithNode, token, "with")
        if kind is TokenType.END:
            self._expect(TokenType.RIGHT_DELIM, "end")
            return _EndMarker(token.pos, "end")
        if kind is TokenType.ELSE:
            return self._else(token)
        if kind in (TokenType.BREAK, TokenType.CONTINUE):
            return self._loop_control(token)
        self._backup(token)
        return ActionNode(token.pos, self._pipeline("command", TokenType.RIGHT_DELIM))

    def _else(self, token: Token) -> _EndMarker:
        following = self._peek_non_space()
        if following.type in (TokenType.IF, TokenType.WITH):
            # "else if" / "else with": the nested block is parsed by the caller
            return _EndMarker(token.pos, "else", chained=following.type)
        self._expect(TokenType.RIGHT_DELIM, "else")
        return _EndMarker(token.pos, "else")

    def _loop_control(self, token: Token) -> Node:
        if self._range_depth == 0:
            raise self.error(f"{{{token.value}}} outside {{range}}", token.pos)
        self._expect(TokenType.RIGHT_DELIM, token.value)
        if token.type is TokenType.BREAK:
            return BreakNode(token.pos)
        return ContinueNode(token.pos)

    def _range(self, token: Token) -> Node:
        self._range_depth += 1
        try:
            return self._branch(RangeNode, token, "range")
        finally:
            self._range_depth -= 1

    def _branch(self, cls: type[BranchNode], token: Token, context: str) -> BranchNode:
        mark = len(self._vars)
        try:
            pipe = self._pipeline(context, TokenType.RIGHT_DELIM)
            body, end = self._item_list(context)
            else_list: ListNode | None = None
            if end.keyword == "else":
                if end.chained is not None:
                    chained = self._next_non_space()
                    if (context, chained.type) not in (
                        ("if", TokenType.IF),
                        ("with", TokenType.WITH),
                    ):
                        raise self._unexpected(chained, f"else in {context}")
                    else_list = ListNode(chained.pos)
                    else_list.append(self._branch(cls, chained, context))
                    return cls(token.pos, pipe, body, else_list)
                else_list, end = self._item_list(context)
                if end.keyword != "end":
                    raise self.error("expected end; found {else}", end.pos)
            return cls(token.pos, pipe, body, else_list)
        finally:
            del self._vars[mark:]

    def _pipeline(self, context: str, end: TokenType) -> PipeNode:
        token = self._peek_non_space()
        pipe = PipeNode(token.pos)
        self._declarations(pipe, context)
        while True:
            token = self._next_non_space()
            if token.type is end:
                self._check_pipeline(pipe, context, token)
                return pipe
            if token.type in _OPERAND_START:
                self._backup(token)
                pipe.cmds.append(self._command())
                continue
            raise self._unexpected(token, context)

    def _declarations(self, pipe: PipeNode, context: str) -> None:
        while True:
            token = self._peek_non_space()
            if token.type is not TokenType.VARIABLE:
                return
            variable = self._next_non_space()
            after = self._peek()
            following = self._peek_non_space()
            if following.type in (TokenType.DECLARE, TokenType.ASSIGN):
                self._next_non_space()
                pipe.is_assign = following.type is TokenType.ASSIGN
                pipe.decl.append(VariableNode(variable.pos, [variable.value]))
                if not pipe.is_assign:
                    self._vars.append(variable.value)
                elif variable.value not in self._vars:
                    raise self.error(f"undefined variable {variable.value!r}", variable.pos)
                return
            if following.type is TokenType.COMMA:
                self._next_non_space()
                pipe.decl.append(VariableNode(variable.pos, [variable.value]))
                self._vars.append(variable.value)
                if context == "range" and len(pipe.decl) < 2:
                    if self._peek_non_space().type is TokenType.VARIABLE:
                        continue
                    raise self.error("range can only initialize variables", following.pos)
                raise self.error(f"too many declarations in {context}", following.pos)
            # not a declaration: restore the variable (and any space after it)
            if after.type is TokenType.SPACE:
                self._backup(after, variable)
            else:
                self._backup(variable)
            return

    def _check_pipeline(self, pipe: PipeNode, context: str, end: Token) -> None:
        if not pipe.cmds:
            raise self.error(f"missing value for {context}", end.pos)
        for i, cmd in enumerate(pipe.cmds[1:], start=2):
            first = cmd.args[0]
            if isinstance(first, (BoolNode, DotNode, NilNode, NumberNode, StringNode)):
                raise self.error(
                    f"non executable command in pipeline stage {i}",
                    first.pos,
                )

    def _command(self) -> CommandNode:
        cmd = CommandNode(self._peek_non_space().pos)
        while True:
            self._peek_non_space()
            operand = self._operand()
            if operand is not None:
                cmd.args.append(operand)
            token = self._next()
            if token.type is TokenType.SPACE:
                continue
            if token.type in (TokenType.RIGHT_DELIM, TokenType.RIGHT_PAREN):
                self._backup(token)
            elif token.type is not TokenType.PIPE:
                raise self._unexpected(token, "operand")
            break
        if not cmd.args:
            raise self.error("empty command", cmd.pos)
        return cmd

    def _operand(self) -> Node | None:
        node = self._term()
        if node is None:
            return None
        if self._peek().type is not TokenType.FIELD:
            return node
        chain = ChainNode(node.pos, node)
        while self._peek().type is TokenType.FIELD:
            chain.add(self._next().value)
        if isinstance(node, FieldNode):
            return FieldNode(node.pos, node.ident + chain.fields)
        if isinstance(node, VariableNode):
            return VariableNode(node.pos, node.ident + chain.fields)
        if isinstance(node, (BoolNode, StringNode, NumberNode, NilNode, DotNode)):
            raise self.error(f"unexpected . after term {str(node)!r}", node.pos)
        return chain

    def _term(self) -> Node | None:
        token = self._next_non_space()
        kind = token.type
        if kind is TokenType.IDENTIFIER:
            if token.value not in self.funcs:
                raise self.error(f"function {token.value!r} not defined", token.pos)
            return IdentifierNode(token.pos, token.value)
        if kind is TokenType.DOT:
            return DotNode(token.pos)
        if kind is TokenType.NIL:
            return NilNode(token.pos)
        if kind is TokenType.VARIABLE:
            if token.value not in self._vars:
                raise self.error(f"undefined variable {token.value!r}", token.pos)
            return VariableNode(token.pos, [token.value])
        if kind is TokenType.FIELD:
            return FieldNode(token.pos, [token.value[1:]])
        if kind is TokenType.BOOL:
            return BoolNode(token.pos, token.value == "true")
        if kind is TokenType.NUMBER:
            try:
                return NumberNode(token.pos, parse_number(token.value), token.value)
            except ValueError:
                raise self.error(f"illegal number syntax: {token.value!r}", token.pos) from None
        if kind is TokenType.CHAR:
            try:
                decoded = unquote(token.value)
            except ValueError as exc:
                raise self.error(str(exc), token.pos) from None
            if len(decoded) != 1:
                raise self.error(f"malformed character constant: {token.value}", token.pos)
            return NumberNode(token.pos, ord(decoded), token.value)
        if kind is TokenType.LEFT_PAREN:
            return self._pipeline("parenthesized pipeline", TokenType.RIGHT_PAREN)
        if kind in (TokenType.STRING, TokenType.RAW_STRING):
            try:
                return StringNode(token.pos, token.value, unquote(token.value))
            except ValueError as exc:
                raise self.error(str(exc), token.pos) from None
        self._backup(token)
        return None


_OPERAND_START: frozenset[TokenType] = frozenset(
    {
        TokenType.BOOL,
        TokenType.CHAR,
        TokenType.DOT,
        TokenType.FIELD,
        TokenType.IDENTIFIER,
        TokenType.NUMBER,
        TokenType.NIL,
        TokenType.RAW_STRING,
        TokenType.STRING,
        TokenType.VARIABLE,
        TokenType.LEFT_PAREN,
    }
)


class _EndMarker(Node):
    """Transient node for ``{end}`` and ``{else}``; never part of a finished tree."""

    def __init__(self, pos: int, keyword: str, chained: TokenType | None = None) -> None:
        super().__init__(pos)
        self.keyword: str = keyword
        self.chained: TokenType | None = chained


def parse(
    text: str,
    funcs: Container[str],
    *,
    left_delim: str,
    right_delim: str,
    name: str,
) -> ListNode:
    """Parse ``text`` into a tree, resolving function names against ``funcs``."""
    return Parser(
        text,
        funcs,
        left_delim=left_delim,
        right_delim=right_delim,
        name=name,
    ).parse()
