# topmark:header:start
#
#   project      : Loreley
#   file         : lexer.py
#   file_relpath : src/loreley/template/lexer.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Tokenizer for the style template language.

The lexer splits template text into literal text and action tokens. Actions are
delimited by a configurable delimiter pair (``{`` and ``}`` by default) and may
carry trim markers (``{- `` and `` -}``) that remove the whitespace adjacent to
the action from the neighbouring text. Comments (``{/* ... */}``) are consumed
here and never reach the parser.

Inside an action the lexer emits one token per operand, keyword, operator and
run of whitespace. Whitespace is significant: the parser uses it to decide
whether a field (``.b``) chains onto the preceding term or starts a new
argument.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from loreley.errors import TemplateSyntaxError

if TYPE_CHECKING:
    from collections.abc import Iterator

LEFT_TRIM_MARKER = "- "
RIGHT_TRIM_MARKER = " -"
LEFT_COMMENT = "/*"
RIGHT_COMMENT = "*/"

SPACE_CHARS = " \t\r\n"


class TokenType(str, Enum):
    """Kinds of tokens produced by `Lexer`."""

    TEXT = "text"
    LEFT_DELIM = "left delim"
    RIGHT_DELIM = "right delim"
    SPACE = "space"
    IDENTIFIER = "identifier"
    FIELD = "field"
    VARIABLE = "variable"
    STRING = "string"
    RAW_STRING = "raw string"
    CHAR = "character constant"
    NUMBER = "number"
    BOOL = "boolean"
    NIL = "nil"
    DOT = "dot"
    PIPE = "pipe"
    LEFT_PAREN = "left paren"
    RIGHT_PAREN = "right paren"
    DECLARE = ":="
    ASSIGN = "="
    COMMA = "comma"
    EOF = "EOF"
    # keywords
    IF = "if"
    ELSE = "else"
    END = "end"
    RANGE = "range"
    WITH = "with"
    BREAK = "break"
    CONTINUE = "continue"


KEYWORDS: dict[str, TokenType] = {
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "end": TokenType.END,
    "range": TokenType.RANGE,
    "with": TokenType.WITH,
    "break": TokenType.BREAK,
    "continue": TokenType.CONTINUE,
}


@dataclass(frozen=True)
class Token:
    """A lexed token.

    Attributes:
        type (TokenType): Token kind.
        value (str): Source text of the token.
        pos (int): Offset of the token in the template text.
    """

    type: TokenType
    value: str
    pos: int

    def __str__(self) -> str:
        if self.type is TokenType.EOF:
            return "EOF"
        if self.type in KEYWORDS.values():
            return f"<{self.value}>"
        if len(self.value) > 10:
            return f"{self.value[:10]!r}..."
        return repr(self.value)


def _is_alnum(ch: str) -> bool:
    return ch == "_" or ch.isalnum()


class Lexer:
    """Turn template text into a stream of `Token`.

    Args:
        text (str): Template source.
        left_delim (str): Opening action delimiter.
        right_delim (str): Closing action delimiter.
        name (str): Template name used in error messages.
    """

    def __init__(self, text: str, *, left_delim: str, right_delim: str, name: str) -> None:
        self.text: str = text
        self.left_delim: str = left_delim
        self.right_delim: str = right_delim
        self.name: str = name
        self.pos: int = 0
        self.paren_depth: int = 0
        self._trim_after_action: bool = False

    def line_of(self, pos: int) -> int:
        return self.text.count("\n", 0, pos) + 1

    def error(self, message: str, pos: int | None = None) -> TemplateSyntaxError:
        at = self.pos if pos is None else pos
        line = self.line_of(at)
        col = at - (self.text.rfind("\n", 0, at) + 1) + 1
        return TemplateSyntaxError(
            f"template: {self.name}:{line}: {message}",
            name=self.name,
            line=line,
            col=col,
        )

    # --- text ---

    def tokens(self) -> Iterator[Token]:
        """Yield all tokens, ending with a single EOF token.

        Raises:
            TemplateSyntaxError: On malformed actions, strings or numbers.
        """
        text = self.text
        trim_next_text = False
        while True:
            start = text.find(self.left_delim, self.pos)
            if start < 0:
                chunk = text[self.pos :]
                if trim_next_text:
                    chunk = chunk.lstrip(SPACE_CHARS)
                if chunk:
                    yield Token(TokenType.TEXT, chunk, self.pos)
                self.pos = len(text)
                break

            after = start + len(self.left_delim)
            trim_left = self._has_left_trim_marker(after)
            chunk = text[self.pos : start]
            if trim_next_text:
                chunk = chunk.lstrip(SPACE_CHARS)
            if trim_left:
                chunk = chunk.rstrip(SPACE_CHARS)
                after += len(LEFT_TRIM_MARKER)
            if chunk:
                yield Token(TokenType.TEXT, chunk, self.pos)

            self.pos = after
            if text.startswith(LEFT_COMMENT, self.pos):
                trim_next_text = self._skip_comment(start)
                continue

            yield Token(TokenType.LEFT_DELIM, self.left_delim, start)
            self.paren_depth = 0
            yield from self._inside_action()
            trim_next_text = self._trim_after_action

        yield Token(TokenType.EOF, "", len(text))

    def _has_left_trim_marker(self, pos: int) -> bool:
        if not self.text.startswith("-", pos):
            return False
        return pos + 1 < len(self.text) and self.text[pos + 1] in SPACE_CHARS

    def _at_right_delim(self) -> tuple[bool, bool]:
        """Return ``(at_delim, trim)`` for the current position."""
        text = self.text
        if (
            self.pos < len(text)
            and text[self.pos] in SPACE_CHARS
            and text.startswith("-" + self.right_delim, self.pos + 1)
        ):
            return True, True
        return text.startswith(self.right_delim, self.pos), False

    def _skip_comment(self, action_start: int) -> bool:
        end = self.text.find(RIGHT_COMMENT, self.pos + len(LEFT_COMMENT))
        if end < 0:
            raise self.error("unclosed comment", action_start)
        self.pos = end + len(RIGHT_COMMENT)
        at_delim, trim = self._at_right_delim()
        if not at_delim:
            raise self.error("comment ends before closing delimiter", action_start)
        self.pos += len(self.right_delim) + (len(RIGHT_TRIM_MARKER) if trim else 0)
        return trim

    # --- actions ---

    def _inside_action(self) -> Iterator[Token]:
        text = self.text
        self._trim_after_action = False
        while True:
            at_delim, trim = self._at_right_delim()
            if at_delim:
                if trim:
                    self.pos += len(RIGHT_TRIM_MARKER)
                if self.paren_depth:
                    raise self.error("unclosed left paren")
                yield Token(TokenType.RIGHT_DELIM, self.right_delim, self.pos)
                self.pos += len(self.right_delim)
                self._trim_after_action = trim
                return
            if self.pos >= len(text):
                raise self.error("unclosed action")

            ch = text[self.pos]
            start = self.pos
            if ch in SPACE_CHARS:
                while self.pos < len(text) and text[self.pos] in SPACE_CHARS:
                    at_delim, _ = self._at_right_delim()
                    if at_delim:
                        break
                    self.pos += 1
                if self.pos > start:
                    yield Token(TokenType.SPACE, text[start : self.pos], start)
                continue
            if ch == "=":
                self.pos += 1
                yield Token(TokenType.ASSIGN, "=", start)
            elif ch == ":":
                if not text.startswith(":=", self.pos):
                    raise self.error("expected :=")
                self.pos += 2
                yield Token(TokenType.DECLARE, ":=", start)
            elif ch == "|":
                self.pos += 1
                yield Token(TokenType.PIPE, "|", start)
            elif ch == ",":
                self.pos += 1
                yield Token(TokenType.COMMA, ",", start)
            elif ch == '"':
                yield self._quote()
            elif ch == "`":
                yield self._raw_quote()
            elif ch == "'":
                yield self._char()
            elif ch == "$":
                yield self._variable()
            elif ch == ".":
                if self.pos + 1 < len(text) and text[self.pos + 1].isdigit():
                    yield self._number()
                else:
                    yield self._field()
            elif ch in "+-" or ch.isdigit():
                yield self._number()
            elif ch == "_" or ch.isalpha():
                yield self._identifier()
            elif ch == "(":
                self.pos += 1
                self.paren_depth += 1
                yield Token(TokenType.LEFT_PAREN, "(", start)
            elif ch == ")":
                self.pos += 1
                self.paren_depth -= 1
                if self.paren_depth < 0:
                    raise self.error("unexpected right paren", start)
                yield Token(TokenType.RIGHT_PAREN, ")", start)
            else:
                raise self.error(f"unrecognized character in action: {ch!r}", start)

    def _at_terminator(self) -> bool:
        if self.pos >= len(self.text):
            return True
        ch = self.text[self.pos]
        if ch in SPACE_CHARS or ch in ".,|:)(=":
            return True
        return self.text.startswith(self.right_delim, self.pos)

    def _scan_word(self) -> None:
        while self.pos < len(self.text) and _is_alnum(self.text[self.pos]):
            self.pos += 1

    def _identifier(self) -> Token:
        start = self.pos
        self._scan_word()
        word = self.text[start : self.pos]
        if not self._at_terminator():
            raise self.error(f"bad character {self.text[self.pos]!r}")
        if word in KEYWORDS:
            return Token(KEYWORDS[word], word, start)
        if word in ("true", "false"):
            return Token(TokenType.BOOL, word, start)
        if word == "nil":
            return Token(TokenType.NIL, word, start)
        return Token(TokenType.IDENTIFIER, word, start)

    def _field(self) -> Token:
        start = self.pos
        self.pos += 1  # the dot
        self._scan_word()
        if self.pos == start + 1:
            if not self._at_terminator():
                raise self.error(f"bad character {self.text[self.pos]!r}")
            return Token(TokenType.DOT, ".", start)
        if not self._at_terminator():
            raise self.error(f"bad character {self.text[self.pos]!r}")
        return Token(TokenType.FIELD, self.text[start : self.pos], start)

    def _variable(self) -> Token:
        start = self.pos
        self.pos += 1  # the dollar sign
        self._scan_word()
        if not self._at_terminator():
            raise self.error(f"bad character {self.text[self.pos]!r}")
        return Token(TokenType.VARIABLE, self.text[start : self.pos], start)

    def _quote(self) -> Token:
        start = self.pos
        self.pos += 1
        text = self.text
        while True:
            if self.pos >= len(text) or text[self.pos] == "\n":
                raise self.error("unterminated quoted string", start)
            ch = text[self.pos]
            if ch == "\\":
                self.pos += 2
                continue
            self.pos += 1
            if ch == '"':
                return Token(TokenType.STRING, text[start : self.pos], start)

    def _raw_quote(self) -> Token:
        start = self.pos
        end = self.text.find("`", start + 1)
        if end < 0:
            raise self.error("unterminated raw quoted string", start)
        self.pos = end + 1
        return Token(TokenType.RAW_STRING, self.text[start : self.pos], start)

    def _char(self) -> Token:
        start = self.pos
        self.pos += 1
        text = self.text
        while True:
            if self.pos >= len(text) or text[self.pos] == "\n":
                raise self.error("unterminated character constant", start)
            ch = text[self.pos]
            if ch == "\\":
                self.pos += 2
                continue
            self.pos += 1
            if ch == "'":
                return Token(TokenType.CHAR, text[start : self.pos], start)

    def _number(self) -> Token:
        start = self.pos
        text = self.text
        if text[self.pos] in "+-":
            self.pos += 1
        digits = "0123456789_"
        if text.startswith(("0x", "0X"), self.pos):
            self.pos += 2
            digits = "0123456789abcdefABCDEF_"
        elif text.startswith(("0o", "0O"), self.pos):
            self.pos += 2
            digits = "01234567_"
        elif text.startswith(("0b", "0B"), self.pos):
            self.pos += 2
            digits = "01_"
        self._accept_run(digits)
        if digits == "0123456789_":
            if self.pos < len(text) and text[self.pos] == ".":
                self.pos += 1
                self._accept_run(digits)
            if self.pos < len(text) and text[self.pos] in "eE":
                self.pos += 1
                if self.pos < len(text) and text[self.pos] in "+-":
                    self.pos += 1
                self._accept_run("0123456789_")
        if self.pos < len(text) and _is_alnum(text[self.pos]):
            self._scan_word()
            raise self.error(f"bad number syntax: {text[start : self.pos]!r}", start)
        value = text[start : self.pos]
        if value in ("+", "-"):
            raise self.error(f"bad number syntax: {value!r}", start)
        return Token(TokenType.NUMBER, value, start)

    def _accept_run(self, valid: str) -> None:
        while self.pos < len(self.text) and self.text[self.pos] in valid:
            self.pos += 1


def tokenize(text: str, *, left_delim: str, right_delim: str, name: str) -> list[Token]:
    """Lex ``text`` completely and return the token list."""
    return list(Lexer(text, left_delim=left_delim, right_delim=right_delim, name=name).tokens())
