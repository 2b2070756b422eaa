# topmark:header:start
#
#   project      : Loreley
#   file         : test_parser.py
#   file_relpath : tests/template/test_parser.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Tests for the template parser and literal decoding."""

from __future__ import annotations

import pytest

from loreley.errors import TemplateSyntaxError
from loreley.template.nodes import ActionNode, IfNode, ListNode, RangeNode, TextNode
from loreley.template.parser import parse, parse_number, unquote
from tests.conftest import parametrize

FUNCS = frozenset({"len", "printf", "eq", "bold", "fg"})


def tree(text: str) -> ListNode:
    return parse(text, FUNCS, left_delim="{", right_delim="}", name="t")


@parametrize(
    "text, expected",
    [
        ("plain", "'plain'"),
        ("{.a.b}", "{.a.b}"),
        ("{ fg   1 }", "{fg 1}"),
        ("{$x := .a}{$x}", "{$x := .a}{$x}"),
        ("{$x := 1}{$x = 2}", "{$x := 1}{$x = 2}"),
        ('{.a | printf "%s"}', '{.a | printf "%s"}'),
        ("{(len .a).x}", "{(len .a).x}"),
        ("{len (len .a)}", "{len (len .a)}"),
        ("{$.top}", "{$.top}"),
        ("{if .a}x{else}y{end}", "{if .a}'x'{else}'y'{end}"),
        ("{if .a}x{else if .b}y{end}", "{if .a}'x'{else}{if .b}'y'{end}{end}"),
        ("{with .a}{.}{end}", "{with .a}{.}{end}"),
        ("{range $i, $e := .}{$e}{end}", "{range $i, $e := .}{$e}{end}"),
        ("{range .}{break}{continue}{end}", "{range .}{break}{continue}{end}"),
        ("{'a'}", "{'a'}"),
    ],
)
def test_parse_normalizes_source(text: str, expected: str) -> None:
    assert str(tree(text)) == expected


def test_tree_shape() -> None:
    root = tree("a{fg 1}{if .x}b{end}")
    assert [type(n) for n in root.nodes] == [TextNode, ActionNode, IfNode]
    branch = root.nodes[2]
    assert isinstance(branch, IfNode)
    assert branch.else_list is None
    assert str(branch.body) == "'b'"


def test_node_positions() -> None:
    root = tree("ab{range .}{end}")
    node = root.nodes[1]
    assert isinstance(node, RangeNode)
    assert node.pos == 3


def test_variables_are_scoped_to_blocks() -> None:
    with pytest.raises(TemplateSyntaxError, match="undefined variable '\\$x'"):
        tree("{if true}{$x := 1}{end}{$x}")


def test_variable_declared_in_range_is_visible_in_body() -> None:
    assert str(tree("{range $e := .}{$e}{end}")) == "{range $e := .}{$e}{end}"


@parametrize(
    "text, message",
    [
        ("{nope 1}", "function 'nope' not defined"),
        ("{$x}", "undefined variable '\\$x'"),
        ("{$x = 1}", "undefined variable '\\$x'"),
        ("{break}", "\\{break\\} outside \\{range\\}"),
        ("{continue}", "\\{continue\\} outside \\{range\\}"),
        ("{if}{end}", "missing value for if"),
        ("{}", "missing value for command"),
        ("{.a | 3}", "non executable command in pipeline stage 2"),
        ('{"s".a}', "unexpected \\. after term"),
        ("{if .a}x{else}y{else}z{end}", "expected end; found \\{else\\}"),
        ("{with $x, $y := .}{end}", "too many declarations in with"),
        ("{range $a, $b, $c := .}{end}", "too many declarations in range"),
        ("{'ab'}", "malformed character constant"),
        ('{"\\q"}', "invalid escape sequence"),
        ("{end}", "unexpected \\{end\\}"),
        ("{range .}x", "unexpected EOF in range"),
        ("{if .a}{else with .b}{end}", "unexpected <with> in else in if"),
        ("{fg 1 ,}", "unexpected ',' in operand"),
    ],
)
def test_parse_errors(text: str, message: str) -> None:
    with pytest.raises(TemplateSyntaxError, match=message):
        tree(text)


def test_parse_error_position() -> None:
    with pytest.raises(TemplateSyntaxError) as excinfo:
        tree("x\n\n  {nope}")
    assert (excinfo.value.line, excinfo.value.col) == (3, 4)


@parametrize(
    "quoted, expected",
    [
        ('"a\\tb"', "a\tb"),
        ('"say \\"hi\\""', 'say "hi"'),
        ("`a\\n`", "a\\n"),
        ('"\\x41\\u00e9"', "Aé"),
        ("'\\101'", "A"),
        ("''", ""),
    ],
)
def test_unquote(quoted: str, expected: str) -> None:
    assert unquote(quoted) == expected


@parametrize(
    "text, expected",
    [
        ("42", 42),
        ("-7", -7),
        ("+3", 3),
        ("0x1F", 31),
        ("0o17", 15),
        ("0b101", 5),
        ("0755", 493),
        ("1_000", 1000),
        ("1.5", 1.5),
        ("1e3", 1000.0),
        (".5", 0.5),
    ],
)
def test_parse_number(text: str, expected: float) -> None:
    value = parse_number(text)
    assert value == expected
    assert type(value) is type(expected)
