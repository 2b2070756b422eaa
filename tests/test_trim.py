# topmark:header:start
#
#   project      : Loreley
#   file         : test_trim.py
#   file_relpath : tests/test_trim.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Tests for `loreley.trim_styles`."""

from __future__ import annotations

import loreley
from loreley import trim_styles
from tests.conftest import parametrize


@parametrize(
    "text, expected",
    [
        ("\x1b[38;5;1m\x1b[48;5;2mfinn", "finn"),
        ("plain", "plain"),
        ("", ""),
        ("a\x1b[0mb\x1b[1mc", "abc"),
        ("\x1b[1;38;5;200mbold", "bold"),
    ],
)
def test_trim_styles(text: str, expected: str) -> None:
    assert trim_styles(text) == expected


def test_trim_removes_everything_a_style_emits() -> None:
    style = loreley.compile('{fg 6}{bg 2}finn{from ">" 4}jake{bold}{reverse}!{reset}')
    assert trim_styles(style.execute_to_string()) == "finn>jake!"


def test_trim_matches_no_colors_rendering() -> None:
    text = '{fg 1}a{to 3 "/"}b{nobg}{nofg}c'
    colored = loreley.compile(text).execute_to_string()
    plain = loreley.compile(text, no_colors=True).execute_to_string()
    assert trim_styles(colored) == plain == "a/bc"


def test_unterminated_escape_is_kept() -> None:
    assert trim_styles("x\x1b[31") == "x\x1b[31"


@parametrize(
    "text",
    [
        "",
        "plain",
        "\x1b[38;5;1mfinn\x1b[0m",
        "\x1b\x1b[1mm",
        "\x1b[1\x1b[2mm",
        "m\x1bm\x1b",
        "x\x1b[31",
        "\x1b[\x1b[mmm\x1b",
    ],
)
def test_trim_is_idempotent(text: str) -> None:
    once = trim_styles(text)
    assert trim_styles(once) == once
