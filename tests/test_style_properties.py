# topmark:header:start
#
#   project      : Loreley
#   file         : test_style_properties.py
#   file_relpath : tests/test_style_properties.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

# pyright: strict

"""Property tests for compiled styles.

Generated styles mix literal text with every style directive and check that:
1) stripping escapes from colored output equals the ``no_colors`` rendering;
2) the colors a style ends with match a simple model of the directives;
3) every escape sequence emitted is a well-formed SGR sequence;
4) trimming is idempotent, on rendered output and on escape-laden text.
"""

from __future__ import annotations

import re

import pytest
from hypothesis import HealthCheck, given, settings

import loreley
from loreley import trim_styles
from tests.strategies_loreley import (
    Step,
    model_colors,
    plain_text_of,
    s_escape_noise,
    s_literal_text,
    s_steps,
    source_of,
)

# Mark the entire test module
pytestmark: pytest.MarkDecorator = pytest.mark.hypothesis_slow

SGR_RE = re.compile(r"\x1b\[(?:\d+)(?:;\d+)*m")

PROPERTY_SETTINGS = settings(
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
    max_examples=200,
)


@PROPERTY_SETTINGS
@given(steps=s_steps())
def test_trimmed_output_equals_colorless_output(steps: list[Step]) -> None:
    source = source_of(steps)
    colored = loreley.compile(source).execute_to_string()
    plain = loreley.compile(source, no_colors=True).execute_to_string()
    assert trim_styles(colored) == plain == plain_text_of(steps)


@PROPERTY_SETTINGS
@given(steps=s_steps())
def test_final_colors_follow_model(steps: list[Step]) -> None:
    style = loreley.compile(source_of(steps))
    style.execute_to_string()
    assert (style.foreground, style.background) == model_colors(steps)


@PROPERTY_SETTINGS
@given(first=s_steps(max_size=6), second=s_steps(max_size=6))
def test_state_carries_over_between_executions(first: list[Step], second: list[Step]) -> None:
    source = source_of(first + second)
    style = loreley.compile(source)
    style.execute_to_string()
    style.execute_to_string()
    once = model_colors(first + second)
    assert (style.foreground, style.background) == model_colors(first + second, once)


@PROPERTY_SETTINGS
@given(steps=s_steps())
def test_only_well_formed_escapes_are_emitted(steps: list[Step]) -> None:
    out = loreley.compile_with_reset(source_of(steps)).execute_to_string()
    assert out.endswith("\x1b[0m")
    assert "\x1b" not in SGR_RE.sub("", out)


@PROPERTY_SETTINGS
@given(text=s_literal_text(max_size=60))
def test_literal_text_renders_unchanged(text: str) -> None:
    assert loreley.compile(text).execute_to_string() == text


@PROPERTY_SETTINGS
@given(steps=s_steps())
def test_trimming_rendered_output_is_idempotent(steps: list[Step]) -> None:
    once = trim_styles(loreley.compile(source_of(steps)).execute_to_string())
    assert trim_styles(once) == once


@PROPERTY_SETTINGS
@given(text=s_escape_noise())
def test_trimming_arbitrary_text_is_idempotent(text: str) -> None:
    once = trim_styles(text)
    assert trim_styles(once) == once
