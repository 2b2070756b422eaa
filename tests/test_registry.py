# topmark:header:start
#
#   project      : Loreley
#   file         : test_registry.py
#   file_relpath : tests/test_registry.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Tests for `loreley.registry`."""

from __future__ import annotations

import pytest

from loreley.errors import ArgumentError
from loreley.registry import (
    Arity,
    BoundDirective,
    CallableDirective,
    Directive,
    DirectiveRegistry,
    as_directive,
    coerce_arg,
    type_name,
)
from tests.conftest import parametrize


@parametrize(
    "arity, count, expected",
    [
        (Arity(1, 1), 0, False),
        (Arity(1, 1), 1, True),
        (Arity(1, 1), 2, False),
        (Arity(1, None), 5, True),
        (Arity(0, 2), 2, True),
    ],
)
def test_arity_accepts(arity: Arity, count: int, expected: bool) -> None:
    assert arity.accepts(count) is expected


@parametrize(
    "arity, text",
    [
        (Arity.exactly(2), "2"),
        (Arity(1, None), "at least 1"),
        (Arity(0, 3), "0 to 3"),
    ],
)
def test_arity_str(arity: Arity, text: str) -> None:
    assert str(arity) == text


@parametrize(
    "value, name",
    [(None, "nil"), (1, "int"), ("s", "str"), (True, "bool"), ([1], "list")],
)
def test_type_name(value: object, name: str) -> None:
    assert type_name(value) == name


def test_coerce_arg_widens_int_to_float() -> None:
    assert coerce_arg("f", 0, float, 3) == 3.0


def test_coerce_arg_rejects_bool_as_int() -> None:
    with pytest.raises(ArgumentError, match="argument 2 of f: expected int; got bool"):
        coerce_arg("f", 1, int, True)


def test_callable_directive_derives_arity_from_signature() -> None:
    def join(sep: str, *parts: object) -> str:
        return sep.join(str(p) for p in parts)

    directive = CallableDirective("join", join)
    assert directive.arity == Arity(1, None)
    assert directive.invoke(["-", 1, 2]) == "1-2"


def test_callable_directive_defaults_widen_arity() -> None:
    def greet(name: str, greeting: str = "hi") -> str:
        return f"{greeting} {name}"

    directive = CallableDirective("greet", greet)
    assert directive.arity == Arity(1, 2)
    assert directive.invoke(["bmo"]) == "hi bmo"


def test_callable_directive_checks_annotated_types() -> None:
    def double(n: int) -> int:
        return n * 2

    directive = CallableDirective("double", double)
    with pytest.raises(ArgumentError, match="wrong type for argument 1 of double"):
        directive.invoke(["2"])


def test_callable_directive_checks_arity() -> None:
    directive = CallableDirective("upper", lambda s: s.upper())
    with pytest.raises(ArgumentError, match="want 1 got 2"):
        directive.invoke(["a", "b"])


def test_callable_directive_rejects_required_keyword_only() -> None:
    def needs_flag(*, flag: bool) -> str:
        return str(flag)

    with pytest.raises(TypeError, match="keyword-only parameter 'flag'"):
        CallableDirective("needs_flag", needs_flag)


def test_callable_directive_rejects_non_callable() -> None:
    with pytest.raises(TypeError, match="not callable"):
        CallableDirective("x", 42)  # type: ignore[arg-type]


def test_bound_directive_passes_state_first() -> None:
    def handler(state: list[str], text: str) -> str:
        state.append(text)
        return text.upper()

    state: list[str] = []
    directive = BoundDirective("push", handler, state, (str,))
    assert directive.invoke(["a"]) == "A"
    assert state == ["a"]
    assert isinstance(directive, Directive)


def test_as_directive_keeps_directives() -> None:
    directive = CallableDirective("x", lambda: "x")
    assert as_directive("x", directive) is directive
    assert isinstance(as_directive("y", lambda: "y"), CallableDirective)


def test_registry_last_registration_wins() -> None:
    registry = DirectiveRegistry({"a": lambda: 1, "b": lambda: 2})
    registry.register("a", lambda: 3)
    assert registry.names() == ["a", "b"]
    assert registry["a"].invoke([]) == 3
    assert len(registry) == 2
    assert "b" in registry


def test_registry_rejects_invalid_names() -> None:
    with pytest.raises(ValueError, match="invalid directive name"):
        DirectiveRegistry().register("not a name", lambda: None)


def test_registry_copy_is_independent() -> None:
    original = DirectiveRegistry({"a": lambda: 1})
    clone = original.copy()
    clone.register("b", lambda: 2)
    assert "b" not in original
    assert clone.get("a") is original.get("a")
