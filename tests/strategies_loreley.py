# topmark:header:start
#
#   project      : Loreley
#   file         : strategies_loreley.py
#   file_relpath : tests/strategies_loreley.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

# pyright: strict

"""Hypothesis strategies for generating style texts.

A generated style is a list of `Step` values: literal text runs and directive
calls with valid arguments. `source_of` turns the steps into style text and
`model_colors` predicts the colors a style ends with, independently of the
renderer.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Literal

from hypothesis import strategies as st

Draw = Callable[[st.SearchStrategy[Any]], Any]

EXCLUDED_CATEGORIES: tuple[Literal["Cs"], ...] = ("Cs",)

NO_ARG_DIRECTIVES: tuple[str, ...] = (
    "nobg",
    "nofg",
    "bold",
    "nobold",
    "reverse",
    "noreverse",
    "reset",
)


@dataclass(frozen=True)
class Step:
    """One piece of a generated style.

    Attributes:
        name (str): Directive name, or ``""`` for a literal text run.
        args (tuple[int | str, ...]): Directive arguments, or the text itself.
    """

    name: str
    args: tuple[int | str, ...] = ()

    @property
    def is_text(self) -> bool:
        return self.name == ""

    def source(self) -> str:
        if self.is_text:
            return str(self.args[0])
        parts = [self.name]
        for arg in self.args:
            parts.append(f'"{arg}"' if isinstance(arg, str) else str(arg))
        return "{" + " ".join(parts) + "}"


def s_color() -> st.SearchStrategy[int]:
    """Palette indexes accepted by ``fg``, ``bg``, ``from`` and ``to``."""
    return st.integers(min_value=0, max_value=255)


def s_literal_text(max_size: int = 12) -> st.SearchStrategy[str]:
    """Text that contains no action delimiter and no escape character."""
    return st.text(
        alphabet=st.characters(
            exclude_categories=EXCLUDED_CATEGORIES,
            exclude_characters="{}\x1b",
        ),
        min_size=1,
        max_size=max_size,
    )


def s_connector() -> st.SearchStrategy[str]:
    """Connector text for ``from`` / ``to``, safe inside a quoted string."""
    return st.from_regex(r"[A-Za-z0-9 <>|/-]{0,3}", fullmatch=True)


def s_escape_noise(max_size: int = 40) -> st.SearchStrategy[str]:
    """Text dense in escape characters, ``m`` and SGR parameter bytes."""
    return st.text(alphabet=st.sampled_from("\x1b\x1b[m;0123456789abz "), max_size=max_size)


@st.composite
def s_step(draw: Draw) -> Step:
    kind: str = draw(st.sampled_from(("text", "fg", "bg", "plain", "from", "to")))
    if kind == "text":
        return Step("", (draw(s_literal_text()),))
    if kind in ("fg", "bg"):
        return Step(kind, (draw(s_color()),))
    if kind == "from":
        return Step("from", (draw(s_connector()), draw(s_color())))
    if kind == "to":
        return Step("to", (draw(s_color()), draw(s_connector())))
    return Step(draw(st.sampled_from(NO_ARG_DIRECTIVES)))


def s_steps(max_size: int = 12) -> st.SearchStrategy[list[Step]]:
    return st.lists(s_step(), max_size=max_size)


def source_of(steps: Sequence[Step]) -> str:
    return "".join(step.source() for step in steps)


def plain_text_of(steps: Sequence[Step]) -> str:
    """The text a style prints with colors off: literals and connectors."""
    out: list[str] = []
    for step in steps:
        if step.is_text:
            out.append(str(step.args[0]))
        elif step.name == "from":
            out.append(str(step.args[0]))
        elif step.name == "to":
            out.append(str(step.args[1]))
    return "".join(out)


def model_colors(steps: Sequence[Step], start: tuple[int, int] = (0, 0)) -> tuple[int, int]:
    """Return the ``(foreground, background)`` a style ends with."""
    fg, bg = start
    for step in steps:
        if step.name == "fg":
            fg = int(step.args[0])
        elif step.name == "bg":
            bg = int(step.args[0])
        elif step.name == "nofg":
            fg = 0
        elif step.name == "nobg":
            bg = 0
        elif step.name == "reset":
            fg, bg = 0, 0
        elif step.name == "from":
            bg = int(step.args[1])
        elif step.name == "to":
            bg = int(step.args[0])
    return fg, bg
