# topmark:header:start
#
#   project      : Loreley
#   file         : renderer.py
#   file_relpath : src/loreley/renderer.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Escape-code renderer: the color state machine behind style directives.

Each directive handler takes the `ColorState` it acts on as its first argument,
updates it, and returns the SGR escape text for the new state. Handlers never
reach for state through closures or globals; `bind_directives` binds them to a
specific state object, and `loreley.compiler` gives every compiled style its own.

Transitions:
    ``from`` and ``to`` draw a connector between two background blocks, as in
    powerline-style prompts. The connector's foreground is one block color and
    its background the other; afterwards the foreground in effect before the
    directive is restored so following text is unaffected.

When `ColorState.no_colors` is set, handlers return no escape text but still
update the state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from loreley.constants import (
    ATTR_BACKGROUND,
    ATTR_BACKGROUND_256,
    ATTR_BOLD,
    ATTR_DEFAULT,
    ATTR_FOREGROUND,
    ATTR_FOREGROUND_256,
    ATTR_NO_BOLD,
    ATTR_NO_REVERSE,
    ATTR_RESET,
    ATTR_REVERSE,
    CODE_END,
    CODE_START,
    DEFAULT_COLOR,
    MAX_COLOR,
    MIN_COLOR,
)
from loreley.errors import ArgumentError
from loreley.registry import BoundDirective, DirectiveRegistry

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass
class ColorState:
    """Mutable color state owned by one compiled style.

    Attributes:
        foreground (int): Current foreground palette index.
        background (int): Current background palette index.
        no_colors (bool): Suppress escape text while still tracking state.
    """

    foreground: int = DEFAULT_COLOR
    background: int = DEFAULT_COLOR
    no_colors: bool = False


def style_codes(state: ColorState, *attrs: str) -> str:
    """Return ``ESC[<attrs joined by ;>m``, or ``""`` when colors are off."""
    if state.no_colors:
        return ""
    return f"{CODE_START}[{';'.join(attrs)}{CODE_END}"


def _check_color(name: str, color: int) -> int:
    if not MIN_COLOR <= color <= MAX_COLOR:
        raise ArgumentError(f"color for {name} out of range [{MIN_COLOR}..{MAX_COLOR}]: {color}")
    return color


def put_reset(state: ColorState) -> str:
    state.background = DEFAULT_COLOR
    state.foreground = DEFAULT_COLOR
    return style_codes(state, ATTR_RESET)


def put_background(state: ColorState, color: int) -> str:
    state.background = _check_color("bg", color)
    return style_codes(state, ATTR_BACKGROUND_256, str(color))


def put_foreground(state: ColorState, color: int) -> str:
    state.foreground = _check_color("fg", color)
    return style_codes(state, ATTR_FOREGROUND_256, str(color))


def put_default_background(state: ColorState) -> str:
    state.background = DEFAULT_COLOR
    return style_codes(state, ATTR_BACKGROUND + ATTR_DEFAULT)


def put_default_foreground(state: ColorState) -> str:
    state.foreground = DEFAULT_COLOR
    return style_codes(state, ATTR_FOREGROUND + ATTR_DEFAULT)


def put_bold(state: ColorState) -> str:
    return style_codes(state, ATTR_BOLD)


def put_no_bold(state: ColorState) -> str:
    return style_codes(state, ATTR_NO_BOLD)


def put_reverse(state: ColorState) -> str:
    return style_codes(state, ATTR_REVERSE)


def put_no_reverse(state: ColorState) -> str:
    return style_codes(state, ATTR_NO_REVERSE)


def put_transition_from(state: ColorState, text: str, next_background: int) -> str:
    """Connector whose foreground is the old background and background the new one.

    Emits: fg(old bg), bg(next), ``text``, fg(old fg).
    """
    _check_color("from", next_background)
    previous_background = state.background
    previous_foreground = state.foreground
    return (
        put_foreground(state, previous_background)
        + put_background(state, next_background)
        + text
        + put_foreground(state, previous_foreground)
    )


def put_transition_to(state: ColorState, next_background: int, text: str) -> str:
    """Connector drawn in the next background color, then switch to it.

    Emits: fg(next), ``text``, bg(next), fg(old fg).
    """
    _check_color("to", next_background)
    previous_foreground = state.foreground
    return (
        put_foreground(state, next_background)
        + text
        + put_background(state, next_background)
        + put_foreground(state, previous_foreground)
    )


# name -> (handler, parameter types)
DIRECTIVES: Final[dict[str, tuple[Callable[..., str], tuple[type, ...]]]] = {
    "bg": (put_background, (int,)),
    "fg": (put_foreground, (int,)),
    "nobg": (put_default_background, ()),
    "nofg": (put_default_foreground, ()),
    "bold": (put_bold, ()),
    "nobold": (put_no_bold, ()),
    "reverse": (put_reverse, ()),
    "noreverse": (put_no_reverse, ()),
    "reset": (put_reset, ()),
    "from": (put_transition_from, (str, int)),
    "to": (put_transition_to, (int, str)),
}


def bind_directives(state: ColorState) -> DirectiveRegistry:
    """Return a registry with every builtin directive bound to ``state``."""
    registry = DirectiveRegistry()
    for name, (handler, param_types) in DIRECTIVES.items():
        registry.register(name, BoundDirective(name, handler, state, param_types))
    return registry
