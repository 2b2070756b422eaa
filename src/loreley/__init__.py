# topmark:header:start
#
#   project      : Loreley
#   file         : __init__.py
#   file_relpath : src/loreley/__init__.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Loreley package.

Loreley compiles small style templates such as ``"{bg 2}warning{reset}"`` into
strings interleaved with ANSI SGR escape sequences (256-color foreground and
background, bold, reverse video, reset), so command-line tools can describe
colorized output declaratively.

Public API:
    - `compile` / `compile_with_reset`: build a `Style` from style text.
    - `Style.execute_to_string`: render a compiled style against data.
    - `trim_styles`: strip escape codes from rendered text.
    - `Compiler`: reusable compiler configuration (delimiters and options).
"""

from __future__ import annotations

from loreley.compiler import Compiler, Style, compile, compile_with_reset
from loreley.constants import DEFAULT_COLOR, LORELEY_VERSION
from loreley.errors import CompileError, ConfigError, ExecutionError, LoreleyError
from loreley.registry import CallableDirective, Directive, DirectiveRegistry
from loreley.renderer import ColorState
from loreley.trim import trim_styles

__version__: str = LORELEY_VERSION

__all__ = [
    "DEFAULT_COLOR",
    "CallableDirective",
    "ColorState",
    "CompileError",
    "Compiler",
    "ConfigError",
    "Directive",
    "DirectiveRegistry",
    "ExecutionError",
    "LoreleyError",
    "Style",
    "compile",
    "compile_with_reset",
    "trim_styles",
]
