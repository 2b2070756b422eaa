# topmark:header:start
#
#   project      : Loreley
#   file         : funcs.py
#   file_relpath : src/loreley/template/funcs.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Builtin template functions and value helpers.

The builtins mirror the ones Go's ``text/template`` predefines: boolean logic
(``and``, ``or``, ``not``), comparisons (``eq``, ``ne``, ``lt``, ``le``, ``gt``,
``ge``), collection helpers (``len``, ``index``, ``slice``) and printing
(``print``, ``println``, ``printf``).

This module also owns how values are printed (`format_value`) and what counts
as true in ``if`` / ``with`` (`is_true`).
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Mapping, Sequence
from typing import Final

from loreley.constants import NIL_VALUE, NO_VALUE
from loreley.errors import ArgumentError
from loreley.registry import Arity, CallableDirective, DirectiveRegistry, check_arity, type_name


class _Missing:
    """Result of looking up a key that is not present in a mapping."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final[_Missing] = _Missing()


def is_true(value: object) -> bool:
    """Return the truth of ``value`` as ``if`` and ``with`` see it.

    Missing values, ``None``, ``False``, zero and empty strings or collections
    are false; everything else is true.
    """
    if value is MISSING or value is None:
        return False
    if isinstance(value, (bool, int, float, complex, str, bytes, Sequence, Mapping)):
        return bool(value)
    try:
        return len(value) > 0  # type: ignore[arg-type]
    except TypeError:
        return True


def format_value(value: object) -> str:
    """Render ``value`` the way an action prints it."""
    if value is MISSING:
        return NO_VALUE
    if value is None:
        return NIL_VALUE
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, Mapping):
        items = " ".join(f"{format_value(k)}:{format_value(v)}" for k, v in _sorted_items(value))
        return f"map[{items}]"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(format_value(v) for v in value) + "]"
    return str(value)


def _sorted_items(mapping: Mapping[object, object]) -> list[tuple[object, object]]:
    try:
        return sorted(mapping.items(), key=lambda kv: kv[0])  # type: ignore[arg-type,return-value]
    except TypeError:
        # keys of mixed types have no order; keep insertion order
        return list(mapping.items())


# --- logic ---


class LazyDirective:
    """A builtin whose arguments are evaluated on demand.

    ``invoke`` receives zero-argument callables instead of values, which lets
    ``and`` and ``or`` stop evaluating at the first deciding argument.
    """

    __slots__ = ("_arity", "_func", "_name")

    def __init__(self, name: str, func: Callable[[Sequence[Callable[[], object]]], object]) -> None:
        self._name: str = name
        self._func = func
        self._arity: Arity = Arity(1, None)

    @property
    def name(self) -> str:
        return self._name

    @property
    def arity(self) -> Arity:
        return self._arity

    def invoke(self, args: Sequence[object]) -> object:
        check_arity(self._name, self._arity, args)
        return self._func(args)  # type: ignore[arg-type]


def _and(thunks: Sequence[Callable[[], object]]) -> object:
    value: object = None
    for thunk in thunks:
        value = thunk()
        if not is_true(value):
            return value
    return value


def _or(thunks: Sequence[Callable[[], object]]) -> object:
    value: object = None
    for thunk in thunks:
        value = thunk()
        if is_true(value):
            return value
    return value


def _not(value: object) -> bool:
    return not is_true(value)


# --- collections ---


def _len(item: object) -> int:
    if item is MISSING or item is None:
        raise ArgumentError("len of nil pointer")
    try:
        return len(item)  # type: ignore[arg-type]
    except TypeError:
        raise ArgumentError(f"len of type {type_name(item)}") from None


def _index_one(item: object, key: object) -> object:
    if item is MISSING or item is None:
        raise ArgumentError("index of untyped nil")
    if isinstance(item, Mapping):
        return item.get(key)
    if isinstance(item, (str, Sequence)):
        if not isinstance(key, int) or isinstance(key, bool):
            raise ArgumentError(f"cannot index slice/array with type {type_name(key)}")
        if not 0 <= key < len(item):
            raise ArgumentError(f"index out of range: {key}")
        return item[key]
    raise ArgumentError(f"can't index item of type {type_name(item)}")


def _index(item: object, *indexes: object) -> object:
    for key in indexes:
        item = _index_one(item, key)
    return item


def _slice(item: object, *indexes: object) -> object:
    if item is MISSING or item is None:
        raise ArgumentError("slice of untyped nil")
    if not isinstance(item, (str, Sequence)) or isinstance(item, Mapping):
        raise ArgumentError(f"can't slice item of type {type_name(item)}")
    if len(indexes) > 2:
        raise ArgumentError(f"too many slice indexes: {len(indexes)}")
    bounds: list[int] = []
    for index in indexes:
        if not isinstance(index, int) or isinstance(index, bool):
            raise ArgumentError(f"cannot index slice/array with type {type_name(index)}")
        if not 0 <= index <= len(item):
            raise ArgumentError(f"index out of range: {index}")
        bounds.append(index)
    if len(bounds) == 2 and bounds[0] > bounds[1]:
        raise ArgumentError(f"invalid slice index: {bounds[0]} > {bounds[1]}")
    start = bounds[0] if bounds else 0
    stop = bounds[1] if len(bounds) == 2 else len(item)
    return item[start:stop]


# --- printing ---


def _print(*args: object) -> str:
    out: list[str] = []
    for i, arg in enumerate(args):
        # a space goes between operands when neither is a string
        if i > 0 and not isinstance(arg, str) and not isinstance(args[i - 1], str):
            out.append(" ")
        out.append(format_value(arg))
    return "".join(out)


def _println(*args: object) -> str:
    return " ".join(format_value(arg) for arg in args) + "\n"


_VERB_RE: re.Pattern[str] = re.compile(r"%(?P<spec>[-+# 0]*\d*(?:\.\d+)?)(?P<verb>[a-zA-Z%])")


def _format_verb(spec: str, verb: str, arg: object) -> str:
    if verb in "vs":
        return ("%" + spec + "s") % format_value(arg)
    if verb == "q":
        text = arg if isinstance(arg, str) else format_value(arg)
        return ("%" + spec + "s") % json.dumps(text, ensure_ascii=False)
    if verb == "t":
        if not isinstance(arg, bool):
            raise TypeError("not a bool")
        return ("%" + spec + "s") % format_value(arg)
    if verb == "d" and isinstance(arg, bool):
        raise TypeError("not an integer")
    return ("%" + spec + verb) % (arg,)


def _printf(fmt: str, *args: object) -> str:
    remaining = list(args)

    def _replace(match: re.Match[str]) -> str:
        spec, verb = match.group("spec"), match.group("verb")
        if verb == "%":
            return "%"
        if not remaining:
            return f"%!{verb}(MISSING)"
        arg = remaining.pop(0)
        try:
            return _format_verb(spec, verb, arg)
        except (TypeError, ValueError):
            return f"%!{verb}({type_name(arg)}={format_value(arg)})"

    out = _VERB_RE.sub(_replace, fmt)
    if remaining:
        extra = ", ".join(f"{type_name(a)}={format_value(a)}" for a in remaining)
        out += f"%!(EXTRA {extra})"
    return out


# --- comparison ---


_ORDERED_KINDS: tuple[str, ...] = ("int", "float", "string")


def _kind(value: object) -> str:
    if value is None or value is MISSING:
        return "nil"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    return type(value).__name__


def _eq(arg1: object, *args: object) -> bool:
    """Report whether ``arg1`` equals any of ``args``.

    Integers and floats are distinct kinds, so ``eq 1 1.0`` is an error rather
    than true. ``nil`` and missing values compare equal only to each other.
    """
    if not args:
        raise ArgumentError("missing argument for comparison")
    kind1 = _kind(arg1)
    for arg in args:
        kind = _kind(arg)
        if kind != kind1 and "nil" not in (kind, kind1):
            raise ArgumentError("incompatible types for comparison")
        if kind1 == "nil" or kind == "nil":
            if kind == kind1:
                return True
            continue
        if arg1 == arg:
            return True
    return False


def _ne(arg1: object, arg2: object) -> bool:
    return not _eq(arg1, arg2)


def _ordered(arg1: object, arg2: object) -> None:
    kind1, kind2 = _kind(arg1), _kind(arg2)
    if kind1 not in _ORDERED_KINDS or kind2 not in _ORDERED_KINDS:
        raise ArgumentError("invalid type for comparison")
    if kind1 != kind2:
        raise ArgumentError("incompatible types for comparison")


def _lt(arg1: object, arg2: object) -> bool:
    _ordered(arg1, arg2)
    return arg1 < arg2  # type: ignore[operator]


def _le(arg1: object, arg2: object) -> bool:
    _ordered(arg1, arg2)
    return arg1 <= arg2  # type: ignore[operator]


def _gt(arg1: object, arg2: object) -> bool:
    _ordered(arg1, arg2)
    return arg1 > arg2  # type: ignore[operator]


def _ge(arg1: object, arg2: object) -> bool:
    _ordered(arg1, arg2)
    return arg1 >= arg2  # type: ignore[operator]


_BUILTINS: dict[str, Callable[..., object]] = {
    "not": _not,
    "len": _len,
    "index": _index,
    "slice": _slice,
    "print": _print,
    "println": _println,
    "printf": _printf,
    "eq": _eq,
    "ne": _ne,
    "lt": _lt,
    "le": _le,
    "gt": _gt,
    "ge": _ge,
}


def builtin_functions() -> DirectiveRegistry:
    """Return a fresh registry holding the builtin template functions."""
    registry = DirectiveRegistry()
    registry.register("and", LazyDirective("and", _and))
    registry.register("or", LazyDirective("or", _or))
    for name, func in _BUILTINS.items():
        registry.register(name, CallableDirective(name, func))
    return registry
