# topmark:header:start
#
#   project      : Loreley
#   file         : registry.py
#   file_relpath : src/loreley/registry.py
#   license      : MIT
#   copyright    : (c) 2026 Loreley contributors
#
# topmark:header:end

"""Directive capability interface and name-indexed registry.

The template engine never calls Python callables directly. Everything it can
invoke sits behind the small `Directive` protocol (a name, an `Arity` and an
`invoke()` method) so dispatch does not depend on knowing each signature.

Key types:
    - `Arity`: accepted argument count range.
    - `Directive`: protocol implemented by everything in a function table.
    - `CallableDirective`: adapter turning any Python callable into a directive,
      deriving arity and simple type checks from its signature.
    - `BoundDirective`: handler bound explicitly to a state object; the handler
      receives the state as its first argument.
    - `DirectiveRegistry`: ordered ``name -> Directive`` table where the last
      registration for a name wins.

Example:
    ```python
    registry = DirectiveRegistry()
    registry.register("shout", str.upper)
    registry.get("shout").invoke(["hi"])  # 'HI'
    ```
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any, Generic, NamedTuple, Protocol, TypeVar, runtime_checkable

from loreley.config.logging import get_logger
from loreley.errors import ArgumentError

if typing.TYPE_CHECKING:
    from loreley.config.logging import LoreleyLogger

logger: LoreleyLogger = get_logger(__name__)

S = TypeVar("S")

# Annotations we know how to check at call time.
_CHECKED_TYPES: tuple[type, ...] = (int, float, str, bool)


class Arity(NamedTuple):
    """Accepted positional argument count.

    Attributes:
        min (int): Minimum number of arguments.
        max (int | None): Maximum number of arguments, ``None`` when variadic.
    """

    min: int
    max: int | None

    def accepts(self, count: int) -> bool:
        """Return True if ``count`` arguments satisfy this arity."""
        if count < self.min:
            return False
        return self.max is None or count <= self.max

    def __str__(self) -> str:
        if self.max is None:
            return f"at least {self.min}"
        if self.max == self.min:
            return str(self.min)
        return f"{self.min} to {self.max}"

    @classmethod
    def exactly(cls, count: int) -> Arity:
        """Build an arity accepting exactly ``count`` arguments."""
        return cls(count, count)


@runtime_checkable
class Directive(Protocol):
    """Anything the template engine can call by name."""

    @property
    def name(self) -> str:
        """Name the directive is registered under."""
        ...

    @property
    def arity(self) -> Arity:
        """Number of arguments the directive accepts."""
        ...

    def invoke(self, args: Sequence[object]) -> object:
        """Call the directive with already evaluated arguments.

        Raises:
            ArgumentError: If the argument count or types do not fit.
        """
        ...


def type_name(value: object) -> str:
    """Return a short, user-facing type name for ``value``."""
    if value is None:
        return "nil"
    return type(value).__name__


def check_arity(name: str, arity: Arity, args: Sequence[object]) -> None:
    """Raise `ArgumentError` if ``args`` does not fit ``arity``."""
    if not arity.accepts(len(args)):
        raise ArgumentError(f"wrong number of args for {name}: want {arity} got {len(args)}")


def coerce_arg(name: str, index: int, expected: type, value: object) -> object:
    """Check ``value`` against ``expected`` and return the converted value.

    Integers are accepted where a float is expected. Booleans are never accepted
    as numbers.

    Raises:
        ArgumentError: If ``value`` does not have the expected type.
    """
    if expected is bool:
        ok = isinstance(value, bool)
    elif expected is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    elif expected is float:
        ok = isinstance(value, (int, float)) and not isinstance(value, bool)
        if ok:
            value = float(value)  # type: ignore[arg-type]
    elif expected is str:
        ok = isinstance(value, str)
    else:
        ok = True
    if not ok:
        raise ArgumentError(
            f"wrong type for argument {index + 1} of {name}: "
            f"expected {expected.__name__}; got {type_name(value)}"
        )
    return value


def coerce_args(
    name: str,
    param_types: Sequence[type | None],
    args: Sequence[object],
) -> list[object]:
    """Apply `coerce_arg` to each argument that has a known expected type."""
    out: list[object] = list(args)
    for i, expected in enumerate(param_types):
        if i >= len(out):
            break
        if expected is not None:
            out[i] = coerce_arg(name, i, expected, out[i])
    return out


def _signature_of(func: Callable[..., object]) -> tuple[Arity, tuple[type | None, ...]]:
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        # Some builtins expose no signature; accept anything.
        return Arity(0, None), ()

    try:
        hints: dict[str, Any] = typing.get_type_hints(func)
    except (NameError, TypeError, AttributeError):  # unresolvable forward references
        hints = {}

    required = 0
    total = 0
    variadic = False
    types: list[type | None] = []
    for param in sig.parameters.values():
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            total += 1
            if param.default is param.empty:
                required += 1
            hint = hints.get(param.name)
            types.append(hint if hint in _CHECKED_TYPES else None)
        elif param.kind is param.VAR_POSITIONAL:
            variadic = True
        elif param.kind is param.KEYWORD_ONLY and param.default is param.empty:
            raise TypeError(f"{func!r}: keyword-only parameter {param.name!r} has no default")
    return Arity(required, None if variadic else total), tuple(types)


class CallableDirective:
    """Adapter exposing a plain Python callable as a `Directive`.

    The arity is derived from the callable's positional parameters. Parameters
    annotated with ``int``, ``float``, ``str`` or ``bool`` are type-checked
    before the call.
    """

    __slots__ = ("_arity", "_func", "_name", "_param_types")

    def __init__(self, name: str, func: Callable[..., object]) -> None:
        if not callable(func):
            raise TypeError(f"value for {name!r} is not callable: {func!r}")
        self._name: str = name
        self._func: Callable[..., object] = func
        self._arity, self._param_types = _signature_of(func)

    @property
    def name(self) -> str:
        return self._name

    @property
    def arity(self) -> Arity:
        return self._arity

    def invoke(self, args: Sequence[object]) -> object:
        check_arity(self._name, self._arity, args)
        return self._func(*coerce_args(self._name, self._param_types, args))

    def __repr__(self) -> str:
        return f"CallableDirective({self._name!r}, {self._func!r})"


class BoundDirective(Generic[S]):
    """A handler bound to an explicit state object.

    The handler is called as ``handler(state, *args)``. The state is passed in
    rather than captured, so every directive bound to the same state object
    observes the same mutations and nothing else can.
    """

    __slots__ = ("_arity", "_handler", "_name", "_param_types", "state")

    def __init__(
        self,
        name: str,
        handler: Callable[..., str],
        state: S,
        param_types: Sequence[type] = (),
    ) -> None:
        self._name: str = name
        self._handler: Callable[..., str] = handler
        self._param_types: tuple[type, ...] = tuple(param_types)
        self._arity: Arity = Arity.exactly(len(self._param_types))
        self.state: S = state

    @property
    def name(self) -> str:
        return self._name

    @property
    def arity(self) -> Arity:
        return self._arity

    def invoke(self, args: Sequence[object]) -> str:
        check_arity(self._name, self._arity, args)
        return self._handler(self.state, *coerce_args(self._name, self._param_types, args))

    def __repr__(self) -> str:
        return f"BoundDirective({self._name!r}, {self._handler.__name__})"


def as_directive(name: str, value: Directive | Callable[..., object]) -> Directive:
    """Return ``value`` as a `Directive`, wrapping plain callables."""
    if isinstance(value, Directive):
        return value
    return CallableDirective(name, value)


class DirectiveRegistry(Mapping[str, Directive]):
    """Ordered ``name -> Directive`` table.

    Registering a name that already exists replaces the earlier entry, so
    callers can override builtins by registering after them.
    """

    def __init__(self, entries: Mapping[str, Directive | Callable[..., object]] | None = None) -> None:
        self._entries: dict[str, Directive] = {}
        if entries:
            self.update(entries)

    def register(self, name: str, value: Directive | Callable[..., object]) -> Directive:
        """Register ``value`` under ``name`` and return the stored directive."""
        if not name.isidentifier():
            raise ValueError(f"invalid directive name: {name!r}")
        directive: Directive = as_directive(name, value)
        if name in self._entries:
            logger.trace("Overriding directive %r", name)
        self._entries[name] = directive
        return directive

    def update(self, entries: Mapping[str, Directive | Callable[..., object]]) -> None:
        """Register every entry of ``entries`` in iteration order."""
        for name, value in entries.items():
            self.register(name, value)

    def names(self) -> list[str]:
        return list(self._entries)

    def copy(self) -> DirectiveRegistry:
        clone = DirectiveRegistry()
        clone._entries = dict(self._entries)
        return clone

    def __getitem__(self, name: str) -> Directive:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
