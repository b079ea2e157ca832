"""Process-wide registries.

GLOBAL maps names to reactive objects (``GLOBAL.<name>`` in markup).
FUNCTIONS maps names to the functions compute and watch rules may call;
markup can only name functions registered here, it never carries code.

Both are populated by setup code at application start and cleared with
reset() (tests call it between cases).
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, TypeVar

from attrx.errors import MissingKeyError, UnknownFunctionError

logger = logging.getLogger("attrx.registry")

F = TypeVar("F", bound=Callable[..., Any])


class Registry:
    """Name -> object table with an explicit register/lookup/clear lifecycle."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._entries: dict[str, Any] = {}

    def register(self, name: str, obj: Any) -> Any:
        """Store obj under name, replacing any previous entry. Returns obj."""
        if name in self._entries:
            logger.debug("%s: replacing entry %r", self.name, name)
        self._entries[name] = obj
        return obj

    def lookup(self, name: str) -> Any | None:
        return self._entries.get(name)

    def unregister(self, name: str) -> Any:
        try:
            return self._entries.pop(name)
        except KeyError:
            raise MissingKeyError(name, where=f"{self.name} entry") from None

    def clear(self) -> None:
        self._entries.clear()

    def names(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {sorted(self._entries)!r})"


class FunctionRegistry(Registry):
    """Registry restricted to callables, usable as a decorator.

    Usage:
        @FUNCTIONS.function
        def double(x):
            return x * 2

        @FUNCTIONS.function(name="fullName")
        def full_name(first, last):
            return f"{first} {last}"
    """

    def register(self, name: str, fn: Any) -> Any:
        if not callable(fn):
            raise TypeError(f"Cannot register {name!r}: {fn!r} is not callable")
        return super().register(name, fn)

    def function(self, fn: F | None = None, *, name: str | None = None):
        def decorate(f: F) -> F:
            self.register(name or f.__name__, f)
            return f

        if fn is not None:
            return decorate(fn)
        return decorate

    def require(self, name: str) -> Callable[..., Any]:
        fn = self._entries.get(name)
        if fn is None:
            raise UnknownFunctionError(name)
        return fn


GLOBAL = Registry("GLOBAL")
FUNCTIONS = FunctionRegistry("FUNCTIONS")


def reset() -> None:
    """Clear both process-wide registries."""
    GLOBAL.clear()
    FUNCTIONS.clear()
