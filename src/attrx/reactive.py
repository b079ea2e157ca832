"""One capability interface over the reactive shapes attrx accepts.

Registries and elements may hold any of:

- an object exposing a ``state`` property (ObjectStore),
- an accessor object exposing ``get``/``set``/``subscribe`` (Store),
- a bare ``(get, set, subscribe[, unsubscribe])`` tuple.

as_reactive() wraps each of them in an adapter with the same four
operations, so wiring code never branches on the shape itself.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

from attrx.store import Callback


@runtime_checkable
class Reactive(Protocol):
    def read(self) -> Any: ...

    def write(self, value: Any) -> None: ...

    def subscribe(self, key: str, callback: Callback) -> Callable[[], bool]: ...

    def unsubscribe(self, key: str) -> bool: ...


class _StateAdapter:
    __slots__ = ("target",)

    def __init__(self, target) -> None:
        self.target = target

    def read(self):
        return self.target.state

    def write(self, value) -> None:
        self.target.state = value

    def subscribe(self, key, callback):
        return self.target.subscribe(key, callback)

    def unsubscribe(self, key):
        return self.target.unsubscribe(key)

    def __repr__(self) -> str:
        return f"_StateAdapter({self.target!r})"


class _AccessorAdapter:
    __slots__ = ("target",)

    def __init__(self, target) -> None:
        self.target = target

    def read(self):
        return self.target.get()

    def write(self, value) -> None:
        self.target.set(value)

    def subscribe(self, key, callback):
        return self.target.subscribe(key, callback)

    def unsubscribe(self, key):
        return self.target.unsubscribe(key)

    def __repr__(self) -> str:
        return f"_AccessorAdapter({self.target!r})"


class _TupleAdapter:
    __slots__ = ("_get", "_set", "_subscribe", "_unsubscribe")

    def __init__(self, accessors: tuple) -> None:
        self._get, self._set, self._subscribe = accessors[:3]
        self._unsubscribe = accessors[3] if len(accessors) == 4 else None

    def read(self):
        return self._get()

    def write(self, value) -> None:
        self._set(value)

    def subscribe(self, key, callback):
        return self._subscribe(key, callback)

    def unsubscribe(self, key):
        if self._unsubscribe is None:
            raise TypeError(
                "(get, set, subscribe) tuples cannot unsubscribe by key; "
                "use the handle returned by subscribe()"
            )
        return self._unsubscribe(key)

    def __repr__(self) -> str:
        return f"_TupleAdapter({self._get!r})"


_ADAPTERS = (_StateAdapter, _AccessorAdapter, _TupleAdapter)


def _adapter_for(obj) -> Callable[[Any], Reactive] | None:
    if isinstance(obj, tuple):
        if len(obj) in (3, 4) and all(callable(fn) for fn in obj):
            return _TupleAdapter
        return None
    if hasattr(obj, "state") and callable(getattr(obj, "subscribe", None)):
        return _StateAdapter
    if all(callable(getattr(obj, name, None)) for name in ("get", "set", "subscribe")):
        return _AccessorAdapter
    return None


def is_reactive(obj) -> bool:
    """True if as_reactive(obj) would succeed."""
    return isinstance(obj, _ADAPTERS) or _adapter_for(obj) is not None


def as_reactive(obj) -> Reactive:
    """Wrap obj in the adapter matching its shape. Raises TypeError otherwise."""
    if isinstance(obj, _ADAPTERS):
        return obj
    adapter = _adapter_for(obj)
    if adapter is None:
        raise TypeError(f"{obj!r} is not a reactive object")
    return adapter(obj)
