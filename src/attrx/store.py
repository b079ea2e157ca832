"""Store — one value plus a keyed table of subscribers.

Every set() pushes the new value to each subscriber synchronously, in
subscription order. A subscriber may set other stores (or this one) from
inside its callback; those nested notifications finish before the outer
set() returns.

A failing subscriber is logged and skipped so the rest still run. In strict
mode (see attrx.config) the error is re-raised after logging.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar

from attrx import config
from attrx.errors import DuplicateKeyError, MissingKeyError

logger = logging.getLogger("attrx.store")

T = TypeVar("T")

Callback = Callable[[str, Any], None]
Unsubscribe = Callable[[], bool]


class Store(Generic[T]):
    """Keyed single-subscriber-per-key publish primitive."""

    __slots__ = ("_value", "_subscriptions")

    def __init__(self, value: T = None) -> None:
        self._value = value
        self._subscriptions: dict[str, Callback] = {}

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        """Assign and notify every subscriber with (key, value)."""
        self._value = value
        # Snapshot: callbacks may subscribe/unsubscribe while we iterate.
        for key, callback in list(self._subscriptions.items()):
            try:
                callback(key, value)
            except Exception:
                logger.exception(
                    "Error encountered while processing subscription with key %r "
                    "(callback=%r, value=%r)",
                    key, callback, value,
                )
                if config.is_strict():
                    raise

    def subscribe(self, key: str, callback: Callback) -> Unsubscribe:
        """Register callback under key. Returns a function that removes it."""
        if not callable(callback):
            raise TypeError(
                f"Cannot subscribe: callback must be callable. "
                f"Received {type(callback).__name__} for key {key!r}"
            )
        if key in self._subscriptions:
            raise DuplicateKeyError(key)
        self._subscriptions[key] = callback
        return lambda: self.unsubscribe(key)

    def unsubscribe(self, key: str) -> bool:
        if key not in self._subscriptions:
            raise MissingKeyError(key)
        del self._subscriptions[key]
        return True

    def keys(self) -> list[str]:
        """Live subscription keys, in notification order."""
        return list(self._subscriptions)

    def accessors(self) -> tuple[Callable[[], T], Callable[[T], None], Callable, Callable]:
        """The bare (get, set, subscribe, unsubscribe) form of this store."""
        return self.get, self.set, self.subscribe, self.unsubscribe

    def __len__(self) -> int:
        return len(self._subscriptions)

    def __repr__(self) -> str:
        return f"Store({self._value!r}, subscribers={len(self._subscriptions)})"


class ObjectStore(Generic[T]):
    """Property-style view over a Store: read and assign ``.state``.

    Usage:
        total = ObjectStore(0)
        total.subscribe("log", lambda key, v: print(v))
        total.state = 5  # prints 5
    """

    __slots__ = ("_store",)

    def __init__(self, value: T = None) -> None:
        self._store: Store[T] = Store(value)

    @property
    def state(self) -> T:
        return self._store.get()

    @state.setter
    def state(self, value: T) -> None:
        self._store.set(value)

    def subscribe(self, key: str, callback: Callback) -> Unsubscribe:
        return self._store.subscribe(key, callback)

    def unsubscribe(self, key: str) -> bool:
        return self._store.unsubscribe(key)

    def keys(self) -> list[str]:
        return self._store.keys()

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"ObjectStore({self._store.get()!r})"
