"""Subscription edges shared by computed, watch and bind wiring."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from attrx.reactive import Reactive
from attrx.store import Callback

logger = logging.getLogger("attrx.wiring")

# (subscription key, unsubscribe handle returned by subscribe)
Edge = tuple[str, Callable[[], bool]]


class WireHandle:
    """Disposable set of subscriptions feeding one target.

    dispose() removes every subscription, after which the same target may be
    wired again under the same keys.
    """

    __slots__ = ("target_key", "_edges", "_disposed")

    def __init__(self, target_key: str, edges: list[Edge]) -> None:
        self.target_key = target_key
        self._edges = edges
        self._disposed = False

    @property
    def keys(self) -> list[str]:
        return [key for key, _ in self._edges]

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        for _, unsubscribe in self._edges:
            unsubscribe()
        logger.debug("Disposed %d edges feeding %r", len(self._edges), self.target_key)
        self._edges = []

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else f"{len(self._edges)} edges"
        return f"WireHandle({self.target_key!r}, {state})"


def subscribe_all(sources: Iterable[Reactive], key: str, callback: Callback) -> list[Edge]:
    """Subscribe callback on every source under key, all or nothing.

    If any subscription fails the ones already made are removed before the
    error propagates.
    """
    edges: list[Edge] = []
    try:
        for source in sources:
            edges.append((key, source.subscribe(key, callback)))
    except Exception:
        for _, unsubscribe in edges:
            unsubscribe()
        raise
    return edges
