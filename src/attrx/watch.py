"""Watchers — push one source's new value through a function into a target.

    data-watch="#name|GLOBAL.greeting|greet"

The function gets a single WatchContext instead of positional arguments:

    @FUNCTIONS.function
    def greet(ctx):
        return f"Hello, {ctx['$value']} ({ctx.GLOBAL.lang})"

``GLOBAL`` and ``element`` in the context read live values lazily, at the
moment the function asks for them.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterator

from attrx import config
from attrx.errors import EvaluationError, MissingDependencyError
from attrx.registry import FUNCTIONS
from attrx.resolver import read_element, read_global, source_for
from attrx.rules import WatchRule, parse_watch
from attrx.wiring import WireHandle, subscribe_all

logger = logging.getLogger("attrx.watch")


class GlobalView:
    """Lazy read-only view of GLOBAL values: ``view.x`` or ``view["x"]``."""

    __slots__ = ()

    def __getattr__(self, key: str) -> Any:
        if key.startswith("__"):
            raise AttributeError(key)
        return read_global(key)

    def __getitem__(self, key: str) -> Any:
        return read_global(key)

    def __repr__(self) -> str:
        return "GlobalView()"


class WatchContext(Mapping):
    """What a watch function receives: ``$value``, ``GLOBAL`` and ``element``."""

    __slots__ = ("value",)

    GLOBAL = GlobalView()
    element = staticmethod(read_element)

    def __init__(self, value: Any) -> None:
        self.value = value

    def __getitem__(self, key: str) -> Any:
        if key == "$value":
            return self.value
        if key == "GLOBAL":
            return self.GLOBAL
        if key == "element":
            return self.element
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(("$value", "GLOBAL", "element"))

    def __len__(self) -> int:
        return 3

    def __repr__(self) -> str:
        return f"WatchContext($value={self.value!r})"


def setup_watch(rule: WatchRule | str, *, fire_immediately: bool = False) -> WireHandle:
    """Subscribe ``watch-<target>`` on the source.

    Each notification calls the function with a WatchContext and writes the
    return value into the target. With fire_immediately=True the function
    also runs once now, with the source's current value.

    Raises MissingDependencyError if the source or target cannot be found and
    UnknownFunctionError if the function was never registered.
    """
    if isinstance(rule, str):
        rule = parse_watch(rule)

    source = source_for(rule.source_key)
    if source is None:
        raise MissingDependencyError(f'Could not find source reactive for "{rule.source_key}"')
    target = source_for(rule.target_key)
    if target is None:
        raise MissingDependencyError(f'Could not find target reactive for "{rule.target_key}"')

    fn = FUNCTIONS.require(rule.function_name)

    def on_change(_key: str, value: Any) -> None:
        try:
            result = fn(WatchContext(value))
        except Exception as exc:
            err = EvaluationError(rule.target_key, rule.function_name, exc)
            logger.error("%s; target left unchanged", err, exc_info=exc)
            if config.is_strict():
                raise err from exc
            return
        target.write(result)

    edges = subscribe_all([source], f"watch-{rule.target_key}", on_change)
    if fire_immediately:
        on_change(edges[0][0], source.read())

    logger.debug("Watcher %s -> %s via %s", rule.source_key, rule.target_key, rule.function_name)
    return WireHandle(rule.target_key, edges)
