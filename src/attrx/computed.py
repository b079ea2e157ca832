"""Computed values — targets derived from a registered function.

    data-compute="total|multiply(GLOBAL.price, element(#qty))"

setup_computed() subscribes a re-evaluation trigger on every source the
arguments reference, evaluates once, and publishes the result as
``GLOBAL.<target>``. Any later notification from a source re-resolves every
argument and calls the function again.

Computed values are eager: they recompute on each notification, not on read.
"""

from __future__ import annotations

import logging
from typing import Any

from attrx import config
from attrx.errors import EvaluationError, MissingDependencyError
from attrx.reactive import Reactive, as_reactive, is_reactive
from attrx.registry import FUNCTIONS, GLOBAL
from attrx.resolver import element_source, extract_dependencies, global_source, resolve_param
from attrx.rules import ComputeRule, parse_compute
from attrx.store import ObjectStore
from attrx.wiring import WireHandle, subscribe_all

logger = logging.getLogger("attrx.computed")


def _sources(rule: ComputeRule) -> list[Reactive]:
    deps = extract_dependencies(rule.args)
    sources: list[Reactive] = []
    for key in sorted(deps.globals):
        source = global_source(key)
        if source is None:
            logger.warning("%s: GLOBAL.%s does not exist yet; not subscribed", rule.target_key, key)
        else:
            sources.append(source)
    for selector in sorted(deps.elements):
        source = element_source(selector)
        if source is None:
            logger.warning("%s: element(%s) is not reactive yet; not subscribed", rule.target_key, selector)
        else:
            sources.append(source)
    return sources


def _target(key: str, default: Any) -> tuple[Any, bool]:
    """The object registered under key, or a fresh ObjectStore (and True)."""
    existing = GLOBAL.lookup(key)
    if existing is not None:
        if not is_reactive(existing):
            raise MissingDependencyError(f"GLOBAL.{key} is not reactive")
        return existing, False
    return ObjectStore(default), True


def setup_computed(rule: ComputeRule | str, *, default: Any = "") -> WireHandle:
    """Wire a compute rule and publish its first value.

    Usage:
        GLOBAL.register("x", ObjectStore(2))
        FUNCTIONS.register("double", lambda x: x * 2)

        setup_computed("doubled|double(GLOBAL.x)")
        GLOBAL.lookup("doubled").state  # 4
        GLOBAL.lookup("x").state = 5
        GLOBAL.lookup("doubled").state  # 10

    Raises UnknownFunctionError if the function was never registered,
    MissingDependencyError if GLOBAL holds a non-reactive value under the
    target key, and
    DuplicateKeyError if the target is already wired to one of the sources
    (dispose the previous handle first).
    """
    if isinstance(rule, str):
        rule = parse_compute(rule)
    fn = FUNCTIONS.require(rule.function_name)
    sub_key = f"computed-{rule.target_key}"

    def evaluate(previous: Any) -> Any:
        try:
            params = [resolve_param(arg) for arg in rule.args]
            return fn(*params)
        except Exception as exc:
            err = EvaluationError(rule.target_key, rule.function_name, exc)
            logger.error("%s; keeping %r", err, previous, exc_info=exc)
            if config.is_strict():
                raise err from exc
            return previous

    holder, fresh = _target(rule.target_key, default)
    sources = _sources(rule)
    target = as_reactive(holder)

    def on_change(_key: str, _value: Any) -> None:
        target.write(evaluate(target.read()))

    edges = subscribe_all(sources, sub_key, on_change)
    try:
        target.write(evaluate(target.read()))
    except Exception:
        for _, unsubscribe in edges:
            unsubscribe()
        raise
    if fresh:
        GLOBAL.register(rule.target_key, holder)

    logger.debug("Computed %r wired to %d sources", rule.target_key, len(edges))
    return WireHandle(rule.target_key, edges)
