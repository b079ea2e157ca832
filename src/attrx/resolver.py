"""Parameter resolution — turning one argument string into a value.

Precedence, first match wins:

1. ``element(<selector>)``: current state of the reactive element.
2. ``GLOBAL.<name>``: current state of the registered global.
3. A JSON literal: ``3``, ``true``, ``null``, ``"text"``, ``[1, 2]``...
4. Anything else: the raw string itself.

A missing element, a not-yet-reactive element, or a missing global resolve
to None rather than failing: during page setup they may simply not exist
yet.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Iterable

from attrx import dom
from attrx.reactive import Reactive, as_reactive, is_reactive
from attrx.registry import GLOBAL

ELEMENT_RE = re.compile(r"^element\s*\(\s*([^)]+)\s*\)$")
GLOBAL_RE = re.compile(r"^GLOBAL\.(\w+)$")

GLOBAL_PREFIX = "GLOBAL."


def _reactive_or_none(obj) -> Reactive | None:
    if obj is None or not is_reactive(obj):
        return None
    return as_reactive(obj)


def global_source(key: str) -> Reactive | None:
    return _reactive_or_none(GLOBAL.lookup(key))


def element_source(selector: str) -> Reactive | None:
    return _reactive_or_none(dom.query_state(selector))


def read_global(key: str) -> Any:
    source = global_source(key)
    return source.read() if source is not None else None


def read_element(selector: str) -> Any:
    source = element_source(selector)
    return source.read() if source is not None else None


def source_for(key: str) -> Reactive | None:
    """Resolve a rule key: ``GLOBAL.<name>`` or an element selector."""
    key = key.strip()
    if key.startswith(GLOBAL_PREFIX):
        return global_source(key[len(GLOBAL_PREFIX):])
    return element_source(key)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a JSON literal")


def resolve_param(raw: str) -> Any:
    raw = raw.strip()

    match = ELEMENT_RE.match(raw)
    if match:
        return read_element(match.group(1).strip())

    match = GLOBAL_RE.match(raw)
    if match:
        return read_global(match.group(1))

    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        return raw


@dataclass(frozen=True)
class Dependencies:
    """Sources a compute rule reads: global keys and element selectors."""

    globals: frozenset[str] = field(default_factory=frozenset)
    elements: frozenset[str] = field(default_factory=frozenset)

    def __bool__(self) -> bool:
        return bool(self.globals or self.elements)


def extract_dependencies(args: Iterable[str]) -> Dependencies:
    """Collect the element/global references in args without reading them."""
    globals_: set[str] = set()
    elements: set[str] = set()
    for raw in args:
        raw = raw.strip()
        match = ELEMENT_RE.match(raw)
        if match:
            elements.add(match.group(1).strip())
            continue
        match = GLOBAL_RE.match(raw)
        if match:
            globals_.add(match.group(1))
    return Dependencies(frozenset(globals_), frozenset(elements))
