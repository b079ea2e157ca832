"""Reactive form inputs — keep an element's value and a Store in sync.

User input sets the store; setting the store writes the element's value
and ``value`` attribute back.
"""

from __future__ import annotations

import logging
from typing import Any

from attrx import dom
from attrx.errors import MissingDependencyError
from attrx.store import Store

logger = logging.getLogger("attrx.inputs")

REACTIVE_ATTR = "data-reactive"
REACTIVE_ON_ATTR = "data-reactive-on"
SYNC_KEY = "_internal_sync-dom-element"
INPUT_SELECTOR = "input[data-reactive], textarea[data-reactive], select[data-reactive]"


def make_reactive_input(element, event_type: str = "input", initial: Any = "") -> Store:
    """Attach a Store to element.state and wire both directions."""
    if element is None:
        raise MissingDependencyError("Element is not defined")

    store: Store = Store(initial or element.value)
    element.state = store
    element.set_attribute(REACTIVE_ATTR, "")

    def sync_element(_key: str, value: Any) -> None:
        element.value = value
        element.set_attribute("value", value)

    store.subscribe(SYNC_KEY, sync_element)
    element.add_event_listener(event_type, lambda event: store.set(event.target.value))
    return store


def create_reactive_field(selector: str, initial: Any, event_type: str = "change") -> Store:
    """make_reactive_input() for the element matching selector in the process document."""
    document = dom.get_document()
    element = document.query(selector) if document is not None else None
    if element is None:
        raise MissingDependencyError(f'Could not find element with selector "{selector}"')
    return make_reactive_input(element, event_type, initial)


def setup_reactive_inputs(document) -> list[Store]:
    """Wire every ``[data-reactive]`` input, textarea and select not yet reactive.

    ``data-reactive-on`` picks the event (default ``change``).
    """
    stores = []
    for element in document.query_all(INPUT_SELECTOR):
        if element.state is not None:
            continue
        event_type = element.get_attribute(REACTIVE_ON_ATTR) or "change"
        initial = element.value or element.get_attribute("value") or ""
        stores.append(make_reactive_input(element, event_type, initial))
    logger.debug("Wired %d reactive inputs", len(stores))
    return stores
