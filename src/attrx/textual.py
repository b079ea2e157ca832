"""Textual render targets for attrx. Opt-in — requires textual.

TextualDocument lets a Textual app stand in for the document: selectors
resolve through app.query_one, template renders go to widget.update(), and
input values to widget.value. Widgets carry no data attributes, so the rule
attributes are declared up front:

    doc = TextualDocument(app, {
        "#qty": {"tag": "input", "data-reactive": "", "data-reactive-on": "input", "value": "1"},
        "#total": {
            "data-reactive": "",
            "data-bind": "GLOBAL.total|total",
            "data-template": "Total: {{total}}",
        },
    })
    attrx.mount(doc)

    def on_input_changed(self, event):
        doc.dispatch(f"#{event.input.id}", "input", event.value)

Widget writes are guarded here, not at callsites: skipped while the app is
paused or not running, NoMatches swallowed, background-thread writes
marshaled through app.call_from_thread.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any

from textual.css.query import NoMatches

from attrx.dom import Event, Listener, matches

TEMPLATE_ATTR = "data-template"

# Apps whose widget writes are currently suspended, keyed by id(app).
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Hold back WidgetElement content and value writes while widgets are swapped."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Can WidgetElement writes reach the widget tree right now?"""
    return app.is_running and id(app) not in _paused_apps


class WidgetElement:
    """Element facade over the widget matching selector.

    The widget is looked up again on every write, so a replaced widget
    with the same id keeps receiving updates.
    """

    def __init__(self, app, selector: str, attributes: dict[str, Any] | None = None) -> None:
        self.app = app
        self.selector = selector
        self._attributes = {k: str(v) for k, v in (attributes or {}).items()}
        if selector.startswith("#"):
            self._attributes.setdefault("id", selector[1:])
        self.tag = self._attributes.pop("tag", "widget")
        self._content = self._attributes.get(TEMPLATE_ATTR, "")
        self._value: Any = self._attributes.get("value", "")
        self.state: Any = None
        self.template: Any = None
        self._listeners: dict[str, list[Listener]] = {}
        self._main = threading.get_ident()

    # --- attributes ---

    def get_attribute(self, name: str) -> str | None:
        return self._attributes.get(name)

    def set_attribute(self, name: str, value: Any) -> None:
        self._attributes[name] = str(value)

    def has_attribute(self, name: str) -> bool:
        return name in self._attributes

    # --- widget writes ---

    @property
    def content(self) -> str:
        return self._content

    @content.setter
    def content(self, text: str) -> None:
        self._content = text
        self._write(lambda widget: widget.update(text))

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, value: Any) -> None:
        if value == self._value:
            return
        self._value = value
        self._write(lambda widget: setattr(widget, "value", value))

    def _write(self, apply) -> None:
        if not is_safe(self.app):
            return
        if threading.get_ident() != self._main:
            self.app.call_from_thread(self._apply, apply)
        else:
            self._apply(apply)

    def _apply(self, apply) -> None:
        try:
            apply(self.app.query_one(self.selector))
        except NoMatches:
            pass

    # --- events ---

    def add_event_listener(self, event_type: str, listener: Listener) -> None:
        self._listeners.setdefault(event_type, []).append(listener)

    def dispatch(self, event_type: str, value: Any) -> None:
        """Feed a widget event in. The widget already shows value."""
        self._value = value
        event = Event(event_type, self)
        for listener in list(self._listeners.get(event_type, ())):
            listener(event)

    def __repr__(self) -> str:
        return f"WidgetElement({self.selector!r})"


class TextualDocument:
    """Document over a Textual app, with rule attributes declared per selector."""

    def __init__(self, app, markup: dict[str, dict[str, Any]] | None = None) -> None:
        self.app = app
        self._elements: dict[str, WidgetElement] = {
            selector: WidgetElement(app, selector, attrs)
            for selector, attrs in (markup or {}).items()
        }

    def query(self, selector: str) -> WidgetElement | None:
        element = self._elements.get(selector)
        if element is not None:
            return element
        try:
            found = self.query_all(selector)
        except ValueError:
            found = []  # a Textual-only selector
        if found:
            return found[0]
        try:
            self.app.query_one(selector)
        except NoMatches:
            return None
        element = self._elements[selector] = WidgetElement(self.app, selector)
        return element

    def query_all(self, selector: str) -> list[WidgetElement]:
        return [el for el in self._elements.values() if matches(el, selector)]

    def dispatch(self, selector: str, event_type: str, value: Any) -> None:
        element = self.query(selector)
        if element is not None:
            element.dispatch(event_type, value)
