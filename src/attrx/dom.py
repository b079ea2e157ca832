"""Document collaborator — the element lookup and attribute surface attrx needs.

attrx never talks to a real browser. It needs a Document that can find
elements by selector and Elements that expose attributes, text content, an
input value, a slot for reactive state and a slot for a template binding.
MemoryDocument is a small in-process implementation; attrx.textual adapts a
Textual app to the same protocol.

The process document is configured once with set_document(), the same way
a process-wide scheduler is set.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Protocol

from attrx.errors import SelectorError

Listener = Callable[["Event"], None]


@dataclass(frozen=True)
class Event:
    type: str
    target: Any


class Element(Protocol):
    tag: str
    content: str
    value: Any
    state: Any
    template: Any

    def get_attribute(self, name: str) -> str | None: ...

    def set_attribute(self, name: str, value: Any) -> None: ...

    def has_attribute(self, name: str) -> bool: ...

    def add_event_listener(self, event_type: str, listener: Listener) -> None: ...


class Document(Protocol):
    def query(self, selector: str) -> Element | None: ...

    def query_all(self, selector: str) -> list[Element]: ...


# ─── Selector matching ───────────────────────────────────────────────────────
# Compound selectors only: tag, #id, .class, [attr], [attr=value], and comma
# groups. No combinators.

_TOKEN_RE = re.compile(
    r"""
    (?P<tag>^[A-Za-z][\w-]*)
    | \#(?P<id>[\w-]+)
    | \.(?P<cls>[\w-]+)
    | \[\s*(?P<attr>[\w-]+)\s*(?:=\s*(?P<q>["']?)(?P<val>[^"'\]]*)(?P=q)\s*)?\]
    """,
    re.VERBOSE,
)


def _compile(selector: str) -> list[tuple[str, str, str | None]]:
    parts: list[tuple[str, str, str | None]] = []
    pos = 0
    selector = selector.strip()
    while pos < len(selector):
        match = _TOKEN_RE.match(selector, pos)
        if match is None or match.end() == pos:
            raise SelectorError(f"Unsupported selector {selector!r}")
        if match.group("tag"):
            parts.append(("tag", match.group("tag").lower(), None))
        elif match.group("id"):
            parts.append(("attr", "id", match.group("id")))
        elif match.group("cls"):
            parts.append(("class", match.group("cls"), None))
        else:
            parts.append(("attr", match.group("attr"), match.group("val")))
        pos = match.end()
    return parts


def matches(element: Element, selector: str) -> bool:
    """True if element matches any comma-separated compound selector."""
    for group in selector.split(","):
        if all(_match_part(element, part) for part in _compile(group)):
            return True
    return False


def _match_part(element: Element, part: tuple[str, str, str | None]) -> bool:
    kind, name, value = part
    if kind == "tag":
        return element.tag.lower() == name
    if kind == "class":
        return name in (element.get_attribute("class") or "").split()
    if not element.has_attribute(name):
        return False
    return value is None or element.get_attribute(name) == value


def select(elements: Iterable[Element], selector: str) -> list[Element]:
    return [el for el in elements if matches(el, selector)]


# ─── In-memory implementation ────────────────────────────────────────────────


class MemoryElement:
    """An element living in a MemoryDocument."""

    def __init__(
        self,
        tag: str,
        attributes: dict[str, Any] | None = None,
        content: str = "",
    ) -> None:
        self.tag = tag
        self._attributes: dict[str, str] = {
            k: str(v) for k, v in (attributes or {}).items()
        }
        self.content = content
        self.value: Any = self._attributes.get("value", "")
        self.state: Any = None
        self.template: Any = None
        self._listeners: dict[str, list[Listener]] = {}

    def get_attribute(self, name: str) -> str | None:
        return self._attributes.get(name)

    def set_attribute(self, name: str, value: Any) -> None:
        self._attributes[name] = str(value)

    def has_attribute(self, name: str) -> bool:
        return name in self._attributes

    def add_event_listener(self, event_type: str, listener: Listener) -> None:
        self._listeners.setdefault(event_type, []).append(listener)

    def dispatch(self, event_type: str, value: Any = None) -> None:
        """Simulate raw user input: set value (if given) and fire listeners."""
        if value is not None:
            self.value = value
        event = Event(event_type, self)
        for listener in list(self._listeners.get(event_type, ())):
            listener(event)

    def __repr__(self) -> str:
        attrs = " ".join(f'{k}="{v}"' for k, v in self._attributes.items())
        return f"<{self.tag}{' ' + attrs if attrs else ''}>"


class MemoryDocument:
    """Flat, ordered collection of MemoryElements."""

    def __init__(self, elements: Iterable[MemoryElement] = ()) -> None:
        self.elements: list[MemoryElement] = list(elements)

    def add(self, tag: str, attributes: dict[str, Any] | None = None, content: str = "") -> MemoryElement:
        element = MemoryElement(tag, attributes, content)
        self.elements.append(element)
        return element

    def query(self, selector: str) -> MemoryElement | None:
        for element in self.elements:
            if matches(element, selector):
                return element
        return None

    def query_all(self, selector: str) -> list[MemoryElement]:
        return select(self.elements, selector)


_document: Document | None = None


def set_document(document: Document | None) -> None:
    """Set the document that element(...) references and selectors resolve in."""
    global _document
    _document = document


def get_document() -> Document | None:
    return _document


def query_state(selector: str) -> Any | None:
    """The reactive state attached to the element matching selector, if any."""
    document = _document
    if document is None:
        return None
    element = document.query(selector)
    if element is None:
        return None
    return getattr(element, "state", None)
