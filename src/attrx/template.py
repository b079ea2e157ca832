"""``{{identifier}}`` templates captured from element content."""

from __future__ import annotations

import itertools
import re
import time
from typing import Any, Mapping

from attrx.errors import RenderError

PLACEHOLDER_RE = re.compile(r"{{\s*(\w+)\s*}}")

REACTIVE_ID_ATTR = "data-reactive-id"

_id_counter = itertools.count()


def unique_id() -> str:
    return f"{time.time_ns() // 1_000_000}-{next(_id_counter)}"


class Template:
    __slots__ = ("text", "placeholders")

    def __init__(self, text: str) -> None:
        self.text = text
        self.placeholders: tuple[str, ...] = tuple(
            dict.fromkeys(m.group(1) for m in PLACEHOLDER_RE.finditer(text))
        )

    def render(self, values: Mapping[str, Any]) -> str:
        def substitute(match: re.Match) -> str:
            key = match.group(1)
            if key not in values:
                raise RenderError(f'No prop with key "{key}" exists')
            return str(values[key])

        return PLACEHOLDER_RE.sub(substitute, self.text)

    def __repr__(self) -> str:
        return f"Template({self.text!r})"


class TemplateBinding:
    """A template attached to one element, remembering the last props.

    render() merges its updates into those props, so two bind rules feeding
    different placeholders of the same element don't erase each other.
    """

    __slots__ = ("element", "template", "props")

    def __init__(self, element, template: Template) -> None:
        self.element = element
        self.template = template
        self.props: dict[str, Any] = {key: "" for key in template.placeholders}

    def render(self, updates: Mapping[str, Any] | None = None) -> str:
        props = {**self.props, **(updates or {})}
        text = self.template.render(props)
        self.props = props
        self.element.content = text
        return text


def attach_template(element) -> TemplateBinding:
    """Capture element.content as a template, render it blank, and tag the element."""
    if element.template is not None:
        return element.template
    binding = TemplateBinding(element, Template(element.content))
    element.template = binding
    binding.render()
    element.set_attribute(REACTIVE_ID_ATTR, unique_id())
    return binding
