"""Bindings — render one reactive source straight into an element's template.

    <p data-reactive data-bind="GLOBAL.total|total">Total: {{total}}</p>
    <p data-reactive data-bind="#name|name">Hello {{name}}</p>
"""

from __future__ import annotations

import logging
from typing import Any

from attrx.errors import MalformedRuleError, MissingDependencyError
from attrx.reactive import Reactive
from attrx.resolver import element_source, global_source
from attrx.rules import BIND_ATTR, BindRule, parse_bind
from attrx.wiring import WireHandle, subscribe_all

logger = logging.getLogger("attrx.bind")


def _bind_source(rule: BindRule) -> Reactive:
    key = rule.global_key
    if key is not None:
        source = global_source(key)
        if source is None:
            raise MissingDependencyError(f'No global with key "{key}" exists')
        return source
    source = element_source(rule.source)
    if source is None:
        raise MissingDependencyError(f'Element with selector "{rule.source}" is not reactive')
    return source


def setup_bind(element, rule: BindRule | str | None = None) -> WireHandle:
    """Subscribe ``bind-<key>`` on the source and render once now.

    The rule defaults to the element's ``data-bind`` attribute. The element
    must already carry a template (see attrx.template.attach_template).
    """
    if rule is None:
        text = element.get_attribute(BIND_ATTR)
        if not text:
            raise MalformedRuleError(f"{element!r} does not have a {BIND_ATTR} attribute")
        rule = text
    if isinstance(rule, str):
        rule = parse_bind(rule)

    binding = element.template
    if binding is None:
        raise MissingDependencyError(f"{element!r} has no template to render into")

    source = _bind_source(rule)
    template_key = rule.template_key

    def on_change(_key: str, value: Any) -> None:
        binding.render({template_key: value})

    edges = subscribe_all([source], f"bind-{template_key}", on_change)
    binding.render({template_key: source.read()})

    logger.debug("Bound %s into {{%s}}", rule.source, template_key)
    return WireHandle(template_key, edges)
