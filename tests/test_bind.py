"""Tests for bind wiring."""

import pytest

from attrx import (
    GLOBAL,
    MalformedRuleError,
    MemoryDocument,
    MemoryElement,
    MissingDependencyError,
    ObjectStore,
    Store,
    attach_template,
    set_document,
    setup_bind,
)


def _target(doc, rule, text):
    el = doc.add("p", {"data-reactive": "", "data-bind": rule}, text)
    attach_template(el)
    return el


def _element(text):
    el = MemoryElement("p", {}, text)
    attach_template(el)
    return el


class TestSetupBind:
    def test_global_renders_immediately_and_on_change(self):
        total = ObjectStore(3)
        GLOBAL.register("total", total)
        el = _target(MemoryDocument(), "GLOBAL.total|total", "Total: {{total}}")
        handle = setup_bind(el)
        assert el.content == "Total: 3"
        total.state = 4
        assert el.content == "Total: 4"
        assert handle.keys == ["bind-total"]

    def test_bare_global(self):
        GLOBAL.register("count", Store(1))
        el = _target(MemoryDocument(), "GLOBAL|count", "{{count}}")
        setup_bind(el)
        assert el.content == "1"

    def test_element_source(self):
        doc = MemoryDocument()
        name = doc.add("input", {"id": "name"})
        name.state = Store("Ada")
        set_document(doc)
        el = _target(doc, "#name|who", "Hello {{who}}")
        setup_bind(el)
        assert el.content == "Hello Ada"
        name.state.set("Bob")
        assert el.content == "Hello Bob"

    def test_explicit_rule(self):
        GLOBAL.register("x", Store("v"))
        el = _element("{{x}}")
        setup_bind(el, "GLOBAL.x|x")
        assert el.content == "v"

    def test_two_bindings_on_one_element(self):
        GLOBAL.register("first", Store("Ada"))
        GLOBAL.register("last", Store("L"))
        el = _element("{{first}} {{last}}")
        setup_bind(el, "GLOBAL.first|first")
        setup_bind(el, "GLOBAL.last|last")
        GLOBAL.lookup("last").set("Lovelace")
        assert el.content == "Ada Lovelace"

    def test_dispose(self):
        total = ObjectStore(1)
        GLOBAL.register("total", total)
        el = _target(MemoryDocument(), "GLOBAL.total|total", "{{total}}")
        setup_bind(el).dispose()
        total.state = 2
        assert el.content == "1"


class TestBindErrors:
    def test_missing_attribute(self):
        el = _element("{{x}}")
        with pytest.raises(MalformedRuleError):
            setup_bind(el)

    def test_missing_global(self):
        el = _target(MemoryDocument(), "GLOBAL.nope|nope", "{{nope}}")
        with pytest.raises(MissingDependencyError, match="No global"):
            setup_bind(el)

    def test_element_not_reactive(self):
        doc = MemoryDocument()
        doc.add("input", {"id": "plain"})
        set_document(doc)
        el = _target(doc, "#plain|v", "{{v}}")
        with pytest.raises(MissingDependencyError, match="not reactive"):
            setup_bind(el)

    def test_no_template(self):
        GLOBAL.register("x", Store(1))
        el = MemoryDocument().add("p", {"data-bind": "GLOBAL.x|x"}, "{{x}}")
        with pytest.raises(MissingDependencyError, match="template"):
            setup_bind(el)
