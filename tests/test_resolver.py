"""Tests for parameter resolution and dependency extraction."""

import pytest

from attrx import GLOBAL, MemoryDocument, ObjectStore, Store, extract_dependencies, resolve_param, set_document
from attrx.resolver import source_for


class TestLiterals:
    def test_number(self):
        assert resolve_param("123") == 123

    def test_quoted_number_stays_string(self):
        assert resolve_param('"123"') == "123"

    def test_json_values(self):
        assert resolve_param("true") is True
        assert resolve_param("null") is None
        assert resolve_param("1.5") == 1.5
        assert resolve_param("[1, 2]") == [1, 2]
        assert resolve_param('{"a": 1}') == {"a": 1}

    def test_raw_string_fallback(self):
        assert resolve_param("hello") == "hello"
        assert resolve_param("'single'") == "'single'"

    def test_trims(self):
        assert resolve_param("  42 ") == 42

    @pytest.mark.parametrize("text", ["NaN", "Infinity", "-Infinity"])
    def test_non_json_constants_stay_strings(self, text):
        assert resolve_param(text) == text


class TestGlobalReferences:
    def test_object_store(self):
        GLOBAL.register("x", ObjectStore(5))
        assert resolve_param("GLOBAL.x") == 5

    def test_accessor_store(self):
        GLOBAL.register("x", Store("s"))
        assert resolve_param("GLOBAL.x") == "s"

    def test_tuple(self):
        GLOBAL.register("x", Store(7).accessors()[:3])
        assert resolve_param("GLOBAL.x") == 7

    def test_missing_is_none(self):
        assert resolve_param("GLOBAL.nope") is None

    def test_not_an_identifier_falls_through(self):
        assert resolve_param("GLOBAL.a.b") == "GLOBAL.a.b"


class TestElementReferences:
    def test_reactive_element(self):
        doc = MemoryDocument()
        el = doc.add("input", {"id": "name"})
        el.state = Store("Ada")
        set_document(doc)
        assert resolve_param("element(#name)") == "Ada"
        assert resolve_param("element( #name )") == "Ada"

    def test_not_reactive_is_none(self):
        doc = MemoryDocument()
        doc.add("input", {"id": "name"})
        set_document(doc)
        assert resolve_param("element(#name)") is None

    def test_missing_element_is_none(self):
        set_document(MemoryDocument())
        assert resolve_param("element(#nope)") is None

    def test_no_document_is_none(self):
        assert resolve_param("element(#x)") is None


class TestSourceFor:
    def test_global_and_element(self):
        GLOBAL.register("x", ObjectStore(1))
        doc = MemoryDocument()
        doc.add("input", {"id": "a"}).state = Store(2)
        set_document(doc)
        assert source_for("GLOBAL.x").read() == 1
        assert source_for("#a").read() == 2
        assert source_for("GLOBAL.nope") is None
        assert source_for("#nope") is None


class TestExtractDependencies:
    def test_collects_without_reading(self):
        deps = extract_dependencies(["GLOBAL.a", "element(#b)", "3", '"GLOBAL.c"', "GLOBAL.a"])
        assert deps.globals == frozenset({"a"})
        assert deps.elements == frozenset({"#b"})
        assert deps

    def test_empty(self):
        deps = extract_dependencies(["1", "x"])
        assert not deps
