"""Tests for watcher wiring."""

import logging

import pytest

from attrx import (
    FUNCTIONS,
    GLOBAL,
    EvaluationError,
    MemoryDocument,
    MissingDependencyError,
    ObjectStore,
    Store,
    UnknownFunctionError,
    WatchContext,
    set_document,
    setup_watch,
    strict,
)


@pytest.fixture
def stores():
    source = ObjectStore("a")
    target = ObjectStore("")
    GLOBAL.register("source", source)
    GLOBAL.register("target", target)
    return source, target


class TestSetupWatch:
    def test_transforms_into_target(self, stores):
        source, target = stores
        FUNCTIONS.register("upper", lambda ctx: ctx["$value"].upper())
        setup_watch("GLOBAL.source|GLOBAL.target|upper")
        assert target.state == ""  # no initial run
        source.state = "hello"
        assert target.state == "HELLO"

    def test_fire_immediately(self, stores):
        _, target = stores
        FUNCTIONS.register("upper", lambda ctx: ctx.value.upper())
        setup_watch("GLOBAL.source|GLOBAL.target|upper", fire_immediately=True)
        assert target.state == "A"

    def test_subscription_key(self, stores):
        source, _ = stores
        FUNCTIONS.register("same", lambda ctx: ctx.value)
        handle = setup_watch("GLOBAL.source|GLOBAL.target|same")
        assert handle.keys == ["watch-GLOBAL.target"]
        assert source.keys() == ["watch-GLOBAL.target"]
        handle.dispose()
        assert source.keys() == []

    def test_context_reads_globals_lazily(self, stores):
        source, target = stores
        GLOBAL.register("suffix", Store("!"))
        FUNCTIONS.register("shout", lambda ctx: ctx["$value"] + ctx.GLOBAL.suffix + ctx["GLOBAL"]["suffix"])
        setup_watch("GLOBAL.source|GLOBAL.target|shout")
        GLOBAL.lookup("suffix").set("?")
        source.state = "hey"
        assert target.state == "hey??"

    def test_context_reads_elements(self, stores):
        source, target = stores
        doc = MemoryDocument()
        doc.add("input", {"id": "n"}).state = Store(3)
        set_document(doc)
        FUNCTIONS.register("times", lambda ctx: ctx["$value"] * ctx.element("#n"))
        setup_watch("GLOBAL.source|GLOBAL.target|times")
        source.state = "ab"
        assert target.state == "ababab"

    def test_element_source_and_target(self):
        doc = MemoryDocument()
        src = doc.add("input", {"id": "src"})
        dst = doc.add("input", {"id": "dst"})
        src.state = Store("")
        dst.state = Store("")
        set_document(doc)
        FUNCTIONS.register("rev", lambda ctx: ctx.value[::-1])
        setup_watch("#src|#dst|rev")
        src.state.set("abc")
        assert dst.state.get() == "cba"

    def test_missing_source(self, stores):
        FUNCTIONS.register("same", lambda ctx: ctx.value)
        with pytest.raises(MissingDependencyError, match="source"):
            setup_watch("GLOBAL.nope|GLOBAL.target|same")

    def test_missing_target(self, stores):
        FUNCTIONS.register("same", lambda ctx: ctx.value)
        with pytest.raises(MissingDependencyError, match="target"):
            setup_watch("GLOBAL.source|#nope|same")

    def test_unknown_function(self, stores):
        with pytest.raises(UnknownFunctionError):
            setup_watch("GLOBAL.source|GLOBAL.target|nope")


class TestWatchErrors:
    def test_failure_leaves_target(self, stores, caplog):
        source, target = stores
        target.state = "kept"
        FUNCTIONS.register("bad", lambda ctx: ctx["missing"])
        setup_watch("GLOBAL.source|GLOBAL.target|bad")
        with caplog.at_level(logging.ERROR, logger="attrx.watch"):
            source.state = "x"
        assert target.state == "kept"
        assert "bad" in caplog.text

    def test_strict_raises(self, stores):
        source, _ = stores
        FUNCTIONS.register("bad", lambda ctx: 1 / 0)
        setup_watch("GLOBAL.source|GLOBAL.target|bad")
        with strict(), pytest.raises(EvaluationError):
            source.state = "x"


class TestWatchContext:
    def test_mapping(self):
        ctx = WatchContext(5)
        assert dict(ctx).keys() == {"$value", "GLOBAL", "element"}
        assert ctx["$value"] == 5
        assert len(ctx) == 3
        with pytest.raises(KeyError):
            ctx["other"]

    def test_missing_global_is_none(self):
        assert WatchContext(1).GLOBAL.nope is None
