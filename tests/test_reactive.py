"""Tests for the reactive capability adapters."""

import pytest

from attrx import ObjectStore, Store, as_reactive, is_reactive


def _shapes():
    store = Store(1)
    return {
        "store": store,
        "object": ObjectStore(1),
        "tuple4": Store(1).accessors(),
        "tuple3": Store(1).accessors()[:3],
    }


class TestAsReactive:
    @pytest.mark.parametrize("shape", ["store", "object", "tuple4", "tuple3"])
    def test_read_write_subscribe(self, shape):
        r = as_reactive(_shapes()[shape])
        log = []
        r.subscribe("k", lambda key, v: log.append(v))
        assert r.read() == 1
        r.write(2)
        assert r.read() == 2
        assert log == [2]

    @pytest.mark.parametrize("shape", ["store", "object", "tuple4"])
    def test_unsubscribe(self, shape):
        r = as_reactive(_shapes()[shape])
        r.subscribe("k", lambda key, v: None)
        assert r.unsubscribe("k") is True

    def test_three_tuple_cannot_unsubscribe_by_key(self):
        r = as_reactive(Store(1).accessors()[:3])
        off = r.subscribe("k", lambda key, v: None)
        with pytest.raises(TypeError):
            r.unsubscribe("k")
        assert off() is True

    def test_adapter_passes_through(self):
        r = as_reactive(Store(1))
        assert as_reactive(r) is r

    def test_rejects_plain_values(self):
        for value in (1, "x", {"get": 1}, (1, 2, 3), None):
            assert not is_reactive(value)
            with pytest.raises(TypeError):
                as_reactive(value)

    def test_state_shape_wins(self):
        """An object with ``state`` is read through the property."""
        o = ObjectStore("via-state")
        assert as_reactive(o).read() == "via-state"
