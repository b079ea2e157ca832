import pytest

from attrx import config, dom, registry


@pytest.fixture(autouse=True)
def _isolated():
    """Fresh registries, no document and production error policy per test."""
    registry.reset()
    dom.set_document(None)
    with config.strict(False):
        yield
    registry.reset()
    dom.set_document(None)
