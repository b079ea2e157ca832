"""Page bootstrap — wire every reactive element in a document.

Order matters: inputs first (they are sources), then templates, then
computed values (they publish GLOBAL targets), then watchers, then bindings
(which render whatever the earlier steps produced).

A broken rule on one element is logged and recorded; the rest of the page
is still wired.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from attrx import dom
from attrx.bind import setup_bind
from attrx.computed import setup_computed
from attrx.errors import AttrxError
from attrx.inputs import REACTIVE_ATTR, setup_reactive_inputs
from attrx.rules import BIND_ATTR, COMPUTE_ATTR, WATCH_ATTR
from attrx.template import attach_template
from attrx.watch import setup_watch
from attrx.wiring import WireHandle

logger = logging.getLogger("attrx.page")

_FORM_TAGS = frozenset({"input", "textarea", "select"})


@dataclass
class MountReport:
    handles: list[WireHandle] = field(default_factory=list)
    failures: list[tuple[object, AttrxError]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def dispose(self) -> None:
        for handle in self.handles:
            handle.dispose()
        self.handles.clear()


def mount(document) -> MountReport:
    """Make document the process document and wire all of its rules."""
    dom.set_document(document)
    report = MountReport()

    setup_reactive_inputs(document)

    reactives = [
        el for el in document.query_all(f"[{REACTIVE_ATTR}]")
        if el.tag.lower() not in _FORM_TAGS
    ]
    for element in reactives:
        attach_template(element)

    steps = (
        (COMPUTE_ATTR, lambda el: setup_computed(el.get_attribute(COMPUTE_ATTR))),
        (WATCH_ATTR, lambda el: setup_watch(el.get_attribute(WATCH_ATTR))),
        (BIND_ATTR, setup_bind),
    )
    for attr, setup in steps:
        for element in reactives:
            if not element.get_attribute(attr):
                continue
            try:
                report.handles.append(setup(element))
            except AttrxError as exc:
                logger.error("Failed to set up %s on %r: %s", attr, element, exc)
                report.failures.append((element, exc))

    logger.info(
        "Mounted %d reactive elements: %d wired, %d failed",
        len(reactives), len(report.handles), len(report.failures),
    )
    return report
