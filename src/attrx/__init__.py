"""attrx: declarative-attribute reactive wiring for Python."""

from importlib.metadata import version as _version

__version__ = _version("attrx")

from attrx.errors import (
    AttrxError,
    DuplicateKeyError,
    EvaluationError,
    MalformedCallError,
    MalformedRuleError,
    MissingDependencyError,
    MissingKeyError,
    RenderError,
    SelectorError,
    UnknownFunctionError,
)
from attrx.config import set_strict, is_strict, strict
from attrx.store import Store, ObjectStore
from attrx.reactive import Reactive, as_reactive, is_reactive
from attrx.registry import GLOBAL, FUNCTIONS, Registry, FunctionRegistry, reset
from attrx.tokenizer import match_call, split_args
from attrx.resolver import resolve_param, extract_dependencies, Dependencies
from attrx.rules import ComputeRule, WatchRule, BindRule, parse_compute, parse_watch, parse_bind
from attrx.wiring import WireHandle
from attrx.computed import setup_computed
from attrx.watch import setup_watch, WatchContext
from attrx.bind import setup_bind
from attrx.template import Template, attach_template
from attrx.dom import MemoryDocument, MemoryElement, set_document, get_document
from attrx.inputs import make_reactive_input, create_reactive_field, setup_reactive_inputs
from attrx.page import mount, MountReport
# textual NOT auto-imported — opt-in only

__all__ = [
    "AttrxError",
    "DuplicateKeyError",
    "MissingKeyError",
    "MalformedRuleError",
    "MalformedCallError",
    "UnknownFunctionError",
    "MissingDependencyError",
    "EvaluationError",
    "RenderError",
    "SelectorError",
    "set_strict",
    "is_strict",
    "strict",
    "Store",
    "ObjectStore",
    "Reactive",
    "as_reactive",
    "is_reactive",
    "GLOBAL",
    "FUNCTIONS",
    "Registry",
    "FunctionRegistry",
    "reset",
    "match_call",
    "split_args",
    "resolve_param",
    "extract_dependencies",
    "Dependencies",
    "ComputeRule",
    "WatchRule",
    "BindRule",
    "parse_compute",
    "parse_watch",
    "parse_bind",
    "WireHandle",
    "setup_computed",
    "setup_watch",
    "WatchContext",
    "setup_bind",
    "Template",
    "attach_template",
    "MemoryDocument",
    "MemoryElement",
    "set_document",
    "get_document",
    "make_reactive_input",
    "create_reactive_field",
    "setup_reactive_inputs",
    "mount",
    "MountReport",
]
