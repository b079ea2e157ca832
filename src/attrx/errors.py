"""Error taxonomy for attrx.

Subscription-table misuse, rule syntax and wiring failures, and runtime
evaluation failures each get their own class so callers can tell a broken
attribute apart from a broken registered function.
"""

from __future__ import annotations


class AttrxError(Exception):
    """Base class for every error raised by attrx."""


class DuplicateKeyError(AttrxError, KeyError):
    """A subscription key is already live on the store."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f'Subscription with key "{self.key}" already exists'


class MissingKeyError(AttrxError, KeyError):
    """A subscription or registry key does not exist."""

    def __init__(self, key: str, where: str = "subscription") -> None:
        super().__init__(key)
        self.key = key
        self.where = where

    def __str__(self) -> str:
        return f'No {self.where} with key "{self.key}" exists'


class MalformedRuleError(AttrxError):
    """A rule attribute does not have the expected ``|``-separated parts."""


class MalformedCallError(MalformedRuleError):
    """A call expression is not ``name(args)``."""


class UnknownFunctionError(AttrxError):
    """A rule names a function that was never registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f'Function "{name}" not found. Register it in FUNCTIONS.')
        self.name = name


class MissingDependencyError(AttrxError):
    """A source, target, element or template a rule needs is not available."""


class EvaluationError(AttrxError):
    """A registered function raised while computing a target's value."""

    def __init__(self, target: str, function: str, cause: BaseException) -> None:
        super().__init__(
            f'Error evaluating "{function}" for target "{target}": {cause!r}'
        )
        self.target = target
        self.function = function
        self.cause = cause


class RenderError(AttrxError):
    """A template placeholder has no value in the supplied mapping."""


class SelectorError(MalformedRuleError, ValueError):
    """A selector uses syntax the document cannot match."""
