"""Rule attributes, parsed once at setup time.

    data-compute="total|add(GLOBAL.price, element(#qty))"
    data-watch="#name|GLOBAL.greeting|greet"
    data-bind="GLOBAL.total|total"
"""

from __future__ import annotations

from dataclasses import dataclass

from attrx.errors import MalformedRuleError
from attrx.tokenizer import match_call, split_args

COMPUTE_ATTR = "data-compute"
WATCH_ATTR = "data-watch"
BIND_ATTR = "data-bind"


@dataclass(frozen=True)
class ComputeRule:
    target_key: str
    function_name: str
    args: tuple[str, ...] = ()


@dataclass(frozen=True)
class WatchRule:
    source_key: str
    target_key: str
    function_name: str


@dataclass(frozen=True)
class BindRule:
    source: str
    template_key: str

    @property
    def is_global(self) -> bool:
        return self.source.startswith("GLOBAL")

    @property
    def global_key(self) -> str | None:
        """Registry key for a GLOBAL source; bare ``GLOBAL`` means template_key."""
        if not self.is_global:
            return None
        _, dot, key = self.source.partition(".")
        return key if dot and key else self.template_key


def _parts(text: str, count: int, expected: str) -> list[str]:
    parts = [part.strip() for part in text.split("|", count - 1)]
    if len(parts) != count or not all(parts):
        raise MalformedRuleError(f"Invalid rule {text!r}. Expected {expected!r}")
    return parts


def parse_compute(text: str) -> ComputeRule:
    # Split once: quoted arguments may contain "|".
    target, call = _parts(text, 2, "targetKey|functionName(param1, param2, ...)")
    name, raw_args = match_call(call)
    return ComputeRule(target, name, tuple(split_args(raw_args)))


def parse_watch(text: str) -> WatchRule:
    source, target, function = _parts(text, 3, "sourceKey|targetKey|functionName")
    if "|" in function:
        raise MalformedRuleError(f"Invalid rule {text!r}. Too many parts")
    return WatchRule(source, target, function)


def parse_bind(text: str) -> BindRule:
    source, key = _parts(text, 2, "selector-or-GLOBAL.key|templateKey")
    if "|" in key:
        raise MalformedRuleError(f"Invalid rule {text!r}. Too many parts")
    return BindRule(source, key)
