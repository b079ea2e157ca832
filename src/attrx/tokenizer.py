"""Tokenizer for the call syntax used in compute rules.

    total|add(GLOBAL.price, element(#qty), "a, b", 3)

match_call() separates the function name from its raw argument text;
split_args() cuts that text into arguments. Commas split only outside
quotes and outside nested parentheses, so user text such as ``"a, b"``
stays one argument. Quotes have no escape sequences.
"""

from __future__ import annotations

import re

from attrx.errors import MalformedCallError

_CALL_RE = re.compile(r"^([A-Za-z_]\w*)\s*\((.*)\)$", re.DOTALL)

_QUOTES = frozenset("\"'")


def match_call(text: str) -> tuple[str, str]:
    """Split ``name(args)`` into (name, raw_args)."""
    match = _CALL_RE.match(text.strip())
    if match is None:
        raise MalformedCallError(
            f'Invalid function call format {text!r}. '
            f'Expected "functionName(param1, param2, ...)"'
        )
    return match.group(1), match.group(2).strip()


class ArgumentLexer:
    """Single left-to-right scan tracking quote state and paren depth.

    Feed characters with feed(); completed arguments accumulate in .args.
    finish() flushes the trailing fragment.
    """

    __slots__ = ("args", "_current", "_quote", "_depth")

    def __init__(self) -> None:
        self.args: list[str] = []
        self._current: list[str] = []
        self._quote: str | None = None
        self._depth = 0

    @property
    def in_quote(self) -> bool:
        return self._quote is not None

    @property
    def depth(self) -> int:
        return self._depth

    def feed(self, char: str) -> None:
        if self._quote is not None:
            if char == self._quote:
                self._quote = None
        elif char in _QUOTES:
            self._quote = char
        elif char == "(":
            self._depth += 1
        elif char == ")":
            self._depth -= 1
        elif char == "," and self._depth == 0:
            self.args.append("".join(self._current).strip())
            self._current.clear()
            return
        self._current.append(char)

    def finish(self) -> list[str]:
        tail = "".join(self._current).strip()
        if tail:
            self.args.append(tail)
        self._current.clear()
        return self.args


def split_args(raw: str) -> list[str]:
    """Split a raw argument list on top-level commas.

    >>> split_args('a, "b,c", (d,e), f')
    ['a', '"b,c"', '(d,e)', 'f']
    """
    if not raw:
        return []
    lexer = ArgumentLexer()
    for char in raw:
        lexer.feed(char)
    return lexer.finish()
