"""Process-wide error policy.

Production policy (the default) logs subscriber and evaluation failures and
carries on. Strict policy logs and then re-raises, which is what you want
while developing markup: the first broken function stops the cascade with a
full traceback.

The initial policy comes from ``ATTRX_ENV``: ``development`` or ``dev``
selects strict mode.
"""

from __future__ import annotations

import os
from contextlib import contextmanager

_DEV_VALUES = frozenset({"development", "dev"})

_strict: bool = os.environ.get("ATTRX_ENV", "").strip().lower() in _DEV_VALUES


def set_strict(enabled: bool) -> None:
    """Switch the process-wide error policy."""
    global _strict
    _strict = bool(enabled)


def is_strict() -> bool:
    return _strict


@contextmanager
def strict(enabled: bool = True):
    """Temporarily switch the error policy.

    Usage:
        with strict():
            store.set(1)  # a failing subscriber now raises
    """
    global _strict
    previous = _strict
    _strict = bool(enabled)
    try:
        yield
    finally:
        _strict = previous
