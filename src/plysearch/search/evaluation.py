"""Evaluation sentinels.

Fitness values only need to be totally ordered, so the engine cannot rely on
numeric infinities to seed the alpha-beta window. ``LOWEST`` and ``HIGHEST``
compare below and above every other value (ints, floats, bools, tuples, ...).
Game adapters may also return them directly to report a proven loss or win.
"""

from __future__ import annotations

from functools import total_ordering
from typing import Any


@total_ordering
class _Extreme:
    """An evaluation that is smaller or larger than any other value."""

    __slots__ = ("_name", "_sign")

    def __init__(self, name: str, sign: int) -> None:
        self._name = name
        self._sign = sign

    def __eq__(self, other: object) -> bool:
        return other is self

    def __lt__(self, other: Any) -> bool:
        if other is self:
            return False
        return self._sign < 0

    def __hash__(self) -> int:
        return hash(self._name)

    def __repr__(self) -> str:
        return self._name

    def __reduce__(self) -> str:
        # Unpickle to the module-level singleton so identity checks survive
        # process workers.
        return self._name


LOWEST = _Extreme("LOWEST", -1)
HIGHEST = _Extreme("HIGHEST", 1)


def is_extreme(value: object) -> bool:
    """Return True if ``value`` is one of the window sentinels."""
    return value is LOWEST or value is HIGHEST
