from __future__ import annotations

import enum
from collections.abc import Callable
from typing import Any


class Ordering(enum.IntEnum):
    """Three-way comparison outcome.

    Members compare as -1/0/1 so ``compare(a, b) <= 0`` reads as
    "a goes no later than b".
    """

    LESS = -1
    EQUAL = 0
    GREATER = 1

    def flipped(self) -> Ordering:
        return Ordering(-self.value)


Comparator = Callable[[Any, Any], Ordering]

_TRUSTED_ATTR = "__sortcontract_reference__"


def trusted(cmp: Comparator) -> Comparator:
    """Mark ``cmp`` as a known-correct reference comparator."""
    setattr(cmp, _TRUSTED_ATTR, True)
    return cmp


def is_trusted(cmp: Comparator) -> bool:
    return bool(getattr(cmp, _TRUSTED_ATTR, False))


def ordering_of(value: float) -> Ordering:
    if value < 0:
        return Ordering.LESS
    if value > 0:
        return Ordering.GREATER
    return Ordering.EQUAL


@trusted
def numeric_order(a: Any, b: Any) -> Ordering:
    """The reference comparator: the usual numeric total order."""
    if a < b:
        return Ordering.LESS
    if b < a:
        return Ordering.GREATER
    return Ordering.EQUAL


def reverse_order(cmp: Comparator) -> Comparator:
    def reversed_cmp(a: Any, b: Any) -> Ordering:
        return cmp(b, a)

    reversed_cmp.__qualname__ = f"reverse_order({getattr(cmp, '__name__', 'cmp')})"
    return reversed_cmp


def key_order(key: Callable[[Any], Any]) -> Comparator:
    def by_key(a: Any, b: Any) -> Ordering:
        return numeric_order(key(a), key(b))

    return by_key
