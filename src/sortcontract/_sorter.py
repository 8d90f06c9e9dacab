"""Stable insertion sort over a caller-supplied comparator.

The sorter trusts nothing about ``compare``: a random or intransitive
comparator still yields a permutation of the input, just not a sorted one.

Elements are folded in from the right (``insertionSort (x :: xs) = insert x
(insertionSort xs)``), so each candidate lands in front of the first
existing element it does not exceed and equal elements keep their input
order.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sortcontract._order import Comparator


def insert(element: Any, ordered: Sequence[Any], compare: Comparator) -> list[Any]:
    """Return a new list with ``element`` placed before the first item it does not exceed."""
    out = list(ordered)
    for i, existing in enumerate(out):
        if compare(element, existing) <= 0:
            out.insert(i, element)
            return out
    out.append(element)
    return out


def insertion_sort(sequence: Sequence[Any], compare: Comparator) -> list[Any]:
    result: list[Any] = []
    for element in reversed(list(sequence)):
        result = insert(element, result, compare)
    return result
