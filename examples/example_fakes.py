# example_fakes.py
from __future__ import annotations

from sortcontract import against, ensures, is_non_decreasing, is_permutation, numeric_order, spec
from sortcontract._showdown import miracle_sort as _miracle, stalin_sort as _stalin


@spec
def sort_spec(xs: list[int]) -> list[int]:
    return sorted(xs)


@against(sort_spec)
@ensures(lambda xs, result: is_permutation(xs, result))
def stalin_sort(xs: list[int]) -> list[int]:
    # Always sorted, rarely complete.
    return _stalin(xs)


@against(sort_spec)
@ensures(lambda xs, result: is_non_decreasing(result, numeric_order))
def miracle_sort(xs: list[int]) -> list[int]:
    # Always complete, rarely sorted.
    return _miracle(xs)
