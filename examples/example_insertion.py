# example_insertion.py
from __future__ import annotations

from sortcontract import against, ensures, insertion_sort, is_non_decreasing, is_permutation, numeric_order, requires, spec


@spec
def sort_spec(xs: list[int]) -> list[int]:
    # Reference spec: obviously-correct, not necessarily fast.
    return sorted(xs)


@against(sort_spec, max_examples=300)
@ensures(lambda xs, result: is_permutation(xs, result) and is_non_decreasing(result, numeric_order))
def sort(xs: list[int]) -> list[int]:
    return insertion_sort(xs, numeric_order)


@against(sort_spec)
@ensures(lambda xs, result: insertion_sort(result, numeric_order) == result)
@ensures(lambda xs, result: sum(result) == sum(xs))
@requires(lambda xs: all(x >= 0 for x in xs))
def sort_naturals(xs: list[int]) -> list[int]:
    return insertion_sort(xs, numeric_order)
