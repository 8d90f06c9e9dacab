# example_chaos.py
from __future__ import annotations

import random

from sortcontract import against, chaos, cyclic, ensures, insertion_sort, is_permutation, spec


@spec
def sort_spec(xs: list[int]) -> list[int]:
    return sorted(xs)


@against(sort_spec)
@ensures(lambda xs, result: is_permutation(xs, result))
def chaos_sort(xs: list[int]) -> list[int]:
    # Seeded from the input so a failing example replays while shrinking.
    return insertion_sort(xs, chaos(random.Random(repr(xs))))


@against(sort_spec)
@ensures(lambda xs, result: sum(result) == sum(xs))
def rock_paper_scissors_sort(xs: list[int]) -> list[int]:
    return insertion_sort(xs, cyclic())
