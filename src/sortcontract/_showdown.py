"""A comedic line-up of sorts that only pretend to work.

Every contestant has the same shape, ``list[int] -> list[int]``, and every
one is judged by the same reference comparator. Only the honest one passes.
"""

from __future__ import annotations

import dataclasses
import random
from collections.abc import Callable, Sequence

from sortcontract._order import numeric_order
from sortcontract._properties import Verdict, is_non_decreasing, judge
from sortcontract._sorter import insertion_sort
from sortcontract._term import bar, bold, dim, mark

SortFn = Callable[[list[int]], list[int]]


def honest_sort(xs: list[int]) -> list[int]:
    return insertion_sort(xs, numeric_order)


def miracle_sort(xs: list[int]) -> list[int]:
    # Check again later; maybe cosmic rays fixed it.
    return list(xs)


def intelligent_design_sort(xs: list[int]) -> list[int]:
    return list(xs)


def stalin_sort(xs: list[int]) -> list[int]:
    kept: list[int] = []
    for x in xs:
        if not kept or kept[-1] <= x:
            kept.append(x)
    return kept


def thanos_sort(xs: list[int], *, rng: random.Random | None = None) -> list[int]:
    """Snap away half the universe until what remains is sorted."""
    source = rng if rng is not None else random.Random(0)
    survivors = list(xs)
    while not is_non_decreasing(survivors, numeric_order):
        keep = sorted(source.sample(range(len(survivors)), len(survivors) // 2))
        survivors = [survivors[i] for i in keep]
    return survivors


def bogo_sort(xs: list[int], *, rng: random.Random | None = None, max_attempts: int = 100) -> list[int]:
    source = rng if rng is not None else random.Random(0)
    attempt = list(xs)
    for _ in range(max_attempts):
        if is_non_decreasing(attempt, numeric_order):
            break
        source.shuffle(attempt)
    return attempt


QUIPS = {
    "honest_sort": "Did the work. Boring. Correct.",
    "miracle_sort": "Still waiting for the bits to flip themselves.",
    "intelligent_design_sort": "The order is already perfect; you just don't understand it.",
    "stalin_sort": "Sorted. Dissenters are no longer in the list.",
    "thanos_sort": "Perfectly balanced, as all things should be.",
    "bogo_sort": "Ran out of patience before luck.",
}


def contestants(seed: int = 0) -> dict[str, SortFn]:
    rng = random.Random(seed)
    return {
        "honest_sort": honest_sort,
        "miracle_sort": miracle_sort,
        "intelligent_design_sort": intelligent_design_sort,
        "stalin_sort": stalin_sort,
        "thanos_sort": lambda xs: thanos_sort(xs, rng=rng),
        "bogo_sort": lambda xs: bogo_sort(xs, rng=rng),
    }


@dataclasses.dataclass(frozen=True)
class ShowdownRow:
    name: str
    output: list[int]
    verdict: Verdict


def showdown(sequence: Sequence[int], entrants: dict[str, SortFn]) -> list[ShowdownRow]:
    rows: list[ShowdownRow] = []
    for name, fn in entrants.items():
        out = fn(list(sequence))
        rows.append(ShowdownRow(name, out, judge(sequence, out, numeric_order)))
    return rows


def render_bars(sequence: Sequence[int], *, max_width: int = 24) -> list[str]:
    if not sequence:
        return [dim("  (empty)")]
    top = max(max(sequence), 1)
    label_width = max(len(str(v)) for v in sequence)
    lines = []
    for v in sequence:
        width = max(0, round(v / top * max_width)) if v > 0 else 0
        lines.append(f"  {str(v).rjust(label_width)} {bar(v, width)}")
    return lines


def render_showdown(sequence: Sequence[int], rows: Sequence[ShowdownRow]) -> str:
    out = [bold("The contestants are handed:"), *render_bars(sequence), ""]
    for row in rows:
        v = row.verdict
        out.append(f"{mark(v.ok)}  {bold(row.name)}  {dim(QUIPS.get(row.name, ''))}")
        out.extend(render_bars(row.output))
        out.append(
            "  "
            + dim(
                f"sorted={v.is_sorted} length_preserved={v.length_preserved} "
                f"sum_preserved={v.sum_preserved} permutation={v.permutation}"
            )
        )
        out.append("")
    return "\n".join(out)
