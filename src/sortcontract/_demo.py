"""Narrated demos: what a chaos comparator does to an insertion sort."""

from __future__ import annotations

import os
import random
from collections.abc import Iterable, Sequence

from sortcontract._comparators import CATALOG, check_axioms, chaos, counting, from_catalog
from sortcontract._enforce import checked_sort
from sortcontract._order import numeric_order
from sortcontract._term import bold, dim, green, mark, red, yellow

DEFAULT_INPUT = (1, 3, 5, 7, 6, 4, 2, 0)


def default_seed() -> int | None:
    raw = os.environ.get("SORTCONTRACT_SEED", "")
    if not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError("SORTCONTRACT_SEED must be an integer") from None


def chaos_demo(sequence: Sequence[int] = DEFAULT_INPUT, *, seed: int | None = None, rounds: int = 3) -> bool:
    """Print the narration; return True when every chaos round kept length and sum."""
    xs = list(sequence)
    print(bold("Input:"), xs, dim(f"(length {len(xs)}, sum {sum(xs)})"))

    honest = counting(numeric_order)
    outcome = checked_sort(xs, honest, reference=numeric_order)
    print(f"\n{bold('numeric comparator')}  -> {outcome.output}  {mark(outcome.ok)}  "
          + dim(f"({honest.calls} comparisons)"))

    rng = random.Random(seed)
    invariants_held = True
    sorted_rounds = 0
    for i in range(1, rounds + 1):
        cmp = chaos(rng)
        outcome = checked_sort(xs, cmp, reference=numeric_order)
        v = outcome.verdict
        invariants_held = invariants_held and v.length_preserved and v.sum_preserved and v.permutation
        sorted_rounds += v.is_sorted
        where = "" if v.first_violation is None else dim(f"  first break at index {v.first_violation}")
        print(f"{bold(f'chaos round {i}')}  -> {outcome.output}  "
              f"{green('sorted') if v.is_sorted else red('unsorted')}  "
              f"len={len(outcome.output)} sum={sum(outcome.output)}{where}")

    print()
    if invariants_held:
        print(green("Length and sum survived every round:"), "the sorter only ever rearranges.")
    else:
        print(red("An invariant broke; the sorter dropped or duplicated an element."))
    print(yellow(f"Sortedness survived {sorted_rounds}/{rounds} chaos rounds;"),
          "a contract check against a trusted comparator is the only thing that notices.")
    return invariants_held


def axiom_report(names: Iterable[str] | None = None, domain: Sequence[int] = tuple(range(4)),
                 *, seed: int | None = None, limit: int = 2) -> dict[str, list[str]]:
    chosen = list(names) if names else sorted(CATALOG)
    report: dict[str, list[str]] = {}
    for name in chosen:
        violations = check_axioms(from_catalog(name, seed=seed), domain, limit=limit)
        broken = sorted({v.axiom for v in violations})
        report[name] = broken
        print(f"{mark(not broken)}  {bold(name)}", dim(", ".join(broken)) if broken else dim("a lawful total order"))
        for v in violations:
            print(f"        {v.axiom:<14} {v.describe()}")
    return report
