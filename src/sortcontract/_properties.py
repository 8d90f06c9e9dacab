"""Post-hoc checks on a sort's output.

Sortedness is always judged with a *reference* comparator supplied by the
caller. Judging an output with the comparator that produced it only proves
the broken rule agrees with itself, so :func:`judge` refuses to do that
unless the comparator is a registered reference (see ``trusted``).
"""

from __future__ import annotations

import dataclasses
from collections import Counter
from collections.abc import Sequence
from typing import Any

from sortcontract._order import Comparator, is_trusted, numeric_order


class SelfReferentialCheck(ValueError):
    """Raised when the comparator under test is also used as the reference."""


@dataclasses.dataclass(frozen=True)
class Verdict:
    is_sorted: bool
    length_preserved: bool
    sum_preserved: bool
    permutation: bool
    first_violation: int | None = None

    @property
    def ok(self) -> bool:
        return self.is_sorted and self.length_preserved and self.sum_preserved and self.permutation

    def to_json(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


def first_violation(sequence: Sequence[Any], reference: Comparator) -> int | None:
    for i in range(len(sequence) - 1):
        if reference(sequence[i], sequence[i + 1]) > 0:
            return i
    return None


def is_non_decreasing(sequence: Sequence[Any], reference: Comparator) -> bool:
    return first_violation(sequence, reference) is None


def length_preserved(before: Sequence[Any], after: Sequence[Any]) -> bool:
    return len(before) == len(after)


def sum_preserved(before: Sequence[Any], after: Sequence[Any]) -> bool:
    return sum(before) == sum(after)


def is_permutation(before: Sequence[Any], after: Sequence[Any]) -> bool:
    return len(before) == len(after) and Counter(before) == Counter(after)


def ensure_independent(reference: Comparator, used: Comparator | None) -> None:
    if used is not None and used is reference and not is_trusted(reference):
        raise SelfReferentialCheck(
            "sortedness must be judged with a reference comparator other than the one that produced the order"
        )


def judge(
    before: Sequence[Any],
    after: Sequence[Any],
    reference: Comparator = numeric_order,
    *,
    used: Comparator | None = None,
) -> Verdict:
    """Judge ``after`` as a sort of ``before``.

    Pass ``used`` (the comparator that drove the sort) to have the
    independence of ``reference`` enforced.
    """
    ensure_independent(reference, used)
    violation = first_violation(after, reference)
    return Verdict(
        is_sorted=violation is None,
        length_preserved=length_preserved(before, after),
        sum_preserved=sum_preserved(before, after),
        permutation=is_permutation(before, after),
        first_violation=violation,
    )
