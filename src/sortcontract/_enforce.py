"""The contract layer wrapped around the sorter.

Two ways to surface a VIOLATION: :func:`checked_sort` hands back a tagged
:class:`SortOutcome`, :func:`strict_sort` raises :class:`ContractViolation`.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from typing import Any

from sortcontract._decorators import ensures
from sortcontract._order import Comparator, numeric_order
from sortcontract._properties import Verdict, ensure_independent, is_non_decreasing, is_permutation, judge
from sortcontract._sorter import insertion_sort


@dataclasses.dataclass(frozen=True)
class SortOutcome:
    status: str  # "ok" | "violation"
    output: list[Any]
    verdict: Verdict

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    def to_json(self) -> dict[str, Any]:
        return {"status": self.status, "output": list(self.output), "verdict": self.verdict.to_json()}


def checked_sort(
    sequence: Sequence[Any],
    compare: Comparator,
    *,
    reference: Comparator = numeric_order,
) -> SortOutcome:
    ensure_independent(reference, compare)
    output = insertion_sort(sequence, compare)
    verdict = judge(sequence, output, reference)
    return SortOutcome("ok" if verdict.ok else "violation", output, verdict)


def _sorted_permutation(sequence: Sequence[Any], compare: Comparator, reference: Comparator, result: list[Any]) -> bool:
    return is_permutation(sequence, result) and is_non_decreasing(result, reference)


@ensures(_sorted_permutation)
def strict_sort(
    sequence: Sequence[Any],
    compare: Comparator,
    reference: Comparator = numeric_order,
) -> list[Any]:
    ensure_independent(reference, compare)
    return insertion_sort(sequence, compare)
