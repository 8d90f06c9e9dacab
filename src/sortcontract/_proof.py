"""Proof-style verification to set against the runtime contract checks.

Two routes:

* :func:`prove_bounded` enumerates *every* list of a fixed length over a
  bounded range of naturals. Within that domain a ``proved`` result is a
  proof by exhaustion, not a sample.
* :func:`prove_symbolic` runs a Hypothesis property under the
  hypothesis-crosshair backend, which explores paths with Z3. Results are
  ``verified``, ``disproved``, ``inconclusive`` or ``unavailable``.

Symbolic verification requires: pip install sortcontract[prove]
  (hypothesis-crosshair>=0.0.18, crosshair-tool>=0.0.77)
"""

from __future__ import annotations

import dataclasses
import itertools
from collections.abc import Callable, Sequence
from typing import Any

from sortcontract._order import numeric_order
from sortcontract._properties import is_non_decreasing, is_permutation

SortFn = Callable[[list[int]], list[int]]


def _idempotent(xs: list[int], out: list[int], sort_fn: SortFn) -> bool:
    return sort_fn(list(out)) == out


def _sum_preserving(xs: list[int], out: list[int], sort_fn: SortFn) -> bool:
    return sum(out) == sum(xs)


def _length_preserving(xs: list[int], out: list[int], sort_fn: SortFn) -> bool:
    return len(out) == len(xs)


def _permutation(xs: list[int], out: list[int], sort_fn: SortFn) -> bool:
    return is_permutation(xs, out)


def _sorted(xs: list[int], out: list[int], sort_fn: SortFn) -> bool:
    return is_non_decreasing(out, numeric_order)


PROPERTIES: dict[str, tuple[str, Callable[[list[int], list[int], SortFn], bool]]] = {
    "idempotent": ("sort(sort(xs)) == sort(xs)", _idempotent),
    "sum_preserving": ("sum(sort(xs)) == sum(xs)", _sum_preserving),
    "length_preserving": ("len(sort(xs)) == len(xs)", _length_preserving),
    "permutation": ("sort(xs) is a rearrangement of xs", _permutation),
    "sorted": ("sort(xs) is non-decreasing under numeric order", _sorted),
}

DEFAULT_PROPERTIES = ("idempotent", "sum_preserving")


@dataclasses.dataclass
class ProofResult:
    status: str  # "proved" | "refuted"
    size: int
    bound: int
    cases: int
    properties: dict[str, str]
    counterexample: dict[str, Any] | None = None

    @property
    def proved(self) -> bool:
        return self.status == "proved"

    def to_json(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


def prove_bounded(
    sort_fn: SortFn,
    *,
    size: int = 4,
    bound: int = 4,
    properties: Sequence[str] = DEFAULT_PROPERTIES,
) -> ProofResult:
    """Check ``properties`` of ``sort_fn`` on all ``bound ** size`` lists of length ``size``.

    Stops at the first counterexample. Elements range over ``0 .. bound - 1``.
    """
    if size < 0 or bound < 1:
        raise ValueError("size must be >= 0 and bound >= 1")
    unknown = [p for p in properties if p not in PROPERTIES]
    if unknown:
        raise KeyError(f"unknown properties: {', '.join(unknown)}")

    statements = {name: PROPERTIES[name][0] for name in properties}
    cases = 0
    for combo in itertools.product(range(bound), repeat=size):
        xs = list(combo)
        out = sort_fn(list(xs))
        cases += 1
        for name in properties:
            if not PROPERTIES[name][1](xs, out, sort_fn):
                return ProofResult(
                    "refuted", size, bound, cases, statements,
                    counterexample={"property": name, "input": xs, "output": out},
                )
    return ProofResult("proved", size, bound, cases, statements)


def _check_crosshair_available() -> bool:
    """Check if hypothesis-crosshair is installed."""
    try:
        import hypothesis_crosshair  # type: ignore[import-not-found]  # noqa: F401
        return True
    except ImportError:
        return False


def prove_symbolic(
    impl_fn: Callable[..., Any],
    *,
    spec_fn: Callable[..., Any] | None = None,
    eq: Callable[[Any, Any], bool] | None = None,
    check_requires: Callable[[Callable[..., Any], tuple[Any, ...], dict[str, Any]], tuple[bool, str]] | None = None,
    check_ensures: Callable[[Callable[..., Any], tuple[Any, ...], dict[str, Any], Any], tuple[bool, str]] | None = None,
    strategy: Any = None,
    max_examples: int = 50,
) -> dict[str, Any]:
    """Attempt symbolic proof of a function's contracts and spec equivalence.

    Returns:
        Dict with keys:
            status: "verified" | "disproved" | "inconclusive" | "unavailable"
            details: Additional information
            counterexample: present when disproved
    """
    if not _check_crosshair_available():
        return {
            "status": "unavailable",
            "details": "hypothesis-crosshair not installed; install with: pip install sortcontract[prove]",
        }
    if strategy is None:
        return {"status": "inconclusive", "details": "no strategy provided for symbolic verification"}

    from hypothesis import HealthCheck, assume, given, settings

    if eq is None:
        eq = lambda a, b: a == b  # noqa: E731

    counterexample: list[dict[str, Any] | None] = [None]

    @settings(
        backend="crosshair",
        max_examples=max_examples,
        deadline=None,
        suppress_health_check=list(HealthCheck),
        derandomize=False,
    )
    @given(strategy)
    def prop(kwargs: dict[str, Any]) -> None:
        if check_requires is not None:
            ok_pre, _ = check_requires(impl_fn, (), kwargs)
            assume(ok_pre)

        impl_r = impl_fn(**kwargs)

        if check_ensures is not None:
            ok_post, post_err = check_ensures(impl_fn, (), kwargs, impl_r)
            if not ok_post:
                counterexample[0] = {"kwargs": kwargs, "impl_result": impl_r, "note": f"ensures failed: {post_err}"}
                raise AssertionError(f"ensures failed: {post_err}")

        if spec_fn is not None:
            spec_r = spec_fn(**kwargs)
            if not eq(impl_r, spec_r):
                counterexample[0] = {"kwargs": kwargs, "impl_result": impl_r, "spec_result": spec_r}
                raise AssertionError("impl != spec")

    try:
        prop()
    except AssertionError:
        return {
            "status": "disproved",
            "details": "symbolic counterexample found",
            "counterexample": counterexample[0],
        }
    except Exception as e:
        return {"status": "inconclusive", "details": f"solver inconclusive: {type(e).__name__}: {e}"}
    return {"status": "verified", "details": f"symbolically verified with {max_examples} examples"}
