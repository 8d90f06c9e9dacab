"""Adversarial comparators and an axiom checker.

These live outside the sorter: randomness is injected by the caller through a
``random.Random`` so the sorter itself stays pure and demos stay replayable.
"""

from __future__ import annotations

import itertools
import random
from collections.abc import Callable, Iterable
from typing import Any

from sortcontract._order import Comparator, Ordering, numeric_order, reverse_order

_OUTCOMES = (Ordering.LESS, Ordering.EQUAL, Ordering.GREATER)


def chaos(rng: random.Random | None = None) -> Comparator:
    """A comparator that answers uniformly at random on every call."""
    source = rng if rng is not None else random.Random()

    def chaos_cmp(a: Any, b: Any) -> Ordering:
        return source.choice(_OUTCOMES)

    return chaos_cmp


def always(outcome: Ordering) -> Comparator:
    def constant_cmp(a: Any, b: Any) -> Ordering:
        return outcome

    constant_cmp.__qualname__ = f"always_{outcome.name.lower()}"
    return constant_cmp


def cyclic(modulus: int = 3) -> Comparator:
    """Rock-paper-scissors on ``value % modulus``.

    Reflexive and anti-symmetric, but 0 < 1 < 2 < 0.
    """
    if modulus < 3:
        raise ValueError("cyclic comparator needs a modulus of at least 3")

    def cyclic_cmp(a: int, b: int) -> Ordering:
        ra, rb = a % modulus, b % modulus
        if ra == rb:
            return Ordering.EQUAL
        return Ordering.LESS if (rb - ra) % modulus == 1 else Ordering.GREATER

    return cyclic_cmp


class counting:
    """Wrap a comparator and count how often it is consulted."""

    def __init__(self, cmp: Comparator) -> None:
        self.cmp = cmp
        self.calls = 0

    def __call__(self, a: Any, b: Any) -> Ordering:
        self.calls += 1
        return self.cmp(a, b)


CATALOG: dict[str, Callable[[random.Random], Comparator]] = {
    "numeric": lambda rng: numeric_order,
    "reverse": lambda rng: reverse_order(numeric_order),
    "chaos": chaos,
    "always-less": lambda rng: always(Ordering.LESS),
    "always-greater": lambda rng: always(Ordering.GREATER),
    "always-equal": lambda rng: always(Ordering.EQUAL),
    "cyclic": lambda rng: cyclic(),
}


def from_catalog(name: str, *, seed: int | None = None) -> Comparator:
    try:
        factory = CATALOG[name]
    except KeyError:
        raise KeyError(f"unknown comparator {name!r}; choose from {', '.join(sorted(CATALOG))}") from None
    return factory(random.Random(seed))


class AxiomViolation:
    """A witnessed breach of one ordering axiom."""

    __slots__ = ("axiom", "outcomes", "witness")

    def __init__(self, axiom: str, witness: tuple[Any, ...], outcomes: tuple[Ordering, ...]) -> None:
        self.axiom = axiom
        self.witness = witness
        self.outcomes = outcomes

    def describe(self) -> str:
        names = [o.name for o in self.outcomes]
        if self.axiom == "reflexivity":
            (x,) = self.witness
            return f"compare({x}, {x}) = {names[0]}, expected EQUAL"
        if self.axiom == "anti-symmetry":
            x, y = self.witness
            return f"compare({x}, {y}) = {names[0]} but compare({y}, {x}) = {names[1]}"
        x, y, z = self.witness
        return f"compare({x}, {y}) = {names[0]}, compare({y}, {z}) = {names[1]}, but compare({x}, {z}) = {names[2]}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "axiom": self.axiom,
            "witness": list(self.witness),
            "outcomes": [o.name for o in self.outcomes],
            "description": self.describe(),
        }

    def __repr__(self) -> str:
        return f"AxiomViolation({self.axiom}: {self.describe()})"


def check_axioms(cmp: Comparator, domain: Iterable[Any], *, limit: int | None = None) -> list[AxiomViolation]:
    """Check reflexivity, anti-symmetry and transitivity on every tuple of ``domain``.

    Each pair is asked once per direction, so a random comparator is judged on
    the answers it actually gave. ``limit`` caps the number of violations
    returned per axiom.
    """
    values = list(domain)
    answers: dict[tuple[Any, Any], Ordering] = {}

    def ask(a: Any, b: Any) -> Ordering:
        if (a, b) not in answers:
            answers[(a, b)] = Ordering(cmp(a, b))
        return answers[(a, b)]

    reflexive: list[AxiomViolation] = []
    for x in values:
        got = ask(x, x)
        if got is not Ordering.EQUAL:
            reflexive.append(AxiomViolation("reflexivity", (x,), (got,)))

    antisymmetric: list[AxiomViolation] = []
    for x, y in itertools.combinations(values, 2):
        xy, yx = ask(x, y), ask(y, x)
        if xy is not yx.flipped():
            antisymmetric.append(AxiomViolation("anti-symmetry", (x, y), (xy, yx)))

    transitive: list[AxiomViolation] = []
    for x, y, z in itertools.permutations(values, 3):
        xy, yz, xz = ask(x, y), ask(y, z), ask(x, z)
        if xy is Ordering.LESS and yz is Ordering.LESS and xz is not Ordering.LESS:
            transitive.append(AxiomViolation("transitivity", (x, y, z), (xy, yz, xz)))

    if limit is not None:
        reflexive, antisymmetric, transitive = reflexive[:limit], antisymmetric[:limit], transitive[:limit]
    return reflexive + antisymmetric + transitive


def broken_axioms(cmp: Comparator, domain: Iterable[Any]) -> set[str]:
    return {v.axiom for v in check_axioms(cmp, domain)}
