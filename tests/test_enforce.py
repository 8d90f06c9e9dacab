"""Tests for the contract-enforcing sort wrappers."""

from __future__ import annotations

import random

import pytest

from sortcontract._comparators import always, chaos
from sortcontract._decorators import ContractViolation
from sortcontract._enforce import SortOutcome, checked_sort, strict_sort
from sortcontract._order import Ordering, numeric_order
from sortcontract._properties import SelfReferentialCheck


class TestCheckedSort:
    def test_ok_under_reference(self, demo_input):
        outcome = checked_sort(demo_input, numeric_order)
        assert isinstance(outcome, SortOutcome)
        assert outcome.ok
        assert outcome.status == "ok"
        assert outcome.output == [0, 1, 2, 3, 4, 5, 6, 7]

    def test_violation_is_tagged_not_raised(self, demo_input):
        outcome = checked_sort(demo_input, always(Ordering.LESS))
        assert outcome.status == "violation"
        assert not outcome.verdict.is_sorted
        assert outcome.verdict.sum_preserved
        assert outcome.verdict.length_preserved

    def test_refuses_self_judgement(self, demo_input):
        cmp = chaos(random.Random(1))
        with pytest.raises(SelfReferentialCheck):
            checked_sort(demo_input, cmp, reference=cmp)

    def test_to_json(self):
        j = checked_sort([2, 1], numeric_order).to_json()
        assert j["status"] == "ok"
        assert j["output"] == [1, 2]
        assert j["verdict"]["is_sorted"] is True


class TestStrictSort:
    def test_returns_sorted(self, demo_input):
        assert strict_sort(demo_input, numeric_order) == sorted(demo_input)

    def test_raises_on_violation(self, demo_input):
        with pytest.raises(ContractViolation, match="Postcondition failed") as info:
            strict_sort(demo_input, always(Ordering.LESS))
        assert info.value.kind == "ensures"

    def test_chaos_eventually_violates(self, demo_input):
        rng = random.Random(42)
        violations = 0
        for _ in range(10):
            try:
                strict_sort(demo_input, chaos(rng))
            except ContractViolation:
                violations += 1
        assert violations > 0

    def test_self_judgement_is_refused_before_sorting(self):
        calls = []

        def always_less(a, b):
            calls.append((a, b))
            return Ordering.LESS

        with pytest.raises(SelfReferentialCheck):
            strict_sort([3, 1, 2], always_less, always_less)
        assert calls == []

    def test_trusted_reference_may_judge_itself(self):
        assert strict_sort([3, 1, 2], numeric_order, numeric_order) == [1, 2, 3]
