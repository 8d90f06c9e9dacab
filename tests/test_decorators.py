"""Tests for contract decorators: @spec, @requires, @ensures, @against."""

from __future__ import annotations

import pytest

from sortcontract._bundle import _get_bundle, _root_original
from sortcontract._decorators import ContractViolation, against, ensures, requires, spec


# ---------------------------------------------------------------------------
# @spec
# ---------------------------------------------------------------------------

class TestSpec:
    def test_marks_is_spec(self):
        @spec
        def f(xs: list[int]) -> list[int]:
            return sorted(xs)
        assert _get_bundle(f)["is_spec"] is True

    def test_returns_original_function(self):
        def f(xs: list[int]) -> list[int]:
            return xs
        assert spec(f) is f


# ---------------------------------------------------------------------------
# @requires
# ---------------------------------------------------------------------------

class TestRequires:
    def test_passes_when_satisfied(self):
        @requires(lambda xs: all(x >= 0 for x in xs))
        def f(xs: list[int]) -> int:
            return sum(xs)
        assert f([1, 2, 3]) == 6

    def test_raises_when_violated(self):
        @requires(lambda xs: all(x >= 0 for x in xs))
        def f(xs: list[int]) -> int:
            return sum(xs)
        with pytest.raises(ContractViolation, match="Precondition failed") as info:
            f([1, -2])
        assert info.value.kind == "requires"
        assert info.value.function.endswith("f")

    def test_violation_is_an_assertion_error(self):
        @requires(lambda x: x > 0)
        def f(x: int) -> int:
            return x
        with pytest.raises(AssertionError):
            f(0)

    def test_positional_and_keyword_calls_bind_alike(self):
        @requires(lambda xs, limit: len(xs) <= limit)
        def f(xs: list[int], limit: int = 3) -> int:
            return len(xs)
        assert f([1, 2]) == 2
        assert f(xs=[1, 2, 3], limit=3) == 3
        with pytest.raises(ContractViolation):
            f([1, 2, 3, 4])

    def test_raising_predicate_counts_as_failure(self):
        @requires(lambda x: 1 / x > 0)
        def f(x: int) -> int:
            return x
        with pytest.raises(ContractViolation, match="ZeroDivisionError"):
            f(0)

    def test_bundle_accumulates(self):
        @requires(lambda x: x > 0)
        @requires(lambda x: x < 100)
        def f(x: int) -> int:
            return x
        assert len(_get_bundle(f)["requires"]) == 2


# ---------------------------------------------------------------------------
# @ensures
# ---------------------------------------------------------------------------

class TestEnsures:
    def test_passes_when_satisfied(self):
        @ensures(lambda xs, result: len(result) == len(xs))
        def f(xs: list[int]) -> list[int]:
            return sorted(xs)
        assert f([3, 1, 2]) == [1, 2, 3]

    def test_raises_when_violated(self):
        @ensures(lambda xs, result: len(result) == len(xs))
        def f(xs: list[int]) -> list[int]:
            return xs[1:]
        with pytest.raises(ContractViolation, match="Postcondition failed") as info:
            f([3, 1, 2])
        assert info.value.kind == "ensures"

    def test_also_checks_requires(self):
        @ensures(lambda x, result: result > 0)
        @requires(lambda x: x > 0)
        def f(x: int) -> int:
            return x
        with pytest.raises(ContractViolation, match="Precondition failed"):
            f(-1)


# ---------------------------------------------------------------------------
# @against
# ---------------------------------------------------------------------------

class TestAgainst:
    def test_stores_spec_in_bundle(self):
        def my_spec(xs: list[int]) -> list[int]:
            return sorted(xs)

        @against(my_spec)
        def f(xs: list[int]) -> list[int]:
            return sorted(xs)
        b = _get_bundle(f)
        assert b["against"]["spec"] is my_spec
        assert b["against"]["max_examples"] == 200
        assert b["against"]["eq"] is None

    def test_custom_eq(self):
        def same_multiset(a, b):
            return sorted(a) == sorted(b)

        def my_spec(xs: list[int]) -> list[int]:
            return xs

        @against(my_spec, eq=same_multiset, max_examples=50)
        def f(xs: list[int]) -> list[int]:
            return xs
        b = _get_bundle(f)
        assert b["against"]["eq"] is same_multiset
        assert b["against"]["max_examples"] == 50


# ---------------------------------------------------------------------------
# Decorator ordering / chaining
# ---------------------------------------------------------------------------

class TestDecoratorChaining:
    def test_full_stack(self):
        @spec
        def ref(xs: list[int]) -> list[int]:
            return sorted(xs)

        @against(ref)
        @ensures(lambda xs, result: len(result) == len(xs))
        @requires(lambda xs: len(xs) < 10)
        def f(xs: list[int]) -> list[int]:
            return sorted(xs)

        b = _get_bundle(_root_original(f))
        assert len(b["requires"]) == 1
        assert len(b["ensures"]) == 1
        assert b["against"]["spec"] is ref
