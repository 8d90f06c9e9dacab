"""Tests for the comparator-driven insertion sort."""

from __future__ import annotations

import random
from collections import Counter

from hypothesis import given, settings
from hypothesis import strategies as st

from sortcontract._comparators import always, chaos, counting, cyclic
from sortcontract._order import Ordering, key_order, numeric_order, reverse_order
from sortcontract._properties import is_non_decreasing
from sortcontract._sorter import insert, insertion_sort

small_ints = st.integers(min_value=-1000, max_value=1000)
int_lists = st.lists(small_ints, max_size=40)


def _broken_comparators(seed: int):
    return [
        chaos(random.Random(seed)),
        always(Ordering.LESS),
        always(Ordering.GREATER),
        always(Ordering.EQUAL),
        cyclic(),
        reverse_order(numeric_order),
    ]


# ---------------------------------------------------------------------------
# insert
# ---------------------------------------------------------------------------

class TestInsert:
    def test_into_empty(self):
        assert insert(3, [], numeric_order) == [3]

    def test_before_first_not_exceeded(self):
        assert insert(3, [1, 2, 4, 5], numeric_order) == [1, 2, 3, 4, 5]

    def test_appends_when_largest(self):
        assert insert(9, [1, 2], numeric_order) == [1, 2, 9]

    def test_tie_goes_in_front(self):
        out = insert((1, "new"), [(0, "a"), (1, "old")], key_order(lambda p: p[0]))
        assert out == [(0, "a"), (1, "new"), (1, "old")]

    def test_does_not_mutate(self):
        ordered = [1, 2, 3]
        insert(0, ordered, numeric_order)
        assert ordered == [1, 2, 3]


# ---------------------------------------------------------------------------
# insertion_sort: concrete scenarios
# ---------------------------------------------------------------------------

class TestInsertionSortScenarios:
    def test_workshop_input(self, demo_input):
        out = insertion_sort(demo_input, numeric_order)
        assert out == [0, 1, 2, 3, 4, 5, 6, 7]
        assert sum(out) == sum(demo_input) == 28
        assert is_non_decreasing(out, numeric_order)
        assert insertion_sort(out, numeric_order) == out

    def test_empty(self):
        assert insertion_sort([], numeric_order) == []
        assert is_non_decreasing([], numeric_order)

    def test_single(self):
        assert insertion_sort([42], numeric_order) == [42]
        assert is_non_decreasing([42], numeric_order)

    def test_input_untouched(self, demo_input):
        before = list(demo_input)
        insertion_sort(demo_input, chaos(random.Random(7)))
        assert demo_input == before

    def test_accepts_tuples(self):
        assert insertion_sort((3, 1, 2), numeric_order) == [1, 2, 3]

    def test_reverse_comparator_sorts_descending(self, demo_input):
        assert insertion_sort(demo_input, reverse_order(numeric_order)) == [7, 6, 5, 4, 3, 2, 1, 0]

    def test_chaos_keeps_length_and_sum(self, demo_input):
        for seed in range(20):
            out = insertion_sort(demo_input, chaos(random.Random(seed)))
            assert len(out) == 8
            assert sum(out) == 28
            assert Counter(out) == Counter(demo_input)

    def test_chaos_usually_unsorted(self, demo_input):
        outs = [insertion_sort(demo_input, chaos(random.Random(seed))) for seed in range(20)]
        assert not all(is_non_decreasing(o, numeric_order) for o in outs)
        assert len({tuple(o) for o in outs}) > 1

    def test_always_less_is_identity(self, demo_input):
        assert insertion_sort(demo_input, always(Ordering.LESS)) == demo_input

    def test_always_greater_keeps_fold_order(self, demo_input):
        assert insertion_sort(demo_input, always(Ordering.GREATER)) == list(reversed(demo_input))

    def test_comparator_only_sees_candidate_and_existing(self):
        seen = []

        def spy(a, b):
            seen.append((a, b))
            return numeric_order(a, b)

        insertion_sort([2, 1], spy)
        assert seen == [(2, 1)]

    def test_comparisons_are_quadratic_at_worst(self):
        cmp = counting(numeric_order)
        insertion_sort(list(range(10)), cmp)
        assert cmp.calls <= 10 * 9 // 2


# ---------------------------------------------------------------------------
# insertion_sort: properties
# ---------------------------------------------------------------------------

class TestInsertionSortProperties:
    @settings(deadline=None, max_examples=150)
    @given(int_lists, st.integers(min_value=0, max_value=2**16))
    def test_permutation_under_any_comparator(self, xs, seed):
        for cmp in _broken_comparators(seed):
            out = insertion_sort(xs, cmp)
            assert len(out) == len(xs)
            assert Counter(out) == Counter(xs)
            assert sum(out) == sum(xs)

    @settings(deadline=None, max_examples=200)
    @given(int_lists)
    def test_matches_builtin_sorted(self, xs):
        assert insertion_sort(xs, numeric_order) == sorted(xs)

    @settings(deadline=None, max_examples=200)
    @given(int_lists)
    def test_sorted_under_reference(self, xs):
        assert is_non_decreasing(insertion_sort(xs, numeric_order), numeric_order)

    @settings(deadline=None, max_examples=200)
    @given(int_lists)
    def test_idempotent(self, xs):
        once = insertion_sort(xs, numeric_order)
        assert insertion_sort(once, numeric_order) == once

    @settings(deadline=None, max_examples=200)
    @given(st.lists(st.integers(min_value=0, max_value=4), max_size=30))
    def test_stable(self, keys):
        tagged = [(k, i) for i, k in enumerate(keys)]
        out = insertion_sort(tagged, key_order(lambda p: p[0]))
        assert out == sorted(tagged, key=lambda p: p[0])
        for k in set(keys):
            tags = [i for kk, i in out if kk == k]
            assert tags == sorted(tags)
