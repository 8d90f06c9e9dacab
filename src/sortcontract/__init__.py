from sortcontract._cli import main
from sortcontract._comparators import CATALOG, AxiomViolation, always, check_axioms, chaos, counting, cyclic
from sortcontract._decorators import ContractViolation, against, ensures, requires, spec
from sortcontract._enforce import SortOutcome, checked_sort, strict_sort
from sortcontract._engine import check_module
from sortcontract._order import Comparator, Ordering, key_order, numeric_order, ordering_of, reverse_order, trusted
from sortcontract._proof import ProofResult, prove_bounded, prove_symbolic
from sortcontract._properties import (
    SelfReferentialCheck,
    Verdict,
    first_violation,
    is_non_decreasing,
    is_permutation,
    judge,
    length_preserved,
    sum_preserved,
)
from sortcontract._sorter import insert, insertion_sort
from sortcontract._strategies import register_strategy, register_strategy_factory

__all__ = [
    "CATALOG",
    "AxiomViolation",
    "Comparator",
    "ContractViolation",
    "Ordering",
    "ProofResult",
    "SelfReferentialCheck",
    "SortOutcome",
    "Verdict",
    "against",
    "always",
    "chaos",
    "check_axioms",
    "check_module",
    "checked_sort",
    "counting",
    "cyclic",
    "ensures",
    "first_violation",
    "insert",
    "insertion_sort",
    "is_non_decreasing",
    "is_permutation",
    "judge",
    "key_order",
    "length_preserved",
    "main",
    "numeric_order",
    "ordering_of",
    "prove_bounded",
    "prove_symbolic",
    "register_strategy",
    "register_strategy_factory",
    "requires",
    "reverse_order",
    "spec",
    "strict_sort",
    "sum_preserved",
    "trusted",
]
