from __future__ import annotations

import dataclasses
import importlib
import json
import os
import time
from collections.abc import Callable
from typing import Any

from hypothesis import assume, find, given, settings
from hypothesis.errors import FailedHealthCheck, NoSuchExample

from sortcontract._bundle import _BUNDLE_ATTR, _check_ensures, _check_requires, _get_bundle, _root_original
from sortcontract._strategies import _find_satisfying_kwargs, _strategy_for_function
from sortcontract._util import _ensure_dir, _jsonable, _now_iso, _qualified_name


@dataclasses.dataclass
class ObligationResult:
    function: str
    obligation: str
    status: str  # "pass" | "fail" | "error" | "skip"
    details: dict[str, Any]
    duration_s: float = 0.0

    def to_json(self) -> dict[str, Any]:
        return {
            "function": self.function,
            "obligation": self.obligation,
            "status": self.status,
            "details": self.details,
            "duration_s": round(self.duration_s, 3),
        }


def _default_eq(a: Any, b: Any) -> bool:
    return a == b


def _collect_functions(module: Any) -> list[Callable[..., Any]]:
    fns: list[Callable[..., Any]] = []
    for _name, obj in vars(module).items():
        if callable(obj) and hasattr(_root_original(obj), _BUNDLE_ATTR):
            fns.append(obj)
    return fns


def _describe_failure(
    root: Callable[..., Any],
    spec_fn: Callable[..., Any],
    eq: Callable[[Any, Any], bool],
    kwargs: dict[str, Any],
) -> dict[str, Any] | None:
    """Re-run one input and explain why it breaks the contract, or None if it doesn't."""
    impl_r = root(**kwargs)
    ok_post, post_err = _check_ensures(root, (), kwargs, impl_r)
    if not ok_post:
        return {
            "kwargs": _jsonable(kwargs),
            "impl_result": _jsonable(impl_r),
            "spec_result": None,
            "note": f"ensures failed: {post_err}",
        }
    spec_r = spec_fn(**kwargs)
    if not eq(impl_r, spec_r):
        return {"kwargs": _jsonable(kwargs), "impl_result": _jsonable(impl_r), "spec_result": _jsonable(spec_r)}
    return None


def _find_counterexample(
    root: Callable[..., Any],
    spec_fn: Callable[..., Any],
    eq: Callable[[Any, Any], bool],
    *,
    max_list_size: int,
) -> dict[str, Any] | None:
    strat_kwargs = _strategy_for_function(root, max_list_size=max_list_size)

    def fails(kwargs: dict[str, Any]) -> bool:
        ok_pre, _ = _check_requires(root, (), kwargs)
        if not ok_pre:
            return False
        try:
            return _describe_failure(root, spec_fn, eq, kwargs) is not None
        except Exception:
            return True

    try:
        kwargs = find(strat_kwargs, fails)
    except NoSuchExample:
        return None

    try:
        return _describe_failure(root, spec_fn, eq, kwargs)
    except Exception as e:
        return {"kwargs": _jsonable(kwargs), "error": f"{type(e).__name__}: {e}"}


def _check_smoke(root: Callable[..., Any], qn: str, *, smoke_max_list_size: int) -> ObligationResult:
    t0 = time.monotonic()
    b = _get_bundle(root)
    try:
        smoke_strat = _strategy_for_function(root, max_list_size=smoke_max_list_size)
        example_kwargs = _find_satisfying_kwargs(root, smoke_strat)
    except NoSuchExample:
        return ObligationResult(
            qn, "requires_satisfiable", "fail",
            {"error": "No satisfying input found"},
            duration_s=time.monotonic() - t0,
        )

    try:
        r = root(**example_kwargs)
        ok_post, post_err = _check_ensures(root, (), example_kwargs, r)
    except Exception as e:
        return ObligationResult(
            qn, "contracts_smoke", "error",
            {"example": _jsonable(example_kwargs), "error": f"{type(e).__name__}: {e}"},
            duration_s=time.monotonic() - t0,
        )

    if not ok_post:
        return ObligationResult(
            qn, "ensures_holds_on_smoke", "fail",
            {"example": _jsonable(example_kwargs), "result": _jsonable(r), "error": post_err},
            duration_s=time.monotonic() - t0,
        )
    return ObligationResult(
        qn, "contracts_smoke", "pass",
        {"example": _jsonable(example_kwargs), "requires": len(b["requires"]), "ensures": len(b["ensures"])},
        duration_s=time.monotonic() - t0,
    )


def _check_equivalence(root: Callable[..., Any], qn: str, *, max_list_size: int) -> ObligationResult:
    b = _get_bundle(root)
    cfg = b["against"]
    if cfg is None or cfg["spec"] is None:
        return ObligationResult(qn, "equiv_to_spec", "skip", {"reason": "no @against(spec) attached"})

    t1 = time.monotonic()
    spec_fn = cfg["spec"]
    eq = cfg["eq"] or _default_eq
    max_examples = int(cfg["max_examples"])
    spec_name = _qualified_name(spec_fn)

    # Deterministic probe first; it shrinks to a minimal failing input.
    try:
        ce = _find_counterexample(root, spec_fn, eq, max_list_size=max_list_size)
    except Exception as e:
        return ObligationResult(
            qn, "equiv_to_spec", "error",
            {"spec": spec_name, "error": f"{type(e).__name__}: {e}"},
            duration_s=time.monotonic() - t1,
        )
    if ce is not None:
        return ObligationResult(
            qn, "equiv_to_spec", "fail",
            {"spec": spec_name, "error": "counterexample found by find()", "counterexample": ce},
            duration_s=time.monotonic() - t1,
        )

    strat_kwargs = _strategy_for_function(root, max_list_size=max_list_size)
    shrunk_ce: list[dict[str, Any] | None] = [None]

    @settings(
        max_examples=max_examples,
        deadline=cfg["deadline_ms"],
        suppress_health_check=list(cfg["suppress_health_checks"]),
        derandomize=False,
    )
    @given(strat_kwargs)
    def prop(kwargs: dict[str, Any]) -> None:
        ok_pre, _ = _check_requires(root, (), kwargs)
        assume(ok_pre)
        failure = _describe_failure(root, spec_fn, eq, kwargs)
        if failure is not None:
            shrunk_ce[0] = failure
            raise AssertionError(failure.get("note", "impl != spec"))

    try:
        prop()
    except FailedHealthCheck as e:
        return ObligationResult(
            qn, "equiv_to_spec", "fail",
            {"spec": spec_name, "error": f"FailedHealthCheck: {e}"},
            duration_s=time.monotonic() - t1,
        )
    except AssertionError as e:
        return ObligationResult(
            qn, "equiv_to_spec", "fail",
            {"spec": spec_name, "error": str(e), "counterexample": shrunk_ce[0]},
            duration_s=time.monotonic() - t1,
        )
    except Exception as e:
        return ObligationResult(
            qn, "equiv_to_spec", "error",
            {"spec": spec_name, "error": f"{type(e).__name__}: {e}"},
            duration_s=time.monotonic() - t1,
        )
    return ObligationResult(
        qn, "equiv_to_spec", "pass",
        {
            "spec": spec_name,
            "max_examples": max_examples,
            "requires": len(b["requires"]),
            "ensures": len(b["ensures"]),
        },
        duration_s=time.monotonic() - t1,
    )


def _check_symbolic(root: Callable[..., Any], qn: str, *, max_list_size: int) -> ObligationResult:
    from sortcontract._proof import prove_symbolic

    tp = time.monotonic()
    cfg = _get_bundle(root)["against"]
    result = prove_symbolic(
        root,
        spec_fn=cfg["spec"] if cfg else None,
        eq=(cfg["eq"] or _default_eq) if cfg else None,
        check_requires=_check_requires,
        check_ensures=_check_ensures,
        strategy=_strategy_for_function(root, max_list_size=max_list_size),
    )
    status_map = {"verified": "pass", "disproved": "fail", "inconclusive": "skip", "unavailable": "skip"}
    return ObligationResult(
        qn, "symbolic_proof", status_map.get(result["status"], "skip"),
        _jsonable(result),
        duration_s=time.monotonic() - tp,
    )


def check_module(
    module_name: str,
    *,
    out_dir: str = ".sortcontract",
    max_list_size: int = 20,
    smoke_max_list_size: int = 5,
    on_result: Callable[[ObligationResult], None] | None = None,
    prove: bool = False,
) -> tuple[list[ObligationResult], dict[str, Any]]:
    """Discharge the contract obligations of every decorated function in a module.

    Spec functions (``@spec``) are references, not subjects: they are skipped.
    """
    _ensure_dir(out_dir)

    module = importlib.import_module(module_name)
    funcs = [fn for fn in _collect_functions(module) if not _get_bundle(fn)["is_spec"]]

    results: list[ObligationResult] = []
    trust: dict[str, Any] = {"module": module_name, "timestamp": _now_iso(), "functions": []}

    def _emit(result: ObligationResult) -> None:
        results.append(result)
        if on_result is not None:
            on_result(result)

    for fn in funcs:
        root = _root_original(fn)
        qn = _qualified_name(root)
        mine: list[ObligationResult] = []

        smoke = _check_smoke(root, qn, smoke_max_list_size=smoke_max_list_size)
        _emit(smoke)
        mine.append(smoke)
        if smoke.obligation != "requires_satisfiable":
            equiv = _check_equivalence(root, qn, max_list_size=max_list_size)
            _emit(equiv)
            mine.append(equiv)
            if prove:
                proof = _check_symbolic(root, qn, max_list_size=max_list_size)
                _emit(proof)
                mine.append(proof)

        trust["functions"].append({
            "function": qn,
            "trusted": all(r.status in ("pass", "skip") for r in mine),
            "obligations": {r.obligation: r.status for r in mine},
        })

    obligations_path = os.path.join(out_dir, f"{module_name}.obligations.json")
    trust_path = os.path.join(out_dir, f"{module_name}.trust.json")

    with open(obligations_path, "w", encoding="utf-8") as f:
        json.dump([r.to_json() for r in results], f, indent=2)

    with open(trust_path, "w", encoding="utf-8") as f:
        json.dump(trust, f, indent=2)

    return results, trust
