from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

from hypothesis import HealthCheck

from sortcontract._bundle import _bundle, _check_ensures, _check_requires, _root_original, _set_original
from sortcontract._util import _qualified_name


class ContractViolation(AssertionError):
    """A precondition or postcondition did not hold at runtime."""

    def __init__(self, function: str, kind: str, detail: str) -> None:
        self.function = function
        self.kind = kind
        self.detail = detail
        label = "Precondition" if kind == "requires" else "Postcondition"
        super().__init__(f"{label} failed for {function}: {detail}")


def requires(pred: Callable[..., bool]) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def deco(fn: Callable[..., Any]) -> Callable[..., Any]:
        _bundle(fn)["requires"].append(pred)

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            ok, err = _check_requires(fn, args, kwargs)
            if not ok:
                raise ContractViolation(_qualified_name(_root_original(fn)), "requires", err)
            return fn(*args, **kwargs)

        _set_original(wrapper, fn)
        return wrapper

    return deco


def ensures(pred: Callable[..., bool]) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def deco(fn: Callable[..., Any]) -> Callable[..., Any]:
        _bundle(fn)["ensures"].append(pred)

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            ok, err = _check_requires(fn, args, kwargs)
            if not ok:
                raise ContractViolation(_qualified_name(_root_original(fn)), "requires", err)
            result = fn(*args, **kwargs)
            ok2, err2 = _check_ensures(fn, args, kwargs, result)
            if not ok2:
                raise ContractViolation(_qualified_name(_root_original(fn)), "ensures", err2)
            return result

        _set_original(wrapper, fn)
        return wrapper

    return deco


def spec(fn: Callable[..., Any]) -> Callable[..., Any]:
    _bundle(fn)["is_spec"] = True
    return fn


def against(
    spec_fn: Callable[..., Any],
    *,
    eq: Callable[[Any, Any], bool] | None = None,
    max_examples: int = 200,
    deadline_ms: int | None = None,
    suppress_health_checks: tuple[HealthCheck, ...] = (
        HealthCheck.too_slow,
        HealthCheck.filter_too_much,
    ),
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def deco(fn: Callable[..., Any]) -> Callable[..., Any]:
        _bundle(fn)["against"] = {
            "spec": spec_fn,
            "eq": eq,
            "max_examples": max_examples,
            "deadline_ms": deadline_ms,
            "suppress_health_checks": suppress_health_checks,
        }
        return fn

    return deco
