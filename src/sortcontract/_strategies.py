from __future__ import annotations

import collections.abc
import enum
import inspect
import types
from collections.abc import Callable
from typing import Any, Union, get_args, get_origin, get_type_hints

from hypothesis import find
from hypothesis import strategies as st

from sortcontract._bundle import _check_requires, _root_original
from sortcontract._util import StrategyFactory

_STRATEGY_OVERRIDES: dict[Any, st.SearchStrategy[Any]] = {}
_STRATEGY_FACTORY_OVERRIDES: dict[Any, StrategyFactory] = {}


def register_strategy(tp: Any, strat: st.SearchStrategy[Any]) -> None:
    _STRATEGY_OVERRIDES[tp] = strat


def register_strategy_factory(tp: Any, factory: StrategyFactory) -> None:
    _STRATEGY_FACTORY_OVERRIDES[tp] = factory


def _override(tp: Any, *, max_list_size: int) -> st.SearchStrategy[Any] | None:
    for key in (tp, get_origin(tp)):
        if key is None:
            continue
        if key in _STRATEGY_OVERRIDES:
            return _STRATEGY_OVERRIDES[key]
        if key in _STRATEGY_FACTORY_OVERRIDES:
            return _STRATEGY_FACTORY_OVERRIDES[key](max_list_size=max_list_size)
    return None


def _strategy_for_type(tp: Any, *, max_list_size: int = 20, depth: int = 0) -> st.SearchStrategy[Any]:
    if depth > 4:
        return st.none()

    ov = _override(tp, max_list_size=max_list_size)
    if ov is not None:
        return ov

    def inner(t: Any) -> st.SearchStrategy[Any]:
        return _strategy_for_type(t, max_list_size=max_list_size, depth=depth + 1)

    origin = get_origin(tp)
    args = get_args(tp)

    # Elements are orderable values; sortable ints are the common case.
    if tp is Any or tp is int:
        return st.integers()
    if tp is bool:
        return st.booleans()
    if tp is float:
        return st.floats(allow_nan=False, allow_infinity=False)
    if isinstance(tp, type) and issubclass(tp, enum.Enum):
        return st.sampled_from(list(tp))

    if origin is Union or origin is types.UnionType:
        return st.one_of(*[st.none() if a is type(None) else inner(a) for a in args])

    if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
        return st.lists(inner(args[0]), max_size=max_list_size).map(tuple)
    if origin is tuple:
        return st.tuples(*[inner(a) for a in args])
    if origin in (list, collections.abc.Sequence) or tp is list:
        (elem,) = args if args else (int,)
        return st.lists(inner(elem), max_size=max_list_size)

    return st.just(None)


def _strategy_for_function(fn: Callable[..., Any], *, max_list_size: int = 20) -> st.SearchStrategy[dict[str, Any]]:
    sig = inspect.signature(fn)
    hints = get_type_hints(fn)

    kwargs_strats: dict[str, st.SearchStrategy[Any]] = {}
    for name, param in sig.parameters.items():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        if param.default is not inspect.Parameter.empty:
            # Comparators and other knobs keep their declared defaults.
            continue
        kwargs_strats[name] = _strategy_for_type(hints.get(name, Any), max_list_size=max_list_size)

    return st.fixed_dictionaries(kwargs_strats)


def _find_satisfying_kwargs(
    fn: Callable[..., Any], strat_kwargs: st.SearchStrategy[dict[str, Any]]
) -> dict[str, Any]:
    root = _root_original(fn)

    def ok(kwargs: dict[str, Any]) -> bool:
        ok_pre, _ = _check_requires(root, (), kwargs)
        return ok_pre

    return find(strat_kwargs, ok)
