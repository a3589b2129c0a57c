"""Iteration helpers: range, map, filter, for, reduce.

Calls are made by building an Expr with the function value at its head and
evaluating it, so user-defined functions receive list items through the
usual argument binding.
"""

from __future__ import annotations

from lazo import Value
from lazo.errors import LazoArityError, LazoRuntimeError
from lazo.evaluation.evaluator import evaluate
from lazo.types.coerce import get_bool, get_list, get_number
from lazo.types.expr import Expr, List
from lazo.types.null import Null
from lazo.types.scope import Scope


def range_builtin(scope: Scope, args: list[Value]) -> List:
    """(range stop), (range start stop) or (range start stop step)."""
    if not 1 <= len(args) <= 3:
        raise LazoArityError(len(args), 3)

    if len(args) == 1:
        current = 0.0
        stop_expr = args[0]
    else:
        current = get_number(evaluate(args[0], scope))
        stop_expr = args[1]
    step_expr = args[2] if len(args) == 3 else None

    # stop and step are re-evaluated on every iteration
    items: list[Value] = []
    while current < get_number(evaluate(stop_expr, scope)):
        items.append(current)
        step = 1.0 if step_expr is None else get_number(evaluate(step_expr, scope))
        if not step > 0:
            raise LazoRuntimeError("range step must be positive")
        current += step
    return List(items)


def _function_and_items(scope: Scope, args: list[Value]) -> tuple[Value, list[Value]]:
    if len(args) != 2:
        raise LazoArityError(len(args), 2)
    fn = evaluate(args[1], scope)
    return fn, get_list(evaluate(args[0], scope))


def map_builtin(scope: Scope, args: list[Value]) -> List:
    """(map list fn)"""
    fn, items = _function_and_items(scope, args)
    return List([evaluate(Expr((fn, item)), scope) for item in items])


def filter_builtin(scope: Scope, args: list[Value]) -> List:
    """(filter list fn)"""
    fn, items = _function_and_items(scope, args)
    return List([item for item in items if get_bool(evaluate(Expr((fn, item)), scope))])


def for_builtin(scope: Scope, args: list[Value]) -> Value:
    """(for list fn), called for its effects."""
    fn, items = _function_and_items(scope, args)
    for item in items:
        evaluate(Expr((fn, item)), scope)
    return Null


def reduce_builtin(scope: Scope, args: list[Value]) -> Value:
    """(reduce list fn): left fold seeded with the first item.

    Runs in a scratch copy of the scope, so definitions made by `fn` are dropped.
    """
    if len(args) != 2:
        raise LazoArityError(len(args), 2)
    fn = args[1]
    items = get_list(evaluate(args[0], scope))
    if not items:
        raise LazoRuntimeError("passed list is empty")

    scratch = scope.copy()
    result = items[0]
    for item in items[1:]:
        result = evaluate(Expr((fn, result, item)), scratch)
    return result
