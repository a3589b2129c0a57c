"""Control and binding forms.

These are ordinary builtins: they sit in the scope like any other function
and receive their arguments unevaluated. Each one decides which arguments to
evaluate, and when, which is what lets `if` skip the untaken branch and
`define`/`lambda` keep their parameter lists and bodies as code.
"""

from __future__ import annotations

import math

from lazo import Value
from lazo.errors import LazoArityError, LazoError, LazoRuntimeError, LazoSyntaxError
from lazo.evaluation.evaluator import evaluate
from lazo.types.coerce import get_bool, get_list, get_number, get_string
from lazo.types.expr import Expr, List
from lazo.types.lambda_fn import Lambda
from lazo.types.null import Null
from lazo.types.scope import Scope


def if_form(scope: Scope, args: list[Value]) -> Value:
    """(if test then [else]); only the chosen branch is evaluated."""
    if len(args) not in (2, 3):
        raise LazoArityError(len(args), 3)

    if get_bool(evaluate(args[0], scope)):
        return evaluate(args[1], scope)
    elif len(args) == 3:
        return evaluate(args[2], scope)
    else:
        return Null


def cond_form(scope: Scope, args: list[Value]) -> Value:
    """(cond (test result) ...).

    Tests are evaluated in order; the result of the first clause whose test is
    truthy is evaluated and returned. No match yields null.
    """
    for clause in args:
        parts = get_list(clause)
        if len(parts) < 2:
            raise LazoSyntaxError("cond clause requires a condition and a result")
        if get_bool(evaluate(parts[0], scope)):
            return evaluate(parts[1], scope)
    return Null


def define_form(scope: Scope, args: list[Value]) -> Value:
    """
    (define name expr)          binds expr itself, unevaluated
    (define (name params) body) binds a function
    Nothing is evaluated here. A name bound to an Expr runs it again on every
    use, just like a parameter. The binding goes into the caller's scope, and
    the bound value is returned.
    """
    if len(args) < 2:
        raise LazoArityError(len(args), 2)

    target = args[0]
    if isinstance(target, (Expr, List)):
        if not target:
            raise LazoSyntaxError("define requires a function name")
        name = get_string(target[0])
        value = Lambda(target[1:], args[1:])
    else:
        name = get_string(target)
        value = args[1]

    scope.define(name, value)
    return value


def lambda_form(scope: Scope, args: list[Value]) -> Value:
    # (lambda (params) body...); a bare name is a single parameter
    if len(args) < 2:
        raise LazoArityError(len(args), 2)
    return Lambda(get_list(args[0]), args[1:])


def eval_form(scope: Scope, args: list[Value]) -> Value:
    """Evaluate each argument in order and return the last result."""
    result = Null
    for expr in args:
        result = evaluate(expr, scope)
    return result


def try_form(scope: Scope, args: list[Value]) -> Value:
    """(try body fallback): the fallback replaces any Lazo error raised by body."""
    if len(args) != 2:
        raise LazoArityError(len(args), 2)
    try:
        return evaluate(args[0], scope)
    except LazoError:
        return evaluate(args[1], scope)


def error_form(scope: Scope, args: list[Value]) -> Value:
    message = evaluate(args[0], scope) if args else "Something went wrong"
    raise LazoRuntimeError(get_string(message))


def exit_form(scope: Scope, args: list[Value]) -> Value:
    code = get_number(evaluate(args[0], scope)) if args else 0.0
    raise SystemExit(int(code) if math.isfinite(code) else 0)
