"""Application engine for Lazo.

Every callable receives its arguments as raw sub-expressions:

- Builtins (plain Python callables) are invoked as `fn(scope, args)` with the
  live caller scope and decide themselves which arguments to evaluate.
- User-defined Lambdas get strict arity checking, then run in a full copy of
  the caller's scope with each parameter bound to the *loaded* argument:
  symbols are substituted, nested Exprs are passed through and evaluated by
  the callee whenever it uses the parameter.
"""

from __future__ import annotations

from lazo import EvaluatorFn, Value
from lazo.errors import LazoArityError, LazoSyntaxError
from lazo.types.coerce import render
from lazo.types.lambda_fn import Lambda
from lazo.types.null import Null
from lazo.types.scope import Scope


def apply_lambda(
    fn: Lambda,
    args: list[Value],
    scope: Scope,
    evaluate_fn: EvaluatorFn,
) -> Value:
    if len(args) != fn.arity:
        raise LazoArityError(len(args), fn.arity)

    call_scope = scope.copy()
    for name, arg in zip(fn.param_names(), args):
        call_scope.define(name, scope.load(arg))

    result = Null
    for form in fn.body:
        result = evaluate_fn(form, call_scope)
    return result


def apply(
    fn: Value,
    args: list[Value],
    scope: Scope,
    evaluate_fn: EvaluatorFn,
    head: Value = Null,
) -> Value:
    """Apply either a Lambda or a builtin to raw arguments.

    `head` is the unevaluated head of the call, used for the error message
    when `fn` is not callable.
    """
    if isinstance(fn, Lambda):
        return apply_lambda(fn, args, scope, evaluate_fn)
    elif callable(fn):
        return fn(scope, list(args))
    else:
        raise LazoSyntaxError(
            f"first atom in expression should be function, but provided `{render(head)}` is not function"
        )
