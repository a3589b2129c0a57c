"""Core evaluator for the Lazo interpreter.

Evaluation is two-phase. `load` substitutes a bound symbol with its value
(and nothing more). If the loaded value is an Expr, its head is evaluated to
obtain a callable and the remaining elements are handed over *unevaluated*;
every other value evaluates to itself.
"""

from __future__ import annotations

from lazo import Value
from lazo.errors import LazoSyntaxError
from lazo.evaluation.apply import apply
from lazo.types.expr import Expr
from lazo.types.scope import Scope


def load(value: Value, scope: Scope) -> Value:
    """Replace a bound Symbol by its value; unbound symbols stay symbols."""
    return scope.load(value)


def evaluate(value: Value, scope: Scope) -> Value:
    value = load(value, scope)
    if not isinstance(value, Expr):
        return value

    if not value:
        raise LazoSyntaxError("empty expression can't be evaluated")

    head, *args = value
    fn = evaluate(head, scope)
    return apply(fn, args, scope, evaluate, head=head)
