"""Built-in functions for the Lazo runtime scope.

This module defines arithmetic, comparison, logic, string and list helpers,
introspection and console I/O, plus `register`, which installs them together
with the control and iteration forms into a scope.

Every builtin has the signature `fn(scope, args)` where `args` are the raw,
unevaluated argument expressions. The helpers here evaluate all of their
arguments left to right, except `&` and `|`, which stop as soon as the
result is known, and `debug`, which only loads them.
"""
from __future__ import annotations

import math
import sys
from typing import Callable, Iterable

from lazo import Value
from lazo.errors import LazoArityError, LazoRuntimeError
from lazo.evaluation.evaluator import evaluate
from lazo.types.coerce import (
    get_bool,
    get_list,
    get_number,
    get_string,
    get_type,
    render,
)
from lazo.types.expr import List
from lazo.types.null import Null
from lazo.types.scope import Scope
from lazo.builtin.control_forms import (
    cond_form,
    define_form,
    error_form,
    eval_form,
    exit_form,
    if_form,
    lambda_form,
    try_form,
)
from lazo.builtin.iteration_forms import (
    filter_builtin,
    for_builtin,
    map_builtin,
    range_builtin,
    reduce_builtin,
)


def _evaluated(scope: Scope, args: Iterable[Value]) -> list[Value]:
    return [evaluate(arg, scope) for arg in args]


def _expect(args: list[Value], count: int) -> None:
    if len(args) != count:
        raise LazoArityError(len(args), count)


def _expect_at_least(args: list[Value], minimum: int, expected: int = 2) -> None:
    if len(args) < minimum:
        raise LazoArityError(len(args), expected)


def _count(n: float) -> int:
    """Clamp a float to a non-negative repeat count."""
    if not math.isfinite(n) or n <= 0:
        return 0
    return int(n)


# -------------------------------
# Arithmetic
# -------------------------------
def _fold(scope: Scope, args: list[Value], op: Callable[[float, float], float]) -> float:
    _expect_at_least(args, 1)
    numbers = [get_number(v) for v in _evaluated(scope, args)]
    result = numbers[0]
    for x in numbers[1:]:
        result = op(result, x)
    return result


def _divide(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _remainder(a: float, b: float) -> float:
    try:
        return math.fmod(a, b)
    except ValueError:
        return math.nan


def _power(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except OverflowError:
        negative = a < 0 and b.is_integer() and b % 2 == 1
        return -math.inf if negative else math.inf
    except ValueError:
        # pow(0, negative) is a pole, other failures are domain errors
        return math.inf if a == 0 else math.nan


def add(scope: Scope, args: list[Value]) -> float:
    """Sum of all arguments."""
    return _fold(scope, args, lambda a, b: a + b)


def sub(scope: Scope, args: list[Value]) -> float:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    _expect_at_least(args, 1)
    if len(args) == 1:
        return -get_number(evaluate(args[0], scope))
    return _fold(scope, args, lambda a, b: a - b)


def mul(scope: Scope, args: list[Value]) -> float:
    return _fold(scope, args, lambda a, b: a * b)


def div(scope: Scope, args: list[Value]) -> float:
    """Divide left-to-right. Division by zero gives inf or NaN, never an error."""
    return _fold(scope, args, _divide)


def mod(scope: Scope, args: list[Value]) -> float:
    """Remainder with the sign of the dividend (fmod)."""
    return _fold(scope, args, _remainder)


def power(scope: Scope, args: list[Value]) -> float:
    return _fold(scope, args, _power)


# -------------------------------
# Comparison and logic
# -------------------------------
def _pairs(values: list[Value]):
    return zip(values, values[1:])


def equals(scope: Scope, args: list[Value]) -> bool:
    """True if every adjacent pair renders to the same text."""
    _expect_at_least(args, 2)
    rendered = [render(v, readable=False) for v in _evaluated(scope, args)]
    return all(a == b for a, b in _pairs(rendered))


def not_equals(scope: Scope, args: list[Value]) -> bool:
    """True if every adjacent pair renders differently."""
    _expect_at_least(args, 2)
    rendered = [render(v, readable=False) for v in _evaluated(scope, args)]
    return all(a != b for a, b in _pairs(rendered))


def _compare(scope: Scope, args: list[Value], op: Callable[[float, float], bool]) -> bool:
    _expect_at_least(args, 2)
    numbers = [get_number(v) for v in _evaluated(scope, args)]
    return all(op(a, b) for a, b in _pairs(numbers))


def gt(scope: Scope, args: list[Value]) -> bool:
    return _compare(scope, args, lambda a, b: a > b)


def gte(scope: Scope, args: list[Value]) -> bool:
    return _compare(scope, args, lambda a, b: a >= b)


def lt(scope: Scope, args: list[Value]) -> bool:
    return _compare(scope, args, lambda a, b: a < b)


def lte(scope: Scope, args: list[Value]) -> bool:
    return _compare(scope, args, lambda a, b: a <= b)


def logical_and(scope: Scope, args: list[Value]) -> bool:
    _expect_at_least(args, 2)
    return all(get_bool(evaluate(arg, scope)) for arg in args)


def logical_or(scope: Scope, args: list[Value]) -> bool:
    _expect_at_least(args, 2)
    return any(get_bool(evaluate(arg, scope)) for arg in args)


def logical_not(scope: Scope, args: list[Value]) -> bool:
    _expect(args, 1)
    return not get_bool(evaluate(args[0], scope))


# -------------------------------
# Strings
# -------------------------------
def concat(scope: Scope, args: list[Value]) -> str:
    return "".join(get_string(v) for v in _evaluated(scope, args))


def format_builtin(scope: Scope, args: list[Value]) -> str:
    """(format template value): every {} in template is replaced by value."""
    _expect(args, 2)
    template, value = _evaluated(scope, args)
    return get_string(template).replace("{}", get_string(value))


def repeat(scope: Scope, args: list[Value]) -> str:
    _expect(args, 2)
    text, times = _evaluated(scope, args)
    return get_string(text) * _count(get_number(times))


def join(scope: Scope, args: list[Value]) -> str:
    """(join list separator)"""
    _expect(args, 2)
    items, sep = _evaluated(scope, args)
    return get_string(sep).join(get_string(i) for i in get_list(items))


def split(scope: Scope, args: list[Value]) -> List:
    """(split text separator); an empty separator splits between characters."""
    _expect(args, 2)
    text, sep = (get_string(v) for v in _evaluated(scope, args))
    if sep == "":
        return List(["", *text, ""])
    return List(text.split(sep))


# -------------------------------
# Lists
# -------------------------------
def car(scope: Scope, args: list[Value]) -> Value:
    """First element, or null for an empty list."""
    _expect(args, 1)
    items = get_list(evaluate(args[0], scope))
    return items[0] if items else Null


def cdr(scope: Scope, args: list[Value]) -> List:
    _expect(args, 1)
    return List(get_list(evaluate(args[0], scope))[1:])


def length(scope: Scope, args: list[Value]) -> float:
    _expect(args, 1)
    return float(len(get_list(evaluate(args[0], scope))))


def reverse(scope: Scope, args: list[Value]) -> List:
    _expect(args, 1)
    return List(reversed(get_list(evaluate(args[0], scope))))


# -------------------------------
# Introspection
# -------------------------------
def type_builtin(scope: Scope, args: list[Value]) -> str:
    _expect(args, 1)
    return get_type(evaluate(args[0], scope))


def cast(scope: Scope, args: list[Value]) -> Value:
    """(cast value type-name) where type-name is number, string, bool or list."""
    _expect(args, 2)
    value, type_name = _evaluated(scope, args)
    match get_string(type_name):
        case "number":
            return get_number(value)
        case "string":
            return get_string(value)
        case "bool":
            return get_bool(value)
        case "list":
            return List(get_list(value))
        case other:
            raise LazoRuntimeError(f"unknown type name `{other}`")


# -------------------------------
# Console I/O
# -------------------------------
def print_builtin(scope: Scope, args: list[Value]) -> Value:
    """Write each argument's string form to stdout, without a trailing newline."""
    for v in _evaluated(scope, args):
        sys.stdout.write(get_string(v))
    sys.stdout.flush()
    return Null


def input_builtin(scope: Scope, args: list[Value]) -> str:
    """(input [prompt]) reads one line from stdin, stripped."""
    if len(args) > 1:
        raise LazoArityError(len(args), 1)
    if args:
        sys.stdout.write(get_string(evaluate(args[0], scope)))
    sys.stdout.flush()
    try:
        line = sys.stdin.readline()
    except OSError as ex:
        raise LazoRuntimeError("reading line failed") from ex
    return line.strip()


def debug(scope: Scope, args: list[Value]) -> Value:
    """Print each raw argument next to what it loads to."""
    for arg in args:
        print(f"Debug: {render(arg)} = {render(scope.load(arg))}")
    return Null


BUILTINS: dict[str, Value] = {
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "%": mod,
    "^": power,
    "=": equals,
    "!=": not_equals,
    ">": gt,
    ">=": gte,
    "<": lt,
    "<=": lte,
    "&": logical_and,
    "|": logical_or,
    "!": logical_not,
    "concat": concat,
    "format": format_builtin,
    "repeat": repeat,
    "join": join,
    "split": split,
    "car": car,
    "cdr": cdr,
    "len": length,
    "reverse": reverse,
    "type": type_builtin,
    "cast": cast,
    "print": print_builtin,
    "input": input_builtin,
    "debug": debug,
    "eval": eval_form,
    "define": define_form,
    "lambda": lambda_form,
    "if": if_form,
    "cond": cond_form,
    "try": try_form,
    "error": error_form,
    "exit": exit_form,
    "range": range_builtin,
    "map": map_builtin,
    "filter": filter_builtin,
    "for": for_builtin,
    "reduce": reduce_builtin,
    "new-line": "\n",
    "double-quote": '"',
    "tab": "\t",
}


def register(scope: Scope) -> None:
    """Register all builtin functions and constants into the given scope."""
    scope.update(BUILTINS)
