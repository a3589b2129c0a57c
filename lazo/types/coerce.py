"""Total coercions, canonical rendering and structural equality for Lazo values.

Builtins never type-check their arguments. Instead they coerce whatever they
receive through the functions below, which accept every variant and never
raise: (+ "2" 3) is 5, (! null) is true, and so on.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Optional

from lazo import Value
from lazo.types.expr import Expr, List
from lazo.types.lambda_fn import Lambda
from lazo.types.null import NullType
from lazo.types.symbol import Symbol

# Optional sign, decimal mantissa, optional exponent; or inf/infinity/nan.
# ASCII digits only, no underscores (float() alone is more permissive).
NUMBER_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def parse_number(text: str) -> Optional[float]:
    """Parse a numeric literal, or return None if `text` is not one."""
    if NUMBER_RE.fullmatch(text):
        return float(text)
    return None


def is_number(value: Value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def render_number(n: float) -> str:
    """Shortest round-trip digits, positional notation, no trailing '.0'."""
    n = float(n)
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "inf" if n > 0 else "-inf"
    text = format(Decimal(repr(n)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


_KEYWORDS = frozenset(("true", "false", "null"))
_ENCLOSERS = frozenset(('""', "()", "[]"))


def _reads_as_symbol(name: str) -> bool:
    """True if the reader turns `name` back into the same symbol."""
    if parse_number(name.strip()) is not None or name in _KEYWORDS:
        return False
    if not name or name.startswith("'"):
        return False
    return not (len(name) >= 2 and name[0] + name[-1] in _ENCLOSERS)


def render(value: Value, readable: bool = True) -> str:
    """Canonical text of a value; re-reading it yields an equal value.

    With `readable` off, symbols are written as their bare name even where
    the reader would take that name for another literal.
    """
    match value:
        case str():
            return f'"{value}"'
        case bool():
            return "true" if value else "false"
        case int() | float():
            return render_number(value)
        case Symbol():
            if readable and not _reads_as_symbol(value.name):
                return "'" + value.name
            return value.name
        case List():
            return "[" + " ".join(render(x, readable) for x in value) + "]"
        case Expr():
            return "(" + " ".join(render(x, readable) for x in value) + ")"
        case NullType():
            return "null"
        case Lambda():
            return str(value)
        case _ if callable(value):
            return f"function({getattr(value, '__name__', type(value).__name__)})"
        case _:
            return repr(value)


def get_number(value: Value) -> float:
    match value:
        case bool():
            return 1.0 if value else 0.0
        case int() | float():
            return float(value)
        case str() | Symbol():
            n = parse_number(str(value).strip())
            return 0.0 if n is None else n
        case Expr() | List():
            return get_number(value[0]) if value else 0.0
        case _:
            # Function, Null
            return 0.0


def get_string(value: Value) -> str:
    match value:
        case str():
            return value
        case bool():
            return "true" if value else "false"
        case int() | float():
            return render_number(value)
        case Symbol():
            return value.name
        case _:
            return render(value)


def get_bool(value: Value) -> bool:
    match value:
        case bool():
            return value
        case int() | float():
            return value != 0
        case str():
            return value != ""
        case Symbol():
            return value.name != ""
        case Expr() | List():
            return len(value) > 0
        case _:
            return False


def get_list(value: Value) -> list[Value]:
    match value:
        case Expr() | List():
            return list(value)
        case _:
            return [value]


def get_type(value: Value) -> str:
    match value:
        case bool():
            return "bool"
        case int() | float():
            return "number"
        case str():
            return "string"
        case Symbol():
            return "symbol"
        case Expr():
            return "expr"
        case List():
            return "list"
        case NullType():
            return "null"
        case _:
            return "function"


def is_equal(a: Value, b: Value) -> bool:
    """Deep, type-strict equality: true and 1 differ, Expr and List differ, NaN equals NaN."""
    if a is b:
        return True
    if type(a) is not type(b):
        # Host code may hand us ints; they are still Numbers
        return is_number(a) and is_number(b) and float(a) == float(b)
    match a:
        case Expr() | List():
            return len(a) == len(b) and all(is_equal(x, y) for x, y in zip(a, b))
        case Lambda():
            return is_equal(Expr(a.params), Expr(b.params)) and is_equal(Expr(a.body), Expr(b.body))
        case float():
            return a == b or (math.isnan(a) and math.isnan(b))
        case _:
            return a == b


