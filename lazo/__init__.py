# Core type aliases for Lazo's data model.
# Runtime values are plain Python values plus a handful of small classes:
#   Number -> float, String -> str, Bool -> bool, Symbol -> Symbol,
#   List -> List, Expr -> Expr, Function -> Lambda or a Python callable,
#   Null -> Null.
#
# Naming guidance:
# - Value: anything the reader produces or the evaluator returns. Code and data
#   share one representation, an Expr is just a Value that has not been applied yet.

from typing import Any, Callable

__version__ = "0.1.0"

# Runtime value alias
Value = Any

# Evaluator function type: passed to apply so user functions can run their body
EvaluatorFn = Callable[..., Value]
