from lazo.types.symbol import Symbol
from lazo.types.null import Null, NullType
from lazo.types.expr import Expr, List
from lazo.types.lambda_fn import Lambda
from lazo.types.scope import Scope
