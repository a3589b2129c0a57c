"""User-defined function representation for Lazo."""

from __future__ import annotations

from io import StringIO
from typing import Iterable

from lazo import Value


class Lambda:
    """A user-defined function: ordered parameter names and an ordered body.

    There is no captured environment. The body runs in a copy of the scope
    at the call site (see lazo.evaluation.apply).
    """

    __slots__ = ("params", "body")

    def __init__(self, params: Iterable[Value], body: Iterable[Value]):
        self.params: tuple[Value, ...] = tuple(params)
        self.body: tuple[Value, ...] = tuple(body)

    @property
    def arity(self) -> int:
        return len(self.params)

    def param_names(self) -> list[str]:
        from lazo.types.coerce import get_string
        return [get_string(p) for p in self.params]

    def __str__(self) -> str:
        from lazo.types.coerce import render
        with StringIO() as buffer:
            buffer.write("(lambda (")
            buffer.write(" ".join(render(p) for p in self.params))
            buffer.write(") ")
            buffer.write(" ".join(render(b) for b in self.body))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Return the Lisp-style representation of the lambda."""
        return str(self)
