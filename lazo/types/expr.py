"""Sequence values produced by the reader.

`Expr` and `List` share a representation (an immutable tuple of values) but
never compare equal to each other: parentheses always denote a pending call,
brackets always denote data.
"""

from __future__ import annotations

from typing import Iterable

from lazo import Value


class _Sequence(tuple):
    __slots__ = ()

    def __new__(cls, items: Iterable[Value] = ()):
        return super().__new__(cls, items)

    def __eq__(self, other: object) -> bool:
        from lazo.types.coerce import is_equal
        return is_equal(self, other)

    def __ne__(self, other: object) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash((type(self).__name__, tuple(self)))

    def __repr__(self) -> str:
        from lazo.types.coerce import render
        return render(self)


class Expr(_Sequence):
    """A parenthesized form: head is the callable, the rest are raw arguments."""
    __slots__ = ()


class List(_Sequence):
    """A bracketed form: literal data, evaluates to itself."""
    __slots__ = ()
