"""Runtime scope for Lazo.

A Scope is a flat mapping from names to values. There is no parent link:
calling a user-defined function copies the caller's scope in full, so
bindings made inside the call never leak back to the caller.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator, Mapping, Optional

from lazo import Value
from lazo.types.symbol import Symbol


def _key(name: str | Symbol) -> str:
    if isinstance(name, Symbol):
        return name.name
    if not isinstance(name, str):
        raise TypeError(f"Scope names must be strings, got {type(name).__name__}")
    return name


class Scope:
    """Flat mapping from names to Lazo values."""

    __slots__ = ("vars",)

    def __init__(self, bindings: Optional[Mapping[str, Value]] = None):
        self.vars: dict[str, Value] = dict(bindings) if bindings else {}

    def define(self, name: str | Symbol, value: Value) -> None:
        """Bind `name` to `value`, replacing any existing binding."""
        self.vars[_key(name)] = value

    def get(self, name: str | Symbol, default: Value = None) -> Value:
        return self.vars.get(_key(name), default)

    def load(self, value: Value) -> Value:
        """Substitute a bound Symbol by its value, without evaluating further."""
        if isinstance(value, Symbol):
            return self.vars.get(value.name, value)
        return value

    def update(self, mapping: Mapping[str, Value]) -> None:
        """Bulk-define a mapping of name -> value."""
        for k, v in mapping.items():
            self.define(k, v)

    def copy(self) -> Scope:
        """Snapshot of every binding, used as the scope of a function call."""
        return Scope(self.vars)

    def __contains__(self, name: object) -> bool:
        if isinstance(name, Symbol):
            name = name.name
        return name in self.vars

    def __iter__(self) -> Iterator[str]:
        return iter(self.vars)

    def __len__(self) -> int:
        return len(self.vars)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write the bindings into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Scope ")
            self._write_vars(buffer)
            buffer.write(">")
            return buffer.getvalue()
