"""
  Lazo Reader: tokenizer and parser

- The tokenizer only splits at the top level: a whole parenthesized or
  bracketed form comes back as a single token, whitespace and all.
- The parser turns one token into one value, re-tokenizing the interior of
  (...) and [...] forms and recursing.

    - numbers -> float
    - true / false -> bool
    - null -> Null
    - "text" -> str (quotes stripped, no escapes)
    - (a b c) -> Expr
    - [a b c] -> List
    - 'name -> Symbol (explicit)
    - anything else -> Symbol
"""

from __future__ import annotations

from typing import Iterator

from lazo import Value
from lazo.errors import LazoSyntaxError
from lazo.types.coerce import parse_number
from lazo.types.expr import Expr, List
from lazo.types.null import Null
from lazo.types.symbol import Symbol

OPENERS = "(["
CLOSERS = ")]"
# Space, full-width space, newline, tab, carriage return
WHITESPACE = frozenset(" 　\n\t\r")


def tokenize(source: str) -> list[str]:
    """Split source text into top-level tokens."""
    tokens: list[str] = []
    current: list[str] = []
    depth = 0
    in_quote = False

    for ch in source:
        if ch in OPENERS and not in_quote:
            current.append(ch)
            depth += 1
        elif ch in CLOSERS and not in_quote:
            current.append(ch)
            if depth == 0:
                raise LazoSyntaxError("there's duplicate end of the parentheses")
            depth -= 1
        elif ch in WHITESPACE and not in_quote:
            if depth != 0:
                current.append(ch)
            elif current:
                tokens.append("".join(current))
                current.clear()
        elif ch == '"':
            in_quote = not in_quote
            current.append(ch)
        else:
            current.append(ch)

    if in_quote:
        raise LazoSyntaxError("there's not end of the quote")
    if depth != 0:
        raise LazoSyntaxError("there's not end of the parentheses")

    if current:
        tokens.append("".join(current))
    return tokens


def _parse_interior(token: str) -> list[Value]:
    return [parse(t) for t in tokenize(token[1:-1])]


def parse(token: str) -> Value:
    """Parse a single token into a value. Order of the checks matters."""
    token = token.strip()

    number = parse_number(token)
    if number is not None:
        return number

    if token == "true":
        return True
    if token == "false":
        return False

    if token == "null":
        return Null

    if len(token) >= 2 and token.startswith('"') and token.endswith('"'):
        return token[1:-1]

    if token.startswith("(") and token.endswith(")"):
        return Expr(_parse_interior(token))

    if token.startswith("[") and token.endswith("]"):
        return List(_parse_interior(token))

    if token.startswith("'"):
        return Symbol(token[1:])

    return Symbol(token)


def read(source: str) -> Iterator[Value]:
    """Tokenize the whole source up front, then parse one form at a time."""
    for token in tokenize(source):
        yield parse(token)
