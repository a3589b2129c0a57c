from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional

from lazo import Value
from lazo.builtin.env_builtin import register
from lazo.errors import LazoError, LazoRuntimeError
from lazo.evaluation.evaluator import evaluate
from lazo.reader.parser import parse, tokenize
from lazo.types.coerce import render
from lazo.types.null import Null
from lazo.types.scope import Scope

log = logging.getLogger(__name__)

ErrorHandler = Callable[[LazoError], None]

TOO_DEEP = "maximum recursion depth exceeded"


class Interpreter:
    """
    Reads and evaluates Lazo code against a session scope.
    The scope starts with the builtins and keeps definitions across calls.
    """

    def __init__(self, prelude: str | None = None):
        self.scope: Scope = Scope()
        register(self.scope)

        if prelude:
            self.eval_prelude(prelude)

    def eval_prelude(self, code: str) -> None:
        """Evaluate a string of Lazo code for its definitions."""
        self.run(code)

    def read_form(self, token: str) -> Value:
        """Parse one top-level token; nesting past the recursion limit is an error."""
        try:
            return parse(token)
        except RecursionError as ex:
            raise LazoRuntimeError(TOO_DEEP) from ex

    def evaluate(self, expr: Value) -> Value:
        """Evaluate one parsed form in the session scope."""
        if log.isEnabledFor(logging.DEBUG):
            log.debug("evaluating %s", render(expr))
        try:
            return evaluate(expr, self.scope)
        except RecursionError as ex:
            raise LazoRuntimeError(TOO_DEEP) from ex

    def iter_results(self, code: str, on_error: Optional[ErrorHandler] = None) -> Iterator[Value]:
        """Evaluate each top-level form of `code` in turn, yielding its value.

        Without `on_error` the first error propagates and stops the run. With
        it, the error is handed over and evaluation moves on to the next form;
        a tokenizer error still ends the run since there are no forms to
        move on to.
        """
        try:
            tokens = tokenize(code)
        except LazoError as err:
            if on_error is None:
                raise
            log.warning("%s", err)
            on_error(err)
            return

        for token in tokens:
            try:
                result = self.evaluate(self.read_form(token))
            except LazoError as err:
                if on_error is None:
                    raise
                log.warning("%s", err)
                on_error(err)
                continue
            yield result

    def run(self, code: str, on_error: Optional[ErrorHandler] = None) -> list[Value]:
        return list(self.iter_results(code, on_error))

    def eval(self, code: str) -> Value:
        """Evaluate code and return null, the single result, or a list of results."""
        results = self.run(code)
        if not results:
            return Null
        if len(results) == 1:
            return results[0]
        return results
