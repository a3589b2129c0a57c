"""Command-line entry point: run a script file, a one-liner, or the REPL."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from lazo import __version__
from lazo import config
from lazo.errors import LazoError
from lazo.interpreter import Interpreter
from lazo.shell import Shell

log = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazo",
        description="Lisp like programming language",
    )
    parser.add_argument("file", nargs="?", help="script file to be running (if empty, starts the REPL)")
    parser.add_argument("-l", "--one-liner", metavar="CODE", help="run code quickly")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="logging level (default: $LAZO_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("-V", "--version", action="version", version=f"Lazo {__version__}")
    return parser


def run_batch(interpreter: Interpreter, code: str) -> int:
    """Evaluate code top to bottom; the first error stops the run."""
    try:
        interpreter.run(code)
    except LazoError as err:
        log.debug("batch run aborted", exc_info=True)
        print(err, file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=args.log_level or config.get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.setrecursionlimit(max(sys.getrecursionlimit(), config.get_recursion_limit()))

    interpreter = Interpreter()

    if args.file is not None:
        try:
            code = Path(args.file).read_text(encoding="utf-8")
        except OSError:
            print("Error! opening file is fault", file=sys.stderr)
            return 1
        return run_batch(interpreter, code)

    if args.one_liner is not None:
        return run_batch(interpreter, args.one_liner)

    Shell(interpreter).run()
    return 0
