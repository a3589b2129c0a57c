"""Interactive mode for the lazo interpreter. Uses cmd as backend."""

from __future__ import annotations

import cmd
import logging

from termcolor import colored

from lazo import __version__
from lazo import config
from lazo.errors import LazoError
from lazo.interpreter import Interpreter
from lazo.types.coerce import render

try:
    import readline
except ImportError:  # not available on every platform; cmd degrades the same way
    readline = None

log = logging.getLogger(__name__)


class Shell(cmd.Cmd):
    """Lazo read-eval-print loop."""
    intro = f"Lazo {__version__}"
    prompt = "> "

    def __init__(self, interpreter: Interpreter | None = None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.interpreter = interpreter if interpreter is not None else Interpreter()
        self.history_file = config.get_history_file()

    def default(self, line):
        """Evaluates every form on the line, printing each result or error."""
        for result in self.interpreter.iter_results(line, on_error=self.report):
            self.stdout.write(render(result) + "\n")

    def report(self, error: LazoError) -> None:
        self.stdout.write(colored(str(error), "red", attrs=["bold"]) + "\n")

    def read_line(self) -> str | None:
        """Next line of input, or None once input is exhausted."""
        if self.use_rawinput:
            try:
                return input(self.prompt)
            except EOFError:
                return None
        self.stdout.write(self.prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        return line.rstrip("\r\n") if line else None

    def cmdloop(self, intro=None):
        """Like cmd.Cmd.cmdloop, but only real end of input stops it."""
        self.preloop()
        if intro:
            self.stdout.write(str(intro) + "\n")
        stop = False
        while not stop:
            line = self.read_line()
            if line is None:
                self.stdout.write("\n")
                break
            stop = self.onecmd(line)
        self.postloop()

    def onecmd(self, line):
        """Every non-blank line is Lazo source, including `help`, `?x` and `EOF`."""
        if line.strip():
            self.default(line)
        return False

    def load_history(self) -> None:
        if readline is None:
            return
        try:
            readline.read_history_file(str(self.history_file))
        except OSError:
            log.debug("no history at %s", self.history_file)

    def save_history(self) -> None:
        if readline is None:
            return
        try:
            readline.write_history_file(str(self.history_file))
        except OSError as ex:
            log.warning("could not save history to %s: %s", self.history_file, ex)

    def run(self) -> None:
        """Loop until EOF; Ctrl-C abandons the current line only."""
        self.load_history()
        intro = self.intro
        try:
            while True:
                try:
                    self.cmdloop(intro)
                    return
                except KeyboardInterrupt:
                    self.stdout.write("^C\n")
                    intro = ""
        finally:
            self.save_history()
