import io
import logging
import sys
from pathlib import Path

import pytest

from lazo import __version__, config
from lazo.cli import main
from lazo.errors import LazoArityError, LazoRuntimeError, LazoSyntaxError
from lazo.interpreter import Interpreter
from lazo.shell import Shell
from lazo.types.null import Null


# -----------------------------------------------------
# Interpreter
# -----------------------------------------------------

def test_eval_single_form(interp):
    assert interp.eval("(+ 1 2)") == 3.0


def test_eval_multiple_forms_returns_every_result(interp):
    assert interp.eval("(define x 10) (+ x 5)") == [10.0, 15.0]


def test_eval_of_nothing_is_null(interp):
    assert interp.eval("") is Null
    assert interp.eval("  \n") is Null


def test_session_scope_persists_between_calls(interp):
    interp.eval("(define (sq n) (* n n))")
    assert interp.eval("(sq 7)") == 49.0


def test_errors_propagate_without_handler(interp):
    with pytest.raises(LazoArityError):
        interp.eval("((lambda (a) a))")
    with pytest.raises(LazoSyntaxError):
        interp.eval("(+ 1")


def test_on_error_continues_with_next_form(interp):
    errors = []
    results = interp.run('(+ 1 1) (error "first") (+ 2 2)', on_error=errors.append)
    assert results == [2.0, 4.0]
    assert [str(e) for e in errors] == ["Runtime Error! first"]


def test_tokenizer_error_ends_the_run(interp):
    errors = []
    assert interp.run("(+ 1 1) (", on_error=errors.append) == []
    assert len(errors) == 1
    assert isinstance(errors[0], LazoSyntaxError)


def test_errors_are_logged(interp, caplog):
    with caplog.at_level(logging.WARNING, logger="lazo.interpreter"):
        interp.run('(error "logged")', on_error=lambda err: None)
    assert "Runtime Error! logged" in caplog.text


def test_prelude_definitions_are_available():
    interp = Interpreter(prelude="(define (double x) (* x 2)) (define ten 10)")
    assert interp.eval("(double ten)") == 20.0


def test_deep_recursion_becomes_a_runtime_error(interp):
    interp.eval("(define (loop n) (if (<= n 0) 0 (loop (- n 1))))")
    with pytest.raises(LazoRuntimeError) as exc:
        interp.eval("(loop 3)")
    assert "maximum recursion depth exceeded" in str(exc.value)


def nested_call(depth):
    return "(+ " * depth + "1" + ")" * depth


def test_nesting_past_the_recursion_limit_is_reported(interp):
    errors = []
    source = nested_call(sys.getrecursionlimit()) + " (+ 1 1)"
    assert interp.run(source, on_error=errors.append) == [2.0]
    assert len(errors) == 1
    assert isinstance(errors[0], LazoRuntimeError)
    assert "maximum recursion depth exceeded" in str(errors[0])


def test_nesting_past_the_recursion_limit_raises_without_handler(interp):
    with pytest.raises(LazoRuntimeError):
        interp.eval(nested_call(sys.getrecursionlimit()))


def test_interpreters_do_not_share_scope():
    a, b = Interpreter(), Interpreter()
    a.eval("(define only-a 1)")
    assert "only-a" in a.scope
    assert "only-a" not in b.scope


# -----------------------------------------------------
# Shell
# -----------------------------------------------------

def run_shell(source, interpreter=None):
    out = io.StringIO()
    shell = Shell(interpreter, stdin=io.StringIO(source), stdout=out)
    shell.use_rawinput = False
    shell.run()
    return out.getvalue()


def test_shell_prints_each_result():
    out = run_shell('(+ 1 2)\n"hi" [1 2]\n')
    assert out.startswith(f"Lazo {__version__}\n")
    assert "3\n" in out
    assert '"hi"\n[1 2]\n' in out


def test_shell_reports_errors_and_keeps_going():
    out = run_shell('(error "oops")\n(define x 4)\nx\n')
    assert "Runtime Error! oops" in out
    assert "> 4\n" in out


def test_shell_keeps_definitions_across_lines():
    interp = Interpreter()
    run_shell("(define y 9)\n", interp)
    assert interp.scope.get("y") == 9.0


def test_shell_ignores_blank_lines():
    out = run_shell("(+ 1 1)\n\n")
    assert out.count("2\n") == 1


def test_shell_evaluates_command_words_as_code():
    out = run_shell("help\n?x\nEOF\n!\n(+ 1 1)\n")
    assert "> help\n> ?x\n> EOF\n" in out
    assert "> 2\n" in out


def test_shell_survives_deeply_nested_input():
    out = run_shell(nested_call(sys.getrecursionlimit()) + "\n(+ 2 2)\n")
    assert "maximum recursion depth exceeded" in out
    assert "> 4\n" in out


def test_shell_uses_configured_history_file(tmp_path):
    shell = Shell(stdin=io.StringIO(""), stdout=io.StringIO())
    assert shell.history_file == tmp_path / "history"


# -----------------------------------------------------
# Command line
# -----------------------------------------------------

def test_cli_one_liner(capsys):
    assert main(["-l", '(print (+ 1 2) new-line)']) == 0
    assert capsys.readouterr().out == "3\n"


def test_cli_runs_a_file(tmp_path, capsys):
    script = tmp_path / "hello.lazo"
    script.write_text('(define (greet n) (concat "hello " n))\n(print (greet "world"))\n')
    assert main([str(script)]) == 0
    assert capsys.readouterr().out == "hello world"


def test_cli_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.lazo")]) == 1
    assert "Error! opening file is fault" in capsys.readouterr().err


def test_cli_stops_at_first_error(capsys):
    assert main(["-l", '(print "a") (error "stop") (print "b")']) == 1
    captured = capsys.readouterr()
    assert captured.out == "a"
    assert "Runtime Error! stop" in captured.err


def test_cli_tokenizer_error(capsys):
    assert main(["-l", "(print 1"]) == 1
    assert "not end of the parentheses" in capsys.readouterr().err


def test_cli_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert capsys.readouterr().out.strip() == f"Lazo {__version__}"


def test_cli_accepts_log_level_in_any_case():
    assert main(["--log-level", "debug", "-l", "1"]) == 0


def test_cli_rejects_unknown_log_level(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--log-level", "bogus", "-l", "1"])
    assert exc.value.code == 2
    assert "invalid choice" in capsys.readouterr().err


def test_cli_exit_form(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["-l", "(exit 4)"])
    assert exc.value.code == 4


# -----------------------------------------------------
# Configuration
# -----------------------------------------------------

def test_history_file_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("LAZO_HISTORY_FILE", str(tmp_path / "h"))
    assert config.get_history_file() == tmp_path / "h"
    monkeypatch.setenv("LAZO_HISTORY_FILE", "  ")
    assert config.get_history_file() == Path.home() / ".lazo_history"


@pytest.mark.parametrize(
    "raw,expected",
    [(None, 5000), ("20000", 20000), ("10", 1000), ("lots", 5000)],
)
def test_recursion_limit_from_env(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("LAZO_RECURSION_LIMIT", raising=False)
    else:
        monkeypatch.setenv("LAZO_RECURSION_LIMIT", raw)
    assert config.get_recursion_limit() == expected


@pytest.mark.parametrize(
    "raw,expected",
    [(None, logging.WARNING), ("debug", logging.DEBUG), ("nonsense", logging.WARNING)],
)
def test_log_level_from_env(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("LAZO_LOG_LEVEL", raising=False)
    else:
        monkeypatch.setenv("LAZO_LOG_LEVEL", raw)
    assert config.get_log_level() == expected
