import pytest

from lazo.builtin.env_builtin import register
from lazo.interpreter import Interpreter
from lazo.types.scope import Scope


@pytest.fixture
def scope():
    """Fresh scope with builtins loaded."""
    s = Scope()
    register(s)
    return s


@pytest.fixture
def interp():
    return Interpreter()


@pytest.fixture(autouse=True)
def _isolated_history(tmp_path, monkeypatch):
    # Keep the REPL away from the real ~/.lazo_history
    monkeypatch.setenv("LAZO_HISTORY_FILE", str(tmp_path / "history"))
