from __future__ import annotations
import logging
import os
from pathlib import Path

# Defaults
_DEFAULT_HISTORY_FILE = Path.home() / '.lazo_history'
_DEFAULT_RECURSION_LIMIT = 5000
_DEFAULT_LOG_LEVEL = 'WARNING'


def path_from_env(var: str, default: Path) -> Path:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    return Path(raw.strip()).expanduser()


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_history_file() -> Path:
    return path_from_env('LAZO_HISTORY_FILE', _DEFAULT_HISTORY_FILE)


def get_recursion_limit() -> int:
    # never lower the interpreter's own limit
    return max(int_from_env('LAZO_RECURSION_LIMIT', _DEFAULT_RECURSION_LIMIT), 1000)


def get_log_level() -> int:
    name = os.environ.get('LAZO_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING
