from __future__ import annotations
import os

# Defaults
_DEFAULT_RECURSION_LIMIT = 10_000
_DEFAULT_LOG_LEVEL = 'WARNING'
_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def get_recursion_limit() -> int:
    # never drop below what the interpreter itself needs to start
    return max(int_from_env('SCRAP_RECURSION_LIMIT', _DEFAULT_RECURSION_LIMIT), 100)


def get_log_level() -> str:
    level = (os.environ.get('SCRAP_LOG_LEVEL') or _DEFAULT_LOG_LEVEL).strip().upper()
    return level if level in _LOG_LEVELS else _DEFAULT_LOG_LEVEL
