from __future__ import annotations
import os
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional


# Resolve installation dir (stutter package directory)
_STUTTER_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_FILE = _STUTTER_DIR / 'prelude' / 'stdlib.lisp'
_DEFAULT_USER_STDLIB = Path('~') / '.stutter' / 'stdlib.lisp'
_DEFAULT_MAX_DEPTH = 10000
_DEFAULT_MAX_LIST_LEN = 1_000_000
_DEFAULT_LOG_LEVEL = 'WARNING'


def path_from_env(var: str) -> Optional[Path]:
    raw = os.environ.get(var, '').strip()
    if not raw:
        return None
    return Path(raw).expanduser()


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var, '').strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{var} must be positive, got {value}")
    return value


def get_stdlib_path() -> Path:
    """STUTTER_STDLIB_PATH, then ~/.stutter/stdlib.lisp, then the packaged prelude."""
    configured = path_from_env('STUTTER_STDLIB_PATH')
    if configured is not None:
        return configured
    user = _DEFAULT_USER_STDLIB.expanduser()
    if user.is_file():
        return user
    return _DEFAULT_PRELUDE_FILE


def get_max_depth() -> int:
    return int_from_env('STUTTER_MAX_DEPTH', _DEFAULT_MAX_DEPTH)


def get_max_list_len() -> int:
    """Largest List a single `range` may build."""
    return int_from_env('STUTTER_MAX_LIST_LEN', _DEFAULT_MAX_LIST_LEN)


def get_log_level() -> str:
    return os.environ.get('STUTTER_LOG_LEVEL', '').strip().upper() or _DEFAULT_LOG_LEVEL


@contextmanager
def unlimited_int_digits() -> Iterator[None]:
    """Lift CPython's int/str conversion digit limit for the duration of the block.

    Ints are arbitrary precision both as literals and when printed. The host
    setting is restored on exit, so importing or embedding Stutter leaves it alone.
    """
    previous = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(0)
    try:
        yield
    finally:
        sys.set_int_max_str_digits(previous)
