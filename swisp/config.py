from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List


# Resolve installation dir (swisp package directory)
_SWISP_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE = _SWISP_DIR / 'prelude' / 'std.swisp'
_DEFAULT_PROMPT = 'swisp> '
_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_RECURSION_LIMIT = 10000


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    return [Path(p.strip()) for p in raw.split(os.pathsep) if p.strip()]


def get_load_path() -> List[Path]:
    """Directories searched by `load` for relative names, after the cwd."""
    return paths_from_env('SWISP_LOAD_PATH', [])


def get_prelude_path() -> Path:
    roots = paths_from_env('SWISP_PRELUDE_PATH', [_DEFAULT_PRELUDE])
    # treat as a single file; if a directory is set, look for std.swisp inside it
    p = roots[0]
    return p / 'std.swisp' if p.is_dir() else p


def get_prompt() -> str:
    return os.environ.get('SWISP_PROMPT', _DEFAULT_PROMPT)


def get_log_level() -> str:
    return os.environ.get('SWISP_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()


def get_recursion_limit() -> int:
    """Python recursion limit an Interpreter raises the host limit to."""
    raw = os.environ.get('SWISP_RECURSION_LIMIT')
    return int(raw) if raw else _DEFAULT_RECURSION_LIMIT
