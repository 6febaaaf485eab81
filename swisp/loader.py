from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Protocol

from swisp import LispValue
from swisp.config import get_load_path, get_prelude_path
from swisp.errors import LoadError
from swisp.evaluation.evaluator import evaluate
from swisp.output import OutputChannel
from swisp.reader.parser import parse
from swisp.types.environment import Environment
from swisp.types.expression import Error, SExpr

logger = logging.getLogger(__name__)


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str) -> None: ...


# Map a load name to a file: absolute as-is, else cwd then SWISP_LOAD_PATH

def resolve_source(name: str) -> Optional[Path]:
    path = Path(name)
    if path.is_absolute():
        return path if path.is_file() else None
    for root in [Path.cwd(), *get_load_path()]:
        candidate = root / path
        if candidate.is_file():
            return candidate
    return None


def read_source(name: str) -> str:
    path = resolve_source(name)
    if path is None:
        raise LoadError(f"Could not load library {name}")
    try:
        return path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(f"Could not load library {name}") from exc


def eval_source(env: Environment, code: str, output: OutputChannel) -> LispValue:
    """Evaluate each top-level form of `code` in turn.

    An Error produced by one form is written to `output` and the remaining
    forms still run. A parse failure stops before anything is evaluated.
    """
    forms = parse(code)
    if isinstance(forms, Error):
        return forms
    while len(forms):
        result = evaluate(env, forms.pop(0))
        if isinstance(result, Error):
            output.write(f"{result}\n")
    return SExpr()


def load_file(env: Environment, name: str, output: OutputChannel) -> LispValue:
    try:
        code = read_source(name)
    except LoadError as exc:
        logger.warning("%s", exc)
        return Error(str(exc))
    logger.debug("loading %s", name)
    return eval_source(env, code, output)


# Prelude convenience loader

def load_prelude(itp: _HasEvalPrelude) -> None:
    path = get_prelude_path()
    if not path.is_file():
        raise FileNotFoundError(f"Cannot find prelude '{path}' (SWISP_PRELUDE_PATH)")
    logger.debug("loading prelude %s", path)
    itp.eval_prelude(path.read_text(encoding='utf-8'))
