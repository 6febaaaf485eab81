from __future__ import annotations

import sys
from typing import Literal

from swisp import LispValue
from swisp.builtin.env_builtin import register
from swisp.config import get_recursion_limit
from swisp.errors import SwispError
from swisp.evaluation.evaluator import evaluate
from swisp.loader import eval_source, load_file, load_prelude
from swisp.output import OutputChannel, StreamOutput
from swisp.reader.parser import RECURSION_LIMIT_ERROR, parse
from swisp.types.environment import Environment
from swisp.types.expression import Error


def raise_recursion_limit(limit: int) -> None:
    """Raise the host recursion limit to `limit`; never lowers it."""
    if sys.getrecursionlimit() < limit:
        sys.setrecursionlimit(limit)


class Interpreter:
    """
    Owns the global Environment, seeded with the builtins, and feeds source
    text through the reader and evaluator. Definitions persist across calls.
    """

    def __init__(
        self,
        prelude: str | None | Literal['auto'] = 'auto',
        output: OutputChannel | None = None,
    ):
        raise_recursion_limit(get_recursion_limit())
        self.output: OutputChannel = output if output is not None else StreamOutput()
        self.env: Environment = Environment()
        register(self.env, self.output)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            load_prelude(self)
        elif prelude:
            self.eval_prelude(prelude)

    def eval_prelude(self, code: str) -> None:
        """Evaluate library code form by form; a parse failure is fatal."""
        result = eval_source(self.env, code, self.output)
        if isinstance(result, Error):
            raise SwispError(f"Prelude could not be read: {result.message}")

    def eval(self, code: str) -> LispValue:
        """Read `code` as one S-expression and evaluate it."""
        try:
            expr = parse(code)
            if isinstance(expr, Error):
                return expr
            return evaluate(self.env, expr)
        except RecursionError:
            return Error(RECURSION_LIMIT_ERROR)

    def load(self, name: str) -> LispValue:
        try:
            return load_file(self.env, name, self.output)
        except RecursionError:
            return Error(RECURSION_LIMIT_ERROR)
