# Core type aliases and public entry points for Swisp.
#
# Every value in the language, whether produced by the reader as syntax or by
# the evaluator as a result, is an `Expression`. Errors are values too: the
# reader and the evaluator hand back an `Error` instead of raising.
#
# Naming guidance:
# - SExpression: use in reader code to denote syntactic forms (code-as-data).
# - LispValue:  use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Expression` and are interchangeable.

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from swisp.types.expression import (
    Expression,
    Error,
    Number,
    Symbol,
    Str,
    SExpr,
    QExpr,
)

if TYPE_CHECKING:
    from swisp.types.environment import Environment

LispValue = Expression
SExpression = Expression

# Native operation signature: (environment, argument list) -> value
BuiltinFn = Callable[["Environment", SExpr], Expression]

from swisp.types.lambda_fn import Lambda, Builtin, Closure  # noqa: E402
from swisp.types.environment import Environment  # noqa: E402,F811
from swisp.reader.parser import parse  # noqa: E402
from swisp.evaluation.evaluator import evaluate  # noqa: E402
from swisp.interpreter import Interpreter  # noqa: E402

__all__ = [
    "BuiltinFn",
    "LispValue",
    "SExpression",
    "Expression",
    "Error",
    "Number",
    "Symbol",
    "Str",
    "SExpr",
    "QExpr",
    "Lambda",
    "Builtin",
    "Closure",
    "Environment",
    "parse",
    "evaluate",
    "Interpreter",
]
