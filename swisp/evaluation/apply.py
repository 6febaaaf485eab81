"""Application engine for Swisp.

This module centralizes what happens once an S-expression has been reduced to
a Lambda followed by its arguments:
- Builtins are called with the caller's environment and the argument list.
  Validation failures they raise are turned into Error values here, which is
  the only place host exceptions are converted during evaluation.
- Closures bind their formals positionally, with `&` collecting the rest of
  the arguments into a Q-expression.
- A closure given fewer arguments than formals is partially applied and
  returned as a new closure instead of being evaluated.
"""

from __future__ import annotations

from swisp import LispValue
from swisp.errors import SwispError
from swisp.types.environment import Environment
from swisp.types.expression import Error, QExpr, SExpr, Symbol
from swisp.types.lambda_fn import Builtin, Closure, Lambda

VARIADIC = "&"
VARIADIC_FORMAT_ERROR = "Function format invalid. Symbol '&' not followed by single symbol."


def _is_variadic_marker(formal: object) -> bool:
    return isinstance(formal, Symbol) and formal.name == VARIADIC


def call_builtin(env: Environment, fn: Builtin, args: SExpr) -> LispValue:
    try:
        return fn.fn(env, args)
    except SwispError as exc:
        return Error(str(exc))


def call_closure(env: Environment, fn: Closure, args: SExpr) -> LispValue:
    """Bind `args` to the formals of `fn` and run its body.

    `fn` must be exclusively owned by the caller; its formals are consumed.
    """
    formals = fn.formals
    given = len(args)
    total = len(formals)

    while len(args):
        if not len(formals):
            return Error(
                f"Function passed too many arguments. Got {given}, expected {total}"
            )
        symbol = formals.pop(0)
        if _is_variadic_marker(symbol):
            if len(formals) != 1:
                return Error(VARIADIC_FORMAT_ERROR)
            fn.env.assign(formals.pop(0), args.relabel(QExpr))
            break
        fn.env.assign(symbol, args.pop(0))

    # Arguments ran out right before "& rest": rest is bound to {}
    if len(formals) and _is_variadic_marker(formals[0]):
        if len(formals) != 2:
            return Error(VARIADIC_FORMAT_ERROR)
        formals.pop(0)
        fn.env.assign(formals.pop(0), QExpr())

    if len(formals):
        return fn

    from swisp.evaluation.evaluator import evaluate

    # The call site stays visible only while the body runs
    previous, fn.env.caller = fn.env.caller, env
    try:
        return evaluate(fn.env, fn.body.relabel(SExpr))
    finally:
        fn.env.caller = previous


def call_value(env: Environment, fn: Lambda, args: SExpr) -> LispValue:
    """Apply `fn` to the argument list `args` in the caller environment `env`."""
    if isinstance(fn, Builtin):
        return call_builtin(env, fn, args)
    if isinstance(fn, Closure):
        # Bind into a private copy; the value the caller holds is never consumed
        return call_closure(env, fn.copy(), args)
    return Error(f"Cannot apply {fn.type_name}")
