"""Built-in functions for the Swisp runtime environment.

Every builtin takes the caller's environment and the argument list as an
S-expression it owns, and returns a value. Arguments are validated up front;
a violation raises from swisp.builtin.checks before any work is done.
"""
from __future__ import annotations

import operator
from functools import partial
from typing import Callable

from swisp import LispValue
from swisp.builtin.checks import (
    check_all_types,
    check_count,
    check_min_count,
    check_not_empty,
    check_type,
    ensure,
)
from swisp.evaluation.evaluator import evaluate
from swisp.loader import load_file
from swisp.output import OutputChannel, StreamOutput
from swisp.types.environment import Environment
from swisp.types.expression import (
    Error,
    Number,
    QExpr,
    SExpr,
    Str,
    Symbol,
    wrap_int64,
)
from swisp.types.lambda_fn import Closure


# -------------------------------
# List operations
# -------------------------------
def list_builtin(env: Environment, args: SExpr) -> LispValue:
    """Turn the argument list into a Q-expression, unevaluated."""
    return args.relabel(QExpr)


def head(env: Environment, args: SExpr) -> LispValue:
    """Return a Q-expression holding only the first element."""
    check_count("head", args, 1)
    check_type("head", args, 0, QExpr)
    check_not_empty("head", args, 0)

    value = args.pop(0)
    del value.cells[1:]
    return value


def tail(env: Environment, args: SExpr) -> LispValue:
    """Return the Q-expression without its first element."""
    check_count("tail", args, 1)
    check_type("tail", args, 0, QExpr)
    check_not_empty("tail", args, 0)

    value = args.pop(0)
    value.pop(0)
    return value


def eval_builtin(env: Environment, args: SExpr) -> LispValue:
    """Evaluate a Q-expression as if it were an S-expression."""
    check_count("eval", args, 1)
    check_type("eval", args, 0, QExpr)

    return evaluate(env, args.pop(0).relabel(SExpr))


def join(env: Environment, args: SExpr) -> LispValue:
    """Concatenate one or more Q-expressions in argument order."""
    check_min_count("join", args, 1)
    check_all_types("join", args, QExpr)

    value = args.pop(0)
    while len(args):
        value.join(args.pop(0))
    return value


# -------------------------------
# Arithmetic
# -------------------------------
def _truncating_div(x: int, y: int) -> int:
    quotient = abs(x) // abs(y)
    return quotient if (x < 0) == (y < 0) else -quotient


ARITHMETIC: dict[str, Callable[[int, int], int]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _truncating_div,
}


def arithmetic(op: str, env: Environment, args: SExpr) -> LispValue:
    """Fold `op` left-to-right over Number arguments; unary - negates."""
    check_min_count(op, args, 1)
    check_all_types(op, args, Number)

    result = args.pop(0).value
    if op == "-" and not len(args):
        return Number(wrap_int64(-result))

    fn = ARITHMETIC[op]
    while len(args):
        operand = args.pop(0).value
        if op == "/" and operand == 0:
            return Error("Division by zero")
        result = wrap_int64(fn(result, operand))
    return Number(result)


add = partial(arithmetic, "+")
sub = partial(arithmetic, "-")
mul = partial(arithmetic, "*")
div = partial(arithmetic, "/")


# -------------------------------
# Variables and functions
# -------------------------------
def bind_variables(fun: str, env: Environment, args: SExpr) -> LispValue:
    """Bind each symbol of the leading Q-expression to the trailing arguments.

    `def` binds in the global frame, `=` in the current frame.
    """
    check_min_count(fun, args, 1)
    check_type(fun, args, 0, QExpr)

    symbols = args[0]
    for cell in symbols:
        ensure(isinstance(cell, Symbol),
               f"'{fun}' cannot define a non-symbol. Got {cell.type_name}")
    ensure(len(symbols) == len(args) - 1,
           f"'{fun}' was passed with too many arguments. "
           f"Wanted {len(symbols)}, got {len(args) - 1}")

    bind = env.define if fun == "def" else env.assign
    for index, symbol in enumerate(symbols):
        bind(symbol, args[index + 1])
    return SExpr()


define = partial(bind_variables, "def")
put = partial(bind_variables, "=")


def lambda_builtin(env: Environment, args: SExpr) -> LispValue:
    """(\\ {formals} {body}) builds a closure over the defining environment."""
    check_count("\\", args, 2)
    check_type("\\", args, 0, QExpr)
    check_type("\\", args, 1, QExpr)

    for cell in args[0]:
        ensure(isinstance(cell, Symbol),
               f"Cannot define a non-symbol. Got {cell.type_name}")

    formals = args.pop(0)
    body = args.pop(0)
    return Closure(formals, body, Environment(parent=env))


# -------------------------------
# Comparison and conditionals
# -------------------------------
ORDERING: dict[str, Callable[[int, int], bool]] = {
    ">": operator.gt,
    "<": operator.lt,
    ">=": operator.ge,
    "<=": operator.le,
}


def ordering(op: str, env: Environment, args: SExpr) -> LispValue:
    check_count(op, args, 2)
    check_type(op, args, 0, Number)
    check_type(op, args, 1, Number)

    return Number(int(ORDERING[op](args[0].value, args[1].value)))


gt = partial(ordering, ">")
lt = partial(ordering, "<")
gte = partial(ordering, ">=")
lte = partial(ordering, "<=")


def compare(op: str, env: Environment, args: SExpr) -> LispValue:
    """Structural (in)equality of any two values."""
    check_count(op, args, 2)

    equal = args[0] == args[1]
    return Number(int(equal if op == "==" else not equal))


equals = partial(compare, "==")
not_equals = partial(compare, "!=")


def if_builtin(env: Environment, args: SExpr) -> LispValue:
    """(if cond {then} {else}); only the chosen branch is evaluated."""
    check_count("if", args, 3)
    check_type("if", args, 0, Number)
    check_type("if", args, 1, QExpr)
    check_type("if", args, 2, QExpr)

    branch = args.pop(1) if args[0].value != 0 else args.pop(2)
    return evaluate(env, branch.relabel(SExpr))


# -------------------------------
# Strings, errors and I/O
# -------------------------------
def error_builtin(env: Environment, args: SExpr) -> LispValue:
    check_count("error", args, 1)
    check_type("error", args, 0, Str)

    return Error(args[0].value)


def print_builtin(env: Environment, args: SExpr, *, output: OutputChannel) -> LispValue:
    """Write the rendering of each argument, space separated, then a newline."""
    output.write(" ".join(str(cell) for cell in args) + "\n")
    return SExpr()


def load_builtin(env: Environment, args: SExpr, *, output: OutputChannel) -> LispValue:
    """Evaluate every form of a source file, reporting errors as it goes."""
    check_count("load", args, 1)
    check_type("load", args, 0, Str)

    return load_file(env, args[0].value, output)


def register(env: Environment, output: OutputChannel | None = None) -> None:
    """Register all builtin functions into the given environment."""
    if output is None:
        output = StreamOutput()

    builtins = {
        "\\": lambda_builtin,
        "def": define,
        "=": put,
        "list": list_builtin,
        "head": head,
        "tail": tail,
        "eval": eval_builtin,
        "join": join,
        "+": add,
        "-": sub,
        "*": mul,
        "/": div,
        "if": if_builtin,
        "==": equals,
        "!=": not_equals,
        ">": gt,
        "<": lt,
        ">=": gte,
        "<=": lte,
        "load": partial(load_builtin, output=output),
        "error": error_builtin,
        "print": partial(print_builtin, output=output),
    }
    for name, fn in builtins.items():
        env.register_builtin(name, fn)
