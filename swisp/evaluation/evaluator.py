"""Core evaluator for the Swisp interpreter.

Symbols are looked up, S-expressions are reduced, and every other value is
self-evaluating. Errors are ordinary values: the first one met while reducing
an S-expression becomes its result.
"""

from __future__ import annotations

from swisp import SExpression, LispValue
from swisp.evaluation.apply import call_value
from swisp.types.environment import Environment
from swisp.types.expression import Error, SExpr, Symbol
from swisp.types.lambda_fn import Lambda


def evaluate(env: Environment, expr: SExpression) -> LispValue:
    """Reduce `expr` to its normal form in `env`."""
    match expr:
        case Symbol():
            return env.lookup(expr)
        case SExpr():
            return eval_sexpr(env, expr)

    # --- Atoms, Q-expressions, lambdas and errors return as-is ---
    return expr


def eval_sexpr(env: Environment, sexpr: SExpr) -> LispValue:
    """Evaluate the cells of `sexpr` in place, then apply the head."""
    cells = sexpr.cells
    for index, cell in enumerate(cells):
        result = evaluate(env, cell)
        if isinstance(result, Error):
            return result
        cells[index] = result

    if not cells:
        return sexpr
    if len(cells) == 1:
        return evaluate(env, sexpr.pop(0))

    head = sexpr.pop(0)
    if not isinstance(head, Lambda):
        return Error(
            f"S-Expression starts with incorrect type. "
            f"Got {head.type_name}, expected {Lambda.type_name}"
        )
    return call_value(env, head, sexpr)
