"""Argument validation shared by the builtins.

Each helper raises a SwispError subclass; the dispatcher in
swisp.evaluation.apply turns it into an Error value for the caller.
"""
from __future__ import annotations

from typing import Type

from swisp.errors import ArgumentTypeError, ArityError, BuiltinError, EmptyListError
from swisp.types.expression import Container, Expression, SExpr


def check_count(name: str, args: SExpr, expected: int) -> None:
    if len(args) != expected:
        raise ArityError(
            f"Function '{name}' passed incorrect number of arguments. "
            f"Got {len(args)}, Expected {expected}."
        )


def check_min_count(name: str, args: SExpr, minimum: int) -> None:
    if len(args) < minimum:
        raise ArityError(
            f"Function '{name}' passed incorrect number of arguments. "
            f"Got {len(args)}, Expected at least {minimum}."
        )


def check_type(name: str, args: SExpr, index: int, expected: Type[Expression]) -> None:
    value = args[index]
    if not isinstance(value, expected):
        raise ArgumentTypeError(
            f"Function '{name}' passed incorrect type for argument {index}. "
            f"Got {value.type_name}, expected {expected.type_name}"
        )


def check_all_types(name: str, args: SExpr, expected: Type[Expression]) -> None:
    for index in range(len(args)):
        check_type(name, args, index, expected)


def check_not_empty(name: str, args: SExpr, index: int) -> None:
    value = args[index]
    if isinstance(value, Container) and not len(value):
        raise EmptyListError(f"Function '{name}' passed {{}} for argument {index}.")


def ensure(cond: bool, message: str) -> None:
    if not cond:
        raise BuiltinError(message)
