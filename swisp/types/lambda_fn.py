"""Lambda values: native builtins and user-defined closures."""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from swisp.types.expression import Expression, QExpr

if TYPE_CHECKING:
    from swisp import BuiltinFn
    from swisp.types.environment import Environment


class Lambda(Expression):
    """Common tag for everything that can sit in operator position."""

    __slots__ = ()
    type_name = "Lambda"


class Builtin(Lambda):
    """A host-implemented operation, compared by identity of `fn`."""

    __slots__ = ("fn", "name")

    def __init__(self, fn: BuiltinFn, name: str = ""):
        self.fn = fn
        self.name = name

    def copy(self) -> Builtin:
        return Builtin(self.fn, self.name)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Builtin) and self.fn is other.fn

    def __hash__(self) -> int:
        return id(self.fn)

    def __str__(self) -> str:
        return "<builtin>"

    def __repr__(self) -> str:
        return f"Builtin({self.name!r})"


class Closure(Lambda):
    """A user lambda with formal parameters, body, and its own binding frame."""

    __slots__ = ("formals", "body", "env")

    def __init__(self, formals: QExpr, body: QExpr, env: Environment):
        self.formals: QExpr = formals
        self.body: QExpr = body
        # Owned frame; its parent is the defining environment
        self.env: Environment = env

    def copy(self) -> Closure:
        return Closure(self.formals.copy(), self.body.copy(), self.env.copy())

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Closure)
            and self.formals == other.formals
            and self.body == other.body
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(\\ ")
            buffer.write(str(self.formals))
            buffer.write(" ")
            buffer.write(str(self.body))
            buffer.write(")")
            return buffer.getvalue()
