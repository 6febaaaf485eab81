"""The Swisp value model.

A single closed family of classes serves both as the syntax tree produced by
the reader and as the runtime values produced by the evaluator:

    Error, Number, Symbol, Str, Lambda (see lambda_fn), SExpr, QExpr

Values are owned: containers hold their cells exclusively and `copy()` is
always deep. Code that needs to consume part of a container takes it with
`pop()`, which transfers ownership of the removed cell to the caller.
"""

from __future__ import annotations

import sys
from typing import Iterable, Iterator, Type, TypeVar

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

# Characters rendered with a backslash inside string literals
ESCAPES: dict[str, str] = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
}

C = TypeVar("C", bound="Container")


def wrap_int64(value: int) -> int:
    """Wrap an unbounded int into the signed 64-bit range."""
    return (value - INT64_MIN) % (1 << 64) + INT64_MIN


class Expression:
    """Base of every Swisp value."""

    __slots__ = ()
    type_name: str = ""

    def copy(self) -> Expression:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


class Error(Expression):
    __slots__ = ("message",)
    type_name = "Error"

    def __init__(self, message: str):
        self.message = message

    def copy(self) -> Error:
        return Error(self.message)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Error) and self.message == other.message

    def __hash__(self) -> int:
        return hash((Error, self.message))

    def __str__(self) -> str:
        return f"Error: {self.message}"


class Number(Expression):
    __slots__ = ("value",)
    type_name = "Number"

    def __init__(self, value: int):
        self.value = value

    def copy(self) -> Number:
        return Number(self.value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Number) and self.value == other.value

    def __hash__(self) -> int:
        return hash((Number, self.value))

    def __str__(self) -> str:
        return str(self.value)


class Symbol(Expression):
    __slots__ = ("name",)
    type_name = "Symbol"

    def __init__(self, name: str):
        # Intern to ensure fast equality/hash
        self.name = sys.intern(name)

    def copy(self) -> Symbol:
        return Symbol(self.name)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Symbol) and self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.name


class Str(Expression):
    __slots__ = ("value",)
    type_name = "String"

    def __init__(self, value: str):
        self.value = value

    def copy(self) -> Str:
        return Str(self.value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Str) and self.value == other.value

    def __hash__(self) -> int:
        return hash((Str, self.value))

    def __str__(self) -> str:
        return '"' + "".join(ESCAPES.get(ch, ch) for ch in self.value) + '"'


class Container(Expression):
    """Shared behaviour of S-expressions and Q-expressions."""

    __slots__ = ("cells",)
    open_bracket = ""
    close_bracket = ""

    def __init__(self, cells: Iterable[Expression] | None = None):
        self.cells: list[Expression] = list(cells) if cells is not None else []

    def copy(self: C) -> C:
        return type(self)(cell.copy() for cell in self.cells)

    def add(self: C, value: Expression) -> C:
        self.cells.append(value)
        return self

    def join(self: C, other: Container) -> C:
        """Move every cell of `other` onto the end of this container."""
        while other.cells:
            self.cells.append(other.pop(0))
        return self

    def pop(self, index: int) -> Expression:
        """Remove and return the cell at `index`."""
        return self.cells.pop(index)

    def relabel(self, cls: Type[C]) -> C:
        """Hand these cells over to a container of kind `cls`."""
        relabelled = cls()
        relabelled.cells = self.cells
        self.cells = []
        return relabelled

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Expression]:
        return iter(self.cells)

    def __getitem__(self, index: int) -> Expression:
        return self.cells[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Container) or type(self) is not type(other):
            return False
        return len(self.cells) == len(other.cells) and all(
            x == y for x, y in zip(self.cells, other.cells)
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        inner = " ".join(str(cell) for cell in self.cells)
        return f"{self.open_bracket}{inner}{self.close_bracket}"


class SExpr(Container):
    __slots__ = ()
    type_name = "S-Expr"
    open_bracket = "("
    close_bracket = ")"


class QExpr(Container):
    __slots__ = ()
    type_name = "Q-Expr"
    open_bracket = "{"
    close_bracket = "}"
