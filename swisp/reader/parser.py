"""
  Swisp Reader

- Recursive descent over the raw characters, one character of lookahead,
  no backtracking and no separate token stream.
- Emits Expression values directly:

    - 123, -45          -> Number (signed 64-bit)
    - foo, +, -, \\      -> Symbol
    - "text\\n"          -> Str
    - ( ... )           -> SExpr
    - { ... }           -> QExpr
    - ; to end of line  -> skipped

Malformed input raises ReaderError internally; `parse` turns that into an
Error value so callers only ever receive Expressions.
"""

from __future__ import annotations

import re
import string
from typing import Optional

from swisp import SExpression
from swisp.errors import ReaderError
from swisp.types.expression import (
    INT64_MAX,
    INT64_MIN,
    Container,
    Error,
    Number,
    QExpr,
    SExpr,
    Str,
    Symbol,
)

IDENTIFIER_CHARS = frozenset(string.ascii_letters + string.digits + "_+-*\\/=<>!&")
WHITESPACE = frozenset(" \t\r\n")
NUMBER_RE = re.compile(r"-?[0-9]+")

UNESCAPES: dict[str, str] = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    "'": "'",
    '"': '"',
}

CLOSERS: dict[str, str] = {"(": ")", "{": "}"}

END_OF_INPUT = "Unexpected end of input"
RECURSION_LIMIT_ERROR = "Maximum recursion depth exceeded"


class Reader:
    """Reads Expressions from a string, keeping the current position."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0

    def peek(self) -> Optional[str]:
        if self.pos < len(self.source):
            return self.source[self.pos]
        return None

    def skip_whitespace(self) -> None:
        """Skip blanks and `;` comments up to the next token."""
        while (ch := self.peek()) is not None:
            if ch == ";":
                while self.peek() not in (None, "\n"):
                    self.pos += 1
            elif ch not in WHITESPACE:
                return
            self.pos += 1

    def read_expr(self, terminator: Optional[str] = None) -> Container:
        """Read forms until `terminator`, or until end of input if None.

        A closing `}` produces a QExpr, anything else an SExpr.
        """
        expr: Container = QExpr() if terminator == "}" else SExpr()
        while True:
            self.skip_whitespace()
            ch = self.peek()
            if ch is None:
                if terminator is None:
                    return expr
                raise ReaderError(END_OF_INPUT)
            if ch == terminator:
                self.pos += 1
                return expr
            expr.add(self.read())

    def read(self) -> SExpression:
        """Read a single form at the current position."""
        self.skip_whitespace()
        ch = self.peek()
        if ch is None:
            raise ReaderError(END_OF_INPUT)
        if ch in CLOSERS:
            self.pos += 1
            return self.read_expr(CLOSERS[ch])
        if ch in IDENTIFIER_CHARS:
            return self.read_symbol()
        if ch == '"':
            return self.read_string()
        raise ReaderError(f"Unexpected character {ch} at index {self.pos}")

    def read_symbol(self) -> SExpression:
        start = self.pos
        while (ch := self.peek()) is not None and ch in IDENTIFIER_CHARS:
            self.pos += 1
        token = self.source[start:self.pos]
        # A lone "-" is the subtraction symbol, not a malformed number
        if NUMBER_RE.fullmatch(token):
            value = int(token)
            if not INT64_MIN <= value <= INT64_MAX:
                raise ReaderError(f"Invalid number {token}")
            return Number(value)
        return Symbol(token)

    def read_string(self) -> SExpression:
        self.pos += 1  # opening quote
        chars: list[str] = []
        while (ch := self.peek()) != '"':
            if ch is None:
                raise ReaderError(END_OF_INPUT)
            if ch == "\\":
                self.pos += 1
                escaped = self.peek()
                if escaped is None:
                    raise ReaderError(END_OF_INPUT)
                if escaped not in UNESCAPES:
                    raise ReaderError(f"Invalid escape sequence \\{escaped}")
                ch = UNESCAPES[escaped]
            chars.append(ch)
            self.pos += 1
        self.pos += 1  # closing quote
        return Str("".join(chars))


def parse(source: str) -> SExpression:
    """Read every top-level form in `source` into one SExpr.

    Returns an Error value instead of raising when the input is malformed
    or nested deeper than the host stack allows.
    """
    try:
        return Reader(source).read_expr()
    except ReaderError as exc:
        return Error(str(exc))
    except RecursionError:
        return Error(RECURSION_LIMIT_ERROR)
