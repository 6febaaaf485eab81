"""Runtime environment for Swisp.

An Environment is one frame of bindings from symbol names to values, linked to
an optional parent frame. The frame with no parent is the global frame.

Parent links are references, not ownership: a closure owns its own frame but
only points at the chain it was defined in. While a closure body runs, its
frame also carries a `caller` link to the environment it was applied from, so
names that are not bound lexically still resolve at the call site.

Binding always stores a deep copy and lookup always hands out a deep copy, so
no value stored here is ever shared with the code that uses it.
"""

from __future__ import annotations

import logging
from io import StringIO
from typing import Iterator, Optional

from swisp import BuiltinFn
from swisp.types.expression import Error, Expression, Symbol
from swisp.types.lambda_fn import Builtin

logger = logging.getLogger(__name__)


class Environment:
    """Frame of Symbol bindings with a lexical parent and a dynamic caller."""

    __slots__ = ("vars", "parent", "caller")

    def __init__(self, parent: Optional[Environment] = None):
        self.vars: dict[str, Expression] = {}
        self.parent: Environment | None = parent
        self.caller: Environment | None = None

    @property
    def root(self) -> Environment:
        """The global frame at the end of the parent chain."""
        env = self
        while env.parent is not None:
            env = env.parent
        return env

    def _frames(self) -> Iterator[Environment]:
        """Frames in resolution order: own, lexical chain, then call sites."""
        seen: set[int] = set()
        stack: list[Environment] = [self]
        while stack:
            env = stack.pop()
            if id(env) in seen:
                continue
            seen.add(id(env))
            yield env
            # caller is pushed first so the lexical parent is visited before it
            if env.caller is not None:
                stack.append(env.caller)
            if env.parent is not None:
                stack.append(env.parent)

    def lookup(self, symbol: Symbol) -> Expression:
        """Return a copy of the value bound to `symbol`.

        An unbound symbol yields an Error value rather than raising.
        """
        for env in self._frames():
            value = env.vars.get(symbol.name)
            if value is not None:
                return value.copy()
        return Error(f"Unbound symbol {symbol.name}")

    def assign(self, symbol: Symbol, value: Expression) -> None:
        """Bind `symbol` to a copy of `value` in this frame."""
        logger.debug("bind %s = %s", symbol.name, value)
        self.vars[symbol.name] = value.copy()

    def define(self, symbol: Symbol, value: Expression) -> None:
        """Bind `symbol` to a copy of `value` in the global frame."""
        self.root.assign(symbol, value)

    def register_builtin(self, name: str, fn: BuiltinFn) -> None:
        self.assign(Symbol(name), Builtin(fn, name))

    def copy(self) -> Environment:
        """New frame with deep-copied bindings sharing this frame's parent."""
        env = Environment(self.parent)
        env.caller = self.caller
        for name, value in self.vars.items():
            env.vars[name] = value.copy()
        return env

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.parent is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            chain = []
            env: Environment | None = self
            while env is not None:
                env_buf = StringIO()
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
                env = env.parent
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
