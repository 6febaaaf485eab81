"""Output channels used by `print` and `load` to display text."""
from __future__ import annotations

import sys
from io import StringIO
from typing import Protocol, TextIO


class OutputChannel(Protocol):
    def write(self, text: str) -> None: ...


class StreamOutput:
    """Writes to a text stream, stdout by default.

    The default is resolved on every write so a replaced sys.stdout is honoured.
    """

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    def write(self, text: str) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(text)
        stream.flush()


class BufferOutput:
    """Collects everything written, for embedding and tests."""

    def __init__(self) -> None:
        self.buffer = StringIO()

    def write(self, text: str) -> None:
        self.buffer.write(text)

    def getvalue(self) -> str:
        return self.buffer.getvalue()

    def lines(self) -> list[str]:
        return self.getvalue().splitlines()
