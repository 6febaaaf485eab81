from __future__ import annotations

"""
Line-oriented REPL and command-line entry point for Swisp.

    swisp                 start the interactive loop
    swisp FILE ...        load each file, then exit
    swisp -i FILE ...     load each file, then start the loop
    swisp -c CODE         evaluate CODE and print the result

Each input line is read as one S-expression, evaluated in a single
Interpreter so that definitions persist, and its rendering is printed.
"""

import argparse
import logging
import sys
from typing import Optional, Sequence, TextIO

from swisp.config import get_log_level, get_prompt
from swisp.interpreter import Interpreter
from swisp.types.expression import Error

EXIT_COMMANDS = {"exit", "quit"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="swisp", description="Swisp interpreter")
    parser.add_argument("files", nargs="*", help="source files to load in order")
    parser.add_argument("-c", dest="code", help="evaluate CODE and print its value")
    parser.add_argument("-i", "--interactive", action="store_true",
                        help="start the REPL after loading files")
    parser.add_argument("--no-prelude", action="store_true",
                        help="do not load the standard prelude")
    return parser


class Repl:
    def __init__(self, interp: Interpreter, prompt: str, stdin: TextIO | None = None,
                 stdout: TextIO | None = None):
        self.interp = interp
        self.prompt = prompt
        self.stdin = stdin
        self.stdout = stdout

    def _readline(self) -> Optional[str]:
        if self.stdin is None:
            try:
                return input(self.prompt)
            except EOFError:
                return None
        out = self.stdout or sys.stdout
        out.write(self.prompt)
        out.flush()
        line = self.stdin.readline()
        return line if line else None

    def run(self) -> None:
        out = self.stdout or sys.stdout
        while True:
            try:
                line = self._readline()
            except KeyboardInterrupt:
                out.write("\n")
                continue
            if line is None:
                out.write("\n")
                return
            line = line.strip()
            if not line:
                continue
            if line in EXIT_COMMANDS:
                return
            out.write(f"{self.interp.eval(line)}\n")


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=get_log_level(),
                        format="%(levelname)s %(name)s: %(message)s")

    interp = Interpreter(prelude=None if args.no_prelude else 'auto')

    status = 0
    for name in args.files:
        result = interp.load(name)
        if isinstance(result, Error):
            print(result)
            status = 1

    if args.code is not None:
        result = interp.eval(args.code)
        print(result)
        return 1 if isinstance(result, Error) else status

    if not args.files or args.interactive:
        Repl(interp, get_prompt()).run()
    return status
