"""
Interactive read-eval-print loop for Stutter.

Input is read line by line until the parentheses balance, so one form may
span several lines. `q` quits, a blank line re-prompts, EOF quits. Errors are
printed as `error: <message>` and the session continues with its global
environment intact.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

from stutter.config import get_log_level, get_stdlib_path
from stutter.errors import StutterBootstrapError, StutterError
from stutter.interpreter import Interpreter
from stutter.modules.bootstrap import load_stdlib, paren_balance
from stutter.printer import to_string

logger = logging.getLogger(__name__)

PROMPT = "λ "
QUIT = "q"


class Repl:
    def __init__(
        self,
        interpreter: Interpreter,
        stdin: TextIO = sys.stdin,
        stdout: TextIO = sys.stdout,
        prompt: str = PROMPT,
    ):
        self.interp = interpreter
        self.stdin = stdin
        self.stdout = stdout
        self.prompt = prompt

    def read(self) -> Optional[str]:
        """Read one balanced chunk of input; None at end of input."""
        self.stdout.write(self.prompt)
        self.stdout.flush()
        lines: list[str] = []
        while True:
            line = self.stdin.readline()
            if line == "":
                if not lines:
                    return None
                break
            lines.append(line.rstrip("\n"))
            if paren_balance("\n".join(lines)) <= 0:
                break
        return "\n".join(lines)

    def handle(self, text: str) -> bool:
        """Evaluate and print one chunk of input. Returns False to quit."""
        command = text.strip()
        if command == QUIT:
            return False
        if not command:
            return True
        try:
            result = self.interp.eval(text)
        except StutterError as exc:
            logger.debug("evaluation failed: %r", exc)
            self.stdout.write(f"error: {exc}\n")
        else:
            self.stdout.write(f"{to_string(result)}\n")
        return True

    def loop(self) -> None:
        while True:
            text = self.read()
            if text is None:
                self.stdout.write("\n")
                break
            if not self.handle(text):
                break


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stutter", description="Stutter Lisp interpreter")
    parser.add_argument("scripts", nargs="*", type=Path, help="source files to run before the REPL")
    parser.add_argument("--stdlib", type=Path, default=None, help="standard library file to load")
    parser.add_argument("--no-stdlib", action="store_true", help="start without the standard library")
    parser.add_argument("--no-repl", action="store_true", help="exit after running the scripts")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    interp = Interpreter(prelude=None)
    if not args.no_stdlib:
        path = args.stdlib or get_stdlib_path()
        try:
            load_stdlib(interp.global_env, path)
        except OSError as exc:
            print(f"FAILED TO READ STDLIB, PLEASE PUT STDLIB.LISP IN {path}: {exc}", file=sys.stderr)
            return 1
        except StutterBootstrapError as exc:
            print(f"error loading stdlib: {exc}", file=sys.stderr)
            return 1

    for script in args.scripts:
        try:
            result = interp.eval(script.read_text(encoding="utf-8"))
        except OSError as exc:
            print(f"error: cannot read {script}: {exc}", file=sys.stderr)
            return 1
        except StutterError as exc:
            print(f"error: {script}: {exc}", file=sys.stderr)
            return 1
        logger.info("ran %s -> %s", script, to_string(result))

    if args.no_repl:
        return 0
    Repl(interp).loop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
