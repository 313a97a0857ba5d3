from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Iterator, Literal

from stutter import LispValue
from stutter.config import get_max_depth, unlimited_int_digits
from stutter.errors import StutterResourceExhausted
from stutter.evaluation.evaluator import evaluate
from stutter.modules.bootstrap import load_source, load_stdlib, pad, split_forms
from stutter.reader.lexer import lex
from stutter.reader.parser import parse
from stutter.types.environment import GlobalEnvironment, LocalEnvironment
from stutter.types.nil import Nil

logger = logging.getLogger(__name__)

# Upper bound on Python frames used per level of evaluation depth.
_FRAMES_PER_LEVEL = 5
_FRAME_MARGIN = 200


@contextmanager
def _recursion_headroom(max_depth: int) -> Iterator[None]:
    """Let the evaluator's depth budget, not Python's limit, stop runaway recursion."""
    previous = sys.getrecursionlimit()
    needed = max_depth * _FRAMES_PER_LEVEL + _FRAME_MARGIN
    if needed > previous:
        sys.setrecursionlimit(needed)
    try:
        yield
    finally:
        if needed > previous:
            sys.setrecursionlimit(previous)


def run(source: str, global_env: GlobalEnvironment) -> LispValue:
    """
    Lex, parse and evaluate exactly one top-level form.

    Empty, whitespace-only or comment-only source yields Nil. The caller
    supplies one paren-balanced form; the local environment starts empty and
    `global_env` is shared with every other form of the session.
    """
    max_depth = get_max_depth()
    with unlimited_int_digits():
        tokens = lex(source)
        if not tokens:
            return Nil
        tree = parse(tokens)
        try:
            with _recursion_headroom(max_depth):
                return evaluate(tree, LocalEnvironment(), global_env, budget=max_depth)
        except RecursionError:
            raise StutterResourceExhausted("maximum recursion depth exceeded") from None
        except MemoryError:
            raise StutterResourceExhausted("out of memory") from None


class Interpreter:
    """
    A Stutter session: one GlobalEnvironment shared by every form fed to it,
    optionally pre-populated with the standard library.
    """

    def __init__(self, prelude: str | None | Literal['auto'] = 'auto'):
        self.global_env: GlobalEnvironment = GlobalEnvironment()

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            load_stdlib(self.global_env)
        else:
            self.eval_prelude(prelude)

    def eval_prelude(self, code: str) -> None:
        load_source(code, self.global_env, "<prelude>")

    def eval(self, code: str) -> LispValue:
        """Run every top-level form of `code` in order; return the last result."""
        result: LispValue = Nil
        for form in split_forms(code):
            logger.debug("eval %s", form)
            result = run(pad(form), self.global_env)
        return result
