"""Lambda function representation and argument binding for Stutter."""

from __future__ import annotations

from io import StringIO

from stutter import LispValue
from stutter.reader.parser import ParseTree
from stutter.types.environment import LocalEnvironment
from stutter.types.symbol import Symbol


class Lambda:
    """A first-class lambda: formal parameters and an unevaluated body.

    There is no captured environment. Scoping is dynamic: the
    body sees the bindings of whoever calls it, not of where it was written.
    """

    __slots__ = ("params", "body")

    def __init__(self, params: list[Symbol], body: ParseTree):
        self.params: tuple[Symbol, ...] = tuple(params)
        self.body: ParseTree = body

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Lambda)
            and self.params == other.params
            and self.body == other.body
        )

    def __hash__(self) -> int:
        return hash((self.params, self.body))

    def __str__(self) -> str:
        return "<lambda>"

    def __repr__(self) -> str:
        """Debugging view of the parameters and body."""
        with StringIO() as buffer:
            buffer.write("Lambda((")
            buffer.write(" ".join(str(p) for p in self.params))
            buffer.write(") ")
            buffer.write(str(self.body))
            buffer.write(")")
            return buffer.getvalue()

    def extend_env(
        self, args: list[LispValue], caller_env: LocalEnvironment
    ) -> LocalEnvironment:
        """
        Bind argument values to the formal parameters on top of the caller's
        environment and return the environment for evaluating the body.

        Binding is positional over the shorter of the two sequences: surplus
        arguments are dropped and surplus parameters stay unbound, so they
        resolve through the caller's scope like any other free name.
        """
        env = caller_env
        for param, arg in zip(self.params, args):
            env = env.bind(param, arg)
        return env
