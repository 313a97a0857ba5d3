"""Core evaluator for the Stutter interpreter.

A direct recursive tree walk: leaves resolve to values, branches dispatch on
their operator through SPECIAL_FORMS or, for identifier-headed branches,
through the application engine. Recursion is bounded by a countdown
`budget` threaded through every nested call.
"""

from __future__ import annotations

from stutter import LispValue
from stutter.config import get_max_depth
from stutter.errors import StutterResourceExhausted, StutterSyntaxError
from stutter.evaluation.apply import apply
from stutter.evaluation.special_forms import SPECIAL_FORMS, lambda_form
from stutter.reader.lexer import LITERAL_KINDS, Token, TokenKind
from stutter.reader.parser import Call, Leaf, ParseTree
from stutter.types.environment import GlobalEnvironment, LocalEnvironment
from stutter.types.symbol import LAMBDA


def evaluate_leaf(
    tok: Token, env: LocalEnvironment, global_env: GlobalEnvironment
) -> LispValue:
    if tok.kind is TokenKind.ID:
        return env.lookup(tok.value, global_env)
    if tok.kind in LITERAL_KINDS:
        return tok.value
    raise StutterSyntaxError(f"token: {tok} does not form a valid atom")


def evaluate(
    tree: ParseTree,
    env: LocalEnvironment,
    global_env: GlobalEnvironment,
    perform_calls: bool = True,
    budget: int | None = None,
) -> LispValue:
    """
    Evaluate `tree` under the local `env` and the shared `global_env`.

    perform_calls=False is the literal mode used by `quote`: lambda forms
    still build a Lambda, every other call or fixed form is rejected.
    `budget` is the remaining nesting depth; it defaults to the configured
    maximum for a top-level call.
    """
    if budget is None:
        budget = get_max_depth()
    if budget <= 0:
        raise StutterResourceExhausted("maximum evaluation depth exceeded")
    budget -= 1

    if isinstance(tree, Leaf):
        return evaluate_leaf(tree.token, env, global_env)

    op = tree.op
    if isinstance(op, Call):
        if op.name is LAMBDA:
            return lambda_form(tree.children, env, global_env, evaluate, budget)
        if not perform_calls:
            raise StutterSyntaxError(f"cannot evaluate a bare call: {tree}")
        return apply(op.name, tree.children, env, global_env, evaluate, budget)

    if not perform_calls:
        raise StutterSyntaxError(f"could not evaluate branch: {tree}")
    return SPECIAL_FORMS[op](tree.children, env, global_env, evaluate, budget)
