import logging

from stutter import EvaluatorFn, LispValue
from stutter.errors import StutterSyntaxError
from stutter.evaluation.special_forms.common import require_arity
from stutter.reader.lexer import TokenKind
from stutter.reader.parser import Leaf, ParseTree
from stutter.types.environment import GlobalEnvironment, LocalEnvironment
from stutter.types.nil import Nil

logger = logging.getLogger(__name__)


def define_form(
    children: tuple[ParseTree, ...],
    env: LocalEnvironment,
    global_env: GlobalEnvironment,
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> LispValue:
    """
    (def name value)
    Always writes the global environment, even from inside a let or lambda
    body. The binding is installed only once `value` evaluated successfully.
    """
    require_arity(children, 2, "(def VAR EXPR)")

    target, val_expr = children
    if not (isinstance(target, Leaf) and target.token.kind is TokenKind.ID):
        raise StutterSyntaxError(f"expecting function name, got {target}")

    name = target.token.value
    value = evaluate_fn(val_expr, env, global_env, budget=budget)
    global_env.define(name, value)
    logger.debug("def %s", name)
    return Nil
