from stutter import EvaluatorFn, LispValue
from stutter.evaluation.special_forms.common import require_arity
from stutter.reader.parser import ParseTree
from stutter.types.environment import GlobalEnvironment, LocalEnvironment


def quote_form(
    children: tuple[ParseTree, ...],
    env: LocalEnvironment,
    global_env: GlobalEnvironment,
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> LispValue:
    """
    (quote ITEM)
    Evaluates ITEM without performing calls. Literals and lambda forms come
    through and identifiers still resolve; any other form is rejected by the
    evaluator, including (quote (list 1 2 3)).
    """
    require_arity(children, 1, "(quote ITEM)")
    return evaluate_fn(children[0], env, global_env, perform_calls=False, budget=budget)
