from stutter import EvaluatorFn, LispValue
from stutter.errors import StutterTypeError
from stutter.evaluation.numeric import is_bool
from stutter.evaluation.special_forms.common import require_arity
from stutter.printer import to_string
from stutter.reader.parser import ParseTree
from stutter.types.environment import GlobalEnvironment, LocalEnvironment


def if_form(
    children: tuple[ParseTree, ...],
    env: LocalEnvironment,
    global_env: GlobalEnvironment,
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> LispValue:
    require_arity(children, 3, "(if (CONDITION) (EXPR) (EXPR))")

    condition = evaluate_fn(children[0], env, global_env, budget=budget)
    # Only real booleans select a branch; there is no truthiness.
    if not is_bool(condition):
        raise StutterTypeError(f"expecting boolean expression, got {to_string(condition)}")

    path = children[1] if condition else children[2]
    return evaluate_fn(path, env, global_env, budget=budget)
