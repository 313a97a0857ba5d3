from functools import reduce

from stutter import EvaluatorFn, LispValue
from stutter.errors import StutterSyntaxError
from stutter.evaluation.numeric import apply_binary
from stutter.evaluation.special_forms.common import resolve_exprs
from stutter.reader.parser import Op, ParseTree
from stutter.types.environment import GlobalEnvironment, LocalEnvironment


def make_arithmetic_form(op: Op):
    """
    (OP a b c ...) evaluates every operand, then folds left: ((a OP b) OP c) ...
    Comparisons fold the same way, so only the two-operand form is useful.
    """

    def arithmetic_form(
        children: tuple[ParseTree, ...],
        env: LocalEnvironment,
        global_env: GlobalEnvironment,
        evaluate_fn: EvaluatorFn,
        budget: int,
    ) -> LispValue:
        if not children:
            raise StutterSyntaxError(f"{op} requires at least 1 argument")
        values = resolve_exprs(children, env, global_env, evaluate_fn, budget)
        return reduce(lambda acc, operand: apply_binary(op, acc, operand), values)

    arithmetic_form.__name__ = f"arithmetic_form_{op.name.lower()}"
    return arithmetic_form
