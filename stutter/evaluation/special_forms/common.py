from stutter import EvaluatorFn, LispValue
from stutter.errors import StutterSyntaxError
from stutter.reader.parser import ParseTree
from stutter.types.environment import GlobalEnvironment, LocalEnvironment


def resolve_exprs(
    children: tuple[ParseTree, ...],
    env: LocalEnvironment,
    global_env: GlobalEnvironment,
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> list[LispValue]:
    """Evaluate every child left to right; the first failure propagates."""
    return [evaluate_fn(child, env, global_env, budget=budget) for child in children]


def require_arity(children: tuple[ParseTree, ...], n: int, usage: str) -> None:
    if len(children) != n:
        raise StutterSyntaxError(f"expecting form of {usage}")
