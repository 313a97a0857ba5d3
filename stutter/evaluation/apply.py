"""Application engine for Stutter.

A branch headed by an identifier, `(f a b)`, is a call by name:

- `f` is resolved like any identifier (local scope, then global).
- If it is a Lambda, the arguments are evaluated left to right in the
  caller's environment and bound positionally on top of that same
  environment, and the body is evaluated there. This is dynamic scoping:
  free names in the body resolve against the caller, not the definition
  site.
- Anything else is returned unchanged and the arguments are not evaluated,
  which lets `(x)` read a constant bound with `def`.
"""

from stutter import EvaluatorFn, LispValue
from stutter.evaluation.special_forms.common import resolve_exprs
from stutter.reader.parser import ParseTree
from stutter.types.environment import GlobalEnvironment, LocalEnvironment
from stutter.types.lambda_fn import Lambda
from stutter.types.symbol import Symbol


def apply_lambda(
    fn: Lambda,
    args: list[LispValue],
    env: LocalEnvironment,
    global_env: GlobalEnvironment,
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> LispValue:
    """Apply a Lambda to already-evaluated arguments from the caller's `env`."""
    new_env = fn.extend_env(args, env)
    return evaluate_fn(fn.body, new_env, global_env, budget=budget)


def apply(
    name: Symbol,
    children: tuple[ParseTree, ...],
    env: LocalEnvironment,
    global_env: GlobalEnvironment,
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> LispValue:
    head = env.lookup(name, global_env)
    if not isinstance(head, Lambda):
        return head
    args = resolve_exprs(children, env, global_env, evaluate_fn, budget)
    return apply_lambda(head, args, env, global_env, evaluate_fn, budget)
