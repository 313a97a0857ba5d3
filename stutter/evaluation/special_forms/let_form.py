from stutter import EvaluatorFn, LispValue
from stutter.errors import StutterSyntaxError
from stutter.reader.parser import Branch, Call, ParseTree
from stutter.types.environment import GlobalEnvironment, LocalEnvironment


def let_form(
    children: tuple[ParseTree, ...],
    env: LocalEnvironment,
    global_env: GlobalEnvironment,
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> LispValue:
    """
    (let (VAR expr) ... (VAR expr) body)

    Clauses bind one after another: each expr sees every earlier clause of
    the same let. A clause such as (xs (list 1 2)) binds a List and
    (f (lambda (x) ...)) binds a Lambda without calling it; both follow from
    evaluating the clause expression normally. The caller's environment is
    never modified.
    """
    if len(children) < 2:
        raise StutterSyntaxError("expecting form of (let (VAR expr)...(expr))")

    *clauses, body = children
    new_env = env
    for clause in clauses:
        if not isinstance(clause, Branch):
            raise StutterSyntaxError(f"expecting variable assignment, got {clause}")
        if not isinstance(clause.op, Call):
            raise StutterSyntaxError(f"not a variable: {clause.op}")
        if len(clause.children) != 1:
            raise StutterSyntaxError(f"syntax error: {clause}")
        value = evaluate_fn(clause.children[0], new_env, global_env, budget=budget)
        new_env = new_env.bind(clause.op.name, value)

    return evaluate_fn(body, new_env, global_env, budget=budget)
