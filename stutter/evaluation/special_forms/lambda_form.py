from stutter import EvaluatorFn, LispValue
from stutter.errors import StutterSyntaxError
from stutter.evaluation.special_forms.common import require_arity
from stutter.reader.lexer import TokenKind
from stutter.reader.parser import Branch, Call, Leaf, ParseTree
from stutter.types.environment import GlobalEnvironment, LocalEnvironment
from stutter.types.lambda_fn import Lambda
from stutter.types.symbol import Symbol


def params_to_symbols(params: ParseTree) -> list[Symbol]:
    """
    The parameter list is parsed like any other form, so `(x y z)` arrives as
    Branch(Call(x), [Leaf(y), Leaf(z)]): the first name is the operator.
    """
    if not isinstance(params, Branch):
        raise StutterSyntaxError(f"expecting param list, got {params}")
    if not isinstance(params.op, Call):
        raise StutterSyntaxError(f"expecting first param, got {params.op}")

    names = [params.op.name]
    for item in params.children:
        if not (isinstance(item, Leaf) and item.token.kind is TokenKind.ID):
            raise StutterSyntaxError(f"expecting param name, got {item}")
        names.append(item.token.value)
    return names


def lambda_form(
    children: tuple[ParseTree, ...],
    env: LocalEnvironment,
    global_env: GlobalEnvironment,
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> LispValue:
    """
    (lambda (PARAMS) EXPR)
    Nothing is evaluated and no environment is captured.
    """
    require_arity(children, 2, "(lambda (PARAMS) EXPR)")
    params, body = children
    return Lambda(params_to_symbols(params), body)
