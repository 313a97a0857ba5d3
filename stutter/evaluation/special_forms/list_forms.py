"""List primitives: list, index, take, drop, append, cat, len, range.

All of them evaluate their arguments eagerly and build new lists; a List
value is never modified once it exists.
"""

from stutter import EvaluatorFn, LispValue
from stutter.config import get_max_list_len
from stutter.errors import StutterIndexError, StutterResourceExhausted, StutterTypeError
from stutter.evaluation.numeric import is_int, is_list, to_i64, to_size
from stutter.evaluation.special_forms.common import require_arity, resolve_exprs
from stutter.printer import to_string
from stutter.reader.parser import ParseTree
from stutter.types.environment import GlobalEnvironment, LocalEnvironment


def _offset_and_list(name: str, values: list[LispValue]) -> tuple[int, list]:
    n, seq = values
    if not (is_int(n) and is_list(seq)):
        raise StutterTypeError(f"type error: expected form ({name} NUM LIST)")
    return n, seq


def list_form(
    children: tuple[ParseTree, ...],
    env: LocalEnvironment,
    global_env: GlobalEnvironment,
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> LispValue:
    return resolve_exprs(children, env, global_env, evaluate_fn, budget)


def index_form(
    children: tuple[ParseTree, ...],
    env: LocalEnvironment,
    global_env: GlobalEnvironment,
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> LispValue:
    require_arity(children, 2, "(index NUM LIST)")
    n, seq = _offset_and_list("index", resolve_exprs(children, env, global_env, evaluate_fn, budget))
    if not 0 <= n < len(seq):
        raise StutterIndexError(f"index {n} out of range for list of length {len(seq)}")
    return seq[n]


def take_form(
    children: tuple[ParseTree, ...],
    env: LocalEnvironment,
    global_env: GlobalEnvironment,
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> LispValue:
    require_arity(children, 2, "(take NUM LIST)")
    n, seq = _offset_and_list("take", resolve_exprs(children, env, global_env, evaluate_fn, budget))
    if not 0 <= n <= len(seq):
        raise StutterIndexError(f"take {n} out of range for list of length {len(seq)}")
    return seq[:n]


def drop_form(
    children: tuple[ParseTree, ...],
    env: LocalEnvironment,
    global_env: GlobalEnvironment,
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> LispValue:
    """(drop NUM LIST); any NUM <= 0 yields the empty list."""
    require_arity(children, 2, "(drop NUM LIST)")
    n, seq = _offset_and_list("drop", resolve_exprs(children, env, global_env, evaluate_fn, budget))
    if n <= 0:
        return []
    if n > len(seq):
        raise StutterIndexError(f"drop {n} out of range for list of length {len(seq)}")
    return seq[n:]


def append_form(
    children: tuple[ParseTree, ...],
    env: LocalEnvironment,
    global_env: GlobalEnvironment,
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> LispValue:
    require_arity(children, 2, "(append ITEM LIST)")
    item, seq = resolve_exprs(children, env, global_env, evaluate_fn, budget)
    if not is_list(seq):
        raise StutterTypeError("type error: expected form (append ITEM LIST)")
    return [*seq, item]


def cat_form(
    children: tuple[ParseTree, ...],
    env: LocalEnvironment,
    global_env: GlobalEnvironment,
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> LispValue:
    result: list[LispValue] = []
    for seq in resolve_exprs(children, env, global_env, evaluate_fn, budget):
        if not is_list(seq):
            raise StutterTypeError(f"cat: expecting list, got {to_string(seq)}")
        result.extend(seq)
    return result


def len_form(
    children: tuple[ParseTree, ...],
    env: LocalEnvironment,
    global_env: GlobalEnvironment,
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> LispValue:
    require_arity(children, 1, "(len LIST)")
    (seq,) = resolve_exprs(children, env, global_env, evaluate_fn, budget)
    if not is_list(seq):
        raise StutterTypeError("type error: expected form (len LIST)")
    return len(seq)


def range_form(
    children: tuple[ParseTree, ...],
    env: LocalEnvironment,
    global_env: GlobalEnvironment,
    evaluate_fn: EvaluatorFn,
    budget: int,
) -> LispValue:
    require_arity(children, 2, "(range LOWER UPPER)")
    lower, upper = resolve_exprs(children, env, global_env, evaluate_fn, budget)
    if not (is_int(lower) and is_int(upper)):
        raise StutterTypeError(
            f"unsupported types for range: {to_string(lower)}, {to_string(upper)}"
        )
    lower, upper = to_i64(lower), to_i64(upper)
    span = to_size(max(upper - lower, 0))
    limit = get_max_list_len()
    if span > limit:
        raise StutterResourceExhausted(f"range of {span} elements exceeds the limit of {limit}")
    return list(range(lower, upper))
