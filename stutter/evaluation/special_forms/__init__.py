"""Registry of special forms for the Stutter evaluator.

Maps fixed branch operators to handler functions. Every handler takes
(children, env, global_env, evaluate_fn, budget). Branches headed by an
identifier are not in this table; the evaluator resolves them as calls,
except `lambda`, which is handled by lambda_form.
"""

from stutter.evaluation.numeric import ARITHMETIC_OPS
from stutter.evaluation.special_forms.arithmetic_form import make_arithmetic_form
from stutter.evaluation.special_forms.define_form import define_form
from stutter.evaluation.special_forms.if_form import if_form
from stutter.evaluation.special_forms.lambda_form import lambda_form
from stutter.evaluation.special_forms.let_form import let_form
from stutter.evaluation.special_forms.list_forms import (
    append_form,
    cat_form,
    drop_form,
    index_form,
    len_form,
    list_form,
    range_form,
    take_form,
)
from stutter.evaluation.special_forms.quote_form import quote_form
from stutter.reader.parser import Op

SPECIAL_FORMS = {
    **{op: make_arithmetic_form(op) for op in ARITHMETIC_OPS},
    Op.LET: let_form,
    Op.DEF: define_form,
    Op.QUOTE: quote_form,
    Op.IF: if_form,
    Op.LIST: list_form,
    Op.INDEX: index_form,
    Op.TAKE: take_form,
    Op.DROP: drop_form,
    Op.APPEND: append_form,
    Op.CAT: cat_form,
    Op.LEN: len_form,
    Op.RANGE: range_form,
}

__all__ = ["SPECIAL_FORMS", "lambda_form"]
