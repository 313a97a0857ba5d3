from hypothesis import given, settings, strategies as st

from stutter.interpreter import Interpreter
from stutter.printer import to_string

big_ints = st.integers(min_value=-10**40, max_value=10**40)
small_lists = st.lists(st.integers(min_value=-1000, max_value=1000), max_size=12)


def _lisp_list(values):
    return f"(list {' '.join(str(v) for v in values)})"


@settings(max_examples=50)
@given(big_ints, big_ints)
def test_add_then_subtract_is_identity(a, b):
    itp = Interpreter(prelude=None)
    assert itp.eval(f"(- (+ {a} {b}) {b})") == a


@settings(max_examples=50)
@given(big_ints, big_ints)
def test_int_multiplication_is_exact(a, b):
    itp = Interpreter(prelude=None)
    assert itp.eval(f"(* {a} {b})") == a * b


@settings(max_examples=50)
@given(small_lists, st.data())
def test_take_then_drop_rebuilds_list(values, data):
    # drop 0 is the empty list, so the split point starts at 1.
    i = data.draw(st.integers(min_value=1, max_value=max(len(values), 1)))
    itp = Interpreter(prelude=None)
    itp.eval(f"(def xs {_lisp_list(values)})")
    if i > len(values):
        return
    assert itp.eval(f"(cat (take {i} xs) (drop {i} xs))") == values


@settings(max_examples=50)
@given(small_lists, small_lists)
def test_cat_length_is_sum(xs, ys):
    itp = Interpreter(prelude=None)
    assert itp.eval(f"(len (cat {_lisp_list(xs)} {_lisp_list(ys)}))") == len(xs) + len(ys)


@settings(max_examples=50)
@given(small_lists)
def test_list_prints_as_its_source(values):
    itp = Interpreter(prelude=None)
    assert to_string(itp.eval(_lisp_list(values))) == f"({' '.join(str(v) for v in values)})"


@settings(max_examples=50)
@given(st.integers(min_value=-50, max_value=50), st.integers(min_value=-50, max_value=50))
def test_range_length(lo, hi):
    itp = Interpreter(prelude=None)
    assert itp.eval(f"(len (range {lo} {hi}))") == max(hi - lo, 0)
