import pickle

import pytest

from stutter.errors import StutterTypeError, StutterUnboundSymbol
from stutter.types.environment import GlobalEnvironment, LocalEnvironment
from stutter.types.nil import Nil
from stutter.types.symbol import Symbol


def test_symbols_are_interned():
    assert Symbol("abc") is Symbol("abc")
    assert Symbol("abc") != Symbol("abd")
    assert pickle.loads(pickle.dumps(Symbol("abc"))) is Symbol("abc")


def test_nil_is_falsy_and_only_equal_to_itself():
    assert not Nil
    assert Nil == Nil
    assert Nil != 0
    assert Nil != []
    assert repr(Nil) == "Nil"


def test_bind_returns_new_env_and_keeps_old():
    x = Symbol("x")
    base = LocalEnvironment()
    one = base.bind(x, 1)
    two = one.bind(x, 2)
    g = GlobalEnvironment()
    assert x not in base
    assert one.lookup(x, g) == 1
    assert two.lookup(x, g) == 2
    assert len(base) == 0 and len(one) == 1 and len(two) == 1


def test_sibling_scopes_do_not_see_each_other():
    a, b = Symbol("a"), Symbol("b")
    g = GlobalEnvironment()
    root = LocalEnvironment().bind(a, 1)
    left = root.bind(b, "left")
    right = root.bind(b, "right")
    assert left.lookup(b, g) == "left"
    assert right.lookup(b, g) == "right"
    assert b not in root


def test_local_lookup_falls_back_to_global():
    g = GlobalEnvironment()
    g.define(Symbol("pi"), 3.14)
    assert LocalEnvironment().lookup(Symbol("pi"), g) == 3.14


def test_local_shadows_global():
    g = GlobalEnvironment()
    g.define(Symbol("v"), 1)
    env = LocalEnvironment().bind(Symbol("v"), 2)
    assert env.lookup(Symbol("v"), g) == 2


def test_unbound_lookup():
    with pytest.raises(StutterUnboundSymbol, match="'ghost' is not in scope"):
        LocalEnvironment().lookup(Symbol("ghost"), GlobalEnvironment())


def test_global_define_replaces():
    g = GlobalEnvironment()
    g.define(Symbol("k"), 1)
    g.define(Symbol("k"), 2)
    assert g.lookup(Symbol("k")) == 2
    assert len(g) == 1
    assert list(g) == [Symbol("k")]


@pytest.mark.parametrize("name", ["x", 1, None])
def test_binding_requires_a_symbol(name):
    with pytest.raises(StutterTypeError):
        GlobalEnvironment().define(name, 1)
    with pytest.raises(StutterTypeError):
        LocalEnvironment().bind(name, 1)


def test_call_scope_does_not_leak_into_caller(itp):
    itp.eval("(def f (lambda (p) (+ p 1)))")
    assert itp.eval("(let (q 1) (f q))") == 2
    assert Symbol("p") not in itp.global_env
    assert Symbol("q") not in itp.global_env


def test_global_env_is_shared_across_forms(itp):
    itp.eval("(def counter 0)")
    itp.eval("(def counter (+ counter 1))")
    itp.eval("(def counter (+ counter 1))")
    assert itp.global_env.lookup(Symbol("counter")) == 2


def test_reprs():
    g = GlobalEnvironment()
    g.define(Symbol("a"), 1)
    assert repr(g) == "<GlobalEnvironment {a}>"
    env = LocalEnvironment().bind(Symbol("b"), 2)
    assert repr(env) == "<LocalEnvironment {b: 2}>"
