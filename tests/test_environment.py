import logging

from swisp.types.environment import Environment
from swisp.types.expression import Error, Number, QExpr, Symbol
from swisp.types.lambda_fn import Builtin


def test_lookup_walks_parent_chain():
    root = Environment()
    root.assign(Symbol("x"), Number(1))
    child = Environment(Environment(root))
    assert child.lookup(Symbol("x")) == Number(1)


def test_inner_binding_shadows_outer():
    root = Environment()
    root.assign(Symbol("x"), Number(1))
    child = Environment(root)
    child.assign(Symbol("x"), Number(2))
    assert child.lookup(Symbol("x")) == Number(2)
    assert root.lookup(Symbol("x")) == Number(1)


def test_unbound_lookup_returns_error():
    assert Environment().lookup(Symbol("zzz")) == Error("Unbound symbol zzz")


def test_define_writes_to_global_frame():
    root = Environment()
    child = Environment(Environment(root))
    child.define(Symbol("g"), Number(9))
    assert "g" in root.vars
    assert "g" not in child.vars
    assert child.root is root


def test_assign_writes_to_current_frame():
    root = Environment()
    child = Environment(root)
    child.assign(Symbol("local"), Number(3))
    assert "local" in child.vars
    assert root.lookup(Symbol("local")) == Error("Unbound symbol local")


def test_lookup_hands_out_copies():
    env = Environment()
    env.assign(Symbol("xs"), QExpr([Number(1)]))
    first = env.lookup(Symbol("xs"))
    first.add(Number(2))
    assert env.lookup(Symbol("xs")) == QExpr([Number(1)])


def test_caller_is_searched_after_lexical_chain():
    root = Environment()
    root.assign(Symbol("x"), Number(1))
    call_site = Environment(root)
    call_site.assign(Symbol("x"), Number(2))
    call_site.assign(Symbol("y"), Number(3))
    frame = Environment(root)
    frame.caller = call_site
    assert frame.lookup(Symbol("x")) == Number(1)
    assert frame.lookup(Symbol("y")) == Number(3)


def test_copy_is_independent():
    root = Environment()
    env = Environment(root)
    env.assign(Symbol("a"), QExpr([Number(1)]))
    clone = env.copy()
    clone.assign(Symbol("a"), Number(5))
    assert env.lookup(Symbol("a")) == QExpr([Number(1)])
    assert clone.parent is root


def test_register_builtin():
    def identity(env, args):
        return args

    env = Environment()
    env.register_builtin("id", identity)
    value = env.lookup(Symbol("id"))
    assert isinstance(value, Builtin)
    assert value.fn is identity
    assert value == Builtin(identity)
    assert list(env.vars) == ["id"]


def test_bindings_are_logged(caplog):
    env = Environment()
    with caplog.at_level(logging.DEBUG, logger="swisp.types.environment"):
        env.assign(Symbol("x"), Number(1))
    assert "bind x = 1" in caplog.text


def test_repr_shows_chain():
    root = Environment()
    root.assign(Symbol("a"), Number(1))
    child = Environment(root)
    child.assign(Symbol("b"), Number(2))
    assert repr(child) == "<Environment chain: {b: 2} -> {a: 1}>"
    assert str(child) == "{b: 2} -> ..."
