import pytest

from tinyimp.ast import FuncDecl, Block
from tinyimp.environment import Environment
from tinyimp.errors import TinyError


def test_declare_get_and_set():
    env = Environment()
    env.declare('x', 'int', 1)
    assert env.get('x') == 1
    env.set('x', 2)
    assert env.get('x') == 2
    assert env.types['x'] == 'int'


def test_undeclared_names():
    env = Environment()
    with pytest.raises(TinyError) as excinfo:
        env.get('x')
    assert excinfo.value.kind == 'UndefinedVariable'
    with pytest.raises(TinyError) as excinfo:
        env.set('x', 1)
    assert excinfo.value.kind == 'UndefinedVariable'
    assert 'x' not in env.values


def test_snapshot_is_a_copy_in_declaration_order():
    env = Environment()
    env.declare('b', 'int', 1)
    env.declare('a', 'int', 2)
    snap = env.snapshot()
    env.set('a', 3)
    assert list(snap) == ['b', 'a']
    assert snap['a'] == 2


def test_functions_are_shared_but_values_are_not():
    outer = Environment()
    outer.declare('x', 'int', 1)
    outer.define_function(FuncDecl('f', 'int', (), Block()))
    inner = Environment(functions=outer.functions)
    assert inner.get_function('f') is outer.get_function('f')
    assert inner.get_function('g') is None
    with pytest.raises(TinyError):
        inner.get('x')
