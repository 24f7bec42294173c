import json
from pathlib import Path

import pytest

from tinyimp.ast import Program, Ident, BoolLiteral, IntLiteral, FloatLiteral
from tinyimp.ast_json import ast_to_obj, ast_from_obj
from tinyimp.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_example_programs_survive_json():
    for path in sorted(EXAMPLES.glob('*.timp')):
        program = parse_program(path.read_text(encoding='utf-8'))
        text = json.dumps(ast_to_obj(program))
        assert ast_from_obj(json.loads(text)) == program, path.name


def test_loaded_ast_runs_like_parsed_source(capsys):
    source = (EXAMPLES / 'add.timp').read_text(encoding='utf-8')
    obj = json.loads(json.dumps(ast_to_obj(parse_program(source))))
    state = Interpreter().run(ast_from_obj(obj))
    assert state == {'x': 5}
    assert capsys.readouterr().out.startswith('5\n')


def test_object_shape():
    obj = ast_to_obj(parse_program('main { int x = -1; }'))
    assert obj == {
        'type': 'Program',
        'functions': [],
        'main': {
            'type': 'MainBlock',
            'statements': [{
                'type': 'VarDecl',
                'type_name': 'int',
                'name': 'x',
                'expr': {'type': 'UnaryOp', 'op': '-', 'operand': {'type': 'IntLiteral', 'value': 1}},
            }],
        },
    }


def test_program_without_main():
    assert ast_from_obj(ast_to_obj(Program())) == Program()


def test_invalid_objects():
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'Lambda'})
    with pytest.raises(TypeError):
        ast_from_obj(['not', 'a', 'node'])
    with pytest.raises(TypeError):
        ast_to_obj(object())
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'BinaryOp', 'left': ast_to_obj(Ident('a')), 'op': '%', 'right': ast_to_obj(Ident('b'))})


@pytest.mark.parametrize('obj', [
    {'type': 'BoolLiteral', 'value': 'false'},
    {'type': 'BoolLiteral', 'value': 0},
    {'type': 'IntLiteral', 'value': '12'},
    {'type': 'IntLiteral', 'value': True},
    {'type': 'IntLiteral', 'value': 1.5},
    {'type': 'IntLiteral', 'value': 2 ** 63},
    {'type': 'IntLiteral', 'value': -2 ** 63 - 1},
    {'type': 'FloatLiteral', 'value': '1.5'},
    {'type': 'StrLiteral', 'value': 7},
])
def test_literal_values_are_checked(obj):
    with pytest.raises(ValueError):
        ast_from_obj(obj)


def test_literal_values_at_the_edges_load():
    assert ast_from_obj({'type': 'BoolLiteral', 'value': False}) == BoolLiteral(False)
    assert ast_from_obj({'type': 'IntLiteral', 'value': 2 ** 63 - 1}) == IntLiteral(2 ** 63 - 1)
    assert ast_from_obj({'type': 'IntLiteral', 'value': -2 ** 63}) == IntLiteral(-2 ** 63)
    assert ast_from_obj({'type': 'FloatLiteral', 'value': 3}) == FloatLiteral(3.0)
