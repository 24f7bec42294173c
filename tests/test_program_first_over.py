from pathlib import Path
from tinyimp.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_first_over(capsys):
    """A return inside an if inside an infinite while ends the call."""
    with open(EXAMPLES / 'first_over.timp', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter(report=False)
    state = interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['64', 'true false']
    assert state == {'s': 64, 'big': True}
