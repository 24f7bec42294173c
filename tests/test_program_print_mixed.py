from pathlib import Path
from tinyimp.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_print_mixed(capsys):
    """Mixed argument types print space separated on a single line, and a
    main block without variables still gets an (empty) state report."""
    with open(EXAMPLES / 'print_mixed.timp', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out
    assert out == '1 a true\n\n=== Program State ===\n'
