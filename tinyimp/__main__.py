"""CLI entry point for the Tinyimp interpreter.

Usage:
    python -m tinyimp [-v|-vv|-vvv] [--no-report] <program_file>
    python -m tinyimp [-v...] --emit-ast <program_file>
    python -m tinyimp [-v...] [--no-report] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .timp file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --no-report   Do not print the program state after the main block

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path
from .parser import parse_program
from .interpreter import Interpreter
from .ast_json import ast_to_obj, ast_from_obj
from .errors import ParseError, TinyError


def read_source(program_file: Path):
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(program_file, 'r', encoding='utf-8') as f:
        source = f.read()
    try:
        return parse_program(source)
    except ParseError as e:
        print(f"Syntax error: {e}", file=sys.stderr)
        sys.exit(1)


def execute(ast_program, args) -> None:
    interpreter = Interpreter(debug_level=args.v, report=not args.no_report)
    try:
        interpreter.run(ast_program)
    except TinyError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Tinyimp language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--no-report', action='store_true', help='do not print the final program state')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='TIMP_FILE', help='emit AST JSON for the given .timp file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Tinyimp program file (.timp) to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        ast_program = read_source(program_file)
        obj = ast_to_obj(ast_program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(1)
        with open(ast_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        try:
            ast_program = ast_from_obj(data)
        except (TypeError, ValueError, KeyError) as e:
            print(f"Error: invalid AST file {ast_path}: {e}", file=sys.stderr)
            sys.exit(1)
        execute(ast_program, args)
        return

    # Default: execute source file
    if not args.program:
        parser.error('missing program file; or use --emit-ast/--ast')
    execute(read_source(Path(args.program)), args)


if __name__ == '__main__':
    main()
