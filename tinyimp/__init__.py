# Tinyimp language package
# This package provides a front end and a tree-walking interpreter for the
# Tinyimp language.
from .interpreter import run_program, run_file, Interpreter
from .errors import TinyError, ParseError
from .parser import parse_program

__all__ = [
    'run_program',
    'run_file',
    'Interpreter',
    'TinyError',
    'ParseError',
    'parse_program',
]
