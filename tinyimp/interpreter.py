"""Interpreter for the Tinyimp language.

This module walks a `Program` AST and executes it directly. Expressions
are computed by `Interpreter.evaluate`, statements are performed by
`Interpreter.execute`, and `Interpreter.run` drives a whole program:
it registers the functions, runs the main block against one top-level
environment and finally reports the state of the top-level variables.

Every runtime failure raises `TinyError` and aborts the run.
"""

from __future__ import annotations

import math
import sys
from typing import Any, Dict, List, Optional, TextIO

from .ast import (
    Program, Block, FuncDecl, Assign, VarDecl, IfStmt, WhileStmt,
    ReturnStmt, ExprStmt, IntLiteral, FloatLiteral, BoolLiteral,
    StrLiteral, Ident, BinaryOp, UnaryOp, Call, Expr, Node,
)
from .builtin_function import BuiltinFunction
from .environment import Environment
from .errors import TinyError, ReturnSignal
from .parser import parse_program
from .types import ErrorVal, is_int, is_float, to_string, type_name, values_equal, wrap_int


ARITHMETIC_OPS = ('+', '-', '*', '/')
RELATIONAL_OPS = ('>', '<', '=>', '=<')
LOGICAL_OPS = ('&', '||')

# Python frame budget while a program runs; one Tinyimp call takes about
# six frames, so this allows several thousand nested calls.
RECURSION_LIMIT = 50000


def to_double(value: Any) -> float:
    """Widen an int to float; floats pass through; anything else is an error."""
    if is_int(value):
        return float(value)
    if is_float(value):
        return value
    raise TinyError(ErrorVal('TypeMismatch', f'cannot convert {type_name(value)} to double'))


def divide_int(a: int, b: int) -> int:
    if b == 0:
        raise TinyError(ErrorVal('DivisionByZero', 'division by zero'))
    # truncate toward zero; Python's // floors
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return wrap_int(q)


def divide_double(a: float, b: float) -> float:
    if b == 0.0:
        # IEEE 754: x/0 is a signed infinity, 0/0 and nan/0 are NaN
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


class Interpreter:
    """Core interpreter that executes a Tinyimp AST."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 stdout: Optional[TextIO] = None, report: bool = True):
        self.global_env = Environment()
        self.builtins: Dict[str, BuiltinFunction] = {}
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 else None
        self.stdout = stdout
        self.report = report
        self.load_builtins()

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    @property
    def out(self) -> TextIO:
        # resolved on every write so that a swapped sys.stdout is honoured
        return self.stdout if self.stdout is not None else sys.stdout

    def load_builtins(self):
        def std_print(args: List[Expr], env: Environment) -> Any:
            # each value is written as soon as it is evaluated
            out = self.out
            for i, arg in enumerate(args):
                value = self.evaluate(arg, env)
                out.write(to_string(value))
                if i < len(args) - 1:
                    out.write(' ')
            out.write('\n')
            out.flush()
            return None

        self.builtins['print'] = BuiltinFunction('print', None, std_print)

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Dict[str, Any]:
        """Register the program's functions, execute its main block and
        return a snapshot of the top-level variables."""
        if env is None:
            env = self.global_env
        old_limit = sys.getrecursionlimit()
        sys.setrecursionlimit(max(old_limit, RECURSION_LIMIT))
        try:
            for func in program.functions:
                if env.get_function(func.name) is not None:
                    self.debug(f"redefine function {func.name}")
                else:
                    self.debug(f"define function {func.name}")
                env.define_function(func)
            if program.main is not None:
                self.execute_block(program.main.statements, env)
                if self.report:
                    self.report_state(env)
            return env.snapshot()
        except RecursionError:
            raise TinyError(ErrorVal('StackOverflow', 'maximum call depth exceeded')) from None
        finally:
            sys.setrecursionlimit(old_limit)
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None

    def report_state(self, env: Environment):
        out = self.out
        out.write('\n=== Program State ===\n')
        for name, value in env.values.items():
            out.write(f"{name} = {to_string(value)}\n")
        out.flush()

    def execute_block(self, statements: Any, env: Environment) -> Optional[ReturnSignal]:
        for stmt in statements:
            result = self.execute(stmt, env)
            # propagate return signals
            if result is not None:
                return result
        return None

    def execute(self, node: Node, env: Environment) -> Optional[ReturnSignal]:
        if isinstance(node, VarDecl):
            value = self.evaluate(node.expr, env) if node.expr is not None else None
            env.declare(node.name, node.type_name, value)
            if self.debug_level >= 2:
                self.debug(f"declare {node.type_name} {node.name} = {to_string(value)}")
            return None
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            env.set(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name} = {to_string(value)}")
            return None
        if isinstance(node, IfStmt):
            cond = self.check_condition(self.evaluate(node.condition, env), 'if')
            if self.debug_level >= 3:
                self.debug(f"if condition -> {to_string(cond)}")
            if cond:
                return self.execute_block(node.then_block.statements, env)
            if node.else_block is not None:
                return self.execute_block(node.else_block.statements, env)
            return None
        if isinstance(node, WhileStmt):
            while True:
                cond = self.check_condition(self.evaluate(node.condition, env), 'while')
                if self.debug_level >= 3:
                    self.debug(f"while condition -> {to_string(cond)}")
                if not cond:
                    break
                res = self.execute_block(node.body.statements, env)
                if res is not None:
                    return res
            return None
        if isinstance(node, ReturnStmt):
            value = self.evaluate(node.value, env)
            if self.debug_level >= 2:
                self.debug(f"return {to_string(value)}")
            return ReturnSignal(value)
        if isinstance(node, ExprStmt):
            self.evaluate(node.expr, env)
            return None
        if isinstance(node, Block):
            return self.execute_block(node.statements, env)
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def check_condition(self, value: Any, where: str) -> bool:
        if not isinstance(value, bool):
            raise TinyError(ErrorVal('TypeMismatch', f'{where} condition must be bool, got {type_name(value)}'))
        return value

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, (IntLiteral, FloatLiteral, BoolLiteral, StrLiteral)):
            return node.value
        if isinstance(node, Ident):
            return env.get(node.name)
        if isinstance(node, BinaryOp):
            # both sides are always evaluated, & and || included
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.op, left, right)
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand, env)
            return self.apply_unary_op(node.op, operand)
        if isinstance(node, Call):
            return self.call_function(node, env)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def call_function(self, node: Call, env: Environment) -> Any:
        builtin = self.builtins.get(node.name)
        if builtin is not None:
            if builtin.arity is not None and len(node.args) != builtin.arity:
                raise TinyError(ErrorVal('ArityMismatch', f"{builtin.name} expects {builtin.arity} arguments"))
            return builtin.fn(node.args, env)
        func: Optional[FuncDecl] = env.get_function(node.name)
        if func is None:
            raise TinyError(ErrorVal('UndefinedFunction', f'undefined function {node.name}'))
        if len(node.args) != len(func.params):
            raise TinyError(ErrorVal(
                'ArityMismatch',
                f"function {func.name} expects {len(func.params)} arguments but got {len(node.args)}",
            ))
        args = [self.evaluate(arg, env) for arg in node.args]
        if self.debug_level >= 1:
            self.debug(f"call {func.name}({', '.join(to_string(a) for a in args)})")
        # fresh scope: the callee sees its parameters and the function table only
        call_env = Environment(functions=env.functions)
        for param, arg in zip(func.params, args):
            call_env.declare(param.name, param.type_name, arg)
        res = self.execute_block(func.body.statements, call_env)
        if res is None:
            raise TinyError(ErrorVal('MissingReturn', f'function {func.name} did not return a value'))
        return res.value

    def apply_unary_op(self, op: str, operand: Any) -> Any:
        if op == '!':
            if isinstance(operand, bool):
                return not operand
            raise TinyError(ErrorVal('TypeMismatch', f'operator ! expects bool, got {type_name(operand)}'))
        if op == '-':
            if is_int(operand):
                return wrap_int(-operand)
            if is_float(operand):
                return -operand
            raise TinyError(ErrorVal('TypeMismatch', f'unary - expects numeric, got {type_name(operand)}'))
        raise TinyError(ErrorVal('TypeMismatch', f'unsupported unary operator {op}'))

    def apply_binary_op(self, op: str, a: Any, b: Any) -> Any:
        if a is None or b is None:
            raise TinyError(ErrorVal(
                'NullOperand',
                f'null operand in {op} operation: left={to_string(a)}, right={to_string(b)}',
            ))
        if op in ARITHMETIC_OPS:
            if is_int(a) and is_int(b):
                if op == '+':
                    return wrap_int(a + b)
                if op == '-':
                    return wrap_int(a - b)
                if op == '*':
                    return wrap_int(a * b)
                return divide_int(a, b)
            x = to_double(a)
            y = to_double(b)
            if op == '+':
                return x + y
            if op == '-':
                return x - y
            if op == '*':
                return x * y
            return divide_double(x, y)
        if op in RELATIONAL_OPS:
            x = to_double(a)
            y = to_double(b)
            if op == '>':
                return x > y
            if op == '<':
                return x < y
            if op == '=>':
                return x >= y
            return x <= y
        if op == '==':
            return values_equal(a, b)
        if op in LOGICAL_OPS:
            if not isinstance(a, bool) or not isinstance(b, bool):
                raise TinyError(ErrorVal(
                    'TypeMismatch',
                    f'operator {op} expects bool operands, got {type_name(a)} and {type_name(b)}',
                ))
            if op == '&':
                return a and b
            return a or b
        raise TinyError(ErrorVal('TypeMismatch', f'unknown operator {op}'))


def run_program(source: str, debug_level: int = 0) -> Dict[str, Any]:
    """Convenience function to parse and run a Tinyimp program from source string."""
    ast_program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level)
    return interpreter.run(ast_program)


def run_file(file_path: str, debug_level: int = 0) -> Dict[str, Any]:
    """Parse and run a Tinyimp source file, returning the top-level variables."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    return run_program(source, debug_level=debug_level)
