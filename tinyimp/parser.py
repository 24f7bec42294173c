"""Parser for the Tinyimp language.

The source text is fed into a Lark LALR parser configured with the
Tinyimp grammar, and the resulting parse tree is transformed into the
AST defined in `tinyimp.ast` by `ASTTransformer`.

A program is a sequence of function definitions and at most one `main`
block::

    fn add(int a, int b) -> int { return a + b; }
    main { int x = add(2, 3); print(x); }

The comparison operators are spelled `>`, `<`, `=>` (greater or equal)
and `=<` (less or equal). `&` and `||` are the logical operators.

The `parse_program` function is the public entry point and returns a
`Program` AST node representing the entire source file.
"""

from __future__ import annotations

from typing import List
import ast as py_ast

from lark import Lark, Transformer
from lark.exceptions import UnexpectedInput, VisitError

from .ast import (
    Program, FuncParam, FuncDecl, MainBlock, Block, VarDecl, Assign,
    IfStmt, WhileStmt, ReturnStmt, ExprStmt, BinaryOp, UnaryOp,
    IntLiteral, FloatLiteral, BoolLiteral, StrLiteral, Ident, Call,
)
from .errors import ParseError
from .types import INT_MIN, INT_MAX


TINYIMP_GRAMMAR = r"""
    start: (func_decl | main_block)*

    func_decl: "fn" NAME "(" [param_list] ")" "->" NAME block
    param_list: param ("," param)*
    param: NAME NAME

    main_block: "main" block
    block: "{" statement* "}"

    // Statements
    ?statement: var_decl
              | assign
              | if_stmt
              | while_stmt
              | return_stmt
              | expr_stmt

    var_decl: NAME NAME ["=" expression] ";"
    assign: NAME "=" expression ";"
    if_stmt: "if" "(" expression ")" block ["else" block]
    while_stmt: "while" "(" expression ")" block
    return_stmt: "return" expression ";"
    expr_stmt: expression ";"

    // Expressions with precedence
    ?expression: logic_or
    ?logic_or: logic_and
             | logic_or "||" logic_and -> or_op
    ?logic_and: equality
              | logic_and "&" equality -> and_op
    ?equality: compare
             | equality "==" compare -> eq
    ?compare: sum
            | compare ">" sum -> gt
            | compare "<" sum -> lt
            | compare "=>" sum -> ge
            | compare "=<" sum -> le
    ?sum: product
        | sum "+" product -> add
        | sum "-" product -> sub
    ?product: unary
            | product "*" unary -> mul
            | product "/" unary -> div
    ?unary: "!" unary -> not_op
          | "-" unary -> neg
          | primary
    ?primary: INT -> int_lit
            | FLOAT -> float_lit
            | "true" -> true_lit
            | "false" -> false_lit
            | ESCAPED_STRING -> string_lit
            | NAME "(" [arg_list] ")" -> call
            | NAME -> ident
            | "(" expression ")"
    arg_list: expression ("," expression)*

    // Tokens
    FLOAT.2: /\d+\.\d+([eE][+-]?\d+)?/
    INT: /\d+/
    %import common.CNAME -> NAME
    %import common.ESCAPED_STRING
    %import common.WS
    %ignore WS

    // Comments
    LINE_COMMENT: /\/\/[^\n]*/
    %ignore LINE_COMMENT
    BLOCK_COMMENT: /\/\*[\s\S]*?\*\//
    %ignore BLOCK_COMMENT
"""


TINYIMP_PARSER = Lark(
    TINYIMP_GRAMMAR,
    parser='lalr',
    propagate_positions=True,
    maybe_placeholders=False,
)


def _binary(op: str):
    def build(self, items):
        return BinaryOp(items[0], op, items[1])
    return build


def _unary(op: str):
    def build(self, items):
        return UnaryOp(op, items[0])
    return build


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def start(self, items):
        functions = [item for item in items if isinstance(item, FuncDecl)]
        mains = [item for item in items if isinstance(item, MainBlock)]
        if len(mains) > 1:
            raise ParseError('a program may contain at most one main block')
        return Program(functions=tuple(functions), main=mains[0] if mains else None)

    def func_decl(self, items):
        # items: name, [param_list], return type, block
        name = str(items[0])
        params: List[FuncParam] = items[1] if isinstance(items[1], list) else []
        return_type = str(items[-2])
        body = items[-1]
        return FuncDecl(name=name, return_type=return_type, params=tuple(params), body=body)

    def param_list(self, items):
        return list(items)

    def param(self, items):
        return FuncParam(str(items[0]), str(items[1]))

    def main_block(self, items):
        return MainBlock(statements=items[0].statements)

    def block(self, items):
        return Block(statements=tuple(items))

    def var_decl(self, items):
        expr = items[2] if len(items) > 2 else None
        return VarDecl(type_name=str(items[0]), name=str(items[1]), expr=expr)

    def assign(self, items):
        return Assign(name=str(items[0]), value=items[1])

    def if_stmt(self, items):
        else_block = items[2] if len(items) > 2 else None
        return IfStmt(items[0], items[1], else_block)

    def while_stmt(self, items):
        return WhileStmt(items[0], items[1])

    def return_stmt(self, items):
        return ReturnStmt(items[0])

    def expr_stmt(self, items):
        return ExprStmt(items[0])

    # Expressions
    or_op = _binary('||')
    and_op = _binary('&')
    eq = _binary('==')
    gt = _binary('>')
    lt = _binary('<')
    ge = _binary('=>')
    le = _binary('=<')
    add = _binary('+')
    sub = _binary('-')
    mul = _binary('*')
    div = _binary('/')
    not_op = _unary('!')
    neg = _unary('-')

    def int_lit(self, items):
        token = items[0]
        value = int(token.value)
        if value < INT_MIN or value > INT_MAX:
            raise ParseError(f"integer literal {token.value} out of range at {token.line}:{token.column}")
        return IntLiteral(value)

    def float_lit(self, items):
        return FloatLiteral(float(items[0].value))

    def true_lit(self, items):
        return BoolLiteral(True)

    def false_lit(self, items):
        return BoolLiteral(False)

    def string_lit(self, items):
        # Use Python ast.literal_eval to unescape
        return StrLiteral(py_ast.literal_eval(items[0].value))

    def call(self, items):
        args = items[1] if len(items) > 1 else []
        return Call(name=str(items[0]), args=tuple(args))

    def ident(self, items):
        return Ident(str(items[0]))

    def arg_list(self, items):
        return list(items)


def parse_program(source: str) -> Program:
    """Parse Tinyimp source code into an AST Program.

    Syntax errors, including more than one main block and out of range
    integer literals, are raised as `ParseError`.
    """
    try:
        tree = TINYIMP_PARSER.parse(source)
        return ASTTransformer().transform(tree)
    except UnexpectedInput as e:
        raise ParseError(str(e)) from e
    except VisitError as e:
        if isinstance(e.orig_exc, ParseError):
            raise e.orig_exc from None
        raise
