"""Abstract Syntax Tree (AST) definitions for the Tinyimp language.

The AST classes defined in this module represent the syntactic structure
of parsed Tinyimp programs. They are used by the interpreter to execute
Tinyimp code. Nodes are frozen once built and every sequence is a tuple,
so a tree can be shared freely between runs.

There are two closed families: expressions (`Expr`) and statements
(`Stmt`). `Block`, `FuncParam`, `FuncDecl`, `MainBlock` and `Program`
describe the structure around them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


BINARY_OPERATORS = ('+', '-', '*', '/', '>', '<', '=>', '=<', '==', '&', '||')
UNARY_OPERATORS = ('!', '-')


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class Expr(Node):
    """Base class for expression nodes."""
    pass


@dataclass(frozen=True)
class Stmt(Node):
    """Base class for statement nodes."""
    pass


# Expressions

@dataclass(frozen=True)
class IntLiteral(Expr):
    value: int


@dataclass(frozen=True)
class FloatLiteral(Expr):
    value: float


@dataclass(frozen=True)
class BoolLiteral(Expr):
    value: bool


@dataclass(frozen=True)
class StrLiteral(Expr):
    value: str


@dataclass(frozen=True)
class Ident(Expr):
    name: str


@dataclass(frozen=True)
class BinaryOp(Expr):
    left: Expr
    op: str
    right: Expr

    def __post_init__(self):
        if self.op not in BINARY_OPERATORS:
            raise ValueError(f"unknown binary operator {self.op!r}")


@dataclass(frozen=True)
class UnaryOp(Expr):
    op: str
    operand: Expr

    def __post_init__(self):
        if self.op not in UNARY_OPERATORS:
            raise ValueError(f"unknown unary operator {self.op!r}")


@dataclass(frozen=True)
class Call(Expr):
    name: str
    args: Tuple[Expr, ...] = ()


# Statements

@dataclass(frozen=True)
class Block(Node):
    statements: Tuple[Stmt, ...] = ()


@dataclass(frozen=True)
class Assign(Stmt):
    name: str
    value: Expr


@dataclass(frozen=True)
class VarDecl(Stmt):
    type_name: str
    name: str
    expr: Optional[Expr] = None  # initial value


@dataclass(frozen=True)
class IfStmt(Stmt):
    condition: Expr
    then_block: Block
    else_block: Optional[Block] = None


@dataclass(frozen=True)
class WhileStmt(Stmt):
    condition: Expr
    body: Block


@dataclass(frozen=True)
class ReturnStmt(Stmt):
    value: Expr


@dataclass(frozen=True)
class ExprStmt(Stmt):
    expr: Expr


# Program structure

@dataclass(frozen=True)
class FuncParam:
    type_name: str
    name: str


@dataclass(frozen=True)
class FuncDecl(Node):
    name: str
    return_type: str
    params: Tuple[FuncParam, ...]
    body: Block


@dataclass(frozen=True)
class MainBlock(Node):
    statements: Tuple[Stmt, ...] = ()


@dataclass(frozen=True)
class Program(Node):
    functions: Tuple[FuncDecl, ...] = ()
    main: Optional[MainBlock] = None
