"""JSON serialization/deserialization for Tinyimp AST.

This module converts between Tinyimp AST dataclasses and plain Python
dict/list structures suitable for JSON encoding, so that a program
parsed once can be stored and executed later without the front end.
Every node is written as ``{"type": <class name>, ...fields}``.
"""

from __future__ import annotations

from typing import Any

from .ast import (
    Program,
    FuncParam,
    FuncDecl,
    MainBlock,
    Block,
    VarDecl,
    Assign,
    IfStmt,
    WhileStmt,
    ReturnStmt,
    ExprStmt,
    BinaryOp,
    UnaryOp,
    IntLiteral,
    FloatLiteral,
    BoolLiteral,
    StrLiteral,
    Ident,
    Call,
)
from .types import INT_MIN, INT_MAX


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    # Literals
    if isinstance(node, IntLiteral):
        return {"type": "IntLiteral", "value": node.value}
    if isinstance(node, FloatLiteral):
        return {"type": "FloatLiteral", "value": node.value}
    if isinstance(node, BoolLiteral):
        return {"type": "BoolLiteral", "value": node.value}
    if isinstance(node, StrLiteral):
        return {"type": "StrLiteral", "value": node.value}

    # Expressions
    if isinstance(node, Ident):
        return {"type": "Ident", "name": node.name}
    if isinstance(node, BinaryOp):
        return {"type": "BinaryOp", "left": ast_to_obj(node.left), "op": node.op, "right": ast_to_obj(node.right)}
    if isinstance(node, UnaryOp):
        return {"type": "UnaryOp", "op": node.op, "operand": ast_to_obj(node.operand)}
    if isinstance(node, Call):
        return {"type": "Call", "name": node.name, "args": [ast_to_obj(a) for a in node.args]}

    # Statements
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": node.name, "value": ast_to_obj(node.value)}
    if isinstance(node, VarDecl):
        return {
            "type": "VarDecl",
            "type_name": node.type_name,
            "name": node.name,
            "expr": ast_to_obj(node.expr),
        }
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "then_block": ast_to_obj(node.then_block),
            "else_block": ast_to_obj(node.else_block),
        }
    if isinstance(node, WhileStmt):
        return {"type": "WhileStmt", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, ReturnStmt):
        return {"type": "ReturnStmt", "value": ast_to_obj(node.value)}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}

    # Program structure
    if isinstance(node, FuncParam):
        return {"type": "FuncParam", "type_name": node.type_name, "name": node.name}
    if isinstance(node, FuncDecl):
        return {
            "type": "FuncDecl",
            "name": node.name,
            "return_type": node.return_type,
            "params": [ast_to_obj(p) for p in node.params],
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, MainBlock):
        return {"type": "MainBlock", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, Program):
        return {
            "type": "Program",
            "functions": [ast_to_obj(f) for f in node.functions],
            "main": ast_to_obj(node.main),
        }

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "IntLiteral":
        value = obj["value"]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"IntLiteral value must be an integer, got {value!r}")
        if value < INT_MIN or value > INT_MAX:
            raise ValueError(f"IntLiteral value {value} out of range")
        return IntLiteral(value)
    if t == "FloatLiteral":
        value = obj["value"]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"FloatLiteral value must be a number, got {value!r}")
        return FloatLiteral(float(value))
    if t == "BoolLiteral":
        value = obj["value"]
        if not isinstance(value, bool):
            raise ValueError(f"BoolLiteral value must be true or false, got {value!r}")
        return BoolLiteral(value)
    if t == "StrLiteral":
        value = obj["value"]
        if not isinstance(value, str):
            raise ValueError(f"StrLiteral value must be a string, got {value!r}")
        return StrLiteral(value)
    if t == "Ident":
        return Ident(name=obj["name"])
    if t == "BinaryOp":
        return BinaryOp(left=ast_from_obj(obj["left"]), op=obj["op"], right=ast_from_obj(obj["right"]))
    if t == "UnaryOp":
        return UnaryOp(op=obj["op"], operand=ast_from_obj(obj["operand"]))
    if t == "Call":
        return Call(name=obj["name"], args=tuple(ast_from_obj(a) for a in obj.get("args", [])))
    if t == "Block":
        return Block(statements=tuple(ast_from_obj(s) for s in obj["statements"]))
    if t == "Assign":
        return Assign(name=obj["name"], value=ast_from_obj(obj["value"]))
    if t == "VarDecl":
        return VarDecl(type_name=obj["type_name"], name=obj["name"], expr=ast_from_obj(obj.get("expr")))
    if t == "IfStmt":
        return IfStmt(
            condition=ast_from_obj(obj["condition"]),
            then_block=ast_from_obj(obj["then_block"]),
            else_block=ast_from_obj(obj.get("else_block")),
        )
    if t == "WhileStmt":
        return WhileStmt(condition=ast_from_obj(obj["condition"]), body=ast_from_obj(obj["body"]))
    if t == "ReturnStmt":
        return ReturnStmt(value=ast_from_obj(obj["value"]))
    if t == "ExprStmt":
        return ExprStmt(expr=ast_from_obj(obj["expr"]))
    if t == "FuncParam":
        return FuncParam(type_name=obj["type_name"], name=obj["name"])
    if t == "FuncDecl":
        return FuncDecl(
            name=obj["name"],
            return_type=obj["return_type"],
            params=tuple(ast_from_obj(p) for p in obj["params"]),
            body=ast_from_obj(obj["body"]),
        )
    if t == "MainBlock":
        return MainBlock(statements=tuple(ast_from_obj(s) for s in obj["statements"]))
    if t == "Program":
        return Program(
            functions=tuple(ast_from_obj(f) for f in obj.get("functions", [])),
            main=ast_from_obj(obj.get("main")),
        )

    raise ValueError(f"Unknown AST node type: {t}")
