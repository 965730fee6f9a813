"""Parenthesized prefix rendering of the syntax tree, for debugging and tests."""

from __future__ import annotations
from typing import Sequence, Union
import json

from .ast import (
    Assign, Binary, BlockStmt, BreakStmt, Call, Expr, ExpressionStmt, Function,
    FunctionStmt, Grouping, IfStmt, Literal, Logical, PrintStmt, ReturnStmt, Stmt,
    Unary, Variable, VarStmt, WhileStmt,
)
from .interpreter import stringify


def parenthesize(name:str, *parts:Union[Expr, Stmt, str])->str:
    out=[name]
    for part in parts:
        out.append(part if isinstance(part,str) else print_node(part))
    return "("+" ".join(out)+")"

def print_expr(expr:Expr)->str:
    if isinstance(expr, Literal):
        if isinstance(expr.value,str):
            return json.dumps(expr.value)
        return stringify(expr.value)
    if isinstance(expr, Grouping):
        return parenthesize("group", expr.expression)
    if isinstance(expr, Unary):
        return parenthesize(expr.operator.lexeme, expr.right)
    if isinstance(expr, (Binary, Logical)):
        return parenthesize(expr.operator.lexeme, expr.left, expr.right)
    if isinstance(expr, Variable):
        return expr.name.lexeme
    if isinstance(expr, Assign):
        return parenthesize("=", expr.name.lexeme, expr.value)
    if isinstance(expr, Call):
        return parenthesize("call", expr.callee, *expr.arguments)
    if isinstance(expr, Function):
        params="("+" ".join(p.lexeme for p in expr.params)+")"
        return parenthesize("fun", params, *expr.body)
    raise TypeError(f"Unknown expression type: {type(expr).__name__}")

def print_stmt(stmt:Stmt)->str:
    if isinstance(stmt, ExpressionStmt):
        return parenthesize(";", stmt.expression)
    if isinstance(stmt, PrintStmt):
        return parenthesize("print", stmt.expression)
    if isinstance(stmt, VarStmt):
        if stmt.initializer is None:
            return parenthesize("var", stmt.name.lexeme)
        return parenthesize("var", stmt.name.lexeme, stmt.initializer)
    if isinstance(stmt, BlockStmt):
        return parenthesize("block", *stmt.statements)
    if isinstance(stmt, IfStmt):
        if stmt.else_branch is None:
            return parenthesize("if", stmt.condition, stmt.then_branch)
        return parenthesize("if", stmt.condition, stmt.then_branch, stmt.else_branch)
    if isinstance(stmt, WhileStmt):
        return parenthesize("while", stmt.condition, stmt.body)
    if isinstance(stmt, BreakStmt):
        return "(break)"
    if isinstance(stmt, FunctionStmt):
        params="("+" ".join(p.lexeme for p in stmt.function.params)+")"
        return parenthesize("fun", stmt.name.lexeme, params, *stmt.function.body)
    if isinstance(stmt, ReturnStmt):
        if stmt.value is None:
            return "(return)"
        return parenthesize("return", stmt.value)
    raise TypeError(f"Unknown statement type: {type(stmt).__name__}")

def print_node(node:Union[Expr, Stmt])->str:
    if isinstance(node, Stmt):
        return print_stmt(node)
    return print_expr(node)

def print_program(statements:Sequence[Stmt])->str:
    return "\n".join(print_stmt(s) for s in statements)
