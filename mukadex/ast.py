"""Syntax tree for mukadex programs.

Nodes are frozen dataclasses; child sequences are tuples. Variable and
Assign nodes carry a ``uid`` assigned at construction, which is what the
resolver's distance table is keyed on.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple
import itertools

from .tokens import Token

_uids = itertools.count(1)

def _next_uid()->int:
    return next(_uids)


class Expr: pass
class Stmt: pass

@dataclass(frozen=True)
class Literal(Expr):
    value: Any

@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr

@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr

@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr

@dataclass(frozen=True)
class Logical(Expr):
    left: Expr
    operator: Token
    right: Expr

@dataclass(frozen=True)
class Variable(Expr):
    name: Token
    uid: int = field(default_factory=_next_uid, compare=False)

@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr
    uid: int = field(default_factory=_next_uid, compare=False)

@dataclass(frozen=True)
class Call(Expr):
    callee: Expr
    paren: Token
    arguments: Tuple[Expr, ...]

@dataclass(frozen=True)
class Function(Expr):
    params: Tuple[Token, ...]
    body: Tuple[Stmt, ...]

@dataclass(frozen=True)
class ExpressionStmt(Stmt):
    expression: Expr

@dataclass(frozen=True)
class PrintStmt(Stmt):
    expression: Expr

@dataclass(frozen=True)
class VarStmt(Stmt):
    name: Token
    initializer: Optional[Expr]

@dataclass(frozen=True)
class BlockStmt(Stmt):
    statements: Tuple[Stmt, ...]

@dataclass(frozen=True)
class IfStmt(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]

@dataclass(frozen=True)
class WhileStmt(Stmt):
    condition: Expr
    body: Stmt

@dataclass(frozen=True)
class BreakStmt(Stmt):
    keyword: Token

@dataclass(frozen=True)
class FunctionStmt(Stmt):
    name: Token
    function: Function

@dataclass(frozen=True)
class ReturnStmt(Stmt):
    keyword: Token
    value: Optional[Expr]
