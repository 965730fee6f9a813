"""Static scope resolution.

Walks the tree once before execution. For every local variable reference
it tells the interpreter how many scopes separate the use from the
declaration; globals are left unresolved and looked up by name at run
time. Nothing is evaluated here: loops are visited once and both branches
of an ``if`` are visited.
"""

from __future__ import annotations
from typing import Dict, List, Sequence, Union
import enum
import logging

from .ast import (
    Assign, Binary, BlockStmt, BreakStmt, Call, Expr, ExpressionStmt, Function,
    FunctionStmt, Grouping, IfStmt, Literal, Logical, PrintStmt, ReturnStmt, Stmt,
    Unary, Variable, VarStmt, WhileStmt,
)
from .errors import ErrorReporter
from .interpreter import Interpreter
from .tokens import Token

logger = logging.getLogger(__name__)


class FunctionType(enum.Enum):
    NONE = "none"
    FUNCTION = "function"
    LAMBDA = "lambda"


class Resolver:
    def __init__(self, interpreter:Interpreter, reporter:ErrorReporter, warn_unused:bool=True):
        self.interpreter=interpreter
        self.reporter=reporter
        self.warn_unused=warn_unused
        # innermost scope last; False until the initializer has been resolved
        self.scopes: List[Dict[str, bool]]=[]
        # locals declared with `var` and not referenced yet, per scope
        self.unused: List[Dict[str, Token]]=[]
        self.current_function=FunctionType.NONE
        self.in_loop=False
        self.resolved_count=0

    def resolve(self, target:Union[Sequence[Stmt], Stmt, Expr]):
        if isinstance(target, Stmt):
            self.resolve_stmt(target)
        elif isinstance(target, Expr):
            self.resolve_expr(target)
        else:
            for stmt in target:
                self.resolve_stmt(stmt)
            logger.debug("resolved %d local references", self.resolved_count)

    def resolve_stmt(self, stmt:Stmt):
        if isinstance(stmt, BlockStmt):
            self.begin_scope()
            for s in stmt.statements:
                self.resolve_stmt(s)
            self.end_scope()
        elif isinstance(stmt, VarStmt):
            self.declare(stmt.name)
            if stmt.initializer is not None:
                self.resolve_expr(stmt.initializer)
            self.define(stmt.name)
            if self.scopes:
                self.unused[-1][stmt.name.lexeme]=stmt.name
        elif isinstance(stmt, FunctionStmt):
            # defined before the body so the function can call itself
            self.declare(stmt.name)
            self.define(stmt.name)
            self.resolve_function(stmt.function, FunctionType.FUNCTION)
        elif isinstance(stmt, ExpressionStmt):
            self.resolve_expr(stmt.expression)
        elif isinstance(stmt, PrintStmt):
            self.resolve_expr(stmt.expression)
        elif isinstance(stmt, IfStmt):
            self.resolve_expr(stmt.condition)
            self.resolve_stmt(stmt.then_branch)
            if stmt.else_branch is not None:
                self.resolve_stmt(stmt.else_branch)
        elif isinstance(stmt, WhileStmt):
            self.resolve_expr(stmt.condition)
            enclosing_loop=self.in_loop
            self.in_loop=True
            self.resolve_stmt(stmt.body)
            self.in_loop=enclosing_loop
        elif isinstance(stmt, BreakStmt):
            if not self.in_loop:
                self.reporter.error(stmt.keyword, "Can't use 'break' outside of a loop.")
        elif isinstance(stmt, ReturnStmt):
            if self.current_function==FunctionType.NONE:
                self.reporter.error(stmt.keyword, "Can't return from top-level code.")
            if stmt.value is not None:
                self.resolve_expr(stmt.value)
        else:
            raise TypeError(f"Unknown statement type: {type(stmt).__name__}")

    def resolve_expr(self, expr:Expr):
        if isinstance(expr, Variable):
            if self.scopes and self.scopes[-1].get(expr.name.lexeme) is False:
                self.reporter.error(expr.name, "Can't read local variable in its own initializer.")
            self.resolve_local(expr, expr.name)
        elif isinstance(expr, Assign):
            self.resolve_expr(expr.value)
            self.resolve_local(expr, expr.name)
        elif isinstance(expr, (Binary, Logical)):
            self.resolve_expr(expr.left)
            self.resolve_expr(expr.right)
        elif isinstance(expr, Unary):
            self.resolve_expr(expr.right)
        elif isinstance(expr, Grouping):
            self.resolve_expr(expr.expression)
        elif isinstance(expr, Call):
            self.resolve_expr(expr.callee)
            for arg in expr.arguments:
                self.resolve_expr(arg)
        elif isinstance(expr, Function):
            self.resolve_function(expr, FunctionType.LAMBDA)
        elif isinstance(expr, Literal):
            pass
        else:
            raise TypeError(f"Unknown expression type: {type(expr).__name__}")

    def resolve_local(self, expr:Union[Variable, Assign], name:Token):
        for i in range(len(self.scopes)-1, -1, -1):
            if name.lexeme in self.scopes[i]:
                self.interpreter.resolve(expr, len(self.scopes)-1-i)
                self.unused[i].pop(name.lexeme, None)
                self.resolved_count+=1
                return

    def resolve_function(self, function:Function, type_:FunctionType):
        enclosing_function=self.current_function
        enclosing_loop=self.in_loop
        self.current_function=type_
        # a loop around the definition does not cover the body
        self.in_loop=False

        self.begin_scope()
        for param in function.params:
            self.declare(param)
            self.define(param)
        for stmt in function.body:
            self.resolve_stmt(stmt)
        self.end_scope()

        self.current_function=enclosing_function
        self.in_loop=enclosing_loop

    def begin_scope(self):
        self.scopes.append({})
        self.unused.append({})

    def end_scope(self):
        self.scopes.pop()
        for name, token in self.unused.pop().items():
            if self.warn_unused:
                self.reporter.warning(token, f"Local variable '{name}' is never used.")

    def declare(self, name:Token):
        if not self.scopes:
            return
        scope=self.scopes[-1]
        if name.lexeme in scope:
            self.reporter.error(name, "Already a variable with this name in this scope.")
        scope[name.lexeme]=False

    def define(self, name:Token):
        if not self.scopes:
            return
        self.scopes[-1][name.lexeme]=True


def resolve(statements:Sequence[Stmt], interpreter:Interpreter, reporter:ErrorReporter, warn_unused:bool=True):
    Resolver(interpreter, reporter, warn_unused=warn_unused).resolve(statements)
