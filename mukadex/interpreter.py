from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Sequence, TextIO
import logging
import math
import sys
import time

from .ast import (
    Assign, Binary, BlockStmt, BreakStmt, Call, Expr, ExpressionStmt, Function,
    FunctionStmt, Grouping, IfStmt, Literal, Logical, PrintStmt, ReturnStmt, Stmt,
    Unary, Variable, VarStmt, WhileStmt,
)
from .callables import NativeFunction, ScriptCallable, ScriptFunction
from .environment import Environment
from .errors import (
    ArityError, DivisionByZeroError, ErrorReporter, NotCallableError,
    OperandTypeError, ScriptRuntimeError, StackOverflowError,
)
from .signals import BREAK, NORMAL, Break, Completion, Return
from .tokens import Token, TokenType

logger = logging.getLogger(__name__)

# script calls cost about nine Python frames each
RECURSION_LIMIT = 10000


def is_number(v:Any)->bool:
    # bool is an int subclass in Python
    return isinstance(v,(int,float)) and not isinstance(v,bool)

def is_truthy(v:Any)->bool:
    if v is None: return False
    if isinstance(v,bool): return v
    return True

def is_equal(a:Any, b:Any)->bool:
    # no coercion between types: 1 == true is false
    if is_number(a) and is_number(b):
        return a==b
    if type(a) is not type(b):
        return False
    return a==b

def stringify(v:Any)->str:
    if v is None: return "nil"
    if isinstance(v,bool): return "true" if v else "false"
    if is_number(v):
        if math.isnan(v): return "NaN"
        if math.isinf(v): return "Infinity" if v>0 else "-Infinity"
        text=str(float(v))
        if text.endswith(".0"):
            text=text[:-2]
        return text
    return str(v)


class Interpreter:
    def __init__(self, reporter:ErrorReporter, stdout:Optional[TextIO]=None):
        self.reporter=reporter
        self.stdout=stdout
        self.globals=Environment()
        self.environment=self.globals
        self.locals: Dict[int, int] = {}
        if sys.getrecursionlimit()<RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)

        self.define_native("clock", 0, lambda interp: time.monotonic())

    def define_native(self, name:str, arity:int, func:Callable[..., Any]):
        if name in self.globals.values:
            logger.debug("Overwriting builtin %s", name)
        self.globals.define(name, NativeFunction(name, arity, func))

    def resolve(self, expr:Expr, depth:int):
        self.locals[expr.uid]=depth

    def interpret(self, statements:Sequence[Stmt]):
        logger.debug("interpreting %d statements", len(statements))
        try:
            for stmt in statements:
                self.execute(stmt)
        except ScriptRuntimeError as error:
            self.reporter.runtime_error(error)

    # ---------------------------
    # Statements
    # ---------------------------

    def execute(self, stmt:Stmt)->Completion:
        if isinstance(stmt, ExpressionStmt):
            self.evaluate(stmt.expression)
            return NORMAL
        if isinstance(stmt, PrintStmt):
            value=self.evaluate(stmt.expression)
            print(stringify(value), file=self.stdout if self.stdout is not None else sys.stdout)
            return NORMAL
        if isinstance(stmt, VarStmt):
            value=None
            if stmt.initializer is not None:
                value=self.evaluate(stmt.initializer)
            self.environment.define(stmt.name.lexeme, value)
            return NORMAL
        if isinstance(stmt, BlockStmt):
            return self.execute_block(stmt.statements, Environment(self.environment))
        if isinstance(stmt, IfStmt):
            if is_truthy(self.evaluate(stmt.condition)):
                return self.execute(stmt.then_branch)
            if stmt.else_branch is not None:
                return self.execute(stmt.else_branch)
            return NORMAL
        if isinstance(stmt, WhileStmt):
            while is_truthy(self.evaluate(stmt.condition)):
                completion=self.execute(stmt.body)
                if isinstance(completion, Break):
                    break
                if isinstance(completion, Return):
                    return completion
            return NORMAL
        if isinstance(stmt, BreakStmt):
            return BREAK
        if isinstance(stmt, FunctionStmt):
            func=ScriptFunction(stmt.name.lexeme, stmt.function, self.environment)
            self.environment.define(stmt.name.lexeme, func)
            return NORMAL
        if isinstance(stmt, ReturnStmt):
            value=None
            if stmt.value is not None:
                value=self.evaluate(stmt.value)
            return Return(value)
        raise TypeError(f"Unknown statement type: {type(stmt).__name__}")

    def execute_block(self, statements:Sequence[Stmt], env:Environment)->Completion:
        previous=self.environment
        try:
            self.environment=env
            for stmt in statements:
                completion=self.execute(stmt)
                if completion is not NORMAL:
                    return completion
            return NORMAL
        finally:
            self.environment=previous

    # ---------------------------
    # Expressions
    # ---------------------------

    def evaluate(self, expr:Expr)->Any:
        if isinstance(expr, Literal):
            return expr.value
        if isinstance(expr, Grouping):
            return self.evaluate(expr.expression)
        if isinstance(expr, Unary):
            right=self.evaluate(expr.right)
            if expr.operator.type==TokenType.MINUS:
                self.check_number_operand(expr.operator, right)
                return -right
            if expr.operator.type==TokenType.BANG:
                return not is_truthy(right)
            raise TypeError(f"Unknown unary operator: {expr.operator.lexeme}")
        if isinstance(expr, Binary):
            return self.binary(expr)
        if isinstance(expr, Logical):
            left=self.evaluate(expr.left)
            if expr.operator.type==TokenType.OR:
                if is_truthy(left):
                    return left
            else:
                if not is_truthy(left):
                    return left
            return self.evaluate(expr.right)
        if isinstance(expr, Variable):
            return self.look_up_variable(expr.name, expr)
        if isinstance(expr, Assign):
            value=self.evaluate(expr.value)
            distance=self.locals.get(expr.uid)
            if distance is not None:
                self.environment.assign_at(distance, expr.name, value)
            else:
                self.globals.assign(expr.name, value)
            return value
        if isinstance(expr, Call):
            callee=self.evaluate(expr.callee)
            args=[self.evaluate(a) for a in expr.arguments]
            return self.call_value(callee, args, expr.paren)
        if isinstance(expr, Function):
            return ScriptFunction(None, expr, self.environment)
        raise TypeError(f"Unknown expression type: {type(expr).__name__}")

    def look_up_variable(self, name:Token, expr:Expr)->Any:
        distance=self.locals.get(expr.uid)
        if distance is not None:
            return self.environment.get_at(distance, name.lexeme)
        return self.globals.get(name)

    def call_value(self, callee:Any, args:List[Any], paren:Token)->Any:
        if not isinstance(callee, ScriptCallable):
            raise NotCallableError(paren, "Can only call functions.")
        ar=callee.arity()
        if len(args)!=ar:
            raise ArityError(paren, f"Expected {ar} arguments but got {len(args)}.")
        try:
            return callee.call(self, args)
        except RecursionError:
            raise StackOverflowError(paren, "Stack overflow.") from None

    def binary(self, expr:Binary)->Any:
        left=self.evaluate(expr.left)
        right=self.evaluate(expr.right)
        t=expr.operator.type
        if t==TokenType.PLUS:
            if is_number(left) and is_number(right):
                return left+right
            if isinstance(left,str) and isinstance(right,str):
                return left+right
            if isinstance(left,str) and is_number(right):
                return left+stringify(right)
            if is_number(left) and isinstance(right,str):
                return stringify(left)+right
            raise OperandTypeError(expr.operator, "Unsupported operand types for '+'.")
        if t==TokenType.MINUS:
            self.check_number_operands(expr.operator,left,right)
            return left-right
        if t==TokenType.STAR:
            self.check_number_operands(expr.operator,left,right)
            return left*right
        if t==TokenType.SLASH:
            if is_number(right) and right==0:
                raise DivisionByZeroError(expr.operator, "Division by zero.")
            self.check_number_operands(expr.operator,left,right)
            return left/right
        if t==TokenType.GREATER:
            self.check_number_operands(expr.operator,left,right)
            return left>right
        if t==TokenType.GREATER_EQUAL:
            self.check_number_operands(expr.operator,left,right)
            return left>=right
        if t==TokenType.LESS:
            self.check_number_operands(expr.operator,left,right)
            return left<right
        if t==TokenType.LESS_EQUAL:
            self.check_number_operands(expr.operator,left,right)
            return left<=right
        if t==TokenType.EQUAL_EQUAL:
            return is_equal(left,right)
        if t==TokenType.BANG_EQUAL:
            return not is_equal(left,right)
        raise TypeError(f"Unknown binary operator: {expr.operator.lexeme}")

    def check_number_operand(self, operator:Token, operand:Any):
        if is_number(operand): return
        raise OperandTypeError(operator, "Operand must be a number.")

    def check_number_operands(self, operator:Token, left:Any, right:Any):
        if is_number(left) and is_number(right): return
        raise OperandTypeError(operator, "Operands must be numbers.")
