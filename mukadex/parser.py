"""Recursive-descent parser.

Grammar, lowest precedence first:

    program     -> declaration* EOF
    declaration -> funDecl | varDecl | statement
    statement   -> exprStmt | printStmt | block | ifStmt | whileStmt
                 | forStmt | breakStmt | returnStmt
    expression  -> assignment
    assignment  -> IDENTIFIER "=" assignment | logic_or
    logic_or    -> logic_and ( "or" logic_and )*
    logic_and   -> equality ( "and" equality )*
    equality    -> comparison ( ( "!=" | "==" ) comparison )*
    comparison  -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term        -> factor ( ( "-" | "+" ) factor )*
    factor      -> unary ( ( "/" | "*" ) unary )*
    unary       -> ( "!" | "-" ) unary | call
    call        -> primary ( "(" arguments? ")" )*
    primary     -> NUMBER | STRING | "true" | "false" | "nil"
                 | "(" expression ")" | IDENTIFIER | "fun" functionBody

A syntax error inside a declaration is reported, the parser skips to the
next statement boundary and the declaration is dropped. Input nested
deeper than MAX_NESTING is rejected with "Too much nesting." instead of
exhausting the Python stack.
"""

from __future__ import annotations
from contextlib import contextmanager
from typing import List, Optional
import logging

from .ast import (
    Assign, Binary, BlockStmt, BreakStmt, Call, Expr, ExpressionStmt, Function,
    FunctionStmt, Grouping, IfStmt, Literal, Logical, PrintStmt, ReturnStmt, Stmt,
    Unary, Variable, VarStmt, WhileStmt,
)
from .errors import ErrorReporter
from .tokens import Token, TokenType

logger = logging.getLogger(__name__)

MAX_ARGUMENTS = 255
# statements, assignments, unary operators, operator chains and calls
# each count one level
MAX_NESTING = 512

BINARY_LEVELS = (
    (Logical, (TokenType.OR,)),
    (Logical, (TokenType.AND,)),
    (Binary, (TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)),
    (Binary, (TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL)),
    (Binary, (TokenType.MINUS, TokenType.PLUS)),
    (Binary, (TokenType.SLASH, TokenType.STAR)),
)

STATEMENT_KEYWORDS = frozenset({
    TokenType.FUN, TokenType.VAR, TokenType.FOR, TokenType.IF, TokenType.WHILE,
    TokenType.PRINT, TokenType.RETURN, TokenType.BREAK,
})

class ParseError(Exception):
    pass

class Parser:
    def __init__(self, tokens: List[Token], reporter:ErrorReporter):
        self.tokens=tokens
        self.reporter=reporter
        self.current=0
        self.depth=0

    def parse(self)->List[Stmt]:
        statements=[]
        while not self.is_at_end():
            try:
                stmt=self.declaration()
            except RecursionError:
                # the host stack ran out before MAX_NESTING did
                self.error(self.peek(), "Too much nesting.")
                self.synchronize()
                continue
            if stmt is not None:
                statements.append(stmt)
        logger.debug("parsed %d top-level statements", len(statements))
        return statements

    def declaration(self)->Optional[Stmt]:
        try:
            if self.check(TokenType.FUN) and self.check(TokenType.IDENTIFIER, 1):
                self.advance()
                return self.function_declaration()
            if self.match(TokenType.VAR):
                return self.var_declaration()
            return self.statement()
        except ParseError:
            self.synchronize()
            return None

    def function_declaration(self)->FunctionStmt:
        name=self.consume(TokenType.IDENTIFIER, "Expect function name.")
        return FunctionStmt(name, self.function_body("function"))

    def function_body(self, kind:str)->Function:
        self.consume(TokenType.LEFT_PAREN, f"Expect '(' after {kind} name.")
        params=[]
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(params)>=MAX_ARGUMENTS:
                    self.error(self.peek(), f"Can't have more than {MAX_ARGUMENTS} parameters.")
                params.append(self.consume(TokenType.IDENTIFIER, "Expect parameter name."))
                if not self.match(TokenType.COMMA):
                    break
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after parameters.")
        self.consume(TokenType.LEFT_BRACE, f"Expect '{{' before {kind} body.")
        body=self.block()
        return Function(tuple(params), tuple(body))

    def var_declaration(self)->VarStmt:
        name=self.consume(TokenType.IDENTIFIER, "Expect variable name.")
        initializer=None
        if self.match(TokenType.EQUAL):
            initializer=self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return VarStmt(name, initializer)

    def statement(self)->Stmt:
        with self.nested():
            if self.match(TokenType.PRINT):
                return self.print_statement()
            if self.match(TokenType.LEFT_BRACE):
                return BlockStmt(tuple(self.block()))
            if self.match(TokenType.IF):
                return self.if_statement()
            if self.match(TokenType.WHILE):
                return self.while_statement()
            if self.match(TokenType.FOR):
                return self.for_statement()
            if self.match(TokenType.BREAK):
                return self.break_statement()
            if self.match(TokenType.RETURN):
                return self.return_statement()
            return self.expression_statement()

    def return_statement(self)->Stmt:
        keyword=self.previous()
        value=None
        if not self.check(TokenType.SEMICOLON):
            value=self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after return value.")
        return ReturnStmt(keyword, value)

    def break_statement(self)->Stmt:
        keyword=self.previous()
        self.consume(TokenType.SEMICOLON, "Expect ';' after 'break'.")
        return BreakStmt(keyword)

    def if_statement(self)->Stmt:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition=self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")
        then_branch=self.statement()
        else_branch=None
        if self.match(TokenType.ELSE):
            else_branch=self.statement()
        return IfStmt(condition, then_branch, else_branch)

    def while_statement(self)->Stmt:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition=self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
        body=self.statement()
        return WhileStmt(condition, body)

    def for_statement(self)->Stmt:
        # desugared: { initializer; while (condition) { body; increment; } }
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")
        if self.match(TokenType.SEMICOLON):
            initializer=None
        elif self.match(TokenType.VAR):
            initializer=self.var_declaration()
        else:
            initializer=self.expression_statement()

        condition=None
        if not self.check(TokenType.SEMICOLON):
            condition=self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment=None
        if not self.check(TokenType.RIGHT_PAREN):
            increment=self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")
        body=self.statement()

        if increment is not None:
            body=BlockStmt((body, ExpressionStmt(increment)))
        if condition is None:
            condition=Literal(True)
        body=WhileStmt(condition, body)
        if initializer is not None:
            body=BlockStmt((initializer, body))
        return body

    def block(self)->List[Stmt]:
        statements=[]
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            stmt=self.declaration()
            if stmt is not None:
                statements.append(stmt)
        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def print_statement(self)->Stmt:
        value=self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return PrintStmt(value)

    def expression_statement(self)->Stmt:
        expr=self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return ExpressionStmt(expr)

    def expression(self)->Expr:
        return self.assignment()

    def assignment(self)->Expr:
        with self.nested():
            expr=self.binary()
            if self.match(TokenType.EQUAL):
                equals=self.previous()
                value=self.assignment()
                if isinstance(expr, Variable):
                    return Assign(expr.name, value)
                # reported without raising; parsing continues
                self.error(equals, "Invalid assignment target.")
            return expr

    def binary(self, level:int=0)->Expr:
        # one BINARY_LEVELS entry per precedence level, loosest first;
        # each operator in a chain adds one level to the tree
        if level==len(BINARY_LEVELS):
            return self.unary()
        node, operators=BINARY_LEVELS[level]
        expr=self.binary(level+1)
        depth=self.depth
        try:
            while self.match(*operators):
                op=self.previous()
                self.deepen()
                expr=node(expr, op, self.binary(level+1))
        finally:
            self.depth=depth
        return expr

    def unary(self)->Expr:
        if self.match(TokenType.BANG, TokenType.MINUS):
            op=self.previous()
            with self.nested():
                return Unary(op, self.unary())
        return self.call()

    def call(self)->Expr:
        expr=self.primary()
        depth=self.depth
        try:
            while self.match(TokenType.LEFT_PAREN):
                self.deepen()
                expr=self.finish_call(expr)
        finally:
            self.depth=depth
        return expr

    def finish_call(self, callee:Expr)->Expr:
        args=[]
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(args)>=MAX_ARGUMENTS:
                    self.error(self.peek(), f"Can't have more than {MAX_ARGUMENTS} arguments.")
                args.append(self.expression())
                if not self.match(TokenType.COMMA):
                    break
        paren=self.consume(TokenType.RIGHT_PAREN, "Expect ')' after arguments.")
        return Call(callee, paren, tuple(args))

    def primary(self)->Expr:
        if self.match(TokenType.FALSE):
            return Literal(False)
        if self.match(TokenType.TRUE):
            return Literal(True)
        if self.match(TokenType.NIL):
            return Literal(None)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous().literal)
        if self.match(TokenType.FUN):
            return self.function_body("function")
        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())
        if self.match(TokenType.LEFT_PAREN):
            expr=self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)
        raise self.error(self.peek(), "Expect expression.")

    # ---------------------------
    # Nesting
    # ---------------------------

    def deepen(self):
        if self.depth>=MAX_NESTING:
            raise self.error(self.peek(), "Too much nesting.")
        self.depth+=1

    @contextmanager
    def nested(self):
        depth=self.depth
        self.deepen()
        try:
            yield
        finally:
            self.depth=depth

    # ---------------------------
    # Token cursor
    # ---------------------------

    def synchronize(self):
        self.advance()
        while not self.is_at_end():
            if self.previous().type==TokenType.SEMICOLON:
                return
            if self.peek().type in STATEMENT_KEYWORDS:
                return
            self.advance()

    def match(self, *types:TokenType)->bool:
        if not any(self.check(t) for t in types):
            return False
        self.advance()
        return True

    def consume(self, type_:TokenType, message:str)->Token:
        if not self.check(type_):
            raise self.error(self.peek(), message)
        return self.advance()

    def check(self, type_:TokenType, offset:int=0)->bool:
        token=self.peek(offset)
        return token.type!=TokenType.EOF and token.type==type_

    def advance(self)->Token:
        if not self.is_at_end():
            self.current+=1
        return self.previous()

    def is_at_end(self)->bool:
        return self.peek().type==TokenType.EOF

    def peek(self, offset:int=0)->Token:
        # clamped so lookahead past the end sees EOF
        return self.tokens[min(self.current+offset, len(self.tokens)-1)]

    def previous(self)->Token:
        return self.tokens[self.current-1]

    def error(self, token:Token, message:str)->ParseError:
        self.reporter.error(token, message)
        return ParseError(message)


def parse(tokens:List[Token], reporter:ErrorReporter)->List[Stmt]:
    return Parser(tokens, reporter).parse()
