from __future__ import annotations
from typing import Any, List
import logging

from .errors import ErrorReporter
from .tokens import KEYWORDS, Token, TokenType

logger = logging.getLogger(__name__)


class Scanner:
    def __init__(self, source:str, reporter:ErrorReporter):
        self.source=source
        self.reporter=reporter
        self.tokens: List[Token]=[]
        self.start=0
        self.current=0
        self.line=1

    def scan_tokens(self)->List[Token]:
        while not self.is_at_end():
            self.start=self.current
            self.scan_token()
        self.tokens.append(Token(TokenType.EOF,"",None,self.line))
        logger.debug("scanned %d tokens over %d lines", len(self.tokens), self.line)
        return self.tokens

    def is_at_end(self)->bool:
        return self.current>=len(self.source)

    def advance(self)->str:
        ch=self.source[self.current]
        self.current+=1
        return ch

    def add_token(self, type_:TokenType, literal:Any=None):
        text=self.source[self.start:self.current]
        self.tokens.append(Token(type_, text, literal, self.line))

    def match(self, expected:str)->bool:
        if self.is_at_end(): return False
        if self.source[self.current]!=expected: return False
        self.current+=1
        return True

    def peek(self)->str:
        if self.is_at_end(): return "\0"
        return self.source[self.current]

    def peek_next(self)->str:
        if self.current+1>=len(self.source): return "\0"
        return self.source[self.current+1]

    def scan_token(self):
        c=self.advance()
        if c=="(":
            self.add_token(TokenType.LEFT_PAREN)
        elif c==")":
            self.add_token(TokenType.RIGHT_PAREN)
        elif c=="{":
            self.add_token(TokenType.LEFT_BRACE)
        elif c=="}":
            self.add_token(TokenType.RIGHT_BRACE)
        elif c==",":
            self.add_token(TokenType.COMMA)
        elif c==".":
            self.add_token(TokenType.DOT)
        elif c=="-":
            self.add_token(TokenType.MINUS)
        elif c=="+":
            self.add_token(TokenType.PLUS)
        elif c==";":
            self.add_token(TokenType.SEMICOLON)
        elif c=="*":
            self.add_token(TokenType.STAR)
        elif c=="!":
            self.add_token(TokenType.BANG_EQUAL if self.match("=") else TokenType.BANG)
        elif c=="=":
            self.add_token(TokenType.EQUAL_EQUAL if self.match("=") else TokenType.EQUAL)
        elif c=="<":
            self.add_token(TokenType.LESS_EQUAL if self.match("=") else TokenType.LESS)
        elif c==">":
            self.add_token(TokenType.GREATER_EQUAL if self.match("=") else TokenType.GREATER)
        elif c=="/":
            if self.match("/"):
                while self.peek()!="\n" and not self.is_at_end():
                    self.advance()
            elif self.match("*"):
                self.block_comment()
            else:
                self.add_token(TokenType.SLASH)
        elif c in (" ", "\r", "\t"):
            return
        elif c=="\n":
            self.line+=1
        elif c=="\"":
            self.string()
        elif self.is_digit(c):
            self.number()
        elif self.is_alpha(c):
            self.identifier()
        else:
            self.reporter.scan_error(self.line, f"Unexpected character: {c!r}.")

    def block_comment(self):
        # no nesting: the first "*/" closes the comment
        while not (self.peek()=="*" and self.peek_next()=="/"):
            if self.is_at_end():
                self.reporter.scan_error(self.line, "Unterminated block comment.")
                return
            if self.advance()=="\n":
                self.line+=1
        self.advance()
        self.advance()

    def string(self):
        while self.peek()!="\"" and not self.is_at_end():
            if self.peek()=="\n":
                self.line+=1
            self.advance()
        if self.is_at_end():
            self.reporter.scan_error(self.line, "Unterminated string.")
            return
        self.advance() # closing "
        value=self.source[self.start+1:self.current-1]
        self.add_token(TokenType.STRING, value)

    def number(self):
        while self.is_digit(self.peek()):
            self.advance()
        if self.peek()=="." and self.is_digit(self.peek_next()):
            self.advance()
            while self.is_digit(self.peek()):
                self.advance()
        value=float(self.source[self.start:self.current])
        self.add_token(TokenType.NUMBER, value)

    def identifier(self):
        while self.is_alpha(self.peek()) or self.is_digit(self.peek()):
            self.advance()
        text=self.source[self.start:self.current]
        type_=KEYWORDS.get(text, TokenType.IDENTIFIER)
        self.add_token(type_)

    # ASCII only
    @staticmethod
    def is_digit(c:str)->bool:
        return "0"<=c<="9"

    @staticmethod
    def is_alpha(c:str)->bool:
        return "a"<=c<="z" or "A"<=c<="Z" or c=="_"


def scan(source:str, reporter:ErrorReporter)->List[Token]:
    return Scanner(source, reporter).scan_tokens()
