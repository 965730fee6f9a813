"""Token kinds and the token record produced by the scanner."""

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any
import enum


class TokenType(enum.Enum):
    LEFT_PAREN="("
    RIGHT_PAREN=")"
    LEFT_BRACE="{"
    RIGHT_BRACE="}"
    COMMA=","
    DOT="."
    MINUS="-"
    PLUS="+"
    SEMICOLON=";"
    SLASH="/"
    STAR="*"

    BANG="!"
    BANG_EQUAL="!="
    EQUAL="="
    EQUAL_EQUAL="=="
    GREATER=">"
    GREATER_EQUAL=">="
    LESS="<"
    LESS_EQUAL="<="

    IDENTIFIER="IDENT"
    STRING="STRING"
    NUMBER="NUMBER"

    AND="and"
    BREAK="break"
    ELSE="else"
    FALSE="false"
    FOR="for"
    FUN="fun"
    IF="if"
    NIL="nil"
    OR="or"
    PRINT="print"
    RETURN="return"
    TRUE="true"
    VAR="var"
    WHILE="while"

    EOF="EOF"

# read-only, shared by every scan
KEYWORDS = MappingProxyType({t.value:t for t in [
    TokenType.AND, TokenType.BREAK, TokenType.ELSE, TokenType.FALSE, TokenType.FOR,
    TokenType.FUN, TokenType.IF, TokenType.NIL, TokenType.OR, TokenType.PRINT,
    TokenType.RETURN, TokenType.TRUE, TokenType.VAR, TokenType.WHILE,
]})

@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    literal: Any
    line: int

    def __str__(self)->str:
        return f"{self.type.name} {self.lexeme} {self.literal}"

    def to_dict(self)->dict:
        return {"type": self.type.name, "lexeme": self.lexeme, "literal": self.literal, "line": self.line}
