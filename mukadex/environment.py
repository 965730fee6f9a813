from __future__ import annotations
from typing import Any, Dict, Optional

from .errors import UndefinedVariableError
from .tokens import Token


class Environment:
    """One lexical scope: name bindings plus a fixed link to the enclosing scope.

    Closures hold a reference to the Environment they were created in, so a
    scope lives as long as the longest-lived function that captured it.
    """

    def __init__(self, enclosing:Optional['Environment']=None):
        self.enclosing=enclosing
        self.values: Dict[str, Any] = {}

    def define(self, name:str, value:Any):
        self.values[name]=value

    def get(self, name_token:Token)->Any:
        env=self
        while env is not None:
            if name_token.lexeme in env.values:
                return env.values[name_token.lexeme]
            env=env.enclosing
        raise UndefinedVariableError(name_token)

    def assign(self, name_token:Token, value:Any):
        env=self
        while env is not None:
            if name_token.lexeme in env.values:
                env.values[name_token.lexeme]=value
                return
            env=env.enclosing
        raise UndefinedVariableError(name_token)

    def ancestor(self, distance:int)->'Environment':
        env=self
        for _ in range(distance):
            env=env.enclosing
        return env

    def get_at(self, distance:int, name:str)->Any:
        return self.ancestor(distance).values[name]

    def assign_at(self, distance:int, name_token:Token, value:Any):
        self.ancestor(distance).values[name_token.lexeme]=value

    def __repr__(self)->str:
        depth=0
        env=self.enclosing
        while env is not None:
            depth+=1
            env=env.enclosing
        return f"<Environment depth={depth} names={sorted(self.values)}>"
