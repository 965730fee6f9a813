from __future__ import annotations
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Protocol, runtime_checkable

from .ast import Function
from .environment import Environment
from .signals import Return

if TYPE_CHECKING:
    from .interpreter import Interpreter


@runtime_checkable
class ScriptCallable(Protocol):
    def arity(self)->int: ...
    def call(self, interpreter:'Interpreter', arguments:List[Any])->Any: ...

class NativeFunction:
    def __init__(self, name:str, arity_:int, func:Callable[..., Any]):
        self._name=name
        self._arity=arity_
        self._func=func
    @property
    def name(self)->str:
        return self._name
    def arity(self)->int:
        return self._arity
    def call(self, interpreter:'Interpreter', arguments:List[Any])->Any:
        return self._func(interpreter, *arguments)
    def __str__(self)->str:
        return f"<native fn {self._name}>"

class ScriptFunction:
    """A user function: its declaration plus the Environment it was defined in."""
    def __init__(self, name:Optional[str], declaration:Function, closure:Environment):
        self.name=name
        self.declaration=declaration
        self.closure=closure
    def arity(self)->int:
        return len(self.declaration.params)
    def call(self, interpreter:'Interpreter', arguments:List[Any])->Any:
        env=Environment(self.closure)
        for param, arg in zip(self.declaration.params, arguments):
            env.define(param.lexeme, arg)
        completion=interpreter.execute_block(self.declaration.body, env)
        if isinstance(completion, Return):
            return completion.value
        return None
    def __str__(self)->str:
        if self.name is None:
            return "<fn anonymous>"
        return f"<fn {self.name}>"
