from __future__ import annotations
from typing import Any, Callable, List, Optional, TextIO
import logging

from .ast import Stmt
from .errors import ErrorReporter
from .interpreter import Interpreter
from .parser import Parser
from .resolver import Resolver
from .scanner import Scanner
from .tokens import Token

logger = logging.getLogger(__name__)


class Session:
    """Drives source text through scan, parse, resolve and execute.

    One Session keeps one Interpreter, so globals survive from one call of
    ``run`` to the next (this is what the REPL relies on).
    """

    def __init__(self, stdout:Optional[TextIO]=None, reporter:Optional[ErrorReporter]=None, warn_unused:bool=True):
        self.reporter=reporter if reporter is not None else ErrorReporter()
        self.warn_unused=warn_unused
        self.interpreter=Interpreter(self.reporter, stdout=stdout)

    def define_native(self, name:str, arity:int, func:Callable[..., Any]):
        self.interpreter.define_native(name, arity, func)

    def scan(self, source:str)->List[Token]:
        return Scanner(source, self.reporter).scan_tokens()

    def parse(self, source:str)->List[Stmt]:
        return Parser(self.scan(source), self.reporter).parse()

    def run(self, source:str):
        statements=self.parse(source)
        if self.reporter.had_error:
            logger.debug("syntax errors, not resolving")
            return
        Resolver(self.interpreter, self.reporter, warn_unused=self.warn_unused).resolve(statements)
        if self.reporter.had_error:
            logger.debug("resolution errors, not executing")
            return
        self.interpreter.interpret(statements)


def run_source(source:str, stdout:Optional[TextIO]=None, reporter:Optional[ErrorReporter]=None)->Session:
    session=Session(stdout=stdout, reporter=reporter)
    session.run(source)
    return session
