"""Error reporting for mukadex.

Scan, parse and resolve errors are reported through an ErrorReporter and
recorded as Diagnostics; they never raise out of the pipeline. Runtime
faults are ScriptRuntimeError exceptions that abort the run and are
reported once by the interpreter.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, TextIO
import logging
import sys

from termcolor import colored

from .tokens import Token, TokenType

logger = logging.getLogger(__name__)


# ---------------------------
# Runtime faults
# ---------------------------

class ScriptRuntimeError(Exception):
    def __init__(self, token:Token, message:str):
        super().__init__(message)
        self.token=token
        self.message=message
    def __str__(self):
        return f"[line {self.token.line}] RuntimeError: {self.message}"

class OperandTypeError(ScriptRuntimeError):
    pass

class DivisionByZeroError(ScriptRuntimeError):
    pass

class UndefinedVariableError(ScriptRuntimeError):
    def __init__(self, token:Token):
        super().__init__(token, f"Undefined variable '{token.lexeme}'.")

class ArityError(ScriptRuntimeError):
    pass

class NotCallableError(ScriptRuntimeError):
    pass

class StackOverflowError(ScriptRuntimeError):
    pass


# ---------------------------
# Reporter
# ---------------------------

@dataclass(frozen=True)
class Diagnostic:
    kind: str  # "error", "warning" or "runtime"
    line: int
    where: str
    message: str

    def __str__(self)->str:
        if self.kind=="runtime":
            return f"{self.message}\n[line {self.line}]"
        label="Warning" if self.kind=="warning" else "Error"
        return f"[line {self.line}] {label}{self.where}: {self.message}"


class ErrorReporter:
    """Host error surface shared by the scanner, parser, resolver and interpreter."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, stream:Optional[TextIO]=None, color:bool=True):
        self.stream=stream
        self.color=color
        self.had_error=False
        self.had_runtime_error=False
        self.diagnostics: List[Diagnostic]=[]

    def scan_error(self, line:int, message:str):
        self._report(Diagnostic("error", line, "", message))

    def error(self, token:Token, message:str):
        self._report(Diagnostic("error", token.line, self._where(token), message))

    def warning(self, token:Token, message:str):
        diagnostic=Diagnostic("warning", token.line, self._where(token), message)
        self.diagnostics.append(diagnostic)
        self._emit(str(diagnostic), ErrorReporter.WARNING)

    def runtime_error(self, error:ScriptRuntimeError):
        diagnostic=Diagnostic("runtime", error.token.line, self._where(error.token), error.message)
        self.diagnostics.append(diagnostic)
        self.had_runtime_error=True
        self._emit(str(diagnostic), ErrorReporter.ERROR)

    def reset(self):
        self.had_error=False
        self.had_runtime_error=False

    @property
    def errors(self)->List[Diagnostic]:
        return [d for d in self.diagnostics if d.kind=="error"]

    @property
    def warnings(self)->List[Diagnostic]:
        return [d for d in self.diagnostics if d.kind=="warning"]

    @staticmethod
    def _where(token:Token)->str:
        if token.type==TokenType.EOF:
            return " at end"
        return f" at '{token.lexeme}'"

    def _report(self, diagnostic:Diagnostic):
        self.diagnostics.append(diagnostic)
        self.had_error=True
        logger.debug("static error on line %d: %s", diagnostic.line, diagnostic.message)
        self._emit(str(diagnostic), ErrorReporter.ERROR)

    def _emit(self, text:str, color:str):
        stream=self.stream if self.stream is not None else sys.stderr
        if self.color:
            text=colored(text, color, attrs=["bold"])
        print(text, file=stream)
