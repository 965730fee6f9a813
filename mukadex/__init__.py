"""mukadex: a small dynamically-typed scripting language with closures.

Example:

fun makeCounter() {
  var count = 0;
  return fun () { count = count + 1; return count; };
}
var c = makeCounter();
c();
print c(); // 2
"""

import logging

from .errors import Diagnostic, ErrorReporter, ScriptRuntimeError
from .interpreter import Interpreter
from .session import Session, run_source

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["Diagnostic", "ErrorReporter", "Interpreter", "ScriptRuntimeError", "Session", "run_source"]
