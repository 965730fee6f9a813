"""Completion values threaded through statement execution.

Executing a statement yields NORMAL, BREAK or a Return carrying a value.
Loops consume BREAK, calls consume Return; neither is ever raised, so they
cannot be mistaken for a runtime fault.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Union


class Normal:
    __slots__ = ()
    def __repr__(self)->str:
        return "NORMAL"

class Break:
    __slots__ = ()
    def __repr__(self)->str:
        return "BREAK"

@dataclass(frozen=True)
class Return:
    value: Any = None

NORMAL = Normal()
BREAK = Break()

Completion = Union[Normal, Break, Return]
