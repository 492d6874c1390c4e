"""
Function Scope and Stack-Slot Allocation
========================================

Each function body is one flat scope: every declaration in it, wherever
it appears, shares the same namespace and the same stack frame.

Stack Frame Layout
------------------
After the prologue (push rbp / mov rbp, rsp / sub rsp, N):

    +----------------+
    | Return address |  [rbp+8]
    +----------------+
    | Saved rbp      |  [rbp]     <- rbp
    +----------------+
    | Variable 1     |  [rbp-8]
    | Variable 2     |  [rbp-16]
    | ...            |
    | Variable N     |  [rbp-8N]  <- rsp
    +----------------+

Offsets are positive distances below the frame pointer, assigned in
declaration order in WORD_SIZE steps.
"""

import difflib
from dataclasses import dataclass
from typing import Iterator, Optional

from chemist.errors import SourceLocation
from chemist.cc.errors import DuplicateSymbolError, UndefinedSymbolError

WORD_SIZE = 8


@dataclass(frozen=True)
class Symbol:
    """
    A declared local variable.

    Attributes:
        name: Variable name
        offset: Distance below rbp of the variable's slot
    """
    name: str
    offset: int


class Scope:
    """
    Symbol table for the function currently being generated.

    One instance lives for a whole generate() run and is reset between
    functions, so offsets start again at WORD_SIZE in every function.
    """

    def __init__(self):
        self._symbols: dict[str, Symbol] = {}
        self._frame_size = 0

    @property
    def frame_size(self) -> int:
        """Bytes of stack needed for all variables declared so far."""
        return self._frame_size

    def add_variable(self, name: str, location: Optional[SourceLocation] = None) -> Symbol:
        """
        Declare a variable and give it the next free slot.

        Raises:
            DuplicateSymbolError: If the name is already declared
        """
        if name in self._symbols:
            raise DuplicateSymbolError(name, location=location)

        self._frame_size += WORD_SIZE
        symbol = Symbol(name=name, offset=self._frame_size)
        self._symbols[name] = symbol
        return symbol

    def lookup_offset(self, name: str, location: Optional[SourceLocation] = None) -> int:
        """
        Return the slot offset of a declared variable.

        Raises:
            UndefinedSymbolError: If the name was never declared
        """
        symbol = self._symbols.get(name)
        if symbol is None:
            similar = difflib.get_close_matches(name, list(self._symbols), n=3)
            raise UndefinedSymbolError(name, location=location, similar_identifiers=similar)
        return symbol.offset

    def reset(self) -> None:
        """Forget every symbol; called when moving to the next function."""
        self._symbols.clear()
        self._frame_size = 0

    def symbols(self) -> Iterator[Symbol]:
        """Symbols in declaration order."""
        return iter(self._symbols.values())

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)
