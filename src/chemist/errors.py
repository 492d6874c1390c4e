"""
Chemist Error Hierarchy
=======================

This module defines the root of the exception hierarchy for the chemist
toolchain. All exceptions inherit from ChemistError, allowing callers to
catch every toolchain error with a single except clause if desired.

Exception Hierarchy
-------------------
ChemistError (base)
└── CompilerError (see chemist.cc.errors)
    ├── CompilerIOError - source unreadable or output unwritable
    ├── CSyntaxError - token stream does not match the grammar
    ├── CSemanticError - duplicate or undefined symbols
    └── CCodeGenError - malformed AST reaching the generator

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class ChemistError(Exception):
    """
    Base exception for all chemist errors.

    All exceptions in the toolchain inherit from this class, allowing
    callers to catch all of them with a single except clause:

        try:
            compile_c(source)
        except ChemistError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Tokens, AST nodes and errors all carry one of these so diagnostics can
    point at the offending spot. The frozen design ensures locations cannot
    be accidentally modified.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
