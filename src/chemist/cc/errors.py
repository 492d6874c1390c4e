"""
Compiler Error Hierarchy
========================

This module defines the exception hierarchy for the chemist C-subset
compiler. All exceptions inherit from CompilerError, which itself inherits
from ChemistError for consistent error handling across the toolchain.

Exception Hierarchy
-------------------
CompilerError (base for all compiler errors)
├── CompilerIOError - source unreadable or output unwritable
├── CSyntaxError - parser syntax errors
│   ├── UnexpectedTokenError - token does not start any valid construct
│   └── MissingTokenError - required token not found
├── CSemanticError - scope errors
│   ├── DuplicateSymbolError - variable declared twice in one function
│   └── UndefinedSymbolError - variable used but never declared
└── CCodeGenError - code generation errors
    └── MalformedNodeError - AST node missing a field or of the wrong kind

Every error is fatal: the compiler reports the first one it finds and
stops. Nothing here ever terminates the process; the CLI decides that.

Error Message Format
--------------------
    hello.c:3:12: error: undefined variable 'cnt'
        return cnt;
               ^
    hint: did you mean 'count'?
"""

from typing import Optional, List

from chemist.errors import ChemistError, SourceLocation


# =============================================================================
# Base Compiler Exception
# =============================================================================

class CompilerError(ChemistError):
    """
    Base exception for all compiler errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            hello.c:5:12: error: expected ';'
                return 42
                         ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class CompilerIOError(CompilerError):
    """
    Source file cannot be read, or the output file cannot be written.

    Attributes:
        path: The file that could not be accessed
        reason: Operating system explanation
    """

    def __init__(self, path: str, reason: str, writing: bool = False):
        self.path = path
        self.reason = reason
        action = "write" if writing else "read"
        super().__init__(f"cannot {action} '{path}': {reason}")


# =============================================================================
# Syntax Errors
# =============================================================================

class CSyntaxError(CompilerError):
    """
    The token stream does not match the grammar at the parser's position.

    Examples:
        - Missing semicolon
        - Missing closing brace
        - Character the language does not know, like '+'
    """
    pass


class UnexpectedTokenError(CSyntaxError):
    """
    Unexpected token during parsing.

    Raised when the current token cannot start the construct the parser
    is looking at (a statement, an expression, a function).
    """

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected

        hint = None
        if expected:
            hint = f"expected {expected}"

        super().__init__(
            f"unexpected {found}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MissingTokenError(CSyntaxError):
    """
    Required token is missing.

    Raised when a specific token (like ';' or '}') is required but
    something else was found.
    """

    def __init__(
        self,
        expected: str,
        found: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found

        message = f"expected {expected}"
        if found:
            message = f"{message}, got {found}"

        super().__init__(
            message,
            location=location,
            source_line=source_line,
        )


# =============================================================================
# Semantic Errors
# =============================================================================

class CSemanticError(CompilerError):
    """
    Semantic error in otherwise well-formed source.

    Raised while the code generator resolves variable names against the
    active function scope.
    """
    pass


class DuplicateSymbolError(CSemanticError):
    """
    Variable declared more than once in the same function.
    """

    def __init__(
        self,
        identifier: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.identifier = identifier
        super().__init__(
            f"redeclaration of '{identifier}'",
            location=location,
            source_line=source_line,
        )


class UndefinedSymbolError(CSemanticError):
    """
    Reference to a variable that was never declared in the function.

    Similarly-named variables are offered as a hint to catch typos.
    """

    def __init__(
        self,
        identifier: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_identifiers: Optional[List[str]] = None,
    ):
        self.identifier = identifier
        self.similar_identifiers = similar_identifiers or []

        hint = None
        if self.similar_identifiers:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_identifiers[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"undefined variable '{identifier}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


# =============================================================================
# Code Generation Errors
# =============================================================================

class CCodeGenError(CompilerError):
    """
    Error during code generation.
    """
    pass


class MalformedNodeError(CCodeGenError):
    """
    An AST node reached the generator in a shape it cannot emit.

    Examples:
        - function or call with an empty name
        - return statement without an expression
        - an expression kind not allowed in its position
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
    ):
        super().__init__(f"malformed node: {message}", location=location)
