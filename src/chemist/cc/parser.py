"""
Recursive Descent Parser
========================

This module implements a recursive descent parser for the C subset. It
takes the token list from the lexer and builds an Abstract Syntax Tree.

Grammar
-------
program     ::= function*
function    ::= 'int' IDENTIFIER '(' ')' '{' statement* '}'
statement   ::= return_stmt | var_decl | var_assign | call_stmt
return_stmt ::= 'return' expr ';'
var_decl    ::= 'int' IDENTIFIER ('=' expr)? ';'
var_assign  ::= IDENTIFIER '=' expr ';'
call_stmt   ::= IDENTIFIER '(' ')' ';'
expr        ::= NUMBER | IDENTIFIER '(' ')' | IDENTIFIER

Every branch point is decided by at most one token of lookahead:
a statement starting with IDENTIFIER is an assignment when the next
token is '=' and a call otherwise; an IDENTIFIER in expression position
is a call when followed by '(' and a variable reference otherwise.

There is no error recovery. The first mismatch raises a CSyntaxError
and compilation stops.

Example Usage
-------------
>>> from chemist.cc.parser import parse_source
>>> ast = parse_source('int main() { return 42; }')
>>> ast.functions[0].name
'main'
"""

import logging
from typing import Optional

from chemist.errors import SourceLocation
from chemist.cc.lexer import CLexer, CToken, CTokenType
from chemist.cc.ast import (
    ProgramNode,
    FunctionNode,
    VariableDeclaration,
    AssignmentStatement,
    ReturnStatement,
    BodyItem,
    Expression,
    CallExpression,
    IdentifierExpression,
    NumberLiteral,
)
from chemist.cc.errors import (
    UnexpectedTokenError,
    MissingTokenError,
)

logger = logging.getLogger(__name__)


class CParser:
    """
    Recursive descent parser for the C subset.

    The parser owns its token list and a single forward cursor; nothing
    is shared between parser instances.

    Attributes:
        tokens: List of tokens to parse (must end with EOF)
        filename: Source filename for error reporting
        source_lines: Original source lines for error context
    """

    def __init__(
        self,
        tokens: list[CToken],
        filename: str = "<input>",
        source_lines: Optional[list[str]] = None,
    ):
        self.tokens = tokens
        self.filename = filename
        self.source_lines = source_lines or []

        # Current position in token stream
        self._pos = 0

    def parse(self) -> ProgramNode:
        """
        Parse the token stream into an AST.

        Returns:
            ProgramNode containing all functions in source order

        Raises:
            CSyntaxError: On the first token that does not fit the grammar
        """
        functions = []
        while not self._at_end():
            functions.append(self._parse_function())

        logger.debug(f"{self.filename}: parsed {len(functions)} function(s)")
        return ProgramNode(
            location=SourceLocation(self.filename, 1, 1),
            functions=functions,
        )

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._peek().type == CTokenType.EOF

    def _peek(self, offset: int = 0) -> CToken:
        """Look at token at current position + offset."""
        pos = self._pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]  # EOF
        return self.tokens[pos]

    def _advance(self) -> CToken:
        token = self._peek()
        if not self._at_end():
            self._pos += 1
        return token

    def _check(self, *types: CTokenType) -> bool:
        return self._peek().type in types

    def _match(self, *types: CTokenType) -> Optional[CToken]:
        """Consume current token if it matches one of the types."""
        if self._check(*types):
            return self._advance()
        return None

    def _expect(self, token_type: CTokenType) -> CToken:
        """
        Expect and consume a specific token type.

        Raises:
            MissingTokenError: If the current token is of another type
        """
        if self._check(token_type):
            return self._advance()

        current = self._peek()
        raise MissingTokenError(
            token_type.description,
            found=self._describe(current),
            location=current.location,
            source_line=self._get_source_line(current.line),
        )

    def _unexpected(self, expected: str) -> UnexpectedTokenError:
        current = self._peek()
        return UnexpectedTokenError(
            self._describe(current),
            expected=expected,
            location=current.location,
            source_line=self._get_source_line(current.line),
        )

    def _describe(self, token: CToken) -> str:
        """Describe a token, including the offending character for UNKNOWN."""
        if token.type == CTokenType.UNKNOWN:
            line = self._get_source_line(token.line)
            if line is not None and 0 < token.column <= len(line):
                return f"character '{line[token.column - 1]}'"
        return f"{token.describe()} (token {self._pos})"

    def _get_source_line(self, line: int) -> Optional[str]:
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    # =========================================================================
    # Function Parsing
    # =========================================================================

    def _parse_function(self) -> FunctionNode:
        """Parse: 'int' IDENTIFIER '(' ')' '{' statement* '}'"""
        if not self._check(CTokenType.INT):
            raise self._unexpected("function definition starting with 'int'")
        self._advance()

        name_token = self._expect(CTokenType.IDENTIFIER)
        self._expect(CTokenType.LPAREN)
        self._expect(CTokenType.RPAREN)
        self._expect(CTokenType.LBRACE)

        body = []
        while not self._check(CTokenType.RBRACE, CTokenType.EOF):
            body.append(self._parse_statement())

        self._expect(CTokenType.RBRACE)

        return FunctionNode(
            location=name_token.location,
            name=name_token.value,
            body=body,
        )

    # =========================================================================
    # Statement Parsing
    # =========================================================================

    def _parse_statement(self) -> BodyItem:
        token = self._peek()

        if token.type == CTokenType.RETURN:
            return self._parse_return_statement()
        if token.type == CTokenType.INT:
            return self._parse_variable_declaration()
        if token.type == CTokenType.IDENTIFIER:
            if self._peek(1).type == CTokenType.ASSIGN:
                return self._parse_assignment()
            return self._parse_call_statement()

        raise self._unexpected("statement")

    def _parse_return_statement(self) -> ReturnStatement:
        location = self._expect(CTokenType.RETURN).location
        value = self._parse_expression()
        self._expect(CTokenType.SEMICOLON)
        return ReturnStatement(location=location, value=value)

    def _parse_variable_declaration(self) -> VariableDeclaration:
        self._expect(CTokenType.INT)
        name_token = self._expect(CTokenType.IDENTIFIER)

        initializer = None
        if self._match(CTokenType.ASSIGN):
            initializer = self._parse_expression()

        self._expect(CTokenType.SEMICOLON)
        return VariableDeclaration(
            location=name_token.location,
            name=name_token.value,
            initializer=initializer,
        )

    def _parse_assignment(self) -> AssignmentStatement:
        name_token = self._expect(CTokenType.IDENTIFIER)
        self._expect(CTokenType.ASSIGN)
        value = self._parse_expression()
        self._expect(CTokenType.SEMICOLON)
        return AssignmentStatement(
            location=name_token.location,
            name=name_token.value,
            value=value,
        )

    def _parse_call_statement(self) -> CallExpression:
        call = self._parse_call()
        self._expect(CTokenType.SEMICOLON)
        return call

    # =========================================================================
    # Expression Parsing
    # =========================================================================

    def _parse_expression(self) -> Expression:
        """Parse: NUMBER | IDENTIFIER '(' ')' | IDENTIFIER"""
        token = self._peek()

        if token.type == CTokenType.NUMBER:
            self._advance()
            return NumberLiteral(location=token.location, value=int(token.value, 10))

        if token.type == CTokenType.IDENTIFIER:
            if self._peek(1).type == CTokenType.LPAREN:
                return self._parse_call()
            self._advance()
            return IdentifierExpression(location=token.location, name=token.value)

        raise self._unexpected("number, variable or function call")

    def _parse_call(self) -> CallExpression:
        name_token = self._expect(CTokenType.IDENTIFIER)
        self._expect(CTokenType.LPAREN)
        self._expect(CTokenType.RPAREN)
        return CallExpression(location=name_token.location, function_name=name_token.value)


# =============================================================================
# Convenience Functions
# =============================================================================

def parse(
    tokens: list[CToken],
    filename: str = "<input>",
    source_lines: Optional[list[str]] = None,
) -> ProgramNode:
    """Parse a token list into a ProgramNode."""
    return CParser(tokens, filename, source_lines).parse()


def parse_source(source: str, filename: str = "<input>") -> ProgramNode:
    """
    Parse source code into an AST.

    This is a convenience function that combines lexing and parsing.

    Raises:
        CSyntaxError: If parsing fails
    """
    tokens = list(CLexer(source, filename).tokenize())
    return CParser(tokens, filename, source.splitlines()).parse()
