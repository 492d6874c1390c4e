"""
Lexer (Tokenizer)
=================

This module converts C-subset source text into a flat list of tokens for
the parser.

Token Categories
----------------
- Keywords: int, return
- Identifiers: ASCII letter followed by ASCII letters and digits
- Numbers: decimal digit runs, kept as their spelling
- Punctuators: ; { } ( ) =
- Anything else: UNKNOWN (rejected later by the parser)

The lexer never raises. Characters it does not recognise become UNKNOWN
tokens so the parser can report them with full context.

Keywords use a maximal-munch boundary check: "int" and "return" are only
keywords when the next character is not alphanumeric, so "integer" and
"returned" lex as identifiers.

Example Usage
-------------
>>> from chemist.cc.lexer import CLexer
>>> for token in CLexer('int main() { return 42; }', "test.c").tokenize():
...     print(token)
Token(INT, 1:1)
Token(IDENTIFIER, 'main', 1:5)
Token(LPAREN, 1:9)
Token(RPAREN, 1:10)
Token(LBRACE, 1:12)
Token(RETURN, 1:14)
Token(NUMBER, '42', 1:21)
Token(SEMICOLON, 1:23)
Token(RBRACE, 1:25)
Token(EOF, 1:26)
"""

import logging
import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

from chemist.errors import SourceLocation

logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class CTokenType(Enum):
    """Token types for the C subset."""

    # === Keywords ===
    INT = auto()            # int
    RETURN = auto()         # return

    # === Identifiers and Literals ===
    IDENTIFIER = auto()     # Variable/function names
    NUMBER = auto()         # Decimal integer literals

    # === Delimiters ===
    SEMICOLON = auto()      # ;
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    ASSIGN = auto()         # =

    # === Structural ===
    EOF = auto()            # End of input
    UNKNOWN = auto()        # Any unrecognised character

    @property
    def description(self) -> str:
        """Human-readable name used in diagnostics."""
        return _DESCRIPTIONS[self]


_DESCRIPTIONS: dict[CTokenType, str] = {
    CTokenType.INT: "'int'",
    CTokenType.RETURN: "'return'",
    CTokenType.IDENTIFIER: "identifier",
    CTokenType.NUMBER: "number",
    CTokenType.SEMICOLON: "';'",
    CTokenType.LBRACE: "'{'",
    CTokenType.RBRACE: "'}'",
    CTokenType.LPAREN: "'('",
    CTokenType.RPAREN: "')'",
    CTokenType.ASSIGN: "'='",
    CTokenType.EOF: "end of input",
    CTokenType.UNKNOWN: "unknown character",
}


# Keywords in match order
KEYWORDS: dict[str, CTokenType] = {
    "int": CTokenType.INT,
    "return": CTokenType.RETURN,
}

# Single-character punctuators
PUNCTUATORS: dict[str, CTokenType] = {
    ";": CTokenType.SEMICOLON,
    "{": CTokenType.LBRACE,
    "}": CTokenType.RBRACE,
    "(": CTokenType.LPAREN,
    ")": CTokenType.RPAREN,
    "=": CTokenType.ASSIGN,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class CToken:
    """
    A single token from the source.

    Attributes:
        type: The CTokenType classification
        value: Literal spelling for IDENTIFIER and NUMBER, None otherwise
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: CTokenType
    value: Optional[str]
    line: int
    column: int
    filename: str

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.value is not None:
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def describe(self) -> str:
        """Describe the token for error messages, e.g. "identifier 'foo'"."""
        if self.value is not None:
            return f"{self.type.description} '{self.value}'"
        return self.type.description


# =============================================================================
# Lexer Implementation
# =============================================================================

class CLexer:
    """
    Tokenizes C-subset source code.

    Each lexer owns its own scanning position, so independent compilations
    never share state.

    Usage:
        lexer = CLexer(source_text, filename)
        tokens = list(lexer.tokenize())

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    IDENT_START = string.ascii_letters

    IDENT_CHARS = string.ascii_letters + string.digits

    WHITESPACE = " \t\n\r\v\f"

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

        # Current position in source
        self._pos = 0
        self._line = 1
        self._column = 1

    def tokenize(self) -> Iterator[CToken]:
        """
        Generate tokens from the source code.

        Yields:
            CToken objects, always ending with a single EOF token
        """
        while True:
            self._skip_whitespace()
            if self._at_end():
                break
            yield self._scan_token()

        yield CToken(CTokenType.EOF, None, self._line, self._column, self.filename)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Character at current position + offset, or "" past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume and return the current character, tracking line/column."""
        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1

        return char

    def _skip_whitespace(self) -> None:
        while not self._at_end() and self._peek() in self.WHITESPACE:
            self._advance()

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> CToken:
        start_line = self._line
        start_column = self._column

        keyword = self._match_keyword()
        if keyword is not None:
            return CToken(keyword, None, start_line, start_column, self.filename)

        char = self._peek()

        if char in self.IDENT_START:
            text = self._scan_while(self.IDENT_CHARS)
            return CToken(CTokenType.IDENTIFIER, text, start_line, start_column, self.filename)

        if char in string.digits:
            text = self._scan_while(string.digits)
            return CToken(CTokenType.NUMBER, text, start_line, start_column, self.filename)

        self._advance()
        token_type = PUNCTUATORS.get(char, CTokenType.UNKNOWN)
        if token_type is CTokenType.UNKNOWN:
            logger.debug(f"{self.filename}:{start_line}:{start_column}: unknown character {char!r}")
        return CToken(token_type, None, start_line, start_column, self.filename)

    def _match_keyword(self) -> Optional[CTokenType]:
        """
        Consume a keyword at the current position if one is there.

        A keyword only matches when it is not immediately followed by an
        identifier character.
        """
        for word, token_type in KEYWORDS.items():
            if not self.source.startswith(word, self._pos):
                continue
            following = self._peek(len(word))
            if following and following in self.IDENT_CHARS:
                continue
            for _ in word:
                self._advance()
            return token_type
        return None

    def _scan_while(self, allowed: str) -> str:
        chars = []
        while self._peek() and self._peek() in allowed:
            chars.append(self._advance())
        return "".join(chars)


def tokenize(source: str, filename: str = "<input>") -> list[CToken]:
    """
    Tokenize source text eagerly.

    The parser needs indexed lookahead, so this materialises the whole
    token stream. The list always ends with exactly one EOF token.
    """
    tokens = list(CLexer(source, filename).tokenize())
    logger.debug(f"{filename}: {len(tokens)} tokens")
    return tokens
