# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the C-subset tokenizer.
#
# Test coverage includes:
#   - Keywords and the maximal-munch boundary check
#   - Identifiers and decimal literals
#   - Punctuators and UNKNOWN characters
#   - Token locations and the trailing EOF token
# =============================================================================

import pytest
from chemist.cc.lexer import CLexer, CTokenType, CToken, tokenize


# =============================================================================
# Helper Function
# =============================================================================

def token_types(source: str) -> list[CTokenType]:
    """Token types for source, EOF included."""
    return [t.type for t in tokenize(source, "test.c")]


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        """Empty source should produce only EOF."""
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type == CTokenType.EOF

    def test_whitespace_only(self):
        """Whitespace-only source should produce only EOF."""
        assert token_types("  \n\t \r\n  ") == [CTokenType.EOF]

    def test_keywords(self):
        assert token_types("int return") == [
            CTokenType.INT,
            CTokenType.RETURN,
            CTokenType.EOF,
        ]

    def test_keyword_has_no_text(self):
        """Only identifiers and numbers carry their spelling."""
        tokens = tokenize("int return ;")
        assert all(t.value is None for t in tokens)

    def test_identifier(self):
        tokens = tokenize("main")
        assert tokens[0].type == CTokenType.IDENTIFIER
        assert tokens[0].value == "main"

    def test_identifier_with_digits(self):
        tokens = tokenize("var2x")
        assert tokens[0].type == CTokenType.IDENTIFIER
        assert tokens[0].value == "var2x"

    def test_number(self):
        tokens = tokenize("42")
        assert tokens[0].type == CTokenType.NUMBER
        assert tokens[0].value == "42"

    def test_number_keeps_leading_zeros(self):
        """Literal spelling is preserved; conversion happens in the parser."""
        tokens = tokenize("007")
        assert tokens[0].value == "007"

    def test_punctuators(self):
        assert token_types(";{}()=") == [
            CTokenType.SEMICOLON,
            CTokenType.LBRACE,
            CTokenType.RBRACE,
            CTokenType.LPAREN,
            CTokenType.RPAREN,
            CTokenType.ASSIGN,
            CTokenType.EOF,
        ]

    def test_exactly_one_eof(self):
        types = token_types("int main() { return 0; }")
        assert types.count(CTokenType.EOF) == 1
        assert types[-1] == CTokenType.EOF


# =============================================================================
# Keyword Boundary Tests
# =============================================================================

class TestKeywordBoundaries:
    """Keywords only match when not followed by an identifier character."""

    @pytest.mark.parametrize("source", ["integer", "int2", "returned", "return0"])
    def test_keyword_prefix_is_identifier(self, source):
        tokens = tokenize(source)
        assert tokens[0].type == CTokenType.IDENTIFIER
        assert tokens[0].value == source

    def test_keyword_followed_by_punctuator(self):
        assert token_types("int(") == [CTokenType.INT, CTokenType.LPAREN, CTokenType.EOF]

    def test_keyword_at_end_of_input(self):
        assert token_types("return") == [CTokenType.RETURN, CTokenType.EOF]

    def test_keyword_inside_identifier(self):
        """'int' in the middle of a word is part of the identifier."""
        tokens = tokenize("point")
        assert len(tokens) == 2
        assert tokens[0].value == "point"

    def test_number_then_identifier(self):
        """A digit run stops at the first letter."""
        tokens = tokenize("12ab")
        assert [t.type for t in tokens] == [
            CTokenType.NUMBER,
            CTokenType.IDENTIFIER,
            CTokenType.EOF,
        ]
        assert tokens[0].value == "12"
        assert tokens[1].value == "ab"


# =============================================================================
# Unknown Character Tests
# =============================================================================

class TestUnknownCharacters:
    """The lexer never fails; unrecognised characters become UNKNOWN."""

    @pytest.mark.parametrize("char", ["+", "-", "*", "@", "#", "_", ",", "\"", "/"])
    def test_unknown_character(self, char):
        tokens = tokenize(char)
        assert tokens[0].type == CTokenType.UNKNOWN
        assert tokens[0].value is None
        assert tokens[1].type == CTokenType.EOF

    def test_scanning_continues_after_unknown(self):
        assert token_types("a + b") == [
            CTokenType.IDENTIFIER,
            CTokenType.UNKNOWN,
            CTokenType.IDENTIFIER,
            CTokenType.EOF,
        ]

    def test_non_ascii_letter_is_unknown(self):
        tokens = tokenize("é")
        assert tokens[0].type == CTokenType.UNKNOWN


# =============================================================================
# Complete Input Tests
# =============================================================================

class TestCompleteInput:

    def test_complete_function(self):
        """Complete function should tokenize correctly."""
        assert token_types("int main() { int x = 5; x = f(); return x; }") == [
            CTokenType.INT,
            CTokenType.IDENTIFIER,
            CTokenType.LPAREN,
            CTokenType.RPAREN,
            CTokenType.LBRACE,
            CTokenType.INT,
            CTokenType.IDENTIFIER,
            CTokenType.ASSIGN,
            CTokenType.NUMBER,
            CTokenType.SEMICOLON,
            CTokenType.IDENTIFIER,
            CTokenType.ASSIGN,
            CTokenType.IDENTIFIER,
            CTokenType.LPAREN,
            CTokenType.RPAREN,
            CTokenType.SEMICOLON,
            CTokenType.RETURN,
            CTokenType.IDENTIFIER,
            CTokenType.SEMICOLON,
            CTokenType.RBRACE,
            CTokenType.EOF,
        ]

    def test_token_location(self):
        """Tokens should have correct line and column."""
        tokens = tokenize("int\n  main", "test.c")
        assert (tokens[0].line, tokens[0].column) == (1, 1)
        assert (tokens[1].line, tokens[1].column) == (2, 3)
        assert str(tokens[1].location) == "test.c:2:3"

    def test_lexer_is_lazy_iterator(self):
        """CLexer.tokenize yields tokens one at a time."""
        stream = CLexer("int main", "test.c").tokenize()
        first = next(stream)
        assert isinstance(first, CToken)
        assert first.type == CTokenType.INT

    def test_independent_lexers(self):
        """Two lexers never share a scanning position."""
        a = CLexer("int a", "a.c").tokenize()
        b = CLexer("return b", "b.c").tokenize()
        assert next(a).type == CTokenType.INT
        assert next(b).type == CTokenType.RETURN
        assert next(a).value == "a"
        assert next(b).value == "b"

    def test_token_repr(self):
        tokens = tokenize("x")
        assert repr(tokens[0]) == "Token(IDENTIFIER, 'x', 1:1)"

    def test_describe(self):
        tokens = tokenize("foo ;")
        assert tokens[0].describe() == "identifier 'foo'"
        assert tokens[1].describe() == "';'"
