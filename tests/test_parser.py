"""
Parser Tests
============

Tests for the recursive descent parser: the grammar, the one-token
lookahead decisions, node locations and syntax error reporting.
"""

import pytest

from chemist.errors import SourceLocation
from chemist.cc.lexer import tokenize
from chemist.cc.parser import CParser, parse, parse_source
from chemist.cc.ast import (
    ProgramNode,
    FunctionNode,
    VariableDeclaration,
    AssignmentStatement,
    ReturnStatement,
    CallExpression,
    IdentifierExpression,
    NumberLiteral,
    ASTPrinter,
    ASTVisitor,
)
from chemist.cc.errors import (
    CSyntaxError,
    MissingTokenError,
    UnexpectedTokenError,
)


def parse_main_body(body: str) -> list:
    """Parse 'int main() { body }' and return the statement list."""
    program = parse_source(f"int main() {{ {body} }}", "test.c")
    assert len(program.functions) == 1
    return program.functions[0].body


# =============================================================================
# Program Structure Tests
# =============================================================================

class TestProgramStructure:
    """Test parsing of function definitions."""

    def test_empty_program(self):
        program = parse_source("")
        assert isinstance(program, ProgramNode)
        assert program.functions == []

    def test_minimal_function(self):
        program = parse_source("int main() { return 42; }")
        func = program.functions[0]
        assert isinstance(func, FunctionNode)
        assert func.name == "main"
        assert len(func.body) == 1

    def test_empty_body(self):
        program = parse_source("int main() { }")
        assert program.functions[0].body == []

    def test_functions_in_source_order(self):
        program = parse_source("int b() { return 1; } int a() { return 2; } int main() { return 0; }")
        assert [f.name for f in program.functions] == ["b", "a", "main"]

    def test_program_location(self):
        program = parse_source("int main() { return 0; }", "prog.c")
        assert program.location == SourceLocation("prog.c", 1, 1)

    def test_function_location_is_name(self):
        program = parse_source("int\n  main() { return 0; }", "prog.c")
        assert program.functions[0].location == SourceLocation("prog.c", 2, 3)

    def test_parse_from_token_list(self):
        """parse() accepts a token list produced separately."""
        tokens = tokenize("int main() { return 1; }", "t.c")
        program = parse(tokens, "t.c")
        assert program.functions[0].name == "main"

    def test_parser_instances_are_independent(self):
        tokens = tokenize("int f() { return 1; }")
        first = CParser(tokens).parse()
        second = CParser(tokens).parse()
        assert first.functions[0].name == second.functions[0].name == "f"


# =============================================================================
# Statement Tests
# =============================================================================

class TestStatements:
    """Test each statement form."""

    def test_return_number(self):
        (stmt,) = parse_main_body("return 7;")
        assert isinstance(stmt, ReturnStatement)
        assert isinstance(stmt.value, NumberLiteral)
        assert stmt.value.value == 7

    def test_return_variable(self):
        stmt = parse_main_body("int x; return x;")[1]
        assert isinstance(stmt.value, IdentifierExpression)
        assert stmt.value.name == "x"

    def test_return_call(self):
        (stmt,) = parse_main_body("return helper();")
        assert isinstance(stmt.value, CallExpression)
        assert stmt.value.function_name == "helper"

    def test_declaration_without_initializer(self):
        (decl,) = parse_main_body("int count;")
        assert isinstance(decl, VariableDeclaration)
        assert decl.name == "count"
        assert decl.initializer is None

    def test_declaration_with_initializer(self):
        (decl,) = parse_main_body("int a = 5;")
        assert decl.name == "a"
        assert isinstance(decl.initializer, NumberLiteral)
        assert decl.initializer.value == 5

    def test_declaration_with_call_initializer(self):
        (decl,) = parse_main_body("int x = helper();")
        assert isinstance(decl.initializer, CallExpression)
        assert decl.initializer.function_name == "helper"

    def test_assignment(self):
        (stmt,) = parse_main_body("x = y;")
        assert isinstance(stmt, AssignmentStatement)
        assert stmt.name == "x"
        assert isinstance(stmt.value, IdentifierExpression)
        assert stmt.value.name == "y"

    def test_call_statement(self):
        (stmt,) = parse_main_body("helper();")
        assert isinstance(stmt, CallExpression)
        assert stmt.function_name == "helper"

    def test_number_literal_leading_zeros(self):
        """Literals are decimal even with leading zeros."""
        (stmt,) = parse_main_body("return 010;")
        assert stmt.value.value == 10

    def test_large_literal_is_kept(self):
        (stmt,) = parse_main_body("return 99999999999999999999;")
        assert stmt.value.value == 99999999999999999999

    def test_statements_keep_order(self):
        body = parse_main_body("int a = 1; f(); a = 2; return a;")
        assert [type(s) for s in body] == [
            VariableDeclaration,
            CallExpression,
            AssignmentStatement,
            ReturnStatement,
        ]

    def test_statement_locations(self):
        program = parse_source("int main() {\n  int a = 1;\n  return a;\n}", "s.c")
        decl, ret = program.functions[0].body
        assert decl.location == SourceLocation("s.c", 2, 7)
        assert ret.location == SourceLocation("s.c", 3, 3)


# =============================================================================
# Lookahead Tests
# =============================================================================

class TestLookahead:
    """IDENTIFIER decisions use exactly one token of lookahead."""

    def test_identifier_then_assign_is_assignment(self):
        (stmt,) = parse_main_body("a = 1;")
        assert isinstance(stmt, AssignmentStatement)

    def test_identifier_then_lparen_is_call(self):
        (stmt,) = parse_main_body("a();")
        assert isinstance(stmt, CallExpression)

    def test_identifier_then_other_is_call_attempt(self):
        """Anything but '=' after an identifier is parsed as a call."""
        with pytest.raises(MissingTokenError) as exc_info:
            parse_main_body("a;")
        assert exc_info.value.expected == "'('"

    def test_expression_identifier_without_parens_is_variable(self):
        (decl,) = parse_main_body("int a = b;")
        assert isinstance(decl.initializer, IdentifierExpression)


# =============================================================================
# Syntax Error Tests
# =============================================================================

class TestSyntaxErrors:
    """The first mismatch raises a CSyntaxError."""

    def test_missing_semicolon(self):
        with pytest.raises(MissingTokenError) as exc_info:
            parse_source("int main() { return 42 }", "e.c")
        err = exc_info.value
        assert isinstance(err, CSyntaxError)
        assert err.expected == "';'"
        assert err.location == SourceLocation("e.c", 1, 24)
        assert "expected ';'" in str(err)

    def test_missing_closing_brace(self):
        with pytest.raises(MissingTokenError) as exc_info:
            parse_source("int main() { return 0;")
        assert exc_info.value.expected == "'}'"
        assert "end of input" in str(exc_info.value)

    def test_missing_parentheses(self):
        with pytest.raises(CSyntaxError):
            parse_source("int main { return 0; }")

    def test_parameters_are_rejected(self):
        with pytest.raises(CSyntaxError):
            parse_source("int main(x) { return 0; }")

    def test_top_level_statement(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("return 0;")
        assert exc_info.value.expected == "function definition starting with 'int'"

    def test_statement_cannot_start_with_number(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_main_body("5;")
        assert exc_info.value.expected == "statement"

    def test_missing_expression(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_main_body("return ;")
        assert exc_info.value.expected == "number, variable or function call"

    def test_unknown_character_is_reported(self):
        """Operators are not part of the language."""
        with pytest.raises(CSyntaxError) as exc_info:
            parse_source("int main() { return 1 + 2; }")
        assert "character '+'" in str(exc_info.value)

    def test_underscore_is_not_identifier_character(self):
        with pytest.raises(CSyntaxError):
            parse_source("int my_var() { return 0; }")

    def test_error_shows_source_line_and_caret(self):
        with pytest.raises(CSyntaxError) as exc_info:
            parse_source("int main() {\n    return 42\n}", "c.c")
        lines = str(exc_info.value).splitlines()
        assert lines[0].startswith("c.c:3:1: error: expected ';'")
        assert lines[1] == "    }"
        assert lines[2] == "    ^"


# =============================================================================
# AST Utility Tests
# =============================================================================

class TestASTUtilities:

    def test_printer(self):
        program = parse_source("int main() { int a = 5; a = f(); g(); return a; }")
        assert ASTPrinter().print(program) == "\n".join([
            "Program",
            "  Function: main",
            "    Variable: a = 5",
            "    Assign: a = f()",
            "    Call: g()",
            "    Return a",
        ])

    def test_visitor_walks_nested_calls(self):
        class CallCollector(ASTVisitor):
            def __init__(self):
                self.names = []

            def visit_CallExpression(self, node):
                self.names.append(node.function_name)

        program = parse_source("int main() { int x = a(); x = b(); c(); return d(); }")
        collector = CallCollector()
        collector.visit(program)
        assert collector.names == ["a", "b", "c", "d"]
