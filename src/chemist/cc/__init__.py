"""
Chemist C-Subset Compiler
=========================

This package implements a tiny ahead-of-time compiler from a fixed subset
of C to x86-64 assembly in flat assembler (FASM) syntax. The output is a
freestanding Linux ELF64 executable: no C runtime, no libc.

Pipeline
--------
    C Source → Lexer → Parser → AST → Code Generator → Assembly

Usage
-----
>>> from chemist.cc import compile_c
>>> asm_output = compile_c('int main() { return 42; }')

Language Subset
---------------
- One type: a 64-bit int
- Functions without parameters: int name() { ... }
- Local declarations with optional initializer: int x = 5;
- Assignment: x = y;
- Calls as statements or values: f(); int r = f();
- return of a number, a variable or a call result

Not supported:
- Operators of any kind
- Control flow other than return
- Parameters, pointers, arrays, structs, other types
- Preprocessing and multiple translation units

Memory Model
------------
- 8-byte stack slots below rbp, one per declared variable
- Return values in rax
- The entry routine exits with main's return value as the status
"""

from chemist.cc.compiler import (
    ChemistCompiler,
    CompilerOptions,
    CompilerResult,
    compile_c,
    compile_file,
)
from chemist.cc.errors import (
    CompilerError,
    CompilerIOError,
    CSyntaxError,
    CSemanticError,
    CCodeGenError,
    DuplicateSymbolError,
    UndefinedSymbolError,
    MalformedNodeError,
)
from chemist.cc.lexer import CLexer, CTokenType, CToken, tokenize
from chemist.cc.parser import CParser, parse, parse_source
from chemist.cc.scope import Scope, Symbol
from chemist.cc.codegen import CodeGenerator, generate
from chemist.cc.ast import (
    ASTNode,
    ProgramNode,
    FunctionNode,
    VariableDeclaration,
    AssignmentStatement,
    ReturnStatement,
    CallExpression,
    IdentifierExpression,
    NumberLiteral,
    ASTPrinter,
)

__all__ = [
    # Main API
    "ChemistCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_c",
    "compile_file",
    # Errors
    "CompilerError",
    "CompilerIOError",
    "CSyntaxError",
    "CSemanticError",
    "CCodeGenError",
    "DuplicateSymbolError",
    "UndefinedSymbolError",
    "MalformedNodeError",
    # Lexer
    "CLexer",
    "CTokenType",
    "CToken",
    "tokenize",
    # Parser
    "CParser",
    "parse",
    "parse_source",
    # Scope
    "Scope",
    "Symbol",
    # Code Generator
    "CodeGenerator",
    "generate",
    # AST Nodes
    "ASTNode",
    "ProgramNode",
    "FunctionNode",
    "VariableDeclaration",
    "AssignmentStatement",
    "ReturnStatement",
    "CallExpression",
    "IdentifierExpression",
    "NumberLiteral",
    "ASTPrinter",
]
