"""
Chemist - A Tiny C-Subset Compiler for x86-64
=============================================

This package compiles a deliberately small subset of C (integer locals,
parameterless functions, calls and return) into flat assembler (FASM)
source for a freestanding Linux ELF64 executable.

Main Components
---------------
- **cc**: the compiler (lexer, parser, AST, scope, code generator)
- **cli**: the ``chemcc`` command

Quick Start
-----------
    >>> from chemist import compile_c
    >>> asm = compile_c('int main() { return 42; }')

Or from the shell:
    $ chemcc hello.c hello     # writes hello.asm and runs fasm on it
"""

__version__ = "1.0.0"

from chemist.errors import ChemistError, SourceLocation
from chemist.cc import (
    ChemistCompiler,
    CompilerOptions,
    CompilerResult,
    compile_c,
    compile_file,
    CompilerError,
)

__all__ = [
    "__version__",
    "ChemistError",
    "SourceLocation",
    "ChemistCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_c",
    "compile_file",
    "CompilerError",
]
