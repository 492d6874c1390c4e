"""
Compiler Main Module
====================

This module provides the main compiler interface. It orchestrates the
complete compilation process:

    Source → Lex → Parse → Generate → Assembly

Usage
-----
Command line:
    $ chemcc hello.c hello

Programmatic:
    >>> from chemist.cc import compile_c
    >>> asm = compile_c('int main() { return 0; }')

Error Handling
--------------
Compilation stops at the first error. Every stage raises a CompilerError
subclass and nothing is caught here, so the caller always sees exactly
the error that stopped the pipeline. No partial assembly is ever
returned.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from chemist.cc.lexer import tokenize
from chemist.cc.parser import CParser
from chemist.cc.codegen import CodeGenerator
from chemist.cc.ast import ProgramNode, ASTPrinter
from chemist.cc.errors import CompilerIOError

logger = logging.getLogger(__name__)


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        output_comments: Annotate the generated assembly with comments
        assembler: External assembler command run by the CLI on the
                   generated file
        output_suffix: Suffix appended to the output base name
    """
    output_comments: bool = False
    assembler: str = "fasm"
    output_suffix: str = ".asm"


@dataclass
class CompilerResult:
    """
    Result of a successful compilation.

    Attributes:
        filename: Source filename
        success: True once assembly has been generated
        assembly: Generated assembly code
        ast: Abstract syntax tree
        token_count: Number of tokens lexed
        warnings: Non-fatal diagnostics
    """
    filename: str = ""
    success: bool = False
    assembly: str = ""
    ast: Optional[ProgramNode] = None
    token_count: int = 0
    warnings: list[str] = field(default_factory=list)


class ChemistCompiler:
    """
    C-subset to x86-64 assembly compiler.

    Example:
        compiler = ChemistCompiler()
        result = compiler.compile_file("hello.c")
        print(result.assembly)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: str = "<input>") -> CompilerResult:
        """
        Compile source code to assembly.

        Raises:
            CompilerError: On the first lexical, syntax, semantic or
                           generation error
        """
        result = CompilerResult(filename=filename)

        tokens = tokenize(source, filename)
        result.token_count = len(tokens)

        ast = CParser(tokens, filename, source.splitlines()).parse()
        result.ast = ast
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"AST for {filename}:\n{ASTPrinter().print(ast)}")

        generator = CodeGenerator(output_comments=self.options.output_comments)
        result.assembly = generator.generate(ast)
        result.warnings = list(generator.warnings)
        result.success = True

        logger.debug(f"{filename}: generated {len(result.assembly)} bytes of assembly")
        return result

    def compile_file(self, filepath: str | Path) -> CompilerResult:
        """
        Compile a source file to assembly.

        Raises:
            CompilerIOError: If the file cannot be read
            CompilerError: If compilation fails
        """
        return self.compile_source(read_source(filepath), str(filepath))


# =============================================================================
# File Helpers
# =============================================================================

def read_source(filepath: str | Path) -> str:
    """
    Read a whole source file into memory.

    Raises:
        CompilerIOError: If the file is missing or unreadable
    """
    path = Path(filepath)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
        raise CompilerIOError(str(path), reason) from e


def write_assembly(assembly: str, output_path: str | Path) -> Path:
    """
    Write generated assembly to disk.

    Raises:
        CompilerIOError: If the file cannot be written
    """
    path = Path(output_path)
    try:
        path.write_text(assembly, encoding="utf-8")
    except OSError as e:
        raise CompilerIOError(str(path), e.strerror or str(e), writing=True) from e
    logger.debug(f"wrote {path}")
    return path


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_c(source: str, filename: str = "<input>") -> str:
    """
    Compile source code to x86-64 assembly.

    This is the primary high-level interface.

    Raises:
        CompilerError: If compilation fails

    Example:
        >>> asm = compile_c('int main() { return 42; }')
        >>> "call main" in asm
        True
    """
    return ChemistCompiler().compile_source(source, filename).assembly


def compile_file(filepath: str | Path, output_path: Optional[str | Path] = None) -> str:
    """
    Compile a source file, optionally writing the assembly to output_path.

    Raises:
        CompilerError: If reading, compiling or writing fails
    """
    result = ChemistCompiler().compile_file(filepath)
    if output_path:
        write_assembly(result.assembly, output_path)
    return result.assembly
