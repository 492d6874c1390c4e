"""
x86-64 Code Generator
=====================

This module generates flat assembler (FASM) source for a freestanding
Linux ELF64 executable from the AST.

Code Generation Strategy
------------------------
1. Every expression evaluates into rax (the accumulator).
2. Local variables live in 8-byte slots addressed as qword [rbp-offset].
3. Functions return their value in rax.
4. There is no runtime: the entry routine calls main and hands its
   result to the exit system call.

Each function is generated in two passes over its body:

1. Frame sizing: every declaration is registered in the scope and its
   initializer (or a zero store) is generated. Once all declarations are
   known, a single ``sub rsp, N`` reserving the frame is placed ahead of
   that initializer code.
2. Statement emission: return, call and assignment statements are
   generated in order. Declarations produce nothing in this pass.

Because all declarations are registered before any statement is
generated, a variable may be used by a statement that appears before its
declaration in the source.

Register Usage
--------------
| Register | Usage                                  |
|----------|----------------------------------------|
| rax      | Expression results, return values      |
| rbp      | Frame pointer                          |
| rsp      | Stack pointer                          |
| rdi      | Exit status for the exit system call   |

Generated Assembly Format
-------------------------
    format ELF64 executable 3
    entry start
    segment readable executable
    main:
        push rbp
        mov rbp, rsp
        mov rax, 42
        pop rbp
        ret

    start:
        call main
        mov rdi, rax
        mov rax, 60
        syscall
    segment readable writable

Usage
-----
>>> from chemist.cc.parser import parse_source
>>> from chemist.cc.codegen import CodeGenerator
>>> asm = CodeGenerator().generate(parse_source('int main() { return 42; }'))
"""

import logging
from dataclasses import dataclass
from typing import Optional

from chemist.cc.ast import (
    ProgramNode,
    FunctionNode,
    VariableDeclaration,
    AssignmentStatement,
    ReturnStatement,
    Expression,
    CallExpression,
    IdentifierExpression,
    NumberLiteral,
)
from chemist.cc.scope import Scope
from chemist.cc.errors import CCodeGenError, DuplicateSymbolError, MalformedNodeError

logger = logging.getLogger(__name__)


# Target constants (FASM, Linux x86-64)
EXECUTABLE_FORMAT = "ELF64 executable 3"
ENTRY_LABEL = "start"
MAIN_FUNCTION = "main"
EXIT_ARG_REGISTER = "rdi"
EXIT_SYSCALL = 60

WORD_MASK = 0xFFFFFFFFFFFFFFFF


@dataclass
class FunctionInfo:
    """
    Information about the function being generated.

    Attributes:
        name: Function name
        frame_size: Bytes reserved below rbp for variables
    """
    name: str
    frame_size: int = 0


class CodeGenerator:
    """
    Generates x86-64 FASM assembly from the AST.

    The generator owns the only mutable state of this stage: the output
    lines, the function scope and the current function context. The scope
    is created once per generate() call and reset between functions.

    Attributes:
        output_comments: Annotate the listing with ';' comments
        warnings: Non-fatal diagnostics from the last generate() call
    """

    def __init__(self, output_comments: bool = False):
        self.output_comments = output_comments
        self.warnings: list[str] = []

        self._output: list[str] = []
        self._scope = Scope()
        self._current_function: Optional[FunctionInfo] = None

    def generate(self, program: ProgramNode) -> str:
        """
        Generate assembly code from AST.

        Returns:
            Complete assembly source, newline terminated

        Raises:
            CSemanticError: On duplicate or undefined variables
            CCodeGenError: On a malformed AST
        """
        self._output = []
        self._scope = Scope()
        self.warnings = []

        self._emit_header()

        seen: set[str] = set()
        for func in program.functions:
            self._check_function_name(func, seen)
            self._generate_function(func)

        self._emit_entry_point()

        return "\n".join(self._output) + "\n"

    # =========================================================================
    # Assembly Output Methods
    # =========================================================================

    def _emit(self, line: str = "") -> None:
        self._output.append(line)

    def _emit_comment(self, comment: str) -> None:
        if self.output_comments:
            self._emit(f"    ; {comment}")

    def _emit_label(self, label: str) -> None:
        self._emit(f"{label}:")

    def _emit_instruction(self, mnemonic: str, operand: str = "") -> None:
        if operand:
            self._emit(f"    {mnemonic} {operand}")
        else:
            self._emit(f"    {mnemonic}")

    @staticmethod
    def _slot(offset: int) -> str:
        return f"qword [rbp-{offset}]"

    # =========================================================================
    # Header and Entry Point
    # =========================================================================

    def _emit_header(self) -> None:
        self._emit(f"format {EXECUTABLE_FORMAT}")
        self._emit(f"entry {ENTRY_LABEL}")
        self._emit("segment readable executable")

    def _emit_entry_point(self) -> None:
        """Emit the routine that runs main and exits with its result."""
        self._emit_label(ENTRY_LABEL)
        self._emit_instruction("call", MAIN_FUNCTION)
        self._emit_instruction("mov", f"{EXIT_ARG_REGISTER}, rax")
        self._emit_instruction("mov", f"rax, {EXIT_SYSCALL}")
        self._emit_instruction("syscall")
        self._emit("segment readable writable")

    # =========================================================================
    # Function Code Generation
    # =========================================================================

    def _check_function_name(self, func: FunctionNode, seen: set[str]) -> None:
        if not func.name:
            raise MalformedNodeError("function has no name", func.location)
        if func.name == ENTRY_LABEL:
            raise CCodeGenError(
                f"function name '{ENTRY_LABEL}' is reserved for the program entry point",
                location=func.location,
            )
        if func.name in seen:
            raise DuplicateSymbolError(func.name, location=func.location)
        seen.add(func.name)

    def _generate_function(self, func: FunctionNode) -> None:
        self._scope.reset()
        self._current_function = FunctionInfo(name=func.name)

        if self.output_comments:
            self._emit(f"; Function: {func.name}")
        self._emit_label(func.name)
        self._emit_instruction("push", "rbp")
        self._emit_instruction("mov", "rbp, rsp")

        # Pass 1: size the frame and initialise every slot
        frame_start = len(self._output)
        for stmt in func.body:
            if isinstance(stmt, VariableDeclaration):
                self._generate_declaration(stmt)

        frame_size = self._scope.frame_size
        self._current_function.frame_size = frame_size
        if frame_size:
            reserve = [f"    sub rsp, {frame_size}"]
            if self.output_comments:
                reserve.insert(0, f"    ; Allocate {frame_size} bytes for locals")
            self._output[frame_start:frame_start] = reserve
        logger.debug(f"function '{func.name}': {len(self._scope)} variable(s), frame {frame_size} bytes")

        # Pass 2: statements
        has_return = False
        for stmt in func.body:
            match stmt:
                case VariableDeclaration():
                    pass
                case ReturnStatement():
                    self._generate_return(stmt)
                    has_return = True
                case AssignmentStatement():
                    self._generate_assignment(stmt)
                case CallExpression():
                    self._generate_call(stmt)
                case _:
                    raise MalformedNodeError(
                        f"unexpected statement {type(stmt).__name__}",
                        getattr(stmt, "location", func.location),
                    )

        if not has_return:
            message = f"{func.location}: warning: function '{func.name}' has no return statement; returning 0"
            logger.warning(message)
            self.warnings.append(message)
            self._emit_comment("implicit return 0")
            self._emit_instruction("mov", "rax, 0")
            self._emit_epilogue()

        self._emit("")
        self._current_function = None

    def _emit_epilogue(self) -> None:
        frame_size = self._current_function.frame_size
        if frame_size:
            self._emit_instruction("add", f"rsp, {frame_size}")
        self._emit_instruction("pop", "rbp")
        self._emit_instruction("ret")

    # =========================================================================
    # Statement Code Generation
    # =========================================================================

    def _generate_declaration(self, decl: VariableDeclaration) -> None:
        """Register a variable and initialise its slot (zero if no initializer)."""
        if not decl.name:
            raise MalformedNodeError("variable declaration has no name", decl.location)

        symbol = self._scope.add_variable(decl.name, decl.location)

        if decl.initializer is None:
            self._emit_comment(f"int {decl.name}")
            self._emit_instruction("mov", f"{self._slot(symbol.offset)}, 0")
            return

        self._emit_comment(f"int {decl.name} = ...")
        self._generate_expression(decl.initializer)
        self._emit_instruction("mov", f"{self._slot(symbol.offset)}, rax")

    def _generate_assignment(self, stmt: AssignmentStatement) -> None:
        if not stmt.name:
            raise MalformedNodeError("assignment has no target", stmt.location)

        offset = self._scope.lookup_offset(stmt.name, stmt.location)
        self._emit_comment(f"{stmt.name} = ...")
        self._generate_expression(stmt.value)
        self._emit_instruction("mov", f"{self._slot(offset)}, rax")

    def _generate_return(self, stmt: ReturnStatement) -> None:
        if stmt.value is None:
            raise MalformedNodeError("return statement has no expression", stmt.location)

        self._emit_comment("return value")
        self._generate_expression(stmt.value)
        self._emit_epilogue()

    # =========================================================================
    # Expression Code Generation
    # =========================================================================

    def _generate_expression(self, expr: Optional[Expression]) -> None:
        """Evaluate a literal, variable reference or call into rax."""
        match expr:
            case NumberLiteral(value=value):
                self._emit_instruction("mov", f"rax, {value & WORD_MASK}")
            case IdentifierExpression(name=name):
                if not name:
                    raise MalformedNodeError("variable reference has no name", expr.location)
                offset = self._scope.lookup_offset(name, expr.location)
                self._emit_instruction("mov", f"rax, {self._slot(offset)}")
            case CallExpression():
                self._generate_call(expr)
            case None:
                raise MalformedNodeError("missing expression")
            case _:
                raise MalformedNodeError(
                    f"{type(expr).__name__} is not a number, variable or call",
                    getattr(expr, "location", None),
                )

    def _generate_call(self, expr: CallExpression) -> None:
        if not expr.function_name:
            raise MalformedNodeError("function call has no name", expr.location)
        self._emit_instruction("call", expr.function_name)


def generate(program: ProgramNode, output_comments: bool = False) -> str:
    """Generate assembly text for a parsed program."""
    return CodeGenerator(output_comments=output_comments).generate(program)
