"""
Abstract Syntax Tree (AST) Definitions
======================================

This module defines the AST node types built by the parser and consumed
by the code generator.

Node Hierarchy
--------------
ASTNode (base)
├── ProgramNode - root node, functions in source order
├── FunctionNode - function definition
├── Statements
│   ├── VariableDeclaration - int x; / int x = expr;
│   ├── AssignmentStatement - x = expr;
│   └── ReturnStatement - return expr;
└── Expressions
    ├── CallExpression - f() (also valid as a statement)
    ├── IdentifierExpression - variable reference
    └── NumberLiteral - integer constant

Design Notes
------------
- All nodes are dataclasses; children live in ordinary fields and lists,
  so each node has exactly one owner and the tree is freed by the garbage
  collector.
- Each node stores its source location for error reporting.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from chemist.errors import SourceLocation


# =============================================================================
# AST Node Base Classes
# =============================================================================

@dataclass
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node appears
    """
    location: SourceLocation

    def __repr__(self) -> str:
        """Default representation showing node type."""
        return f"{self.__class__.__name__}@{self.location.line}:{self.location.column}"


@dataclass
class Expression(ASTNode):
    """Base class for nodes that produce a value in the accumulator."""
    pass


@dataclass
class Statement(ASTNode):
    """Base class for nodes that appear in a function body."""
    pass


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass
class NumberLiteral(Expression):
    """
    Integer literal expression.

    Attributes:
        value: The integer value
    """
    value: int = 0


@dataclass
class IdentifierExpression(Expression):
    """
    Variable reference expression.

    Attributes:
        name: The variable name
    """
    name: str = ""


@dataclass
class CallExpression(Expression):
    """
    Call to a parameterless function.

    Used both as an expression (its result is the return value in rax)
    and directly as a statement.

    Attributes:
        function_name: Name of the function to call
    """
    function_name: str = ""


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass
class VariableDeclaration(Statement):
    """
    Local variable declaration.

    Represents declarations like:
        int x;
        int y = 10;

    Attributes:
        name: Variable name
        initializer: Optional initialization expression
    """
    name: str = ""
    initializer: Optional[Expression] = None


@dataclass
class AssignmentStatement(Statement):
    """
    Assignment to an already-declared variable: name = value;

    Attributes:
        name: Target variable name
        value: Right-hand side expression
    """
    name: str = ""
    value: Expression = None


@dataclass
class ReturnStatement(Statement):
    """
    Return statement. Always carries exactly one expression.

    Attributes:
        value: Return value expression
    """
    value: Expression = None


# A function body may hold any statement or a bare call
BodyItem = Union[Statement, CallExpression]


# =============================================================================
# Declarations
# =============================================================================

@dataclass
class FunctionNode(ASTNode):
    """
    Function definition: int name() { body }

    Attributes:
        name: Function name
        body: Statements in source order
    """
    name: str = ""
    body: list[BodyItem] = field(default_factory=list)


@dataclass
class ProgramNode(ASTNode):
    """
    Root node of the AST.

    Attributes:
        functions: Function definitions in source order
    """
    functions: list[FunctionNode] = field(default_factory=list)


# =============================================================================
# AST Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Subclasses override visit_* methods for the node types they care
    about; everything else falls through to generic_visit, which walks
    the node's children.

    Usage:
        class CallCollector(ASTVisitor):
            def visit_CallExpression(self, node):
                ...

        CallCollector().visit(program)
    """

    def visit(self, node: ASTNode):
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """Visit all child nodes."""
        for field_value in node.__dict__.values():
            if isinstance(field_value, ASTNode):
                self.visit(field_value)
            elif isinstance(field_value, list):
                for item in field_value:
                    if isinstance(item, ASTNode):
                        self.visit(item)


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging.

    Usage:
        printer = ASTPrinter()
        print(printer.print(ast))

    Output:
        Program
          Function: main
            Variable: a = 5
            Return a
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def visit_ProgramNode(self, node: ProgramNode):
        self._emit("Program")
        self.indent_level += 1
        for func in node.functions:
            self.visit(func)
        self.indent_level -= 1

    def visit_FunctionNode(self, node: FunctionNode):
        self._emit(f"Function: {node.name}")
        self.indent_level += 1
        for stmt in node.body:
            self.visit(stmt)
        self.indent_level -= 1

    def visit_VariableDeclaration(self, node: VariableDeclaration):
        init = f" = {self._expr_str(node.initializer)}" if node.initializer else ""
        self._emit(f"Variable: {node.name}{init}")

    def visit_AssignmentStatement(self, node: AssignmentStatement):
        self._emit(f"Assign: {node.name} = {self._expr_str(node.value)}")

    def visit_ReturnStatement(self, node: ReturnStatement):
        self._emit(f"Return {self._expr_str(node.value)}")

    def visit_CallExpression(self, node: CallExpression):
        self._emit(f"Call: {self._expr_str(node)}")

    def _expr_str(self, expr: Optional[Expression]) -> str:
        """Convert expression to string representation."""
        if expr is None:
            return ""
        if isinstance(expr, NumberLiteral):
            return str(expr.value)
        if isinstance(expr, IdentifierExpression):
            return expr.name
        if isinstance(expr, CallExpression):
            return f"{expr.function_name}()"
        return f"<{type(expr).__name__}>"
