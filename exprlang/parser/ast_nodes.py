"""
Abstract Syntax Tree node definitions for exprlang.

Every node exclusively owns its children; the tree is acyclic and nodes keep
no reference to their parent. Equality is structural: two trees are equal
when they have the same shape and payloads, wherever they came from in the
source. Source spans are carried for diagnostics but never compared.

Author: xwest
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Dict, List, Optional
from dataclasses import dataclass, field
from enum import Enum

from ..lexer.tokens import SourceLocation


# Name given to the prototype wrapping a bare top-level expression.
# Identifiers start with a letter, so this can never clash with a user name.
ANONYMOUS_FUNCTION_NAME = "__anon_expr"


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Expressions
    NUMBER_LITERAL = "NumberLiteral"
    VARIABLE_REF = "VariableRef"
    BINARY_EXPR = "BinaryExpr"
    CALL = "Call"

    # Top-level
    PROTOTYPE = "Prototype"
    FUNCTION_DEF = "FunctionDef"


@dataclass(frozen=True)
class SourceSpan:
    """Represents a span of source code (start and end locations)."""
    start: SourceLocation
    end: SourceLocation

    def __str__(self) -> str:
        if self.start.filename == self.end.filename:
            return f"{self.start.filename}:{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"
        return f"{self.start}-{self.end}"


class ASTVisitor(ABC):
    """Abstract visitor interface for traversing AST nodes."""

    @abstractmethod
    def visit(self, node: 'ASTNode') -> Any:
        """Visit a generic AST node."""
        pass


class ASTNode(ABC):
    """Base class for all AST nodes."""

    node_type: ClassVar[ASTNodeType]

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes."""
        pass

    def __str__(self) -> str:
        return ASTPrinter().render(self)


class Expression(ASTNode):
    """Base class for everything that can be parsed as an expression."""
    pass


# ============================================================================
# Expressions
# ============================================================================

@dataclass
class NumberLiteral(Expression):
    """Numeric literal such as `1.0`."""
    value: float
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)

    node_type = ASTNodeType.NUMBER_LITERAL

    def children(self) -> List[ASTNode]:
        return []


@dataclass
class VariableRef(Expression):
    """Reference to a variable, e.g. `x`."""
    name: str
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)

    node_type = ASTNodeType.VARIABLE_REF

    def children(self) -> List[ASTNode]:
        return []


@dataclass
class BinaryExpr(Expression):
    """Binary operation; `op` is the operator character."""
    op: str
    left: Expression
    right: Expression
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)

    node_type = ASTNodeType.BINARY_EXPR

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]


@dataclass
class Call(Expression):
    """Function call, e.g. `foo(1, x)`."""
    callee: str
    args: List[Expression]
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)

    node_type = ASTNodeType.CALL

    def children(self) -> List[ASTNode]:
        return list(self.args)


# ============================================================================
# Top-level nodes
# ============================================================================

@dataclass
class Prototype(ASTNode):
    """
    A function signature: its name and ordered parameter names.

    Used for both `def` and `extern`. Duplicate parameter names are not
    rejected here.
    """
    name: str
    params: List[str]
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)

    node_type = ASTNodeType.PROTOTYPE

    @property
    def is_anonymous(self) -> bool:
        """True for the prototype wrapping a top-level expression."""
        return self.name == ANONYMOUS_FUNCTION_NAME

    def children(self) -> List[ASTNode]:
        return []


@dataclass
class FunctionDef(ASTNode):
    """A function definition, or a bare top-level expression."""
    prototype: Prototype
    body: Expression
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)

    node_type = ASTNodeType.FUNCTION_DEF

    @property
    def name(self) -> str:
        return self.prototype.name

    @property
    def is_anonymous(self) -> bool:
        return self.prototype.is_anonymous

    def children(self) -> List[ASTNode]:
        return [self.prototype, self.body]


# ============================================================================
# Printing
# ============================================================================

class ASTPrinter(ASTVisitor):
    """
    Renders a tree as an indented outline, one node per line.

    Meant for humans looking at parser output; it is not a format that
    anything reads back.
    """

    def __init__(self, indent: str = "  "):
        self.indent = indent
        self._depth = 0
        self._lines: List[str] = []
        self._labels: Dict[ASTNodeType, Callable[[Any], str]] = {
            ASTNodeType.NUMBER_LITERAL: lambda n: f"NumberLiteral {n.value!r}",
            ASTNodeType.VARIABLE_REF: lambda n: f"VariableRef {n.name}",
            ASTNodeType.BINARY_EXPR: lambda n: f"BinaryExpr '{n.op}'",
            ASTNodeType.CALL: lambda n: f"Call {n.callee} ({len(n.args)} args)",
            ASTNodeType.PROTOTYPE: lambda n: f"Prototype {n.name}({' '.join(n.params)})",
            ASTNodeType.FUNCTION_DEF: lambda n: "FunctionDef",
        }

    def render(self, node: ASTNode) -> str:
        self._depth = 0
        self._lines = []
        node.accept(self)
        return "\n".join(self._lines)

    def visit(self, node: ASTNode) -> Any:
        self._lines.append(self.indent * self._depth + self._labels[node.node_type](node))
        self._depth += 1
        for child in node.children():
            child.accept(self)
        self._depth -= 1
