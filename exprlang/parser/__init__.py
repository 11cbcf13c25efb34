"""
exprlang Parser Package

Recursive descent parser with operator-precedence climbing for binary
expressions. Produces AST nodes for function definitions, extern
declarations and top-level expressions.

Key Features:
- One token of lookahead, no backtracking
- Caller-supplied binary operator precedence table
- Failures recorded as diagnostics instead of raised
- Structural equality on AST nodes

Author: xwest
"""

from .ast_nodes import *
from .parser import Parser, STANDARD_PRECEDENCE, MAX_NESTING_DEPTH, standard_precedence
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser",
    "STANDARD_PRECEDENCE",
    "MAX_NESTING_DEPTH",
    "standard_precedence",

    # AST nodes
    "ASTNode", "ASTNodeType", "ASTVisitor", "ASTPrinter", "SourceSpan",
    "Expression", "NumberLiteral", "VariableRef", "BinaryExpr", "Call",
    "Prototype", "FunctionDef", "ANONYMOUS_FUNCTION_NAME",

    # Error handling
    "ParseError",
]
