"""
Lox Parser Package

Implements a recursive-descent parser for Lox expressions.

Key Features:
- One method per precedence level, left-associative folding
- Right-associative conditional operator and a lowest-precedence comma
- Immutable AST nodes with double-dispatch visitors
- All-or-nothing results: a syntax error yields no tree
"""

from .ast_nodes import (
    ASTNodeType, ExpressionVisitor, Expression,
    Binary, Grouping, Literal, Unary, Conditional, postorder,
)
from .parser import Parser, ParseResult, parse, parse_string, parse_file
from .errors import ParseError, SyntaxErrorRecovery

__all__ = [
    # Core parser
    "Parser", "ParseResult", "parse", "parse_string", "parse_file",

    # AST nodes
    "ASTNodeType", "ExpressionVisitor", "Expression",
    "Binary", "Grouping", "Literal", "Unary", "Conditional", "postorder",

    # Error handling
    "ParseError", "SyntaxErrorRecovery",
]
